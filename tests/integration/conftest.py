import pytest
import pytest_asyncio
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock
from httpx import ASGITransport, AsyncClient
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession
from src.adapter.services.blob_storage import LocalBlobStorage
from src.depends import build_engine, get_blob_storage, get_email_transport, get_session
from src.domain.client import Client
from src.domain.issuer_profile import IssuerProfile
from src.domain.service import Service

OWNER_ID = "user_42"


@pytest_asyncio.fixture(scope="function")
async def engine():
    """In-memory SQLite database shared by every connection of one test"""
    engine = build_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(engine):
    """Create a new database session for each test"""
    Session = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)
    async with Session() as session:
        yield session


@pytest_asyncio.fixture
async def seeded(db_session):
    """Issuer profile, client and global service of OWNER_ID"""
    issuer = IssuerProfile(
        owner_id=OWNER_ID,
        name="Marie Curie",
        email="marie@example.com",
        address="1 rue des Lilas\n75001 Paris",
        freelance_id="12345678900011",
        iban="FR7630006000011234567890189",
        bic="AGRIFRPP",
        bank="Crédit Agricole",
    )
    client = Client(
        owner_id=OWNER_ID,
        name="ACME SAS",
        contact_name="Jean",
        address="10 avenue de la République\n69001 Lyon",
        email="compta@acme.example",
        legal_form="SAS",
    )
    service = Service(
        owner_id=OWNER_ID,
        label="Développement",
        default_price=Decimal("100"),
        is_global=True,
    )
    db_session.add_all([issuer, client, service])
    await db_session.commit()
    return {"issuer": issuer, "client": client, "service": service}


@pytest.fixture
def blob_storage(tmp_path):
    return LocalBlobStorage(str(tmp_path / "storage"), public_url="/api/storage")


@pytest.fixture
def email_transport():
    transport = MagicMock()
    transport.send = AsyncMock()
    return transport


@pytest_asyncio.fixture
async def client(db_session, blob_storage, email_transport):
    """Create test client with database session and collaborator overrides"""
    from src.api.app import create_app
    from config import ApplicationConfig

    app = create_app(ApplicationConfig)

    # Override the session dependency to use test session
    async def override_get_session():
        yield db_session

    app.dependency_overrides[get_session] = override_get_session
    app.dependency_overrides[get_blob_storage] = lambda: blob_storage
    app.dependency_overrides[get_email_transport] = lambda: email_transport

    # Use ASGITransport for httpx AsyncClient
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
