from fastapi import Header
from sqlalchemy import event
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession
from config import ApplicationConfig
import src.domain  # noqa: F401  registers every table on SQLModel.metadata
from src.adapter.services.blob_storage import create_blob_storage
from src.adapter.services.email_transport import create_email_transport
from src.adapter.services.pdf_service import ReportLabPdfService


def enable_sqlite_savepoints(async_engine):
    """Let SQLAlchemy emit BEGIN itself so SAVEPOINT works with the sqlite driver"""

    @event.listens_for(async_engine.sync_engine, "connect")
    def do_connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(async_engine.sync_engine, "begin")
    def do_begin(conn):
        conn.exec_driver_sql("BEGIN")

    return async_engine


def build_engine(db_uri: str, **kwargs):
    async_engine = create_async_engine(db_uri, echo=False, future=True, **kwargs)
    if async_engine.dialect.name == "sqlite":
        enable_sqlite_savepoints(async_engine)
    return async_engine


engine = build_engine(ApplicationConfig.DB_URI)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)

blob_storage = create_blob_storage(ApplicationConfig)
email_transport = create_email_transport(ApplicationConfig)


async def get_session() -> AsyncSession:
    async with AsyncSessionLocal() as session:
        yield session


def get_blob_storage():
    return blob_storage


def get_email_transport():
    return email_transport


def get_pdf_service():
    return ReportLabPdfService(
        address_line_chars=ApplicationConfig.PDF_ADDRESS_LINE_CHARS,
        description_max_chars=ApplicationConfig.PDF_DESCRIPTION_MAX_CHARS,
    )


def get_owner_id(x_owner_id: str = Header(default="", alias="X-Owner-Id")) -> str:
    """Owner resolved by the upstream authentication layer"""
    return x_owner_id.strip()


async def init_models():
    """Create missing tables"""
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
