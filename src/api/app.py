import logging
from contextlib import asynccontextmanager
import time

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
import sentry_sdk

from src.api.error import ClientError
from src.depends import init_models
from src.api.routes import invoices, services, statistics, templates

logger = logging.getLogger(__name__)


def setup_sentry(config):
    sentry_sdk.init(
        dsn=config.DSN_SENTRY,
        environment=config.SENTRY_ENVIRONMENT,
        traces_sample_rate=0.1,
    )
    logger.info("Sentry initialized")


def create_app(config) -> FastAPI:
    logging.basicConfig(
        level=getattr(logging, str(config.LOG_LEVEL).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    if config.ENABLE_SENTRY and config.DSN_SENTRY:
        setup_sentry(config)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        await init_models()
        yield

    app = FastAPI(
        lifespan=lifespan,
        title="Freelance Invoicing Service",
        description="Invoices, numbering, PDF documents and payment tracking",
        version="1.0.0",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ORIGINS,
        allow_credentials=config.CORS_ALLOW_CREDENTIALS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    if config.ENABLE_LOGGING_MIDDLEWARE:
        @app.middleware("http")
        async def log_requests(request: Request, call_next):
            started = time.perf_counter()
            response = await call_next(request)
            elapsed_ms = (time.perf_counter() - started) * 1000
            logger.info(
                f"{request.method} {request.url.path} -> {response.status_code} ({elapsed_ms:.1f} ms)"
            )
            return response

    @app.exception_handler(ClientError)
    async def client_error_handler(request: Request, exc: ClientError):
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        first = exc.errors()[0] if exc.errors() else {}
        location = ".".join(str(part) for part in first.get("loc", ()))
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={
                "error": {
                    "code": "VALIDATION_FAILED",
                    "message": f"{location}: {first.get('msg', 'Invalid request')}",
                }
            },
        )

    prefix = config.API_PREFIX
    app.include_router(templates.router, prefix=prefix)
    app.include_router(statistics.router, prefix=prefix)
    app.include_router(invoices.router, prefix=prefix)
    app.include_router(services.router, prefix=prefix)

    if config.STORAGE_BACKEND == "local":
        app.mount(
            config.STORAGE_PUBLIC_URL,
            StaticFiles(directory=config.STORAGE_LOCAL_DIR, check_dir=False),
            name="storage",
        )

    @app.get("/health", tags=["Health"])
    async def health():
        return {"status": "ok"}

    return app
