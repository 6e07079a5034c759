import logging
from contextlib import asynccontextmanager
from typing import Optional

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.gzip import GZipMiddleware

# Load environment variables as early as possible
load_dotenv()

from .config import Settings, get_settings
from .exceptions import APIException, api_exception_handler, http_exception_handler, validation_exception_handler
from .infrastructure.persistence.storage import Storage, build_storage
from .middleware import ErrorHandlingMiddleware, LoggingMiddleware, SecurityMiddleware
from .routers import auth_router, services_router, users_router
from .schemas.common.common import HealthResponse
from .utils import utc_now

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    logger.info(f"Starting {app.title} with {app.state.storage.backend} storage...")
    yield
    # Shutdown
    logger.info(f"Shutting down {app.title}...")
    app.state.storage.close()


def create_app(settings: Optional[Settings] = None, storage: Optional[Storage] = None) -> FastAPI:
    """Build the API. Each call gets its own storage unless one is passed in."""
    settings = settings or get_settings()

    # Configure logging
    logging.basicConfig(
        level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
        format=settings.LOG_FORMAT
    )
    if settings.EXPOSE_OTP_IN_RESPONSE:
        logger.warning("EXPOSE_OTP_IN_RESPONSE is enabled; OTP codes are returned to clients")

    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        debug=settings.DEBUG,
        lifespan=lifespan,
        docs_url=("/docs" if settings.DOCS_ENABLED else None),
        redoc_url=("/redoc" if settings.DOCS_ENABLED else None),
        openapi_url=("/openapi.json" if settings.DOCS_ENABLED else None)
    )
    app.state.settings = settings
    app.state.storage = storage or build_storage(settings)

    # Add custom exception handlers
    app.add_exception_handler(APIException, api_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    # Add middleware
    app.add_middleware(ErrorHandlingMiddleware, debug=settings.DEBUG)
    app.add_middleware(LoggingMiddleware)
    app.add_middleware(SecurityMiddleware)

    # GZip compression
    app.add_middleware(GZipMiddleware, minimum_size=settings.GZIP_MIN_SIZE)

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins_list,
        allow_credentials=settings.CORS_ALLOW_CREDENTIALS,
        allow_methods=settings.allowed_methods_list,
        allow_headers=settings.allowed_headers_list,
    )

    app.include_router(auth_router.router, prefix=settings.API_PREFIX)
    app.include_router(users_router.router, prefix=settings.API_PREFIX)
    app.include_router(services_router.router, prefix=settings.API_PREFIX)

    # Health check endpoint
    @app.get("/health", response_model=HealthResponse)
    def health_check():
        return HealthResponse(
            status="healthy",
            service=settings.APP_NAME,
            version=settings.APP_VERSION,
            storage=app.state.storage.backend,
            timestamp=utc_now().isoformat(),
        )

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    _settings = get_settings()
    uvicorn.run(
        "app.main:app",
        host=_settings.HOST,
        port=_settings.PORT,
        log_level=_settings.LOG_LEVEL.lower()
    )
