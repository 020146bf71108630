# 📄 File: app/main.py
#
# 🧭 Purpose (Layman Explanation):
# The main control center that starts PetVally, connects all the different parts together
# and makes sure everything is ready to serve pet owners, caregivers and staff.
#
# 🧪 Purpose (Technical Summary):
# FastAPI application factory and entry point: lifespan (logging, database, admin bootstrap,
# client cleanup), middleware stack, exception handlers, rate limiter and router registration.
#
# 🔗 Dependencies:
# - FastAPI framework, uvicorn, slowapi
# - app.shared.config.settings
# - app.shared.infrastructure.database (connection + session)
# - app.api.router (every module router)
#
# 🔄 Connected Modules / Calls From:
# - uvicorn server startup (`petvally-api` script, `uvicorn app.main:app`)
# - tests (TestClient)

from contextlib import asynccontextmanager
from typing import AsyncGenerator

import uvicorn
from fastapi import FastAPI, Response
from fastapi.middleware.cors import CORSMiddleware
from slowapi.errors import RateLimitExceeded

from app.api.health import health_router
from app.api.middleware.authentication import PageGateMiddleware
from app.api.middleware.error_handling import ErrorHandlingMiddleware, register_exception_handlers
from app.api.middleware.logging import RequestLoggingMiddleware
from app.api.router import API_PREFIX, api_router
from app.modules.accounts.domain.services.auth_service import bootstrap_admin
from app.shared.config.settings import get_settings
from app.shared.core.rate_limiter import limiter, rate_limit_exceeded_handler
from app.shared.infrastructure.database.connection import close_database, init_database
from app.shared.infrastructure.database.session import database_session, initialize_sessions, session_manager
from app.shared.infrastructure.external_apis.gemini_client import get_gemini_client
from app.shared.utils.logging import get_logger, setup_logging

settings = get_settings()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan context manager.

    Startup: logging, database engine (and tables when DB_CREATE_TABLES), session factory and
    the configured admin account. Shutdown: Gemini HTTP session and database pool.
    """
    setup_logging()
    logger.info("🐾 PetVally API starting up...")

    try:
        await init_database()
        logger.info("✅ Database connection initialized")

        await initialize_sessions()
        logger.info("✅ Session manager initialized")

        async with database_session() as session:
            admin = await bootstrap_admin(session)
        if admin is not None:
            logger.info(f"✅ Admin account '{admin.username}' created")

        logger.info("✅ PetVally API startup complete")
        yield

    except Exception as e:
        logger.error(f"❌ Startup failed: {e}")
        raise

    finally:
        logger.info("🔄 PetVally API shutting down...")
        await get_gemini_client().close()
        await close_database()
        session_manager.reset()
        logger.info("✅ PetVally API shutdown complete")


def create_application() -> FastAPI:
    """
    Application factory function.

    Returns:
        FastAPI: Configured FastAPI application instance
    """
    app = FastAPI(
        title=settings.APP_NAME,
        description=settings.APP_DESCRIPTION,
        version=settings.APP_VERSION,
        docs_url="/docs" if settings.DEBUG else None,
        redoc_url="/redoc" if settings.DEBUG else None,
        openapi_url="/openapi.json" if settings.DEBUG else None,
        lifespan=lifespan,
        debug=settings.DEBUG,
    )

    # =========================================================================
    # MIDDLEWARE CONFIGURATION (last added runs first)
    # =========================================================================

    app.add_middleware(ErrorHandlingMiddleware)
    app.add_middleware(PageGateMiddleware)
    if not settings.is_testing:
        app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=settings.CORS_ALLOW_CREDENTIALS,
        allow_methods=["GET", "HEAD", "POST", "PUT", "DELETE", "PATCH", "OPTIONS"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID", "X-Has-Upvoted"],
    )

    # =========================================================================
    # EXCEPTION HANDLERS AND RATE LIMITING
    # =========================================================================

    register_exception_handlers(app)
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)

    # =========================================================================
    # ROUTER REGISTRATION
    # =========================================================================

    app.include_router(health_router)
    app.include_router(api_router)

    @app.get("/", include_in_schema=False)
    async def root() -> dict:
        return {
            "name": settings.APP_NAME,
            "version": settings.APP_VERSION,
            "description": settings.APP_DESCRIPTION,
            "health_check": "/health",
            "api_base": API_PREFIX,
        }

    @app.get("/favicon.ico", include_in_schema=False)
    async def favicon():
        return Response(status_code=204)

    return app


app = create_application()


def main():
    """Run the API with uvicorn using the configured host, port and workers."""
    uvicorn.run(
        "app.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.RELOAD and settings.ENVIRONMENT == "development",
        log_level=settings.LOG_LEVEL.lower(),
        workers=1 if settings.RELOAD else settings.WORKERS,
    )


if __name__ == "__main__":
    main()
