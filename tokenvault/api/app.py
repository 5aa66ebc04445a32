from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from sqlmodel import SQLModel
from .error import ClientError, ServerError
import logging

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def setup_logging(level: str = "INFO"):
    """Configure root and uvicorn loggers with a shared level and format"""
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
    for name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        logging.getLogger(name).setLevel(level.upper())


async def handle_client_error(request: Request, exc: ClientError):
    error_dict = {"code": exc.base_error.code, "message": exc.base_error.message}
    logger.warning(f"Client error: {error_dict}")
    return JSONResponse(status_code=exc.status_code, content={"error": error_dict})


async def handle_server_error(request: Request, exc: ServerError):
    error_dict = {"code": exc.base_error.code, "message": "Internal server error"}
    logger.error(f"Server error: {exc.base_error.code}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"error": error_dict}
    )


def create_app(ApplicationConfig) -> FastAPI:
    setup_logging(ApplicationConfig.LOG_LEVEL)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        from tokenvault.app.services.vault import build_vault
        from tokenvault.depends import create_unit_of_work, engine

        async with engine.begin() as conn:
            await conn.run_sync(SQLModel.metadata.create_all)

        app.state.vault = await build_vault(ApplicationConfig, create_unit_of_work)
        logger.info(f"Token vault ready with {len(app.state.vault.store)} token(s)")
        yield
        await engine.dispose()

    app = FastAPI(title="Token Vault API", version="0.1.0", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ApplicationConfig.CORS_ORIGINS,
        allow_credentials=ApplicationConfig.CORS_ALLOW_CREDENTIALS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    from tokenvault.api.routes import admin, api_keys, devices, health_check, tokens

    app.include_router(health_check.router, tags=["Health"])
    app.include_router(admin.router, tags=["Admin"])
    app.include_router(api_keys.router, tags=["API Keys"])
    app.include_router(tokens.router, tags=["Tokens"])
    app.include_router(devices.router, tags=["Device"])

    app.add_exception_handler(ClientError, handle_client_error)
    app.add_exception_handler(ServerError, handle_server_error)

    return app
