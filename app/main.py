"""FastAPI application entry point."""

import logging

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.openapi.utils import get_openapi
from sqlalchemy.exc import SQLAlchemyError

from app.application.exceptions import ApplicationError
from app.domain.exceptions import DomainException
from app.infrastructure.config.settings import Settings, get_settings
from app.presentation.api import auth, user
from app.presentation.dependencies import build_session_token_service
from app.presentation.exception_handlers import (
    application_error_handler,
    database_error_handler,
    domain_exception_handler,
    generic_exception_handler,
    validation_error_handler,
)
from app.presentation.schemas import ErrorResponse
from app.presentation.session_gate import SessionGateMiddleware

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the application: logging, middleware, exception handlers and routers."""
    settings = settings or get_settings()

    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = FastAPI(
        title=settings.app_name,
        description="Kinote account and session API",
        version=settings.app_version,
        debug=settings.debug,
    )

    # Added first so CORS wraps the gate and preflight requests are answered
    app.add_middleware(
        SessionGateMiddleware,
        token_service=build_session_token_service(settings),
        protected_prefixes=settings.protected_path_prefixes_list,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # One handler per exception base class; error_code decides the status
    app.add_exception_handler(ApplicationError, application_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(DomainException, domain_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, validation_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(SQLAlchemyError, database_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, generic_exception_handler)

    app.include_router(auth.router, prefix="/api")
    app.include_router(user.router, prefix="/api")

    @app.get("/")
    async def root() -> dict[str, str]:
        """Health check endpoint."""
        return {
            "message": settings.app_name,
            "status": "running",
            "version": settings.app_version,
            "environment": settings.environment,
        }

    def custom_openapi():
        """
        Document validation failures as the 400 envelope.

        FastAPI documents request validation as 422 HTTPValidationError;
        validation_error_handler actually answers 400 with ErrorResponse.
        """
        if app.openapi_schema:
            return app.openapi_schema

        openapi_schema = get_openapi(
            title=app.title,
            version=app.version,
            description=app.description,
            routes=app.routes,
        )

        schemas = openapi_schema.setdefault("components", {}).setdefault("schemas", {})
        schemas.pop("HTTPValidationError", None)
        schemas.pop("ValidationError", None)
        schemas.setdefault(
            "ErrorResponse",
            ErrorResponse.model_json_schema(ref_template="#/components/schemas/{model}"),
        )

        error_ref = {
            "description": "Validation error",
            "content": {
                "application/json": {"schema": {"$ref": "#/components/schemas/ErrorResponse"}}
            },
        }
        for path_data in openapi_schema.get("paths", {}).values():
            for operation in path_data.values():
                if isinstance(operation, dict) and "responses" in operation:
                    if operation["responses"].pop("422", None) is not None:
                        operation["responses"].setdefault("400", error_ref)

        app.openapi_schema = openapi_schema
        return app.openapi_schema

    app.openapi = custom_openapi  # type: ignore[method-assign]

    logger.info(f"{settings.app_name} {settings.app_version} starting ({settings.environment})")
    return app


app = create_app()
