import logging
from contextlib import asynccontextmanager
from typing import Optional
import uvicorn
from fastapi import FastAPI
from sqlalchemy.engine import Engine
from generic_app.api.routes import router as api_router
from generic_app.config.domain import EntityConfig, resolve_domain_config
from generic_app.config.features import FeaturesConfig, features_config
from generic_app.core.config import settings
from generic_app.core.logging import configure_logging
from generic_app.crud.engine import EntityActions
from generic_app.crud.revalidate import PathRevalidator
from generic_app.crud.service import CRUDService
from generic_app.db.accessor import AccessorRegistry, init_models
from generic_app.db.session import engine as default_engine
from generic_app.storage.base import StorageService
from generic_app.storage.factory import StorageServiceFactory

log = logging.getLogger(__name__)


def create_app(
    entity: Optional[EntityConfig] = None,
    features: Optional[FeaturesConfig] = None,
    db_engine: Optional[Engine] = None,
    accessors: Optional[AccessorRegistry] = None,
    storage: Optional[StorageService] = None,
) -> FastAPI:
    """
    Build the API application.

    Dependencies default to the configured domain (see resolve_domain_config),
    the database from settings and the storage provider named in the features
    config, as selected by StorageServiceFactory. All of them are resolved
    once, at startup.
    """
    entity = entity or resolve_domain_config().entity
    features = features or features_config

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Startup and shutdown events."""
        log.info("Starting API server...", extra={"entity": entity.name})
        registry = accessors
        if registry is None:
            registry = init_models(entity, db_engine or default_engine)
        selected_storage = storage or StorageServiceFactory.get_storage_service(features.storage.provider)

        accessor = registry.lookup(entity.model_key)
        app.state.entity = entity
        app.state.features = features
        app.state.revalidator = PathRevalidator()
        app.state.crud = CRUDService(accessor) if accessor is not None else None
        app.state.actions = EntityActions(
            entity,
            features,
            registry,
            selected_storage,
            revalidator=app.state.revalidator,
        )
        log.info("API server startup complete (storage=%s)", selected_storage.name, extra={"entity": entity.name})
        yield
        log.info("Shutting down API server...", extra={"entity": entity.name})

    app = FastAPI(
        title=settings.app_name,
        version="0.1.0",
        lifespan=lifespan,
    )
    app.include_router(api_router, prefix="/v1")
    return app


configure_logging()
app = create_app()


def run() -> None:
    """Serve the API with uvicorn on the configured host and port."""
    uvicorn.run("generic_app.main:app", host=settings.api_host, port=settings.api_port)


if __name__ == "__main__":
    run()
