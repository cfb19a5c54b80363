# main.py
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from vidshare.blob_storage import AzureBlobObjectStore, ObjectStore
from vidshare.config import Settings, configure_logging, get_settings
from vidshare.database import Database, PostgresDatabase, create_tables
from vidshare.errors import register_exception_handlers
from vidshare.routers import consumers, creators, users


def create_app(
    database: Optional[Database] = None,
    object_store: Optional[ObjectStore] = None,
    settings: Optional[Settings] = None,
) -> FastAPI:
    """Build the API around the given collaborators.

    Collaborators that are not passed in are built from settings, and only
    those are opened at startup and closed at shutdown.
    """
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    owned_database = None
    if database is None:
        database = owned_database = PostgresDatabase(
            settings.conninfo,
            min_size=settings.db_pool_min_size,
            max_size=settings.db_pool_max_size,
        )

    owned_store = None
    if object_store is None:
        object_store = owned_store = AzureBlobObjectStore(
            settings.azure_storage_connection,
            container_name=settings.azure_blob_container_name,
        )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if owned_database is not None:
            await owned_database.create_pool()
        try:
            if owned_database is not None:
                await create_tables(owned_database)
            if owned_store is not None:
                await owned_store.ensure_container()
            yield
        finally:
            if owned_database is not None:
                await owned_database.close_pool()

    app = FastAPI(
        title="Video Sharing API",
        description="Video uploads, comments, ratings and users on Azure Blob Storage and PostgreSQL",
        version="1.0.0",
        lifespan=lifespan
    )
    app.state.database = database
    app.state.object_store = object_store

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    app.include_router(creators.router, prefix="/creator", tags=["Creators"])
    app.include_router(consumers.router, prefix="/videos", tags=["Consumers"])
    app.include_router(users.router, prefix="/users", tags=["Users"])

    @app.get("/health")
    async def health():
        return {"message": "Welcome to the Video Sharing Platform API"}

    return app
