"""Main application entry point.

Initializes storage and starts the feed catalog API server.
"""

import argparse
import asyncio
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from feedcatalog import __version__
from feedcatalog.api import init_services, register_exception_handlers, router
from feedcatalog.config.settings import Settings, settings
from feedcatalog.storage.base import KeyValueStore
from feedcatalog.storage.factory import create_kv_store
from feedcatalog.storage.feed_list import FeedListStore
from feedcatalog.utils.logger import configure_logging, get_logger


async def create_feed_list_store(kv: KeyValueStore, app_settings: Settings) -> FeedListStore:
    """Open the backing store and build a ready feed list store.

    Raises:
        StorageError: If the backing store can't be opened.
        InitializationError: If the feed list bucket can't be created.
    """
    await kv.initialize()

    store_kwargs = {"serialize_adds": app_settings.feed_list_serialize_adds}
    if not app_settings.include_default_feeds:
        store_kwargs["default_feeds"] = ()

    feed_list_store = FeedListStore(kv, **store_kwargs)
    await feed_list_store.initialize()
    return feed_list_store


def create_app(app_settings: Settings | None = None) -> FastAPI:
    """Create FastAPI application."""
    app_settings = app_settings or settings

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan manager.

        Startup fails if the feed list store can't be initialized.
        """
        logger = get_logger("lifespan")
        logger.info("Starting feed catalog")

        kv = create_kv_store(app_settings)
        feed_list_store = await create_feed_list_store(kv, app_settings)
        logger.info(
            "Storage initialized",
            db_type=app_settings.db_type,
            db_path=str(app_settings.db_path),
            serialize_adds=app_settings.feed_list_serialize_adds,
        )

        init_services(feed_list_store)

        yield

        await kv.close()
        logger.info("Feed catalog stopped")

    app = FastAPI(
        title="Feed Catalog API",
        description="Catalog of syndication feed sources",
        version=__version__,
        debug=app_settings.debug,
        lifespan=lifespan,
    )
    register_exception_handlers(app)
    app.include_router(router)
    return app


async def run_init_only() -> None:
    """Initialize storage via CLI without starting the API server."""
    logger = get_logger("cli")
    kv = create_kv_store(settings)
    feed_list_store = await create_feed_list_store(kv, settings)
    stored_feeds = await feed_list_store.list_stored()
    await kv.close()
    logger.info("Storage ready", db_path=str(settings.db_path), stored_feeds=len(stored_feeds))


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Feed catalog API server")
    parser.add_argument(
        "--init-only",
        action="store_true",
        help="Initialize storage and exit (no API server)",
    )
    parser.add_argument(
        "--host",
        default=settings.api_host,
        help=f"API server host (default: {settings.api_host})",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=settings.api_port,
        help=f"API server port (default: {settings.api_port})",
    )
    args = parser.parse_args()

    configure_logging(
        log_level=settings.log_level,
        json_format=settings.log_json,
        app_name=settings.app_name,
    )

    if args.init_only:
        asyncio.run(run_init_only())
    else:
        app = create_app()
        uvicorn.run(
            app,
            host=args.host,
            port=args.port,
            log_level=settings.log_level.lower(),
        )


if __name__ == "__main__":
    main()
