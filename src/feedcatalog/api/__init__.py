"""API package."""

from feedcatalog.api.routes import (
    get_feed_list_store,
    init_services,
    register_exception_handlers,
    router,
)

__all__ = [
    "router",
    "init_services",
    "get_feed_list_store",
    "register_exception_handlers",
]
