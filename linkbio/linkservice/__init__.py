from .contracts import Link, LinkIn, ReorderItem, ReorderRequest
from .repository import InMemoryLinkRepo
from .service import LinkService
from .routes import router as links_router

__all__ = [
    "Link",
    "LinkIn",
    "ReorderItem",
    "ReorderRequest",
    "InMemoryLinkRepo",
    "LinkService",
    "links_router",
]
