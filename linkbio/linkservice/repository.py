from __future__ import annotations

from ..docstore import OwnedResourceRepo
from .contracts import Link


class InMemoryLinkRepo(OwnedResourceRepo[Link]):
    model = Link
    collection_name = "links"
    list_sort = (("order", 1),)
