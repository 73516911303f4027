from __future__ import annotations

from ..docstore import OwnedResourceRepo
from .contracts import Product


class InMemoryProductRepo(OwnedResourceRepo[Product]):
    model = Product
    collection_name = "products"
    list_sort = (("created_at", -1),)
