from .contracts import Product, ProductIn
from .repository import InMemoryProductRepo
from .service import ProductService
from .routes import router as products_router

__all__ = [
    "Product",
    "ProductIn",
    "InMemoryProductRepo",
    "ProductService",
    "products_router",
]
