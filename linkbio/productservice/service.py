from __future__ import annotations
import logging
from typing import List, Optional

from ..authservice.contracts import UserRepoPort
from ..contracts import AuthContext, ensure_owner
from ..errors import NotFoundError
from .contracts import Product, ProductIn
from .repository import InMemoryProductRepo


class ProductService:
    def __init__(self, *, products: InMemoryProductRepo, users: UserRepoPort, logger: Optional[logging.Logger] = None):
        self.products = products
        self.users = users
        self.log = logger or logging.getLogger("linkbio.productservice")

    def list_mine(self, ctx: AuthContext) -> List[Product]:
        return self.products.list_for_owner(ctx.user_id)

    def list_public(self, username: str) -> List[Product]:
        user = self.users.find_by_username(username)
        if not user:
            raise NotFoundError("User not found")
        return self.products.list_for_owner(user.id, active_only=True)

    def create(self, ctx: AuthContext, body: ProductIn) -> Product:
        product = self.products.create(ctx.user_id, body.model_dump())
        self.log.info("product.created", extra={"user_id": ctx.user_id, "product_id": product.id})
        return product

    def update(self, ctx: AuthContext, product_id: str, body: ProductIn) -> Product:
        self._owned(ctx, product_id)
        return self.products.update(product_id, body.model_dump(exclude_unset=True))

    def delete(self, ctx: AuthContext, product_id: str) -> None:
        self._owned(ctx, product_id)
        self.products.delete(product_id)
        self.log.info("product.deleted", extra={"user_id": ctx.user_id, "product_id": product_id})

    def _owned(self, ctx: AuthContext, product_id: str) -> Product:
        product = self.products.get(product_id)
        if not product:
            raise NotFoundError("Product not found")
        ensure_owner(ctx, product.user_id)
        return product
