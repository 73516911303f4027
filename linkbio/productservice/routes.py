from __future__ import annotations
from fastapi import APIRouter, Depends

from ..authservice.deps import get_services, require_user
from ..contracts import AuthContext
from .contracts import ProductIn
from .service import ProductService

router = APIRouter(prefix="/products", tags=["products"])


def get_product_service(services=Depends(get_services)) -> ProductService:
    return services.products


def _listing(products):
    return {"success": True, "count": len(products), "data": [p.to_wire() for p in products]}


@router.get("")
def list_products(ctx: AuthContext = Depends(require_user), svc: ProductService = Depends(get_product_service)):
    return _listing(svc.list_mine(ctx))


@router.get("/public/{username}")
def list_public_products(username: str, svc: ProductService = Depends(get_product_service)):
    return _listing(svc.list_public(username))


@router.post("", status_code=201)
def create_product(body: ProductIn, ctx: AuthContext = Depends(require_user), svc: ProductService = Depends(get_product_service)):
    return {"success": True, "data": svc.create(ctx, body).to_wire()}


@router.put("/{product_id}")
def update_product(product_id: str, body: ProductIn, ctx: AuthContext = Depends(require_user), svc: ProductService = Depends(get_product_service)):
    return {"success": True, "data": svc.update(ctx, product_id, body).to_wire()}


@router.delete("/{product_id}")
def delete_product(product_id: str, ctx: AuthContext = Depends(require_user), svc: ProductService = Depends(get_product_service)):
    svc.delete(ctx, product_id)
    return {"success": True, "message": "Product removed"}
