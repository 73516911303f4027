from __future__ import annotations
from fastapi import APIRouter, Depends

from ..authservice.deps import get_services, require_user
from ..contracts import AuthContext
from .contracts import LinkIn, ReorderRequest
from .service import LinkService

router = APIRouter(prefix="/links", tags=["links"])


def get_link_service(services=Depends(get_services)) -> LinkService:
    return services.links


def _listing(links):
    return {"success": True, "count": len(links), "data": [link.to_wire() for link in links]}


@router.get("")
def list_links(ctx: AuthContext = Depends(require_user), svc: LinkService = Depends(get_link_service)):
    return _listing(svc.list_mine(ctx))


@router.get("/public/{username}")
def list_public_links(username: str, svc: LinkService = Depends(get_link_service)):
    return _listing(svc.list_public(username))


@router.post("", status_code=201)
def create_link(body: LinkIn, ctx: AuthContext = Depends(require_user), svc: LinkService = Depends(get_link_service)):
    return {"success": True, "data": svc.create(ctx, body).to_wire()}


# registered before /{link_id} so "reorder" is never taken for an id
@router.put("/reorder")
def reorder_links(body: ReorderRequest, ctx: AuthContext = Depends(require_user), svc: LinkService = Depends(get_link_service)):
    svc.reorder(ctx, body.links)
    return {"success": True, "message": "Links reordered successfully"}


@router.put("/{link_id}")
def update_link(link_id: str, body: LinkIn, ctx: AuthContext = Depends(require_user), svc: LinkService = Depends(get_link_service)):
    return {"success": True, "data": svc.update(ctx, link_id, body).to_wire()}


@router.delete("/{link_id}")
def delete_link(link_id: str, ctx: AuthContext = Depends(require_user), svc: LinkService = Depends(get_link_service)):
    svc.delete(ctx, link_id)
    return {"success": True, "message": "Link removed"}
