from __future__ import annotations
from fastapi import APIRouter, Depends

from ..authservice.deps import get_services, require_user
from ..contracts import AuthContext
from .contracts import ChangePasswordRequest, UpdateProfileRequest
from .service import UserService

router = APIRouter(prefix="/users", tags=["users"])


def get_user_service(services=Depends(get_services)) -> UserService:
    return services.users


@router.get("/me")
def get_me(ctx: AuthContext = Depends(require_user), svc: UserService = Depends(get_user_service)):
    return {"success": True, "data": svc.get_me(ctx).to_wire()}


@router.put("/me")
def update_me(body: UpdateProfileRequest, ctx: AuthContext = Depends(require_user), svc: UserService = Depends(get_user_service)):
    return {"success": True, "data": svc.update_me(ctx, body).to_wire()}


@router.put("/me/password")
def change_password(body: ChangePasswordRequest, ctx: AuthContext = Depends(require_user), svc: UserService = Depends(get_user_service)):
    svc.change_password(ctx, body)
    return {"success": True, "message": "Password updated successfully"}
