from __future__ import annotations
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from ..contracts import AuthContext
from ..errors import AuthRequiredError
from .contracts import LoginRequest, MfaChallenge, MfaCodeRequest, RefreshRequest, RegisterRequest
from .deps import get_auth_service, require_user
from .service import AuthService

router = APIRouter(prefix="/auth", tags=["auth"])

@router.post("/register", status_code=201)
def register(req: RegisterRequest, svc: AuthService = Depends(get_auth_service)):
    return svc.register(req).to_wire()

@router.post("/login")
def login(req: LoginRequest, svc: AuthService = Depends(get_auth_service)):
    outcome = svc.login(req)
    if isinstance(outcome, MfaChallenge):
        return JSONResponse(status_code=400, content=outcome.to_wire())
    return outcome.to_wire()

@router.post("/refresh")
def refresh(req: RefreshRequest, svc: AuthService = Depends(get_auth_service)):
    if not req.refresh_token:
        raise AuthRequiredError("Refresh token required")
    return svc.refresh(req.refresh_token).to_wire()

@router.post("/setup-mfa")
def setup_mfa(ctx: AuthContext = Depends(require_user), svc: AuthService = Depends(get_auth_service)):
    return {"success": True, **svc.enroll_mfa(ctx).to_wire()}

@router.post("/verify-mfa")
def verify_mfa(req: MfaCodeRequest, ctx: AuthContext = Depends(require_user), svc: AuthService = Depends(get_auth_service)):
    svc.confirm_mfa(ctx, req.token)
    return {"success": True, "message": "MFA enabled successfully"}

@router.post("/disable-mfa")
def disable_mfa(req: MfaCodeRequest, ctx: AuthContext = Depends(require_user), svc: AuthService = Depends(get_auth_service)):
    svc.disable_mfa(ctx, req.token)
    return {"success": True, "message": "MFA disabled successfully"}
