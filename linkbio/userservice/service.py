from __future__ import annotations
import logging
from typing import Optional

from ..authservice.contracts import UserRecord, UserRepoPort
from ..authservice.models import PasswordHasher
from ..contracts import AuthContext
from ..errors import ConflictError, DuplicateKeyError, InvalidCredentialsError, NotFoundError, ValidationError
from .contracts import ChangePasswordRequest, UpdateProfileRequest, UserProfile


class UserService:
    def __init__(self, *, users: UserRepoPort, hasher: PasswordHasher, logger: Optional[logging.Logger] = None):
        self.users = users
        self.hasher = hasher
        self.log = logger or logging.getLogger("linkbio.userservice")

    def get_me(self, ctx: AuthContext) -> UserProfile:
        return UserProfile.from_record(self._require_user(ctx))

    def update_me(self, ctx: AuthContext, req: UpdateProfileRequest) -> UserProfile:
        user = self._require_user(ctx)
        changes = {}
        if req.username:
            other = self.users.find_by_username(req.username)
            if other and other.id != user.id:
                raise ConflictError("Username already taken")
            changes["username"] = req.username
        if req.email:
            other = self.users.find_by_email(req.email)
            if other and other.id != user.id:
                raise ConflictError("Email already taken")
            changes["email"] = req.email
        if not changes:
            return UserProfile.from_record(user)
        try:
            updated = self.users.update(user.id, **changes)
        except DuplicateKeyError as ex:
            raise ConflictError(f"{ex.field.capitalize()} already taken")
        self.log.info("user.profile_updated", extra={"user_id": user.id, "fields": sorted(changes)})
        return UserProfile.from_record(updated)

    def change_password(self, ctx: AuthContext, req: ChangePasswordRequest) -> None:
        if not req.current_password or not req.new_password:
            raise ValidationError("Current password and new password are required")
        user = self._require_user(ctx)
        if not self.hasher.verify(req.current_password, user.password_hash):
            raise InvalidCredentialsError("Current password is incorrect")
        self.users.update(user.id, password_hash=self.hasher.hash(req.new_password))
        self.log.info("user.password_changed", extra={"user_id": user.id})

    def _require_user(self, ctx: AuthContext) -> UserRecord:
        user = self.users.find_by_id(ctx.user_id)
        if not user:
            raise NotFoundError("User not found")
        return user
