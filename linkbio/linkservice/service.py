from __future__ import annotations
import logging
from typing import List, Optional

from ..authservice.contracts import UserRepoPort
from ..contracts import AuthContext, ensure_owner
from ..errors import NotFoundError, ValidationError
from .contracts import Link, LinkIn, ReorderItem
from .repository import InMemoryLinkRepo


class LinkService:
    def __init__(self, *, links: InMemoryLinkRepo, users: UserRepoPort, logger: Optional[logging.Logger] = None):
        self.links = links
        self.users = users
        self.log = logger or logging.getLogger("linkbio.linkservice")

    def list_mine(self, ctx: AuthContext) -> List[Link]:
        return self.links.list_for_owner(ctx.user_id)

    def list_public(self, username: str) -> List[Link]:
        user = self.users.find_by_username(username)
        if not user:
            raise NotFoundError("User not found")
        return self.links.list_for_owner(user.id, active_only=True)

    def create(self, ctx: AuthContext, body: LinkIn) -> Link:
        link = self.links.create(ctx.user_id, body.model_dump())
        self.log.info("link.created", extra={"user_id": ctx.user_id, "link_id": link.id})
        return link

    def update(self, ctx: AuthContext, link_id: str, body: LinkIn) -> Link:
        self._owned(ctx, link_id)
        return self.links.update(link_id, body.model_dump(exclude_unset=True))

    def delete(self, ctx: AuthContext, link_id: str) -> None:
        self._owned(ctx, link_id)
        self.links.delete(link_id)
        self.log.info("link.deleted", extra={"user_id": ctx.user_id, "link_id": link_id})

    def reorder(self, ctx: AuthContext, items: Optional[List[ReorderItem]]) -> None:
        """
        Apply new `order` values as independent per-link updates.
        Every referenced link is checked for existence and ownership before
        any update is written; there is no conflict resolution between
        concurrent reorders.
        """
        if items is None:
            raise ValidationError("Invalid links data")
        for item in items:
            self._owned(ctx, item.id)
        for item in items:
            self.links.update(item.id, {"order": item.order})

    def _owned(self, ctx: AuthContext, link_id: str) -> Link:
        link = self.links.get(link_id)
        if not link:
            raise NotFoundError("Link not found")
        ensure_owner(ctx, link.user_id)
        return link
