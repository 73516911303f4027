from __future__ import annotations
from datetime import datetime
from typing import List, Optional

from pydantic import Field, constr

from ..contracts import OptionalUrlStr, UrlStr, WireModel


class LinkIn(WireModel):
    title: constr(strip_whitespace=True, min_length=1, max_length=50)
    url: UrlStr
    icon: OptionalUrlStr = None
    is_active: bool = True
    order: int = 0


class Link(WireModel):
    id: str
    user_id: str
    title: str
    url: str
    icon: Optional[str] = None
    is_active: bool = True
    order: int = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ReorderItem(WireModel):
    id: str
    order: int


class ReorderRequest(WireModel):
    links: Optional[List[ReorderItem]] = Field(default=None)
