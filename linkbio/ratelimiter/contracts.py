from __future__ import annotations

import re
from typing import List, Literal, Optional

from pydantic import BaseModel, Field, PositiveInt, field_validator

Scope = Literal["ip", "global"]


class Policy(BaseModel):
    """Fixed window: at most `limit` requests per `window_seconds` per key."""
    name: str = Field(..., description="Unique policy name")
    limit: PositiveInt = Field(..., description="Requests allowed per window")
    window_seconds: PositiveInt = Field(..., description="Window length in seconds")
    scope: Scope = Field("ip")
    path_pattern: str = Field(r".*", description="Regex to match request path")
    methods: Optional[List[str]] = Field(None, description="List of HTTP methods; None means all")

    @field_validator("methods")
    @classmethod
    def normalize_methods(cls, v: Optional[List[str]]) -> Optional[List[str]]:
        if v is None:
            return v
        return [m.upper() for m in v]

    def matches(self, method: str, path: str) -> bool:
        if self.methods and method.upper() not in self.methods:
            return False
        return re.search(self.path_pattern, path) is not None


class ConsumeResult(BaseModel):
    allowed: bool
    limit: int
    remaining: int
    reset_after: int  # seconds until the current window closes
    policy: str
    key: str
