from __future__ import annotations
from typing import Annotated, Any, Dict, Optional

from pydantic import AfterValidator, BaseModel, BeforeValidator, ConfigDict, HttpUrl, TypeAdapter
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel

from .errors import ForbiddenError

# ---------- Wire base ----------

class WireModel(BaseModel):
    """camelCase on the wire, snake_case in Python."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_wire(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)

# ---------- Field types ----------

_HTTP_URL = TypeAdapter(HttpUrl)

def _check_http_url(value: str) -> str:
    value = value.strip()
    try:
        _HTTP_URL.validate_python(value)
    except PydanticValidationError:
        raise ValueError("Invalid URL")
    # keep what the user typed; HttpUrl would normalise it
    return value

UrlStr = Annotated[str, AfterValidator(_check_http_url)]
# forms send "" for an empty optional URL
OptionalUrlStr = Annotated[Optional[UrlStr], BeforeValidator(lambda v: v or None)]

# ---------- Identity ----------

class AuthContext(BaseModel):
    """Authenticated identity produced at the HTTP boundary and handed to services."""
    user_id: str

def ensure_owner(ctx: AuthContext, owner_id: str) -> None:
    if owner_id != ctx.user_id:
        raise ForbiddenError()
