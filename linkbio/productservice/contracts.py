from __future__ import annotations
from datetime import datetime
from typing import Literal, Optional

from pydantic import confloat, constr

from ..contracts import OptionalUrlStr, WireModel

Currency = Literal["USD", "EUR", "GBP", "JPY", "CAD", "AUD"]


class ProductIn(WireModel):
    name: constr(strip_whitespace=True, min_length=1, max_length=100)
    description: constr(strip_whitespace=True, min_length=1, max_length=1000)
    price: confloat(ge=0)
    currency: Currency = "USD"
    image_url: OptionalUrlStr = None
    is_active: bool = True


class Product(WireModel):
    id: str
    user_id: str
    name: str
    description: str
    price: float
    currency: Currency = "USD"
    image_url: Optional[str] = None
    is_active: bool = True
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
