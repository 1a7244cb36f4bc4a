from datetime import datetime, timezone
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, StrictFloat, StrictInt, StrictStr, field_validator


class OrderCreate(BaseModel):
    """Schema for the order create request body.
    """
    user_id: StrictInt
    product_id: StrictInt


class OrderOut(BaseModel):
    """A persisted order without any remote details.
    """
    model_config = ConfigDict(from_attributes=True, frozen=True)

    id: int
    user_id: int
    product_id: int
    created_at: datetime
    updated_at: datetime

    @field_validator("created_at", "updated_at")
    @classmethod
    def assume_utc(cls, value: datetime) -> datetime:
        # SQLite returns naive values for timezone-aware columns.
        return value if value.tzinfo else value.replace(tzinfo=timezone.utc)


class UserSnapshot(BaseModel):
    """Body of ``GET /users?id=`` on the user service, decoded strictly.
    """
    model_config = ConfigDict(extra="forbid", frozen=True)

    id: StrictInt
    name: StrictStr
    email: StrictStr
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ProductSnapshot(BaseModel):
    """Body of ``GET /products?id=`` on the product service, decoded strictly.
    """
    model_config = ConfigDict(extra="forbid", frozen=True)

    id: StrictInt
    name: StrictStr
    description: StrictStr = ""
    price: Union[StrictFloat, StrictInt]
    category: StrictStr
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class OrderWithDetails(OrderOut):
    """An order merged with freshly fetched user and product snapshots.
    """
    user: Optional[UserSnapshot] = None
    product: Optional[ProductSnapshot] = None
