from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

class ProductCreate(BaseModel):
    """Schema for creating or replacing a product.
    """
    name: str = Field(min_length=1)
    description: str = ""
    price: float = Field(gt=0)
    category: str = Field(min_length=1)

class ProductOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    description: str
    price: float
    category: str
    created_at: datetime
    updated_at: datetime
