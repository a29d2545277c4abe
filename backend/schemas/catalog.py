from pydantic import BaseModel, Field
from typing import Literal, Optional
from decimal import Decimal


# Browse options for the catalog
class CatalogFilter(BaseModel):
    genre: Optional[str] = None
    max_price: Optional[Decimal] = Field(default=None, ge=0)
    order: Literal["asc", "desc"] = "asc"


class CatalogEntryOut(BaseModel):
    game_id: str
    game_name: str
    genre: Optional[str] = None
    price: Decimal
    description: Optional[str] = None
    image_url: Optional[str] = None

    class Config:
        from_attributes = True
