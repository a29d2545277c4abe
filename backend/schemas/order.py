from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import datetime
from decimal import Decimal


# A single game requested in a cart
class LineItem(BaseModel):
    game_id: str
    game_name: Optional[str] = None
    quantity: int = Field(gt=0)
    unit_price: Decimal = Field(ge=0)

    @property
    def line_total(self) -> Decimal:
        return self.unit_price * self.quantity


# Finished cart handed from the cart builder to the order coordinator
class Cart(BaseModel):
    items: List[LineItem] = []
    game_count: int = 0
    total_price: Decimal = Decimal("0.00")

    @property
    def is_empty(self) -> bool:
        return not self.items


# Outcome of a committed order placement
class OrderReceipt(BaseModel):
    rental_order_id: str
    tracking_id: str
    login: str
    game_count: int
    total_price: Decimal
    order_timestamp: datetime
    due_date: datetime


# Output schema for an order line
class OrderGameOut(BaseModel):
    game_id: str
    units_ordered: int

    class Config:
        from_attributes = True


# Order details shown to the owner of the order
class OrderDetail(BaseModel):
    rental_order_id: str
    order_timestamp: datetime
    due_date: datetime
    total_price: Decimal
    tracking_id: Optional[str] = None
    games: List[OrderGameOut]
