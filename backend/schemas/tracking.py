from pydantic import BaseModel
from typing import Optional
from datetime import datetime


class TrackingOut(BaseModel):
    tracking_id: str
    rental_order_id: str
    status: str
    current_location: Optional[str] = None
    courier_name: Optional[str] = None
    last_update_date: datetime
    additional_comments: Optional[str] = None

    class Config:
        from_attributes = True
