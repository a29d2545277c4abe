# backend/models/tracking.py
from sqlalchemy import Column, String, ForeignKey, DateTime
from sqlalchemy.orm import relationship
from database import Base

# Shipment status of a rental order, created together with the order
class TrackingRecord(Base):
    __tablename__ = "trackinginfo"

    tracking_id = Column(String(50), primary_key=True, index=True)
    rental_order_id = Column(String(50), ForeignKey("rentalorder.rental_order_id"), unique=True, nullable=False)
    status = Column(String, nullable=False)
    current_location = Column(String)
    courier_name = Column(String)
    last_update_date = Column(DateTime, nullable=False)
    additional_comments = Column(String, default="")

    order = relationship("RentalOrder", back_populates="tracking")
