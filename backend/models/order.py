# backend/models/order.py
from sqlalchemy import Column, Integer, String, Numeric, ForeignKey, DateTime, CheckConstraint
from sqlalchemy.orm import relationship
from database import Base

class RentalOrder(Base):
    __tablename__ = "rentalorder"

    rental_order_id = Column(String(50), primary_key=True, index=True)
    login = Column(String(50), ForeignKey("users.login", onupdate="CASCADE"), nullable=False, index=True)
    no_of_games = Column(Integer, CheckConstraint("no_of_games >= 0"), nullable=False, default=0)
    total_price = Column(Numeric(10, 2), CheckConstraint("total_price >= 0"), nullable=False)
    order_timestamp = Column(DateTime, nullable=False, index=True)
    due_date = Column(DateTime, nullable=False)

    games = relationship("GameLineItem", back_populates="order", cascade="all, delete-orphan")
    tracking = relationship("TrackingRecord", back_populates="order", uselist=False)

# One row per distinct game within an order
class GameLineItem(Base):
    __tablename__ = "gamesinorder"

    rental_order_id = Column(String(50), ForeignKey("rentalorder.rental_order_id"), primary_key=True)
    game_id = Column(String(50), ForeignKey("catalog.game_id"), primary_key=True)
    units_ordered = Column(Integer, CheckConstraint("units_ordered > 0"), nullable=False)

    order = relationship("RentalOrder", back_populates="games")
    game = relationship("CatalogEntry")
