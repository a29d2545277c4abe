# backend/models/users.py
from sqlalchemy import Column, Integer, String, CheckConstraint
from database import Base

# Represents a rental account with its credentials and staff role
class User(Base):
    __tablename__ = "users"

    login = Column(String(50), primary_key=True, index=True)
    password_hash = Column(String, nullable=False)
    role = Column(String(20), nullable=False, default="customer")
    fav_games = Column(String, nullable=False, default="")
    phone_num = Column(String(20), nullable=True)
    num_overdue_games = Column(Integer, CheckConstraint("num_overdue_games >= 0"), nullable=False, default=0)
