# backend/models/counter.py
from sqlalchemy import Column, Integer, String
from database import Base

# Last issued numeric suffix per identifier kind ("rentalorder", "trackingid").
# Rows are advanced with an atomic UPDATE so concurrent sessions never share a value.
class IdCounter(Base):
    __tablename__ = "idcounters"

    name = Column(String(50), primary_key=True)
    value = Column(Integer, nullable=False, default=0)
