# backend/models/counter.py
from sqlalchemy import Column, Integer, String
from database import Base

# Named monotonic sequence (e.g. "sku:ELC", "receipt").
# Incremented with a single UPDATE so concurrent requests never share a value.
class Counter(Base):
    __tablename__ = "counters"

    name = Column(String, primary_key=True)
    value = Column(Integer, nullable=False, default=0)
