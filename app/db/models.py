"""Database models."""
from datetime import datetime
from sqlalchemy import Column, Integer, String, DateTime, Float, JSON
from sqlalchemy.orm import declarative_base

Base = declarative_base()


class Order(Base):
    """Order model."""

    __tablename__ = "orders"

    id = Column(Integer, primary_key=True, index=True)
    order_type = Column(String, nullable=False)  # dine-in, takeaway, delivery
    customer_name = Column(String, nullable=True, index=True)
    mobile = Column(String, nullable=True)
    table_number = Column(String, nullable=True)
    address = Column(String, nullable=True)
    items = Column(JSON, nullable=False)  # List of {name, price, qty, ...}
    total = Column(Float, default=0.0, nullable=False)
    status = Column(String, default="incoming", nullable=False, index=True)
    # Host local wall-clock time, never updated after insert
    created_at = Column(DateTime, default=datetime.now, nullable=False, index=True)
