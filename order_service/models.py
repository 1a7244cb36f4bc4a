from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Integer
from sqlalchemy.orm import declarative_base

from service_common.db import ToDictMixIn

Base = declarative_base()


def utcnow():
    return datetime.now(timezone.utc)


class Order(Base, ToDictMixIn):
    __tablename__ = "orders"
    id = Column(Integer, primary_key=True, index=True)
    # Plain ids, not foreign keys: users and products live in other services
    # and are not re-checked once the order exists.
    user_id = Column(Integer, nullable=False)
    product_id = Column(Integer, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)
