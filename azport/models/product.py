import json

from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from sqlalchemy.types import TypeDecorator

from azport.database import Base


class JSONList(TypeDecorator):
    """JSON array stored as TEXT. Anything undecodable or not a list reads back as []."""

    impl = Text
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        return json.dumps(list(value) if isinstance(value, (list, tuple)) else [])

    def process_result_value(self, value, dialect):
        if value is None:
            return []
        try:
            decoded = json.loads(value)
        except (TypeError, ValueError):
            return []
        return decoded if isinstance(decoded, list) else []


class Product(Base):
    """Catalog entry. Products point at their category by id; the API exposes the name."""

    __tablename__ = "products"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String, nullable=False)
    description = Column(Text)
    image = Column(Text)  # URL or inline data URL
    specs = Column(JSONList)
    use_cases = Column("useCases", JSONList)
    category_id = Column(Integer, ForeignKey("categories.id"), nullable=True, index=True)
    images = Column(JSONList)
    document = Column(Text)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    category = relationship("Category", back_populates="products")
