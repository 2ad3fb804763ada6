from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.sql import func

from azport.database import Base


class User(Base):
    """The site administrator. A single row is expected in practice."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String, unique=True, index=True, nullable=False)
    password_hash = Column("password", String, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
