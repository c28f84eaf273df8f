# farm/infrastructure/database/models.py

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.sql import func

from farm.infrastructure.database.session import Base


class BaseModel(Base):
    __abstract__ = True

    id = Column(Integer, primary_key=True, autoincrement=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())


class BarnRecord(BaseModel):
    """ORM model for barns. color holds Color.value."""

    __tablename__ = "barns"

    name = Column(String, nullable=False, default="")
    color = Column(String, nullable=False, index=True)
    capacity = Column(Integer, nullable=False)


class AnimalRecord(BaseModel):
    """ORM model for animals. barn_id is cleared by the database if the barn is deleted first."""

    __tablename__ = "animals"

    name = Column(String, nullable=False)
    favorite_color = Column(String, nullable=False, index=True)
    barn_id = Column(Integer, ForeignKey("barns.id", ondelete="SET NULL"), nullable=True, index=True)
