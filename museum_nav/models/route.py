"""
Route model for computed walking routes
"""
from sqlalchemy import BigInteger, Boolean, Column, DateTime, Float, ForeignKey, Integer, JSON, String, func

from museum_nav.core.db import Base


class Route(Base):
    """
    A straight-line walking route from a start point to a destination.
    Owned by exactly one user; path holds at least the start and end points.
    """
    __tablename__ = "routes"

    id = Column(Integer, primary_key=True, autoincrement=False)
    user_id = Column(BigInteger, ForeignKey("users.id"), nullable=False, index=True)
    destination_id = Column(Integer, nullable=True)
    start_coordinates = Column(JSON, nullable=False)
    end_coordinates = Column(JSON, nullable=False)
    path = Column(JSON, nullable=False)
    instructions = Column(JSON, nullable=False)
    stops = Column(JSON, nullable=False, default=list)
    distance = Column(Float, nullable=False)
    estimated_time = Column(Integer, nullable=False)
    arrival_time = Column(String(16), nullable=True)
    calculation_time = Column(Integer, nullable=False, default=0)
    is_personalized = Column(Boolean, nullable=False, default=False)
    map_url = Column(String(255), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)
