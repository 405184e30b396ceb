from sqlalchemy import Column, DateTime, Float, Integer, JSON, String, Text, func

from museum_nav.core.db import Base


class Exhibit(Base):
    __tablename__ = "exhibits"

    id = Column(Integer, primary_key=True, autoincrement=False)
    name = Column(String(255), nullable=False)
    title = Column(String(255), nullable=True)
    artist = Column(String(255), nullable=True)
    category = Column(JSON, nullable=False, default=list)
    description = Column(Text, nullable=True)
    location = Column(String(255), nullable=True)
    coordinates = Column(JSON, nullable=True)
    status = Column(String(32), nullable=False, default="open")
    ratings = Column(JSON, nullable=False, default=dict)  # user id (str) -> rating
    average_rating = Column(Float, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)
