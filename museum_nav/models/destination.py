from sqlalchemy import Column, DateTime, Integer, JSON, String, func

from museum_nav.core.db import Base


class Destination(Base):
    __tablename__ = "destinations"

    id = Column(Integer, primary_key=True, autoincrement=False)
    name = Column(String(255), nullable=False)
    type = Column(String(32), nullable=False)
    coordinates = Column(JSON, nullable=False)
    map_id = Column(Integer, nullable=True)
    status = Column(String(32), nullable=False, default="available")
    crowd_level = Column(String(16), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)
