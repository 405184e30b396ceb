from sqlalchemy import BigInteger, Boolean, Column, DateTime, Integer, String, Text, func

from museum_nav.core.db import Base


class Notification(Base):
    __tablename__ = "notifications"

    id = Column(Integer, primary_key=True, autoincrement=False)
    user_id = Column(BigInteger, nullable=False, index=True)
    route_id = Column(Integer, nullable=True, index=True)
    type = Column(String(32), nullable=False)  # route_deviation, arrival, destination_closed, crowd_alert, info
    message = Column(Text, nullable=False)
    is_read = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
