from pydantic import BaseModel


class NotificationResult(BaseModel):
    notificationId: int
    type: str
    message: str
