from datetime import datetime

from pydantic import BaseModel


class TimestampedPayload(BaseModel):
    payload: str
    timestamp: int
    signed_at: datetime
    age: int

    model_config = {"frozen": True}
