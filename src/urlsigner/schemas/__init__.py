from urlsigner.schemas.tokens import TimestampedPayload

__all__ = ["TimestampedPayload"]
