from datetime import datetime


class SignError(Exception):
    """Base class for every token verification failure."""

    reason = "invalid"


class MalformedToken(SignError):
    """The token does not have the separator-delimited shape or fails base64url decoding."""

    reason = "malformed"

    def __init__(self, message: str, token: str | None = None) -> None:
        super().__init__(message)
        self.token = token


class BadTimeSignature(MalformedToken):
    """The signature checked out but the embedded timestamp is missing or unreadable."""

    reason = "bad_time_signature"


class BadSignature(SignError):
    """The recomputed signature does not match the one carried by the token."""

    reason = "bad_signature"

    def __init__(self, message: str = "Signature does not match", token: str | None = None) -> None:
        super().__init__(message)
        self.token = token


class Expired(SignError):
    reason = "expired"

    def __init__(self, payload: str, signed_at: datetime, age: int, max_age: int) -> None:
        super().__init__(f"Signature age {age} > {max_age} seconds")
        self.payload = payload
        self.signed_at = signed_at
        self.age = age
        self.max_age = max_age
