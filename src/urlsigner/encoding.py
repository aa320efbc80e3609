import base64
import binascii
import re

B64URL_ALPHABET = frozenset("ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789-_")

_B64URL_RE = re.compile(r"[A-Za-z0-9_-]*")

MAX_TIMESTAMP_BYTES = 8


def b64url_encode(data: bytes) -> str:
    """Base64url-encode without '=' padding."""
    return base64.urlsafe_b64encode(data).decode("ascii").rstrip("=")


def b64url_decode(value: str) -> bytes:
    """Strict inverse of :func:`b64url_encode`.

    Rejects padding, characters outside the url-safe alphabet and encodings
    whose unused trailing bits are set, so every byte string has exactly one
    accepted text form. Raises ``ValueError`` on any of those.
    """
    if not _B64URL_RE.fullmatch(value) or len(value) % 4 == 1:
        raise ValueError("invalid base64url value")
    padded = value + "=" * (-len(value) % 4)
    try:
        data = base64.urlsafe_b64decode(padded)
    except binascii.Error as exc:
        raise ValueError("invalid base64url value") from exc
    if b64url_encode(data) != value:
        raise ValueError("non-canonical base64url value")
    return data


def int_to_bytes(n: int) -> bytes:
    """Minimal big-endian two's complement representation, at least one byte."""
    magnitude = n if n >= 0 else ~n
    return n.to_bytes(max(1, (magnitude.bit_length() + 8) // 8), "big", signed=True)


def bytes_to_int(data: bytes) -> int:
    if not 0 < len(data) <= MAX_TIMESTAMP_BYTES:
        raise ValueError(f"timestamp must be 1 to {MAX_TIMESTAMP_BYTES} bytes, got {len(data)}")
    return int.from_bytes(data, "big", signed=True)
