from urlsigner.config import settings
from urlsigner.exceptions import BadSignature, BadTimeSignature, Expired, MalformedToken, SignError
from urlsigner.logging_config import setup_logging
from urlsigner.schemas.tokens import TimestampedPayload
from urlsigner.services.signing import Signer
from urlsigner.services.timestamp import TimestampSigner

__all__ = [
    "BadSignature",
    "BadTimeSignature",
    "Expired",
    "MalformedToken",
    "SignError",
    "Signer",
    "TimestampSigner",
    "TimestampedPayload",
    "settings",
    "setup_logging",
]
