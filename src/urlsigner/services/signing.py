import hashlib
import hmac
import logging

import structlog

from urlsigner.config import settings
from urlsigner.encoding import B64URL_ALPHABET, b64url_decode, b64url_encode
from urlsigner.exceptions import BadSignature, MalformedToken, SignError
from urlsigner.metrics import TOKENS_SIGNED, TOKENS_VERIFIED

# Routed through stdlib logging so nothing is emitted until the host configures it.
logger = structlog.wrap_logger(
    logging.getLogger(__name__), wrapper_class=structlog.stdlib.BoundLogger
)


def _as_bytes(value: str | bytes) -> bytes:
    if isinstance(value, str):
        return value.encode("utf-8")
    return bytes(value)


def derive_key(secret: bytes, salt: bytes, digest_method: str) -> bytes:
    """Derive the MAC key as HMAC(secret, salt) so one secret can serve several purposes."""
    return hmac.new(secret, salt, digest_method).digest()


def record_outcome(signer: str, exc: SignError | None = None) -> None:
    result = "valid" if exc is None else exc.reason
    TOKENS_VERIFIED.labels(signer=signer, result=result).inc()


class Signer:
    """Signs strings as ``<payload>.<signature>`` and verifies them.

    The signature is an HMAC over the payload, base64url-encoded without
    padding. Instances hold only the derived key after construction and can
    be shared between threads.
    """

    metric_label = "signer"

    def __init__(
        self,
        secret: str | bytes,
        *,
        salt: str | bytes | None = None,
        digest_method: str | None = None,
        separator: str | None = None,
    ) -> None:
        secret = _as_bytes(secret)
        if not secret:
            raise ValueError("Secret must not be empty")

        digest_method = digest_method or settings.digest_method
        try:
            hashlib.new(digest_method)
        except ValueError as exc:
            raise ValueError(f"Unsupported digest method: {digest_method}") from exc

        separator = settings.separator if separator is None else separator
        if len(separator) != 1 or separator in B64URL_ALPHABET:
            raise ValueError(
                f"Separator must be a single character outside the base64url alphabet, got {separator!r}"
            )

        salt = _as_bytes(settings.key_derivation_salt if salt is None else salt)

        self.separator = separator
        self.digest_method = digest_method
        self._key = derive_key(secret, salt, digest_method)

        logger.debug("signer_created", digest_method=digest_method, salt_length=len(salt))

    def __repr__(self) -> str:
        return f"{type(self).__name__}(digest_method={self.digest_method!r}, separator={self.separator!r})"

    def _mac(self, value: str) -> bytes:
        return hmac.new(self._key, value.encode("utf-8"), self.digest_method).digest()

    def signature(self, value: str) -> str:
        """Return the base64url signature for ``value``."""
        return b64url_encode(self._mac(value))

    def sign(self, payload: str) -> str:
        TOKENS_SIGNED.labels(signer=self.metric_label).inc()
        return self._sign(payload)

    def unsign(self, token: str) -> str:
        """Verify ``token`` and return the payload it carries.

        Raises MalformedToken when the token has no separator or the signature
        segment is not valid base64url, and BadSignature when the signature
        does not match.
        """
        try:
            payload = self._verify(token)
        except SignError as exc:
            record_outcome(self.metric_label, exc)
            raise
        record_outcome(self.metric_label)
        return payload

    def validate(self, token: str) -> bool:
        """Return True if ``token`` carries a valid signature."""
        try:
            self.unsign(token)
        except SignError:
            return False
        return True

    # Unmetered primitives, shared with TimestampSigner.

    def _sign(self, value: str) -> str:
        return f"{value}{self.separator}{self.signature(value)}"

    def _verify(self, token: str) -> str:
        value, sep, encoded_sig = token.rpartition(self.separator)
        if not sep:
            raise MalformedToken(f"No {self.separator!r} found in token", token=token)

        try:
            sig = b64url_decode(encoded_sig)
        except ValueError as exc:
            raise MalformedToken("Signature is not valid base64url", token=token) from exc

        if not hmac.compare_digest(self._mac(value), sig):
            raise BadSignature(token=token)
        return value
