import time
from collections.abc import Callable
from datetime import datetime, timedelta, timezone

from urlsigner.config import settings
from urlsigner.encoding import b64url_decode, b64url_encode, bytes_to_int, int_to_bytes
from urlsigner.exceptions import BadTimeSignature, Expired, SignError
from urlsigner.metrics import TOKENS_SIGNED
from urlsigner.schemas.tokens import TimestampedPayload
from urlsigner.services.signing import Signer, record_outcome

Clock = Callable[[], float]

UNIX_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


class TimestampSigner:
    """Signs ``<payload>.<timestamp>`` so tokens can be given a maximum age.

    The timestamp is a signed second count since ``settings.timestamp_epoch``
    (negative for clocks set before it) and is
    covered by the same signature as the payload. All MAC work is delegated to
    an inner :class:`Signer`; the signature is always checked before the
    timestamp is looked at.
    """

    metric_label = "timestamp_signer"

    def __init__(
        self,
        secret: str | bytes,
        *,
        salt: str | bytes | None = None,
        digest_method: str | None = None,
        separator: str | None = None,
        clock: Clock | None = None,
    ) -> None:
        self.signer = Signer(secret, salt=salt, digest_method=digest_method, separator=separator)
        self.clock = clock or time.time
        self.epoch = settings.timestamp_epoch

    def __repr__(self) -> str:
        return f"{type(self).__name__}(signer={self.signer!r})"

    @property
    def separator(self) -> str:
        return self.signer.separator

    def get_timestamp(self) -> int:
        return int(self.clock()) - self.epoch

    def timestamp_to_datetime(self, timestamp: int) -> datetime:
        return UNIX_EPOCH + timedelta(seconds=timestamp + self.epoch)

    def sign(self, payload: str) -> str:
        timestamp = b64url_encode(int_to_bytes(self.get_timestamp()))
        TOKENS_SIGNED.labels(signer=self.metric_label).inc()
        return self.signer._sign(f"{payload}{self.separator}{timestamp}")

    def unsign(self, token: str, max_age: int | None) -> str:
        """Verify ``token`` and its age, returning the payload.

        ``max_age`` is in seconds and inclusive: a token exactly ``max_age``
        seconds old is still accepted. ``None`` disables the age check.
        Timestamps in the future are accepted.
        """
        return self.unsign_with_timestamp(token, max_age).payload

    def unsign_with_timestamp(self, token: str, max_age: int | None) -> TimestampedPayload:
        if max_age is not None and max_age < 0:
            raise ValueError("max_age must not be negative")

        try:
            result = self._verify(token, max_age)
        except SignError as exc:
            record_outcome(self.metric_label, exc)
            raise
        record_outcome(self.metric_label)
        return result

    def validate(self, token: str, max_age: int | None) -> bool:
        try:
            self.unsign(token, max_age)
        except SignError:
            return False
        return True

    def _verify(self, token: str, max_age: int | None) -> TimestampedPayload:
        value = self.signer._verify(token)

        payload, sep, encoded_ts = value.rpartition(self.separator)
        if not sep:
            raise BadTimeSignature("Timestamp missing from signed value", token=token)

        try:
            timestamp = bytes_to_int(b64url_decode(encoded_ts))
            signed_at = self.timestamp_to_datetime(timestamp)
        except (ValueError, OverflowError, OSError) as exc:
            raise BadTimeSignature("Timestamp is not valid", token=token) from exc

        age = self.get_timestamp() - timestamp

        if max_age is not None and age > max_age:
            raise Expired(payload, signed_at=signed_at, age=age, max_age=max_age)

        return TimestampedPayload(payload=payload, timestamp=timestamp, signed_at=signed_at, age=age)
