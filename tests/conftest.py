import pytest

from urlsigner.services.signing import Signer
from urlsigner.services.timestamp import TimestampSigner


class FakeClock:
    """Stand-in for time.time that only moves when told to."""

    def __init__(self, now: float) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def secret() -> str:
    return "test-secret-key-1234"


@pytest.fixture
def t0() -> int:
    return 1_700_000_000


@pytest.fixture
def clock(t0: int) -> FakeClock:
    return FakeClock(t0)


@pytest.fixture
def signer(secret: str) -> Signer:
    return Signer(secret)


@pytest.fixture
def ts_signer(secret: str, clock: FakeClock) -> TimestampSigner:
    return TimestampSigner(secret, clock=clock)
