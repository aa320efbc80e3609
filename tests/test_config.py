import logging
from unittest.mock import patch

import pytest
import structlog
from pydantic import ValidationError

from urlsigner.config import Settings
from urlsigner.logging_config import setup_logging
from urlsigner.services.signing import Signer


def test_settings_defaults():
    settings = Settings()

    assert settings.digest_method == "sha1"
    assert settings.key_derivation_salt == "nobi.Signer"
    assert settings.separator == "."
    assert settings.timestamp_epoch == 1293840000


def test_settings_from_env(monkeypatch):
    monkeypatch.setenv("URLSIGNER_DIGEST_METHOD", "sha256")
    monkeypatch.setenv("URLSIGNER_TIMESTAMP_EPOCH", "0")

    settings = Settings()
    assert settings.digest_method == "sha256"
    assert settings.timestamp_epoch == 0


def test_settings_negative_epoch(monkeypatch):
    monkeypatch.setenv("URLSIGNER_TIMESTAMP_EPOCH", "-1")

    with pytest.raises(ValidationError, match="timestamp_epoch"):
        Settings()


def test_signer_reads_defaults_from_settings():
    with patch("urlsigner.services.signing.settings") as mock_settings:
        mock_settings.digest_method = "sha256"
        mock_settings.separator = "~"
        mock_settings.key_derivation_salt = "custom-salt"
        signer = Signer("secret")

    token = signer.sign("a.b")
    assert signer.separator == "~"
    assert len(token.rpartition("~")[2]) == 43
    assert token == Signer("secret", salt="custom-salt", digest_method="sha256", separator="~").sign("a.b")


def test_setup_logging():
    root = logging.getLogger()
    package_logger = logging.getLogger("urlsigner")
    saved = (root.handlers[:], root.level, package_logger.level)
    try:
        setup_logging("debug")
        assert structlog.is_configured()
        assert package_logger.level == logging.DEBUG
    finally:
        structlog.reset_defaults()
        root.handlers[:] = saved[0]
        root.setLevel(saved[1])
        package_logger.setLevel(saved[2])
