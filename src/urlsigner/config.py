from pydantic import field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # MAC
    digest_method: str = "sha1"
    key_derivation_salt: str = "nobi.Signer"

    # Token layout
    separator: str = "."
    timestamp_epoch: int = 1293840000  # 2011-01-01T00:00:00Z

    log_level: str = "INFO"

    model_config = {"env_prefix": "URLSIGNER_"}

    @field_validator("timestamp_epoch")
    @classmethod
    def validate_timestamp_epoch(cls, v: int) -> int:
        if v < 0:
            raise ValueError("timestamp_epoch must not be before 1970-01-01")
        return v


settings = Settings()
