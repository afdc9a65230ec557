from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .errors import ConfigurationError


PRODUCTION_HOST = "https://api.escrow.com"
SANDBOX_HOST = "https://api.escrow-sandbox.com"
API_VERSION = "2017-09-01"

ENV_EMAIL = "ESCROW_EMAIL"
ENV_PASSWORD = "ESCROW_PASSWORD"
ENV_SANDBOX = "ESCROW_SANDBOX"
ENV_TEST_BUYER = "TEST_BUYER_EMAIL"
ENV_TEST_SELLER = "TEST_SELLER_EMAIL"

MISSING_CREDENTIALS = f"Please set {ENV_EMAIL} and {ENV_PASSWORD} in your .env file"


class EscrowSettings(BaseSettings):
    """Escrow variables read from the process environment and a .env file.

    Variables already set in the environment win over the .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    email: str = Field(alias=ENV_EMAIL, min_length=1)
    password: str = Field(alias=ENV_PASSWORD, min_length=1)
    sandbox: bool = Field(default=False, alias=ENV_SANDBOX)
    test_buyer_email: Optional[str] = Field(default=None, alias=ENV_TEST_BUYER)
    test_seller_email: Optional[str] = Field(default=None, alias=ENV_TEST_SELLER)

    @field_validator("sandbox", mode="before")
    @classmethod
    def blank_flag_is_production(cls, v: Any) -> Any:
        if v is None or (isinstance(v, str) and not v.strip()):
            return False
        return v

    @field_validator("test_buyer_email", "test_seller_email", mode="before")
    @classmethod
    def blank_email_is_unset(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v


def _settings_error(error: ValidationError) -> ConfigurationError:
    fields = ", ".join(str(err["loc"][0]) for err in error.errors() if err.get("loc"))
    return ConfigurationError(f"Invalid settings ({fields}). {MISSING_CREDENTIALS}")


@dataclass(frozen=True)
class EscrowConfig:
    """
    Credentials and environment selection for one client.

    email/password are the Basic Auth pair (the password may be an API key).
    sandbox=False targets production.
    test_buyer_email/test_seller_email are only read by the manual harness.
    timeout_seconds=None leaves requests without a timeout.
    """

    email: str
    password: str
    sandbox: bool = False
    test_buyer_email: Optional[str] = None
    test_seller_email: Optional[str] = None
    timeout_seconds: Optional[float] = None

    def __post_init__(self) -> None:
        if not self.email or not self.password:
            raise ConfigurationError(MISSING_CREDENTIALS)

    @property
    def is_production(self) -> bool:
        return not self.sandbox

    @property
    def host(self) -> str:
        return SANDBOX_HOST if self.sandbox else PRODUCTION_HOST

    @property
    def base_url(self) -> str:
        return f"{self.host}/{API_VERSION}"

    @property
    def environment_name(self) -> str:
        return "SANDBOX" if self.sandbox else "PRODUCTION"

    @classmethod
    def from_settings(cls, settings: EscrowSettings) -> "EscrowConfig":
        return cls(
            email=settings.email,
            password=settings.password,
            sandbox=settings.sandbox,
            test_buyer_email=settings.test_buyer_email,
            test_seller_email=settings.test_seller_email,
        )

    @classmethod
    def from_env(
        cls,
        environ: Optional[Mapping[str, str]] = None,
        *,
        dotenv_path: Optional[str] = None,
        load_env_file: bool = True,
    ) -> "EscrowConfig":
        """Build a config from ESCROW_* / TEST_* variables.

        An explicit `environ` is validated on its own, without touching the
        process environment or any .env file.
        """
        try:
            if environ is not None:
                settings = EscrowSettings.model_validate(dict(environ))
            elif not load_env_file:
                settings = EscrowSettings(_env_file=None)
            else:
                settings = EscrowSettings(_env_file=dotenv_path or ".env")
        except ValidationError as e:
            raise _settings_error(e) from e

        return cls.from_settings(settings)


def env_report(environ: Mapping[str, Optional[str]]) -> Dict[str, str]:
    """Recognized variables as display strings; the password is masked."""
    not_set = "NOT SET"
    return {
        ENV_EMAIL: environ.get(ENV_EMAIL) or not_set,
        ENV_PASSWORD: "***SET***" if environ.get(ENV_PASSWORD) else not_set,
        ENV_SANDBOX: environ.get(ENV_SANDBOX) or not_set,
        ENV_TEST_BUYER: environ.get(ENV_TEST_BUYER) or not_set,
        ENV_TEST_SELLER: environ.get(ENV_TEST_SELLER) or not_set,
    }
