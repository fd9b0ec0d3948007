# zabbix_provider/core/config.py
from functools import lru_cache
from typing import Any, List, NamedTuple, Optional

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_PREFIX = "ZABBIX_"
API_ENTRYPOINT = "api_jsonrpc.php"


class ZabbixSettings(BaseSettings):
    """Connection settings for the Zabbix API client.

    Values are resolved from explicit keyword arguments first, then
    ``ZABBIX_*`` environment variables, then the ``.env`` file, then the
    defaults below.
    """

    host: str = Field("localhost", description="Base URL of the Zabbix frontend")
    api_file: str = Field(API_ENTRYPOINT, description="Path segment appended to host")
    username: Optional[str] = Field("admin", description="Login username")
    password: Optional[str] = Field("zabbix", description="Login password")
    http_username: Optional[str] = Field(None, description="HTTP Basic auth username")
    http_password: Optional[str] = Field(None, description="HTTP Basic auth password")
    auth_token: Optional[str] = Field(None, description="Pre-issued API token, bypasses login")
    ssl_context: Optional[str] = Field(None, description="CA bundle path used to verify the server")
    check_ssl: bool = Field(True, description="Whether to verify the SSL certificate")

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        env_file=".env",
        env_ignore_empty=True,
        extra="ignore",
        frozen=True,
    )

    @field_validator(
        "username", "password", "http_username", "http_password", "auth_token", "ssl_context",
        mode="before",
    )
    @classmethod
    def _blank_to_none(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("api_file")
    @classmethod
    def _check_api_file(cls, value: str) -> str:
        # pyzabbix appends api_jsonrpc.php to any URL that lacks it
        if not value.rstrip("/").endswith(API_ENTRYPOINT):
            raise ValueError(f"api_file must end with {API_ENTRYPOINT}, got {value!r}")
        return value.rstrip("/")

    @model_validator(mode="after")
    def _check_credentials(self) -> "ZabbixSettings":
        # a token replaces the user.login call entirely
        if self.auth_token:
            return self
        missing = [name for name in ("username", "password") if not getattr(self, name)]
        if missing:
            raise ValueError(
                f"Missing Zabbix credentials: {', '.join(missing)} (or set {ENV_PREFIX}AUTH_TOKEN)"
            )
        return self

    @property
    def url(self) -> str:
        return f"{self.host.rstrip('/')}/{self.api_file.lstrip('/')}"

    @property
    def uses_token(self) -> bool:
        return bool(self.auth_token)


class AppSettings(BaseSettings):
    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: List[str] = ["*"]
    STATUS_RATE_LIMIT: str = "30/minute"

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


class ConfigOption(NamedTuple):
    env_var: str
    attribute: str
    default: Any
    description: str


def describe_options() -> List[ConfigOption]:
    """Return the recognized ZABBIX_* options in declaration order."""
    return [
        ConfigOption(
            env_var=f"{ENV_PREFIX}{name.upper()}",
            attribute=name,
            default=field.default,
            description=field.description or "",
        )
        for name, field in ZabbixSettings.model_fields.items()
    ]


def load_settings(**overrides: Any) -> ZabbixSettings:
    return ZabbixSettings(**overrides)


@lru_cache()
def get_settings() -> ZabbixSettings:
    return load_settings()


@lru_cache()
def get_app_settings() -> AppSettings:
    return AppSettings()
