from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, HttpUrl, field_validator
from pydantic.alias_generators import to_camel


class OAuthAppConfig(BaseModel):
    """GitHub OAuth application registered by the host."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    client_id: str
    client_secret: str
    redirect_url: str
    scope: str = "user"
    authorize_url: HttpUrl = Field(default="https://github.com/login/oauth/authorize")
    token_url: HttpUrl = Field(default="https://github.com/login/oauth/access_token")

    @field_validator("client_id", "client_secret", "redirect_url")
    @classmethod
    def validate_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must be a non-empty string")
        return value


class GitHubConfig(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    api_base: HttpUrl = Field(default="https://api.github.com")
    timeout: float = 30.0

    @field_validator("timeout")
    @classmethod
    def validate_timeout(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("timeout must be positive")
        return value


class UserConfig(BaseModel):
    """Per-user settings stored by the host. Unknown fields are kept as-is."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

    username: str | None = None
    access_token: str | None = None
    id: str | int | None = None

    def to_host(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)


class RuntimeConfig(BaseModel):
    log_level: str = "INFO"
    host_adapter: str = "ghactivity.adapters.http.host:HttpxHost"

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        if value.upper() not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError("Unsupported log level")
        return value.upper()


class PluginSettings(BaseModel):
    runtime: RuntimeConfig = Field(default_factory=RuntimeConfig)
    oauth: OAuthAppConfig
    github: GitHubConfig = Field(default_factory=GitHubConfig)
    user: UserConfig = Field(default_factory=UserConfig)
