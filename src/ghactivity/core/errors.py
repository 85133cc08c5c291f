class ConfigError(RuntimeError):
    """Configuration validation or loading error."""


class AdapterError(RuntimeError):
    """Raised for adapter initialization failures."""


class MalformedActivityData(ValueError):
    """Raised when a tracked activity record cannot be normalized."""

    def __init__(self, message: str, *, activity_id: str | None = None) -> None:
        self.activity_id = activity_id
        super().__init__(message)


class ActivityClassificationError(RuntimeError):
    """Raised when a record reaches the classifier without a dispatch entry."""


class TokenExchangeError(RuntimeError):
    """Raised when GitHub answers a code exchange without an access token."""

    def __init__(self, error: str | None, description: str | None = None) -> None:
        self.error = error
        self.description = description
        message = f"GitHub token exchange failed: {error or 'no access_token in response'}"
        if description:
            message = f"{message} ({description})"
        super().__init__(message)
