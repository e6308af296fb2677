"""Errors raised by AI provider integrations."""

from enum import StrEnum


class AiErrorKind(StrEnum):
    """Classification of AI provider failures."""

    CONFIGURATION = "configuration"
    NETWORK = "network"
    AUTHENTICATION = "authentication"
    QUOTA = "quota"
    PROVIDER = "provider"


class AiError(Exception):
    """Failure of an AI provider call, tagged with the provider id."""

    def __init__(
        self,
        message: str,
        provider: str,
        kind: AiErrorKind = AiErrorKind.PROVIDER,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.provider = provider
        self.kind = kind
        self.status_code = status_code

    @property
    def is_quota_error(self) -> bool:
        """Return True when the provider rejected the call for quota reasons."""
        return self.kind is AiErrorKind.QUOTA
