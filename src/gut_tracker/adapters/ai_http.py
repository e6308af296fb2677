"""Shared request handling for AI provider adapters."""

import logging

import httpx

from gut_tracker.domain.errors import AiError, AiErrorKind

_logger = logging.getLogger(__name__)


def require_api_key(api_key: str, *, provider: str, display_name: str) -> None:
    """Fail before any request when a hosted provider has no API key."""
    if not api_key:
        raise AiError(
            f"{display_name} API key is missing",
            provider=provider,
            kind=AiErrorKind.CONFIGURATION,
        )


def error_for_status(
    status_code: int, *, provider: str, display_name: str
) -> AiError | None:
    """Classify a provider HTTP status, returning None for success codes."""
    if status_code == httpx.codes.TOO_MANY_REQUESTS:
        return AiError(
            f"{display_name} quota exceeded",
            provider=provider,
            kind=AiErrorKind.QUOTA,
            status_code=status_code,
        )
    if status_code in {httpx.codes.UNAUTHORIZED, httpx.codes.FORBIDDEN}:
        return AiError(
            f"{display_name} rejected the credentials ({status_code}), "
            "check the API key in settings",
            provider=provider,
            kind=AiErrorKind.AUTHENTICATION,
            status_code=status_code,
        )
    if not httpx.codes.is_success(status_code):
        return AiError(
            f"{display_name} error {status_code}",
            provider=provider,
            kind=AiErrorKind.PROVIDER,
            status_code=status_code,
        )
    return None


def missing_text_error(*, provider: str, display_name: str) -> AiError:
    """Error for a successful response that carries no answer text."""
    return AiError(
        f"{display_name} returned a response without text",
        provider=provider,
        kind=AiErrorKind.PROVIDER,
    )


async def post_json(  # noqa: PLR0913
    http_client: httpx.AsyncClient,
    url: str,
    payload: dict[str, object],
    *,
    provider: str,
    display_name: str,
    headers: dict[str, str] | None = None,
    params: dict[str, str] | None = None,
    timeout: float = 60.0,
    retry_transport_errors: bool = True,
    network_error_message: str | None = None,
) -> dict[str, object]:
    """POST a JSON request, retrying once on transport failures."""
    attempts = 2 if retry_transport_errors else 1
    attempt = 0
    while True:
        attempt += 1
        try:
            response = await http_client.post(
                url, json=payload, headers=headers, params=params, timeout=timeout
            )
            break
        except httpx.TransportError as exc:
            _logger.warning(
                "%s request failed (attempt %s/%s): %s",
                display_name,
                attempt,
                attempts,
                exc,
            )
            if attempt >= attempts:
                raise AiError(
                    network_error_message or f"{display_name} network error",
                    provider=provider,
                    kind=AiErrorKind.NETWORK,
                ) from exc
        except httpx.HTTPError as exc:
            raise AiError(
                f"{display_name} request failed",
                provider=provider,
                kind=AiErrorKind.PROVIDER,
            ) from exc

    error = error_for_status(
        response.status_code, provider=provider, display_name=display_name
    )
    if error is not None:
        raise error
    try:
        return response.json()
    except ValueError as exc:
        raise missing_text_error(provider=provider, display_name=display_name) from exc
