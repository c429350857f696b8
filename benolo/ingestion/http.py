"""Shared HTTP helper for fixture providers."""

from __future__ import annotations

import logging
from typing import Any

import requests

logger = logging.getLogger(__name__)
DEFAULT_TIMEOUT_SECONDS = 20
DEFAULT_USER_AGENT = "benolo-sync/1.0"
MAX_ERROR_SNIPPET = 300


class ProviderFetchError(RuntimeError):
    pass


def get_json(
    provider: str,
    url: str,
    *,
    headers: dict[str, str] | None = None,
    params: dict[str, str] | None = None,
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
) -> Any:
    request_headers = {
        "User-Agent": DEFAULT_USER_AGENT,
        "Accept": "application/json",
    }
    if headers:
        request_headers.update(headers)

    try:
        response = requests.get(url, headers=request_headers, params=params, timeout=timeout)
    except requests.RequestException as exc:
        raise ProviderFetchError(f"{provider} request error: {exc}") from exc

    if not 200 <= response.status_code < 300:
        body = (response.text or "")[:MAX_ERROR_SNIPPET]
        logger.error("%s non-2xx status=%s body=%s", provider, response.status_code, body)
        raise ProviderFetchError(f"{provider} request failed ({response.status_code}): {body}")

    try:
        return response.json()
    except ValueError as exc:
        raise ProviderFetchError(f"{provider} returned invalid JSON") from exc
