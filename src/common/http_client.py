"""Shared HTTP helpers used by the remote metadata tier.

Encapsulates request/timeout error handling so callers deal with a single
``FetchError`` instead of the full ``requests`` exception hierarchy.
"""
from __future__ import annotations

import logging
from typing import Any, Optional, Tuple

import requests

from constants import Constants
from common.logging_utils import extra_context, is_debug_enabled, safe_url, Timer

logger = logging.getLogger(__name__)


class FetchError(Exception):
    """Raised when a GET fails at the transport level or returns non-2xx."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


def safe_get(
    url: str,
    *,
    context: str,
    auth: Optional[Tuple[str, str]] = None,
    timeout: Optional[float] = None,
    **kwargs: Any,
) -> requests.Response:
    """Perform a GET request with consistent error handling and DEBUG traces.

    Args:
        url: Target URL.
        context: Human-readable source tag for logs (e.g., "central").
        auth: Optional (username, password) pair sent as Basic authorization.
        timeout: Per-request timeout in seconds; defaults to Constants.REQUEST_TIMEOUT.
        **kwargs: Passed through to requests.get.

    Returns:
        requests.Response: The HTTP response object (always 2xx).

    Raises:
        FetchError: On timeout, connection failure or a non-2xx status.
    """
    safe_target = safe_url(url)
    effective_timeout = Constants.REQUEST_TIMEOUT if timeout is None else timeout
    with Timer() as t:
        if is_debug_enabled(logger):
            logger.debug(
                "HTTP request",
                extra=extra_context(
                    event="http_request",
                    component="http_client",
                    action="GET",
                    target=safe_target,
                    context=context
                )
            )
        try:
            res = requests.get(url, timeout=effective_timeout, auth=auth, **kwargs)
        except requests.Timeout as exc:
            logger.debug(
                "%s request timed out after %s seconds", context, effective_timeout
            )
            raise FetchError(f"request timed out after {effective_timeout} seconds") from exc
        except requests.RequestException as exc:  # includes ConnectionError
            logger.debug("%s connection error: %s", context, exc)
            raise FetchError(str(exc)) from exc

    if not 200 <= res.status_code < 300:
        if is_debug_enabled(logger):
            logger.debug(
                "HTTP non-2xx",
                extra=extra_context(
                    event="http_response",
                    component="http_client",
                    action="GET",
                    outcome="handled_non_2xx",
                    status_code=res.status_code,
                    duration_ms=t.duration_ms(),
                    target=safe_target,
                    context=context
                )
            )
        raise FetchError(f"HTTP {res.status_code} from {safe_target}", status_code=res.status_code)

    if is_debug_enabled(logger):
        logger.debug(
            "HTTP response ok",
            extra=extra_context(
                event="http_response",
                component="http_client",
                action="GET",
                outcome="success",
                status_code=res.status_code,
                duration_ms=t.duration_ms(),
                target=safe_target,
                context=context
            )
        )
    return res
