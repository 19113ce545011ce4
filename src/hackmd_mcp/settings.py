"""Credential and API URL resolution.

HTTP mode resolves a token and base URL per request, first non-empty wins:

    header  >  base64 JSON ``config`` query parameter  >  process environment

The token and the URL are resolved independently. A URL supplied by the
caller (header or query) must appear in the allow-list read from
``ALLOWED_HACKMD_API_URLS``. Stdio mode reads the environment only.
"""

import base64
import binascii
import json
import logging
import os
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from hackmd_mcp.config import (
    CONFIG_QUERY_PARAM,
    CONFIG_TOKEN_KEY,
    CONFIG_URL_KEY,
    DEFAULT_HACKMD_API_URL,
    DEFAULT_HEADERS,
    ENV_ALLOWED_API_URLS,
    ENV_API_TOKEN,
    ENV_API_URL,
    HACKMD_API_TOKEN_HEADER,
    HACKMD_API_URL_HEADER,
    JSONRPC_PARSE_ERROR,
    JSONRPC_SERVER_ERROR,
)

logger = logging.getLogger(__name__)

class ConfigError(Exception):
    """Configuration could not be resolved; carries a JSON-RPC error code."""

    def __init__(self, message: str, code: int = JSONRPC_SERVER_ERROR):
        super().__init__(message)
        self.message = message
        self.code = code


@dataclass(frozen=True)
class HackMDConfig:
    """Credentials and endpoint for one HackMD API client"""
    api_token: str
    api_url: str = DEFAULT_HACKMD_API_URL

    def get_headers(self) -> dict[str, str]:
        """Build the outbound request headers"""
        headers = dict(DEFAULT_HEADERS)
        headers["Authorization"] = f"Bearer {self.api_token}"
        return headers

    def __repr__(self) -> str:
        return f"HackMDConfig(api_token='***', api_url={self.api_url!r})"


# ------------------------------------------------------------------
# Allow-list
# ------------------------------------------------------------------


def _normalize_url(url: str) -> str:
    return url.strip().rstrip("/")


def allowed_api_urls(environ: Optional[Mapping[str, str]] = None) -> list[str]:
    """Parse the comma-separated allow-list, defaulting to the public API."""
    environ = os.environ if environ is None else environ
    raw = environ.get(ENV_ALLOWED_API_URLS, "")
    urls = [_normalize_url(u) for u in raw.split(",") if u.strip()]
    return urls or [_normalize_url(DEFAULT_HACKMD_API_URL)]


def is_allowed_api_url(url: str, allowed: list[str]) -> bool:
    return _normalize_url(url) in {_normalize_url(u) for u in allowed}


# ------------------------------------------------------------------
# Input parsing
# ------------------------------------------------------------------


def _non_empty(value: Any) -> Optional[str]:
    """Return the trimmed string, or None when missing or blank."""
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def decode_query_config(raw: str) -> dict[str, str]:
    """Decode the base64 JSON ``config`` query parameter.

    Accepts standard or URL-safe alphabets, with or without padding. A ``+``
    left unescaped in a query string arrives as a space, so spaces are read
    back as ``+``.

    Raises:
        ConfigError: the value is not base64, not JSON, not an object, or a
            known field is not a string.
    """
    invalid = ConfigError(
        f"Bad Request: Invalid '{CONFIG_QUERY_PARAM}' query parameter; "
        "expected base64-encoded JSON.",
        code=JSONRPC_PARSE_ERROR,
    )
    text = raw.strip().replace(" ", "+").replace("-", "+").replace("_", "/")
    text += "=" * (-len(text) % 4)
    try:
        data = json.loads(base64.b64decode(text, validate=True).decode("utf-8"))
    except (binascii.Error, ValueError) as e:
        raise invalid from e

    if not isinstance(data, dict):
        raise invalid
    for key in (CONFIG_TOKEN_KEY, CONFIG_URL_KEY):
        if data.get(key) is not None and not isinstance(data[key], str):
            raise invalid
    return data


def resolve_config(
    headers: Mapping[str, str],
    query_params: Mapping[str, str],
    environ: Optional[Mapping[str, str]] = None,
) -> HackMDConfig:
    """Resolve the configuration for one HTTP request.

    Args:
        headers: Request headers (looked up case-insensitively).
        query_params: Request query parameters.
        environ: Process environment (default: ``os.environ``).

    Returns:
        A validated HackMDConfig.

    Raises:
        ConfigError: malformed query config, missing token, or a supplied
            URL outside the allow-list.
    """
    environ = os.environ if environ is None else environ
    lowered = {k.lower(): v for k, v in headers.items()}

    token = _non_empty(lowered.get(HACKMD_API_TOKEN_HEADER.lower()))
    url = _non_empty(lowered.get(HACKMD_API_URL_HEADER.lower()))

    if token is None or url is None:
        raw = _non_empty(query_params.get(CONFIG_QUERY_PARAM))
        if raw is not None:
            try:
                query_config = decode_query_config(raw)
            except ConfigError:
                # Only fatal when the token itself has to come from the query
                if token is None:
                    raise
                logger.warning(
                    "Ignoring malformed '%s' query parameter", CONFIG_QUERY_PARAM
                )
                query_config = {}
            token = token or _non_empty(query_config.get(CONFIG_TOKEN_KEY))
            url = url or _non_empty(query_config.get(CONFIG_URL_KEY))

    token = token or _non_empty(environ.get(ENV_API_TOKEN))
    if token is None:
        raise ConfigError(
            "Bad Request: Please provide a HackMD API token via header "
            f"'{HACKMD_API_TOKEN_HEADER}'."
        )

    # Caller-supplied URLs are checked; the environment is operator-controlled
    if url is not None:
        if not is_allowed_api_url(url, allowed_api_urls(environ)):
            raise ConfigError(f"Bad Request: HackMD API URL '{url}' is not allowed.")
    else:
        url = _non_empty(environ.get(ENV_API_URL)) or DEFAULT_HACKMD_API_URL

    return HackMDConfig(api_token=token, api_url=url)


def load_env_config(environ: Optional[Mapping[str, str]] = None) -> HackMDConfig:
    """Build the process-wide configuration used in stdio mode.

    Raises:
        ConfigError: HACKMD_API_TOKEN is missing or blank.
    """
    environ = os.environ if environ is None else environ
    token = _non_empty(environ.get(ENV_API_TOKEN))
    if token is None:
        raise ConfigError(f"{ENV_API_TOKEN} is required")
    url = _non_empty(environ.get(ENV_API_URL)) or DEFAULT_HACKMD_API_URL
    return HackMDConfig(api_token=token, api_url=url)
