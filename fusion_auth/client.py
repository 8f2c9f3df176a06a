"""Low-level HTTP client for the FusionAuth API.

Handles client construction, default tenant headers and request dispatch.
Every resource module funnels its calls through :func:`request`.
"""
from __future__ import annotations
import json
import logging
from http.cookiejar import DefaultCookiePolicy
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional

import requests
from requests.structures import CaseInsensitiveDict

from .exceptions import ConfigurationError, NetworkError
from .result import Result, normalize
from .utils import QueryParameters, build_query_parameters

logger = logging.getLogger(__name__)

API_KEY_HEADER = "Authorization"
TENANT_ID_HEADER = "X-FusionAuth-TenantId"
JSON_CONTENT_TYPE = "application/json"

METHODS = frozenset({"GET", "POST", "PUT", "DELETE"})


@dataclass(frozen=True, eq=False)
class Client:
    """Immutable FusionAuth client configuration.

    Safe to share between threads: nothing on it changes after
    construction, and the session it allocates refuses cookies, so no
    call leaves state behind for the next one. Per-call authentication
    goes through the ``headers`` argument of :func:`send`, never onto
    the client.

    Usage:
        client = create("http://localhost:9011", "api-key", "tenant-id")
        result = ReportService(client).get_totals_report()
    """
    base_url: str
    default_headers: Mapping[str, str]
    session: requests.Session = field(repr=False)
    application_id: Optional[str] = None
    timeout: Optional[float] = None

    def close(self) -> None:
        """Release the underlying transport session."""
        self.session.close()

    def __enter__(self) -> "Client":
        return self

    def __exit__(self, *args) -> None:
        self.close()


def _new_session() -> requests.Session:
    """Allocate a transport session whose cookie jar accepts nothing.

    FusionAuth answers logins with access and refresh token cookies;
    stored on a shared session they would ride along on every later call.
    """
    session = requests.Session()
    session.cookies.set_policy(DefaultCookiePolicy(allowed_domains=[]))
    return session


def create(
    base_url: str,
    api_key: str,
    tenant_id: Optional[str] = None,
    *,
    application_id: Optional[str] = None,
    timeout: Optional[float] = None,
    session: Optional[requests.Session] = None,
) -> Client:
    """Build a client for the FusionAuth instance at ``base_url``.

    No request is made here.

    Args:
        base_url: FusionAuth base URL (e.g. "http://localhost:9011")
        api_key: Tenant API key, sent as the ``Authorization`` header
        tenant_id: Optional tenant id, sent as ``X-FusionAuth-TenantId``
        application_id: Default application for login calls
        timeout: Transport timeout in seconds (None: transport default)
        session: Pre-configured ``requests.Session`` to use as transport.
            It is used as given; callers sharing it across users should
            disable its cookie jar the way :func:`_new_session` does.

    Returns:
        Client instance

    Raises:
        ConfigurationError: If base_url or api_key is empty
    """
    if not base_url or not base_url.strip():
        raise ConfigurationError("base_url must not be empty")
    if not api_key:
        raise ConfigurationError("api_key must not be empty")

    headers: Dict[str, str] = {API_KEY_HEADER: api_key}
    if tenant_id is not None:
        headers[TENANT_ID_HEADER] = tenant_id

    return Client(
        base_url=base_url.strip().rstrip("/"),
        default_headers=MappingProxyType(headers),
        session=session if session is not None else _new_session(),
        application_id=application_id,
        timeout=timeout,
    )


def client_from_settings(settings) -> Client:
    """Create a client from a loaded :class:`fusion_auth.config.Settings`."""
    return create(
        settings.base_url,
        settings.api_key,
        settings.tenant_id,
        application_id=settings.application_id,
        timeout=settings.timeout,
    )


# ─────────────────────────────────────────────────────────────────────────────
# Per-call authentication headers
# ─────────────────────────────────────────────────────────────────────────────
def bearer_auth(token: str) -> Dict[str, str]:
    """Headers for endpoints authenticated with an access token."""
    return {"Authorization": f"Bearer {token}"}


def jwt_auth(token: str) -> Dict[str, str]:
    """Headers for endpoints that expect the ``JWT`` authorization scheme."""
    return {"Authorization": f"JWT {token}"}


def header_auth(name: str, value: str) -> Dict[str, str]:
    """Headers for an endpoint with a custom authentication header."""
    return {name: value}


# ─────────────────────────────────────────────────────────────────────────────
# Dispatch
# ─────────────────────────────────────────────────────────────────────────────
def send(
    client: Client,
    method: str,
    path: str,
    body: Any = None,
    headers: Optional[Mapping[str, str]] = None,
    params: Optional[QueryParameters] = None,
) -> requests.Response:
    """Send one request and return the raw response.

    Args:
        client: Client to send with
        method: GET, POST, PUT or DELETE
        path: API path, optionally already carrying a query string
        body: JSON-serializable body; None sends no body at all
        headers: Extra headers, overriding client defaults on collision
        params: Query parameters appended through the query encoder

    Returns:
        Raw ``requests.Response``

    Raises:
        ValueError: If method is not supported
        NetworkError: If the transport could not complete the round trip
    """
    method = method.upper()
    if method not in METHODS:
        raise ValueError(f"Unsupported HTTP method '{method}'")

    url = f"{client.base_url}{path}{build_query_parameters(params)}"
    merged = CaseInsensitiveDict(client.default_headers)
    merged.update(headers or {})

    data = None
    if body is not None:
        data = json.dumps(body)
        merged.setdefault("Content-Type", JSON_CONTENT_TYPE)

    try:
        resp = client.session.request(
            method,
            url,
            data=data,
            headers=merged,
            timeout=client.timeout,
        )
    except requests.RequestException as exc:
        logger.warning("%s %s failed: %s", method, path, exc)
        raise NetworkError(method, url, str(exc)) from exc

    logger.debug("%s %s -> %s", method, path, resp.status_code)
    return resp


def request(
    client: Client,
    method: str,
    path: str,
    body: Any = None,
    headers: Optional[Mapping[str, str]] = None,
    params: Optional[QueryParameters] = None,
) -> Result:
    """Send one request and normalize the response into a ``Result``."""
    return normalize(send(client, method, path, body=body, headers=headers, params=params))
