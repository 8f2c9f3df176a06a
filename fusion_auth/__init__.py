"""FusionAuth API client library.

Architecture:
- utils.py: Query string encoding and parameter merging
- client.py: Client construction, per-call auth headers, request dispatch
- result.py: Normalization of responses into (tag, payload, response)
- exceptions.py: Configuration, network and decode errors
- login.py, jwt.py, registrations.py, reports.py: Resource services
- config/: Settings loaded from the environment and /run/secrets

Usage:
    from fusion_auth import create, ReportService, Tag

    client = create("http://localhost:9011", "api-key", "tenant-id")
    tag, payload, response = ReportService(client).get_totals_report()
    if tag is Tag.OK:
        print(payload["globalRegistrations"])
"""
from .client import (
    Client,
    create,
    client_from_settings,
    send,
    request,
    bearer_auth,
    jwt_auth,
    header_auth,
    API_KEY_HEADER,
    TENANT_ID_HEADER,
)
from .result import Result, Tag, normalize
from .utils import build_query_parameters, merge_parameters
from .exceptions import (
    FusionAuthError,
    ConfigurationError,
    NetworkError,
    DecodeError,
)
from .login import LoginService, LoginOptions, LoginSearch
from .jwt import JWTService
from .registrations import RegistrationService
from .reports import ReportService, ReportFilter
from .config import Settings, load_settings

__all__ = [
    # Client
    "Client",
    "create",
    "client_from_settings",
    "send",
    "request",
    "bearer_auth",
    "jwt_auth",
    "header_auth",
    "API_KEY_HEADER",
    "TENANT_ID_HEADER",

    # Results
    "Result",
    "Tag",
    "normalize",

    # Query parameters
    "build_query_parameters",
    "merge_parameters",

    # Exceptions
    "FusionAuthError",
    "ConfigurationError",
    "NetworkError",
    "DecodeError",

    # Services
    "LoginService",
    "LoginOptions",
    "LoginSearch",
    "JWTService",
    "RegistrationService",
    "ReportService",
    "ReportFilter",

    # Configuration
    "Settings",
    "load_settings",
]
