"""Settings loader with environment variable and Docker secrets integration.

Nothing in the client reads the environment on its own: callers load
settings explicitly and hand them to ``client_from_settings``.
"""
from __future__ import annotations
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from ..exceptions import ConfigurationError

logger = logging.getLogger(__name__)

SECRETS_DIR = "/run/secrets"


def _load_secret_from_file(secret_name: str, env_var: str | None = None) -> str | None:
    """
    Load secret from /run/secrets (Docker secrets pattern).

    Priority:
    1. /run/secrets/{secret_name} (Docker secrets mount)
    2. Environment variable (fallback)

    Args:
        secret_name: Name of the secret file in /run/secrets
        env_var: Optional environment variable name to check as fallback

    Returns:
        Secret value or None if not found
    """
    secret_file = Path(SECRETS_DIR) / secret_name

    if secret_file.exists() and secret_file.is_file():
        try:
            secret_value = secret_file.read_text().strip()
        except OSError as exc:
            logger.warning("Failed to read %s/%s: %s", SECRETS_DIR, secret_name, exc)
        else:
            if secret_value:
                logger.debug("Loaded %s from %s", secret_name, SECRETS_DIR)
                return secret_value

    if env_var:
        secret_value = os.getenv(env_var)
        if secret_value:
            logger.debug("Loaded %s from environment", env_var)
            return secret_value

    return None


def _optional(var_name: str) -> Optional[str]:
    value = os.environ.get(var_name, "").strip()
    return value or None


def _parse_timeout(raw: Union[str, float, None]) -> Optional[float]:
    if raw is None:
        return None
    try:
        timeout = float(raw)
    except ValueError:
        raise ConfigurationError(f"FUSION_AUTH_TIMEOUT must be a number, got '{raw}'") from None
    if timeout <= 0:
        raise ConfigurationError("FUSION_AUTH_TIMEOUT must be positive")
    return timeout


@dataclass(frozen=True)
class Settings:
    """FusionAuth connection settings."""
    base_url: str
    api_key: str
    tenant_id: Optional[str] = None
    application_id: Optional[str] = None
    timeout: Optional[float] = None


def load_settings(
    base_url: Optional[str] = None,
    api_key: Optional[str] = None,
    tenant_id: Optional[str] = None,
    application_id: Optional[str] = None,
    timeout: Optional[float] = None,
) -> Settings:
    """Load FusionAuth settings from /run/secrets and the environment.

    Any argument that is not None overrides the matching variable, so a
    command line can layer its flags over the deployment defaults.

    Raises:
        ConfigurationError: If the URL or API key is missing, or the
            timeout is not a positive number
    """
    if base_url is None:
        base_url = _optional("FUSION_AUTH_URL")
    if not base_url:
        raise ConfigurationError("Environment variable FUSION_AUTH_URL is required.")

    if api_key is None:
        api_key = _load_secret_from_file("fusion_auth_api_key", "FUSION_AUTH_API_KEY")
    if not api_key:
        raise ConfigurationError(
            f"FUSION_AUTH_API_KEY not found in {SECRETS_DIR}/fusion_auth_api_key or environment"
        )

    settings = Settings(
        base_url=base_url,
        api_key=api_key,
        tenant_id=tenant_id if tenant_id is not None else _optional("FUSION_AUTH_TENANT_ID"),
        application_id=application_id if application_id is not None else _optional("FUSION_AUTH_APPLICATION_ID"),
        timeout=_parse_timeout(timeout if timeout is not None else _optional("FUSION_AUTH_TIMEOUT")),
    )
    logger.info("FusionAuth settings loaded; url=%s; tenant=%s", settings.base_url, settings.tenant_id or "-")
    return settings
