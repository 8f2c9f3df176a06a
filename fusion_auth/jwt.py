"""FusionAuth JWT API operations.

Most calls use the client's API key. Calls that authenticate with the
user's JWT instead pass it as a per-call header; the client is unchanged.

See https://fusionauth.io/docs/v1/tech/apis/jwt
"""
from __future__ import annotations
from typing import Any, Dict

from .client import Client, bearer_auth, jwt_auth, request
from .result import Result

JWT_ISSUE_URL = "/api/jwt/issue"
JWT_RECONCILE_URL = "/api/jwt/reconcile"
JWT_PUBLIC_KEY_URL = "/api/jwt/public-key"
JWT_REFRESH_URL = "/api/jwt/refresh"
JWT_VALIDATE_URL = "/api/jwt/validate"


class JWTService:
    """Service for issuing, refreshing, validating and revoking tokens."""

    def __init__(self, client: Client):
        self.client = client

    def issue_jwt_by_application_id(self, token: str, application_id: str, refresh_token: str) -> Result:
        """Issue an access token for another application using an existing one.

        Authenticated with the caller's access token (Bearer).
        """
        params = {"applicationId": application_id, "refreshToken": refresh_token}
        return request(self.client, "GET", JWT_ISSUE_URL, headers=bearer_auth(token), params=params)

    def reconcile_jwt(self, application_id: str, data: Dict[str, Any], identity_provider_id: str) -> Result:
        """Reconcile a JWT issued by a third party identity provider."""
        body = {
            "applicationId": application_id,
            "data": data,
            "identityProviderId": identity_provider_id,
        }
        return request(self.client, "POST", JWT_RECONCILE_URL, body=body)

    def get_public_keys(self) -> Result:
        return request(self.client, "GET", JWT_PUBLIC_KEY_URL)

    def get_public_key_by_application_id(self, application_id: str) -> Result:
        return request(self.client, "GET", JWT_PUBLIC_KEY_URL, params={"applicationId": application_id})

    def get_public_key_by_key_id(self, key_id: str) -> Result:
        return request(self.client, "GET", JWT_PUBLIC_KEY_URL, params={"kid": key_id})

    def refresh_jwt(self, refresh_token: str, token: str) -> Result:
        """Exchange a refresh token for a new access token."""
        body = {"refreshToken": refresh_token, "token": token}
        return request(self.client, "POST", JWT_REFRESH_URL, body=body)

    def get_user_refresh_tokens_by_user_id(self, user_id: str) -> Result:
        return request(self.client, "GET", JWT_REFRESH_URL, params={"userId": user_id})

    def get_user_refresh_tokens(self, token: str) -> Result:
        """Retrieve the refresh tokens of the user owning ``token`` (Bearer)."""
        return request(self.client, "GET", JWT_REFRESH_URL, headers=bearer_auth(token))

    def revoke_refresh_tokens_by_application_id(self, application_id: str) -> Result:
        return request(self.client, "DELETE", JWT_REFRESH_URL, params={"applicationId": application_id})

    def revoke_refresh_tokens_by_user_id(self, user_id: str) -> Result:
        return request(self.client, "DELETE", JWT_REFRESH_URL, params={"userId": user_id})

    def revoke_refresh_token(self, token: str) -> Result:
        return request(self.client, "DELETE", JWT_REFRESH_URL, params={"token": token})

    def validate_jwt(self, token: str) -> Result:
        """Validate an access token; the payload carries the decoded claims.

        Uses the ``JWT`` authorization scheme rather than Bearer.
        """
        return request(self.client, "GET", JWT_VALIDATE_URL, headers=jwt_auth(token))
