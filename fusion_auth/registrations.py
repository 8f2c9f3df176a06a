"""FusionAuth user registration operations.

See https://fusionauth.io/docs/v1/tech/apis/registrations
"""
from __future__ import annotations
from typing import Any, Dict, Optional

from .client import Client, request
from .result import Result

REGISTRATIONS_URL = "/api/user/registration"
VERIFY_REGISTRATION_URL = "/api/user/verify-registration"


class RegistrationService:
    """Service for managing a user's application registrations."""

    def __init__(self, client: Client):
        """Initialize registration service.

        Args:
            client: FusionAuth client
        """
        self.client = client

    def create_user_registration(self, user_id: str, data: Dict[str, Any]) -> Result:
        """Register an existing user to an application.

        Args:
            user_id: Existing user id
            data: Body holding at least ``registration.applicationId``

        Returns:
            Result with the registration, or field errors on 400
        """
        return request(self.client, "POST", f"{REGISTRATIONS_URL}/{user_id}", body=data)

    def create_user_and_registration(self, data: Dict[str, Any], user_id: Optional[str] = None) -> Result:
        """Create a user and its registration in a single call.

        Args:
            data: Body holding both ``user`` and ``registration``
            user_id: Id to create the user with (generated when omitted)
        """
        path = REGISTRATIONS_URL if user_id is None else f"{REGISTRATIONS_URL}/{user_id}"
        return request(self.client, "POST", path, body=data)

    def get_user_registration(self, user_id: str, application_id: str) -> Result:
        return request(self.client, "GET", f"{REGISTRATIONS_URL}/{user_id}/{application_id}")

    def update_user_registration(self, user_id: str, data: Dict[str, Any]) -> Result:
        return request(self.client, "PUT", f"{REGISTRATIONS_URL}/{user_id}", body=data)

    def delete_user_registration(self, user_id: str, application_id: str) -> Result:
        """Delete a registration. The success payload is ``""``."""
        return request(self.client, "DELETE", f"{REGISTRATIONS_URL}/{user_id}/{application_id}")

    def verify_user_registration(self, verification_id: str) -> Result:
        return request(self.client, "POST", f"{VERIFY_REGISTRATION_URL}/{verification_id}", body={})

    def resend_user_registration_verification_email(self, application_id: str, email: str) -> Result:
        """Resend the registration verification email (ids expire after 24h by default)."""
        params = {"applicationId": application_id, "email": email}
        return request(self.client, "PUT", VERIFY_REGISTRATION_URL, body={}, params=params)
