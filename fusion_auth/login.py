"""FusionAuth Login API operations.

See https://fusionauth.io/docs/v1/tech/apis/login
"""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from .client import Client, request
from .result import Result

LOGIN_URL = "/api/login"
TWO_FACTOR_LOGIN_URL = "/api/two-factor/login"
LOGOUT_URL = "/api/logout"
LOGIN_SEARCH_URL = "/api/system/login-record/search"


@dataclass
class LoginOptions:
    """Optional fields accepted by the login endpoints.

    Unset fields are left out of the request body.
    """
    ip_address: Optional[str] = None
    no_jwt: Optional[bool] = None
    device_description: Optional[str] = None
    device_name: Optional[str] = None
    device_type: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {}
        if self.ip_address is not None:
            data["ipAddress"] = self.ip_address
        if self.no_jwt is not None:
            data["noJWT"] = self.no_jwt

        device = {
            key: value
            for key, value in (
                ("description", self.device_description),
                ("name", self.device_name),
                ("type", self.device_type),
            )
            if value is not None
        }
        meta_data = dict(self.metadata)
        if device:
            meta_data["device"] = {**meta_data.get("device", {}), **device}
        if meta_data:
            data["metaData"] = meta_data
        return data


@dataclass
class LoginSearch:
    """Criteria for the login record search."""
    application_id: Optional[str] = None
    user_id: Optional[str] = None
    start: Optional[int] = None
    end: Optional[int] = None
    start_row: Optional[int] = None
    number_of_results: Optional[int] = None
    retrieve_total: Optional[bool] = None

    def to_parameters(self) -> Dict[str, Any]:
        return {
            "applicationId": self.application_id,
            "userId": self.user_id,
            "start": self.start,
            "end": self.end,
            "startRow": self.start_row,
            "numberOfResults": self.number_of_results,
            "retrieveTotal": self.retrieve_total,
        }


class LoginService:
    """Service for authenticating users against FusionAuth."""

    def __init__(self, client: Client):
        """Initialize login service.

        Args:
            client: FusionAuth client; its ``application_id`` is the
                default application for login calls
        """
        self.client = client

    def _application_id(self, application_id: Optional[str]) -> Optional[str]:
        return application_id if application_id is not None else self.client.application_id

    def _login_body(self, fields: Dict[str, Any], application_id: Optional[str], options: Optional[LoginOptions]) -> Dict[str, Any]:
        body = dict(fields)
        app_id = self._application_id(application_id)
        if app_id is not None:
            body["applicationId"] = app_id
        if options is not None:
            body.update(options.to_dict())
        return body

    def login_user(
        self,
        login_id: str,
        password: str,
        application_id: Optional[str] = None,
        options: Optional[LoginOptions] = None,
    ) -> Result:
        """Authenticate a user with a login id (email or username) and password.

        Without an application id the response carries no refresh token.

        Args:
            login_id: Email or username
            password: User password
            application_id: Application to log into (default: client's)
            options: Additional login options

        Returns:
            Result with the user, token and optional refreshToken
        """
        body = self._login_body({"loginId": login_id, "password": password}, application_id, options)
        return request(self.client, "POST", LOGIN_URL, body=body)

    def login_one_time_password(
        self,
        one_time_password: str,
        application_id: Optional[str] = None,
        options: Optional[LoginOptions] = None,
    ) -> Result:
        """Authenticate with a one time password from the Passwordless or Registration APIs."""
        body = self._login_body({"oneTimePassword": one_time_password}, application_id, options)
        return request(self.client, "POST", LOGIN_URL, body=body)

    def two_factor_login(
        self,
        code: str,
        two_factor_id: str,
        application_id: Optional[str] = None,
        options: Optional[LoginOptions] = None,
    ) -> Result:
        """Complete a login that returned a two factor challenge.

        Args:
            code: Verification code from the authenticator
            two_factor_id: Id returned by the first login step
            application_id: Application to log into (default: client's)
            options: Additional login options
        """
        body = self._login_body({"code": code, "twoFactorId": two_factor_id}, application_id, options)
        return request(self.client, "POST", TWO_FACTOR_LOGIN_URL, body=body)

    def update_login_instant(
        self,
        user_id: str,
        application_id: Optional[str] = None,
        ip_address: Optional[str] = None,
    ) -> Result:
        """Record a login that happened outside of FusionAuth."""
        app_id = self._application_id(application_id)
        path = f"{LOGIN_URL}/{user_id}" if app_id is None else f"{LOGIN_URL}/{user_id}/{app_id}"
        return request(self.client, "PUT", path, params={"ipAddress": ip_address})

    def logout_user(self, refresh_token: str, global_logout: bool = False) -> Result:
        """Revoke a refresh token, or every token of its user when ``global_logout``."""
        params = {"global": global_logout, "refreshToken": refresh_token}
        return request(self.client, "POST", LOGOUT_URL, params=params)

    def search(self, criteria: LoginSearch) -> Result:
        """Search login records."""
        return request(self.client, "GET", LOGIN_SEARCH_URL, params=criteria.to_parameters())
