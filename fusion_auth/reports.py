"""FusionAuth Reports API operations.

Every report except totals requires a ``start`` and ``end`` instant
(epoch milliseconds), truncated by the server to days in the report
timezone.

See https://fusionauth.io/docs/v1/tech/apis/reports
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, Optional

from .client import Client, request
from .result import Result
from .utils import merge_parameters

DAILY_ACTIVE_USERS_URL = "/api/report/daily-active-user"
LOGIN_REPORT_URL = "/api/report/login"
MONTHLY_ACTIVE_USERS_URL = "/api/report/monthly-active-user"
REGISTRATION_REPORT_URL = "/api/report/registration"
TOTALS_REPORT_URL = "/api/report/totals"


@dataclass
class ReportFilter:
    """Optional report filters.

    ``login_id`` and ``user_id`` only apply to the login report; when both
    are set the server gives ``login_id`` precedence.
    """
    application_id: Optional[str] = None
    login_id: Optional[str] = None
    user_id: Optional[str] = None

    def to_parameters(self) -> Dict[str, Any]:
        return {
            "applicationId": self.application_id,
            "loginId": self.login_id,
            "userId": self.user_id,
        }


class ReportService:
    """Service for generating FusionAuth usage reports."""

    def __init__(self, client: Client):
        self.client = client

    def _report(self, path: str, start: int, end: int, filters: Optional[ReportFilter]) -> Result:
        overrides = filters.to_parameters() if filters is not None else None
        params = merge_parameters({"start": start, "end": end}, overrides)
        return request(self.client, "GET", path, params=params)

    def get_daily_active_users_report(self, start: int, end: int, filters: Optional[ReportFilter] = None) -> Result:
        """Daily active users, for one application or globally."""
        return self._report(DAILY_ACTIVE_USERS_URL, start, end, filters)

    def get_login_report(self, start: int, end: int, filters: Optional[ReportFilter] = None) -> Result:
        """Logins, always in hourly counts."""
        return self._report(LOGIN_REPORT_URL, start, end, filters)

    def get_monthly_active_users_report(self, start: int, end: int, filters: Optional[ReportFilter] = None) -> Result:
        return self._report(MONTHLY_ACTIVE_USERS_URL, start, end, filters)

    def get_registration_report(self, start: int, end: int, filters: Optional[ReportFilter] = None) -> Result:
        """Registrations, always in hourly counts."""
        return self._report(REGISTRATION_REPORT_URL, start, end, filters)

    def get_totals_report(self) -> Result:
        """Login and registration totals per application and globally."""
        return request(self.client, "GET", TOTALS_REPORT_URL)
