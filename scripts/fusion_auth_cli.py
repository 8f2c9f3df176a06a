"""Command-line access to FusionAuth reports and JWT helpers.

This module serves as a CLI wrapper around the fusion_auth services.
"""
from __future__ import annotations
import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

SCRIPT_DIR = Path(__file__).parent
PROJECT_ROOT = SCRIPT_DIR.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from fusion_auth import (
    client_from_settings,
    load_settings,
    JWTService,
    ReportService,
    ReportFilter,
    Result,
    FusionAuthError,
)

EXIT_OK = 0
EXIT_ERROR_RESULT = 1
EXIT_FAILURE = 2

REPORTS = {
    "daily-active-users": "get_daily_active_users_report",
    "login": "get_login_report",
    "monthly-active-users": "get_monthly_active_users_report",
    "registration": "get_registration_report",
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="FusionAuth API helper",
        epilog="Unset options fall back to FUSION_AUTH_* variables and /run/secrets.",
    )
    parser.add_argument("--url", help="FusionAuth base URL (FUSION_AUTH_URL)")
    parser.add_argument("--api-key", help="API key (FUSION_AUTH_API_KEY)")
    parser.add_argument("--tenant-id", help="Tenant id (FUSION_AUTH_TENANT_ID)")
    parser.add_argument("--application-id", help="Default application id (FUSION_AUTH_APPLICATION_ID)")
    parser.add_argument("--timeout", type=float, help="Seconds per request (FUSION_AUTH_TIMEOUT)")
    parser.add_argument("--verbose", "-v", action="store_true", help="Log requests to stderr")

    sub = parser.add_subparsers(dest="cmd")

    sub.add_parser("totals")
    sub.add_parser("public-keys")

    sr = sub.add_parser("report")
    sr.add_argument("kind", choices=sorted(REPORTS))
    sr.add_argument("--start", type=int, required=True, help="Epoch milliseconds")
    sr.add_argument("--end", type=int, required=True, help="Epoch milliseconds")
    sr.add_argument("--application-id", dest="report_application_id")
    sr.add_argument("--login-id")
    sr.add_argument("--user-id")

    sv = sub.add_parser("validate-jwt")
    sv.add_argument("--token", required=True)

    return parser


def _print_result(result: Result) -> int:
    tag, payload, response = result
    output = payload if isinstance(payload, str) else json.dumps(payload, indent=2, sort_keys=True)
    stream = sys.stdout if result.ok else sys.stderr
    if not result.ok:
        print(f"[{tag.value}] HTTP {response.status_code}", file=sys.stderr)
    if output:
        print(output, file=stream)
    return EXIT_OK if result.ok else EXIT_ERROR_RESULT


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Command-line entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.cmd:
        parser.print_help()
        return EXIT_FAILURE

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        settings = load_settings(
            base_url=args.url,
            api_key=args.api_key,
            tenant_id=args.tenant_id,
            application_id=args.application_id,
            timeout=args.timeout,
        )
        with client_from_settings(settings) as client:
            if args.cmd == "totals":
                result = ReportService(client).get_totals_report()
            elif args.cmd == "public-keys":
                result = JWTService(client).get_public_keys()
            elif args.cmd == "report":
                filters = ReportFilter(
                    application_id=args.report_application_id,
                    login_id=args.login_id,
                    user_id=args.user_id,
                )
                method = getattr(ReportService(client), REPORTS[args.kind])
                result = method(args.start, args.end, filters)
            else:
                result = JWTService(client).validate_jwt(args.token)
    except FusionAuthError as exc:
        print(f"[fusion-auth] {exc}", file=sys.stderr)
        return EXIT_FAILURE

    return _print_result(result)


if __name__ == "__main__":
    sys.exit(main())
