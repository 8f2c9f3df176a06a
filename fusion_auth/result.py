"""Normalization of raw HTTP responses into a uniform three-part result."""
from __future__ import annotations
import logging
from enum import Enum
from typing import Any, NamedTuple

import requests

from .exceptions import DecodeError

logger = logging.getLogger(__name__)


class Tag(str, Enum):
    """Outcome of a call, decided solely by HTTP status class."""
    OK = "ok"
    ERROR = "error"


class Result(NamedTuple):
    """``(tag, payload, response)`` returned by every resource call.

    ``payload`` is the decoded JSON body, the raw body text for
    non-JSON error responses, or ``""`` when the body is empty.
    """
    tag: Tag
    payload: Any
    response: requests.Response

    @property
    def ok(self) -> bool:
        return self.tag is Tag.OK

    @property
    def status_code(self) -> int:
        return self.response.status_code


def _is_success(status_code: int) -> bool:
    return 200 <= status_code < 300


def normalize(response: requests.Response) -> Result:
    """Reduce a raw response to a ``Result``.

    Args:
        response: Response returned by the transport

    Returns:
        ``Result(Tag.OK, payload, response)`` for 2xx statuses,
        ``Result(Tag.ERROR, payload, response)`` otherwise

    Raises:
        DecodeError: If a 2xx response carries a body that is not JSON
    """
    status_code = response.status_code

    if _is_success(status_code):
        if not response.content:
            return Result(Tag.OK, "", response)
        try:
            payload = response.json()
        except ValueError as exc:
            logger.warning("Malformed JSON body on %s response from %s", status_code, response.url)
            raise DecodeError(response) from exc
        return Result(Tag.OK, payload, response)

    if not response.content:
        return Result(Tag.ERROR, "", response)
    try:
        payload = response.json()
    except ValueError:
        # Error bodies are not guaranteed to be JSON (proxies, bare 404s)
        payload = response.text
    logger.debug("Error response %s from %s", status_code, response.url)
    return Result(Tag.ERROR, payload, response)
