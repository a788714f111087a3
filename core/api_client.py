# core/api_client.py
"""
Thin HTTP client for the backend CMS.

Every record the panel shows or edits lives behind this API. Requests carry
the session token both as the auth cookie and as a Bearer header, so the
backend accepts them whichever way it reads credentials.
"""
import logging

import requests
from django.conf import settings

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Non-OK response or transport failure talking to the backend."""

    def __init__(self, message, status_code=None, payload=None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.payload = payload


def api_url(path: str) -> str:
    return f"{settings.PANEL_BACKEND_URL}{path}"


def session_headers(token=None) -> dict:
    headers = {"Accept": "application/json"}
    if token:
        headers["Authorization"] = f"Bearer {token}"
    return headers


def server_message(payload):
    """
    Pull the human-readable error out of a backend payload.
    Looks at `message`, then `errors[0].message`, then `detail`/`error`.
    """
    if not isinstance(payload, dict):
        return None
    if payload.get("message"):
        return str(payload["message"])
    errors = payload.get("errors")
    if isinstance(errors, list) and errors:
        first = errors[0]
        if isinstance(first, dict) and first.get("message"):
            return str(first["message"])
    detail = payload.get("detail") or payload.get("error")
    return str(detail) if detail else None


def _send(method: str, path: str, token=None, **kwargs):
    cookies = {settings.PANEL_AUTH_COOKIE: token} if token else None
    resp = requests.request(
        method,
        api_url(path),
        headers=session_headers(token),
        cookies=cookies,
        timeout=settings.PANEL_API_TIMEOUT,
        **kwargs,
    )
    try:
        payload = resp.json()
    except ValueError:
        payload = {"raw": resp.text}
    return resp.status_code, payload


def call_api(method: str, path: str, token=None, **kwargs):
    """
    Issue one request against the backend.

    Returns (ok, payload, error) where `error` is the server message for
    non-2xx responses. Transport failures propagate as requests exceptions.
    """
    status_code, payload = _send(method, path, token=token, **kwargs)
    if 200 <= status_code < 300:
        return True, payload, None

    error = server_message(payload)
    logger.info("%s %s -> HTTP %s: %s", method, path, status_code, error)
    return False, payload, error


def request_or_raise(method: str, path: str, default_error: str, token=None, **kwargs):
    """
    Like call_api but raises ApiError on any failure.
    The error message is the server's when it sent one, else `default_error`.
    """
    try:
        status_code, payload = _send(method, path, token=token, **kwargs)
    except requests.RequestException as e:
        logger.warning("%s %s failed: %s", method, path, e)
        raise ApiError(default_error) from e

    if not 200 <= status_code < 300:
        error = server_message(payload)
        logger.info("%s %s -> HTTP %s: %s", method, path, status_code, error)
        raise ApiError(error or default_error, status_code=status_code, payload=payload)
    return payload
