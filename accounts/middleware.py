# accounts/middleware.py
import logging

import requests
from django.conf import settings
from django.shortcuts import redirect

from accounts.models import User
from accounts.roles import (
    PUBLIC_PATHS,
    SIGN_IN_URL,
    UNAUTHORIZED_URL,
    allowed_roles_for,
    dashboard_for,
)
from core.api_client import call_api

logger = logging.getLogger(__name__)

# Session key holding the path that was refused, shown on /unauthorized
REFUSED_PATH_KEY = "refused_path"


def resolve_redirect(path: str, has_cookie: bool, role=None):
    """
    Decide where a request must go before any view runs.

    `role` is the role returned by the identity check, or None when that
    check failed. Returns the redirect target, or None to let the request
    through.
    """
    if path in PUBLIC_PATHS:
        return None
    if not has_cookie or role is None:
        return SIGN_IN_URL

    if path == "/":
        return dashboard_for(role) or UNAUTHORIZED_URL

    allowed = allowed_roles_for(path)
    if allowed is not None and role not in allowed:
        return UNAUTHORIZED_URL
    return None


def fetch_session_user(token):
    """
    Ask the backend who owns `token`.
    Any failure, including transport errors, counts as "not authenticated".
    """
    try:
        ok, payload, _ = call_api("GET", "/api/users/me", token=token)
    except requests.RequestException as e:
        logger.warning("Auth check failed: %s", e)
        return None
    if not ok:
        return None
    return User.from_api(payload)


class RoleRedirectMiddleware:
    """
    Route gate run on every page request: sends anonymous visitors to
    sign-in, "/" to the role dashboard and wrong roles to /unauthorized.
    The resolved user is left on `request.api_user` for the views.
    """

    def __init__(self, get_response):
        self.get_response = get_response

    def _skipped(self, path: str) -> bool:
        return path.startswith(settings.STATIC_URL) or path == "/favicon.ico"

    def __call__(self, request):
        request.api_user = None
        path = request.path

        if self._skipped(path) or path in PUBLIC_PATHS:
            return self.get_response(request)

        token = request.COOKIES.get(settings.PANEL_AUTH_COOKIE)
        user = fetch_session_user(token) if token else None
        request.api_user = user

        # An authenticated user without a role is "unrecognized", not anonymous
        role = (user.role or "") if user else None
        target = resolve_redirect(path, has_cookie=bool(token), role=role)
        if target is None:
            return self.get_response(request)

        logger.debug("Redirecting %s -> %s (role=%s)", path, target, role)
        if target == UNAUTHORIZED_URL and path != "/":
            request.session[REFUSED_PATH_KEY] = path
        return redirect(target)
