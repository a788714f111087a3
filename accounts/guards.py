# accounts/guards.py
import logging
from functools import wraps

from django.conf import settings
from django.shortcuts import redirect

from accounts.middleware import REFUSED_PATH_KEY
from accounts.roles import SIGN_IN_URL, UNAUTHORIZED_URL
from core.api_client import ApiError
from core.queries import get_current_user

logger = logging.getLogger(__name__)


def session_token(request):
    return request.COOKIES.get(settings.PANEL_AUTH_COOKIE)


def auth_guard(allowed_roles):
    """
    Decorator for role-restricted views:
    - Resolves the session's user (reusing the one the middleware found)
    - Not signed in, or the backend can't be reached → sign-in
    - Signed in with a role outside `allowed_roles` → /unauthorized
    - Leaves the user on `request.api_user` and the token on `request.api_token`
    """
    allowed_roles = tuple(allowed_roles)

    def decorator(view_func):
        @wraps(view_func)
        def _wrapped_view(request, *args, **kwargs):
            token = session_token(request)
            user = getattr(request, "api_user", None)

            if user is None:
                if not token:
                    return redirect(SIGN_IN_URL)
                try:
                    user = get_current_user(token)
                except ApiError as e:
                    logger.info("Auth check failed: %s", e)
                    return redirect(SIGN_IN_URL)

            if not user.role or user.role not in allowed_roles:
                logger.info(
                    "Usuario no autorizado. Rol: %s, Roles permitidos: %s", user.role, allowed_roles
                )
                request.session[REFUSED_PATH_KEY] = request.path
                return redirect(UNAUTHORIZED_URL)

            request.api_user = user
            request.api_token = token
            return view_func(request, *args, **kwargs)

        return _wrapped_view
    return decorator
