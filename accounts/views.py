# accounts/views.py
import logging
from urllib.parse import urlencode

from django.conf import settings
from django.shortcuts import render, redirect
from django.utils.http import url_has_allowed_host_and_scheme
from django.views.decorators.http import require_http_methods

from accounts.forms import SignInForm, SignUpForm
from accounts.middleware import REFUSED_PATH_KEY
from accounts.roles import (
    ADMIN,
    EDITOR_AMBIENTE,
    EDITOR_CATALOGO,
    ROLE_DASHBOARDS,
    SIGN_IN_URL,
    redirect_role,
)
from core.api_client import ApiError
from core.queries import login, logout, register_user

logger = logging.getLogger(__name__)


# -------------------------------------------------------------------
# Sign in
# -------------------------------------------------------------------
def sign_in(request):
    """
    Sign in against the backend and keep its token in the auth cookie.
    `?success=true&email=...` comes from a fresh registration.
    """
    registered = request.GET.get("success") == "true"
    form = SignInForm(request.POST or None, initial={"email": request.GET.get("email", "")})
    error = None

    if request.method == "POST" and form.is_valid():
        try:
            user, token = login(form.cleaned_data["email"], form.cleaned_data["password"])
        except ApiError as e:
            logger.info("Login error: %s", e)
            error = e.message
        else:
            logger.info("Login ok: %s (%s)", user.email, user.role)
            response = redirect_role(user.role)
            response.set_cookie(
                settings.PANEL_AUTH_COOKIE,
                token,
                max_age=settings.PANEL_AUTH_COOKIE_MAX_AGE,
                httponly=True,
                samesite="Lax",
                secure=not settings.DEBUG,
            )
            return response

    return render(request, "accounts/sign_in.html", {
        "form": form,
        "error": error,
        "registered": registered,
    })


# -------------------------------------------------------------------
# Sign up
# -------------------------------------------------------------------
def sign_up(request):
    """Register a new account, then send the user to sign in."""
    form = SignUpForm(request.POST or None)
    error = None

    if request.method == "POST" and form.is_valid():
        data = form.cleaned_data
        try:
            register_user(data["name"], data["email"], data["password"], data["role"])
        except ApiError as e:
            logger.info("Registration error: %s", e)
            error = e.message
        else:
            query = urlencode({"success": "true", "email": data["email"]})
            return redirect(f"{SIGN_IN_URL}?{query}")

    return render(request, "accounts/sign_up.html", {"form": form, "error": error})


# -------------------------------------------------------------------
# Logout
# -------------------------------------------------------------------
@require_http_methods(["POST"])
def logout_view(request):
    """End the backend session and drop the auth cookie."""
    token = request.COOKIES.get(settings.PANEL_AUTH_COOKIE)
    if logout(token):
        response = redirect(SIGN_IN_URL)
        response.delete_cookie(settings.PANEL_AUTH_COOKIE, samesite="Lax")
        return response

    request.session["error_message"] = "Error al cerrar sesión"
    referer = request.META.get("HTTP_REFERER")
    if not url_has_allowed_host_and_scheme(
        referer, allowed_hosts={request.get_host()}, require_https=request.is_secure()
    ):
        referer = "/"
    return redirect(referer)


# -------------------------------------------------------------------
# Unauthorized
# -------------------------------------------------------------------
AREA_MESSAGES = (
    ("/admin", "Esta área es exclusiva para administradores."),
    ("/editor-catalogo", "Esta área es exclusiva para editores de catálogo y administradores."),
    ("/editor-ambiente", "Esta área es exclusiva para editores de ambiente y administradores."),
)

ROLE_LINKS = {
    ADMIN: [
        (ROLE_DASHBOARDS[ADMIN], "Panel de Administrador"),
        (ROLE_DASHBOARDS[EDITOR_CATALOGO], "Editor de Catálogo"),
        (ROLE_DASHBOARDS[EDITOR_AMBIENTE], "Editor de Ambiente"),
    ],
    EDITOR_CATALOGO: [(ROLE_DASHBOARDS[EDITOR_CATALOGO], "Editor de Catálogo")],
    EDITOR_AMBIENTE: [(ROLE_DASHBOARDS[EDITOR_AMBIENTE], "Editor de Ambiente")],
}


def area_message(refused_path) -> str:
    for prefix, message in AREA_MESSAGES:
        if refused_path and refused_path.startswith(prefix):
            return message
    return "No tienes permisos para acceder a esta área."


def unauthorized(request):
    """Explain the refused area and link to the dashboards the role may use."""
    user = getattr(request, "api_user", None)
    refused_path = request.session.pop(REFUSED_PATH_KEY, None)
    role = user.role if user else None

    return render(request, "accounts/unauthorized.html", {
        "message": area_message(refused_path) if role else "",
        "links": ROLE_LINKS.get(role, []),
    })


# -------------------------------------------------------------------
# Root
# -------------------------------------------------------------------
def root_redirect(request):
    """The middleware routes "/" by role; reaching this view means no usable session."""
    user = getattr(request, "api_user", None)
    if user is not None:
        return redirect_role(user.role)
    return redirect(SIGN_IN_URL)
