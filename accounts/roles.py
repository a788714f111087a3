# accounts/roles.py
from django.shortcuts import redirect

ADMIN = "admin"
EDITOR_CATALOGO = "editorCatalogo"
EDITOR_AMBIENTE = "editorAmbiente"

ALL_ROLES = (ADMIN, EDITOR_CATALOGO, EDITOR_AMBIENTE)

ROLE_LABELS = {
    ADMIN: "Admin",
    EDITOR_CATALOGO: "Editor Catálogo",
    EDITOR_AMBIENTE: "Editor Ambiente",
}

# Landing page of each role after sign-in or when visiting "/"
ROLE_DASHBOARDS = {
    ADMIN: "/admin",
    EDITOR_CATALOGO: "/editor-catalogo",
    EDITOR_AMBIENTE: "/editor-ambiente",
}

# Path prefix → roles allowed under it
RESTRICTED_PREFIXES = (
    ("/admin", (ADMIN,)),
    ("/editor-catalogo", (ADMIN, EDITOR_CATALOGO)),
    ("/editor-ambiente", (ADMIN, EDITOR_AMBIENTE)),
)

SIGN_IN_URL = "/sign-in"
SIGN_UP_URL = "/sign-up"
UNAUTHORIZED_URL = "/unauthorized"

PUBLIC_PATHS = (SIGN_IN_URL, SIGN_UP_URL)


def dashboard_for(role):
    """Dashboard path for a role, or None when the role is not recognized."""
    return ROLE_DASHBOARDS.get(role)


def allowed_roles_for(path: str):
    """Roles allowed on a path, or None when the path is not role-restricted."""
    for prefix, roles in RESTRICTED_PREFIXES:
        if path.startswith(prefix):
            return roles
    return None


def redirect_role(role):
    """Redirect a freshly signed-in user to the dashboard of their role."""
    return redirect(dashboard_for(role) or "/")
