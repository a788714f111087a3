# accounts/context_processors.py
from accounts.roles import ADMIN, EDITOR_AMBIENTE, EDITOR_CATALOGO, ROLE_DASHBOARDS, ROLE_LABELS

# Pages where the toolbar is never shown
TOOLBAR_HIDDEN_PATHS = ("/sign-in", "/sign-up", "/unauthorized")


def panel_menu(request):
    """Toolbar items for signed-in pages; empty on public pages."""
    user = getattr(request, "api_user", None)
    path = getattr(request, "path", "")
    if user is None or path in TOOLBAR_HIDDEN_PATHS:
        return {"show_toolbar": False}

    menu_items = [
        {
            "name": ROLE_LABELS[role],
            "url": ROLE_DASHBOARDS[role],
            "active": path.rstrip("/") == ROLE_DASHBOARDS[role],
        }
        for role in (ADMIN, EDITOR_CATALOGO, EDITOR_AMBIENTE)
    ]

    return {
        "show_toolbar": True,
        "menu_items": menu_items,
        "current_user": user,
    }


def session_messages(request):
    """Pop one-shot messages left in the session by redirects."""
    session = getattr(request, "session", None)
    if session is None:
        return {}
    return {
        "success_message": session.pop("success_message", None),
        "error_message": session.pop("error_message", None),
    }
