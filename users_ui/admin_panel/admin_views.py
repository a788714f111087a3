# users_ui/admin_panel/admin_views.py
import logging

from django.shortcuts import render

from accounts.guards import auth_guard
from accounts.roles import ADMIN, EDITOR_AMBIENTE, EDITOR_CATALOGO, ROLE_DASHBOARDS, ROLE_LABELS
from core.api_client import ApiError
from core.queries import get_catalogo, get_consumos

logger = logging.getLogger(__name__)


def _count(loader, token):
    """Record count, or None when the collection can't be loaded."""
    try:
        df, _ = loader(token)
    except ApiError as e:
        logger.warning("Dashboard count unavailable: %s", e)
        return None
    return len(df)


# -------------------------
# Dashboard
# -------------------------
@auth_guard([ADMIN])
def dashboard(request):
    """
    Admin landing page:
    - Welcome panel
    - Record counts for both collections (best effort)
    - Shortcuts to the two editors
    """
    token = request.api_token
    context = {
        "user": request.api_user,
        "total_consumos": _count(get_consumos, token),
        "total_catalogo": _count(get_catalogo, token),
        "shortcuts": [
            (ROLE_DASHBOARDS[EDITOR_CATALOGO], ROLE_LABELS[EDITOR_CATALOGO]),
            (ROLE_DASHBOARDS[EDITOR_AMBIENTE], ROLE_LABELS[EDITOR_AMBIENTE]),
        ],
    }
    return render(request, "admin_panel/dashboard.html", context)
