# panel_ambiental/main_urls.py
from django.urls import path, include

from accounts import views as account_views

# --- URL patterns ---
urlpatterns = [
    # Root path → role dashboard (the middleware redirects before this view runs)
    path("", account_views.root_redirect, name="root_redirect"),

    # Role dashboards
    path("", include("users_ui.admin_panel.admin_urls")),
    path("", include("users_ui.editor_catalogo.catalogo_urls")),
    path("", include("users_ui.editor_ambiente.ambiente_urls")),

    # Authentication routes
    path("", include("accounts.auth_urls")),
]
