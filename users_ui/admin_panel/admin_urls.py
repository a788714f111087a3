# users_ui/admin_panel/admin_urls.py
from django.urls import path
from . import admin_views

app_name = "admin_panel"

urlpatterns = [
    path("admin", admin_views.dashboard, name="dashboard"),
]
