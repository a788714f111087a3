# users_ui/editor_ambiente/ambiente_urls.py
from django.urls import path
from . import ambiente_views

app_name = "editor_ambiente"

urlpatterns = [
    path("editor-ambiente", ambiente_views.editor_ambiente, name="page"),
    path("editor-ambiente/tabla", ambiente_views.ambiente_tabla, name="tabla"),
    path("editor-ambiente/exportar/<str:formato>", ambiente_views.ambiente_exportar, name="exportar"),
]
