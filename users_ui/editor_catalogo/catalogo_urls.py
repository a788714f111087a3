# users_ui/editor_catalogo/catalogo_urls.py
from django.urls import path
from . import catalogo_views

app_name = "editor_catalogo"

urlpatterns = [
    path("editor-catalogo", catalogo_views.editor_catalogo, name="page"),
    path("editor-catalogo/tabla", catalogo_views.catalogo_tabla, name="tabla"),
    path("editor-catalogo/exportar/<str:formato>", catalogo_views.catalogo_exportar, name="exportar"),
]
