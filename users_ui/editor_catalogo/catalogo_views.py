# users_ui/editor_catalogo/catalogo_views.py
from urllib.parse import urlencode

import pandas as pd

from accounts.guards import auth_guard
from accounts.roles import ADMIN, EDITOR_CATALOGO, ROLE_DASHBOARDS
from core.core_models import CATALOGO
from core.helpers import catalogo_rows, catalogo_stats
from core.queries import add_record, delete_record, update_record
from users_ui.base_views import export_table, page_container, render_table
from users_ui.editor_catalogo.catalogo_forms import CatalogoItemForm

PAGE_URL = ROLE_DASHBOARDS[EDITOR_CATALOGO]
ALLOWED_ROLES = (EDITOR_CATALOGO, ADMIN)


# -------------------------
# Handlers (raise ApiError)
# -------------------------
def handle_add(token, body: dict):
    body = {**body, "nombreItem": body["nombreItem"].strip()}
    return add_record(CATALOGO, token, body)


def handle_edit(token, record_id, body: dict):
    body = {**body, "nombreItem": body["nombreItem"].strip()}
    return update_record(CATALOGO, token, record_id, body)


def handle_delete(token, record_id):
    return delete_record(CATALOGO, token, record_id)


def record_label(record) -> str:
    return f'el item "{record.get("nombreItem") or ""}"'


# -------------------------
# Page
# -------------------------
@auth_guard(ALLOWED_ROLES)
def editor_catalogo(request):
    return page_container(
        request,
        resource=CATALOGO,
        form_class=CatalogoItemForm,
        template_name="editor_catalogo/page.html",
        page_url=PAGE_URL,
        handlers={"crear": handle_add, "editar": handle_edit, "eliminar": handle_delete},
        record_label=record_label,
        extra_context={"titulo": "Catálogo"},
    )


# -------------------------
# Table fragment
# -------------------------
VISTAS = (("tabla", "Tabla"), ("cuadricula", "Cuadrícula"))
DEFAULT_VISTA = "tabla"


def _table_rows(view_df: pd.DataFrame) -> dict:
    stats = catalogo_stats(view_df)
    return {
        "stats": stats,
        "rows": catalogo_rows(view_df, stats["precio_promedio"]),
    }


def vista_from_request(params) -> str:
    vista = params.get("vista")
    return vista if vista in dict(VISTAS) else DEFAULT_VISTA


def vista_links(params, active: str) -> list:
    """Table/grid toggle links; search and sort survive the switch."""
    base = {k: params[k] for k in ("q", "orden", "dir") if params.get(k)}
    return [
        {"key": key, "label": label, "active": key == active, "query": urlencode({**base, "vista": key})}
        for key, label in VISTAS
    ]


@auth_guard(ALLOWED_ROLES)
def catalogo_tabla(request):
    vista = vista_from_request(request.GET)

    def build_rows(view_df):
        context = _table_rows(view_df)
        context.update({"vista": vista, "vistas": vista_links(request.GET, vista)})
        return context

    return render_table(request, CATALOGO, "editor_catalogo/_tabla.html", build_rows)


# -------------------------
# Export
# -------------------------
def export_frame(view_df: pd.DataFrame) -> pd.DataFrame:
    labels = CATALOGO.column_labels
    if view_df.empty:
        return pd.DataFrame(columns=[labels["nombreItem"], "Precio (S/.)"])
    return pd.DataFrame({
        labels["nombreItem"]: view_df["nombreItem"],
        "Precio (S/.)": view_df["precio"].round(2),
    })


@auth_guard(ALLOWED_ROLES)
def catalogo_exportar(request, formato):
    return export_table(request, CATALOGO, formato, export_frame, "Catálogo")
