# users_ui/editor_ambiente/ambiente_views.py
import pandas as pd

from accounts.guards import auth_guard
from accounts.roles import ADMIN, EDITOR_AMBIENTE, ROLE_DASHBOARDS
from core.core_models import CONSUMO_AGUA
from core.helpers import consumo_rows, consumo_total, format_local_timestamps, format_registro_dates
from core.queries import add_record, delete_record, update_record
from users_ui.base_views import export_table, page_container, render_table
from users_ui.editor_ambiente.ambiente_forms import ConsumoAguaForm
from utils.validators import safe_date

PAGE_URL = ROLE_DASHBOARDS[EDITOR_AMBIENTE]
ALLOWED_ROLES = (ADMIN, EDITOR_AMBIENTE)


# -------------------------
# Handlers (raise ApiError)
# -------------------------
def handle_add(token, body: dict):
    return add_record(CONSUMO_AGUA, token, body)


def handle_edit(token, record_id, body: dict):
    return update_record(CONSUMO_AGUA, token, record_id, body)


def handle_delete(token, record_id):
    return delete_record(CONSUMO_AGUA, token, record_id)


def record_label(record) -> str:
    dia = safe_date(record.get("diaRegistro"))
    return f"el registro de consumo del {dia:%d/%m/%Y}" if dia else "el registro de consumo"


# -------------------------
# Page
# -------------------------
@auth_guard(ALLOWED_ROLES)
def editor_ambiente(request):
    return page_container(
        request,
        resource=CONSUMO_AGUA,
        form_class=ConsumoAguaForm,
        template_name="editor_ambiente/page.html",
        page_url=PAGE_URL,
        handlers={"crear": handle_add, "editar": handle_edit, "eliminar": handle_delete},
        record_label=record_label,
        extra_context={"titulo": "Consumo de Agua"},
    )


# -------------------------
# Table fragment
# -------------------------
def _table_rows(view_df: pd.DataFrame) -> dict:
    return {
        "rows": consumo_rows(view_df),
        "total": consumo_total(view_df),
    }


@auth_guard(ALLOWED_ROLES)
def ambiente_tabla(request):
    return render_table(request, CONSUMO_AGUA, "editor_ambiente/_tabla.html", _table_rows)


# -------------------------
# Export
# -------------------------
def export_frame(view_df: pd.DataFrame) -> pd.DataFrame:
    """Columns as the table shows them."""
    labels = CONSUMO_AGUA.column_labels
    if view_df.empty:
        return pd.DataFrame(columns=[labels[c] for c in ("diaRegistro", "cantidad", "observaciones", "createdAt", "creadoPor")])

    creado_por = view_df["creadoPor"] if "creadoPor" in view_df.columns else pd.Series(None, index=view_df.index)
    return pd.DataFrame({
        labels["diaRegistro"]: format_registro_dates(view_df["diaRegistro"]),
        labels["cantidad"]: view_df["cantidad"].round(2),
        labels["observaciones"]: view_df["observaciones"].fillna(""),
        labels["createdAt"]: format_local_timestamps(view_df["createdAt"]),
        labels["creadoPor"]: creado_por.apply(lambda u: u.get("name", "") if isinstance(u, dict) else ""),
    })


@auth_guard(ALLOWED_ROLES)
def ambiente_exportar(request, formato):
    return export_table(request, CONSUMO_AGUA, formato, export_frame, "Consumo de Agua")
