# users_ui/base_views.py
import logging
from datetime import datetime
from urllib.parse import urlencode

import pandas as pd
from django.http import Http404, HttpResponse, HttpResponseBadRequest
from django.shortcuts import render, redirect

from core.api_client import ApiError
from core.core_models import Resource
from core.helpers import build_table_view, sort_headers, table_state_from_request
from core.queries import find_record, load_records
from utils.export_utils import export_dataframe_csv, export_dataframe_excel, export_dataframe_pdf

logger = logging.getLogger(__name__)

EXPORT_FORMATS = {
    "excel": ("xlsx", "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"),
    "csv": ("csv", "text/csv; charset=utf-8"),
    "pdf": ("pdf", "application/pdf"),
}


# -------------------------
# List table
# -------------------------
def load_table(request, resource: Resource) -> dict:
    """
    Fetch the collection and apply the search/sort from the query string.
    A failed fetch comes back as `error` instead of raising.
    """
    state = table_state_from_request(resource, request.GET)
    context = {
        "state": state,
        "headers": sort_headers(resource, state),
        "error": None,
        "source_count": 0,
        "dropped": 0,
        "view_df": pd.DataFrame(),
    }
    try:
        df, dropped = load_records(resource, request.api_token)
    except ApiError as e:
        logger.warning("Error al cargar %s: %s", resource.name, e)
        context["error"] = e.message
        return context

    context.update({
        "source_count": len(df),
        "dropped": dropped,
        "view_df": build_table_view(resource, df, state),
    })
    return context


def render_table(request, resource: Resource, template_name: str, build_rows):
    """
    Render the table fragment the page loads after showing its skeleton.
    `build_rows(view_df)` returns the extra context for the rows.
    """
    context = load_table(request, resource)
    context["table_query"] = table_query(request.GET)
    if context["error"]:
        return render(request, template_name, context, status=502)
    context.update(build_rows(context["view_df"]))
    return render(request, template_name, context)


# -------------------------
# Exports
# -------------------------
def export_table(request, resource: Resource, formato: str, build_frame, title: str):
    """Download the current filtered+sorted view as Excel, CSV or PDF."""
    if formato not in EXPORT_FORMATS:
        raise Http404("Formato de exportación no soportado")

    context = load_table(request, resource)
    if context["error"]:
        return HttpResponse(f"❌ {context['error']}", status=502)

    df = build_frame(context["view_df"])
    extension, content_type = EXPORT_FORMATS[formato]
    if formato == "excel":
        content = export_dataframe_excel(df, sheet_name=title[:31])
    elif formato == "csv":
        content = export_dataframe_csv(df)
    else:
        content = export_dataframe_pdf(df, title_text=title)

    filename = f"{resource.name.replace('_', '-')}-{datetime.now():%Y%m%d}.{extension}"
    response = HttpResponse(content, content_type=content_type)
    response["Content-Disposition"] = f'attachment; filename="{filename}"'
    return response


# -------------------------
# Page container
# -------------------------
def lookup_record(request, resource: Resource, record_id):
    """
    Find the record a dialog or confirmation refers to.
    Returns (record, error_message).
    """
    try:
        record = find_record(resource, request.api_token, record_id)
    except ApiError as e:
        return None, e.message
    if record is None:
        return None, resource.invalid_id_error
    return record, None


def reload_page(request, page_url: str, message: str):
    """Successful write: drop every bit of page state and load the page again."""
    request.session["success_message"] = message
    return redirect(page_url)


SUCCESS_VERBS = {"crear": "agregado", "editar": "actualizado", "eliminar": "eliminado"}

# Query params that describe the table view; kept on dialog/cancel links
TABLE_PARAMS = ("q", "orden", "dir", "vista")


def table_query(params) -> str:
    return urlencode({k: params[k] for k in TABLE_PARAMS if params.get(k)})


def page_container(request, *, resource: Resource, form_class, template_name: str, page_url: str,
                   handlers: dict, record_label, extra_context=None):
    """
    Shared GET/POST flow for an editor page.

    GET  ?nuevo           → create dialog with default values
    GET  ?editar=<id>     → edit dialog seeded from the record
    GET  ?eliminar=<id>   → delete confirmation
    POST accion=crear|editar|eliminar → run the handler; success reloads the
    bare page, failure re-renders with the banner and the dialog as it was.

    `handlers` maps each accion to a callable raising ApiError on failure.
    """
    dialog = None
    form = None
    editing_id = None
    confirm = None
    error = None

    if request.method == "POST":
        accion = request.POST.get("accion")
        record_id = request.POST.get("id") or None

        if accion in ("crear", "editar"):
            dialog = accion
            editing_id = record_id
            form = form_class(request.POST)
            if form.is_valid():
                try:
                    if accion == "crear":
                        handlers["crear"](request.api_token, form.payload())
                    else:
                        handlers["editar"](request.api_token, record_id, form.payload())
                except ApiError as e:
                    logger.warning("Error al %s %s: %s", accion, resource.name, e)
                    error = e.message
                else:
                    return reload_page(request, page_url, _success_message(resource, accion))
        elif accion == "eliminar":
            confirm = {"id": record_id, "label": request.POST.get("etiqueta", "")}
            try:
                handlers["eliminar"](request.api_token, record_id)
            except ApiError as e:
                logger.warning("Error al eliminar %s: %s", resource.name, e)
                error = e.message
            else:
                return reload_page(request, page_url, _success_message(resource, accion))
        else:
            return HttpResponseBadRequest("Acción no válida")

    elif "nuevo" in request.GET:
        dialog = "crear"
        form = form_class(initial=form_class.initial_for())
    elif "editar" in request.GET:
        record, error = lookup_record(request, resource, request.GET["editar"])
        if record is not None:
            dialog = "editar"
            editing_id = record["id"]
            form = form_class(initial=form_class.initial_for(record))
    elif "eliminar" in request.GET:
        record, error = lookup_record(request, resource, request.GET["eliminar"])
        if record is not None:
            confirm = {"id": record["id"], "label": record_label(record)}

    query = table_query(request.GET)
    context = {
        "page_url": page_url,
        "table_query": query,
        "cancel_url": f"{page_url}?{query}" if query else page_url,
        "dialog": dialog,
        "form": form,
        "editing_id": editing_id,
        "confirm": confirm,
        "page_error": error,
    }
    if extra_context:
        context.update(extra_context)
    return render(request, template_name, context)


def _success_message(resource: Resource, accion: str) -> str:
    return f"{resource.noun.capitalize()} {SUCCESS_VERBS[accion]} correctamente"
