# tests/test_editor_ambiente.py
import pytest


@pytest.fixture
def ambiente(client, backend, login_as):
    login_as("editorAmbiente")
    return client


# -------------------------
# Page and table
# -------------------------
def test_page_shows_skeleton_until_table_loads(ambiente, backend):
    response = ambiente.get("/editor-ambiente")
    html = response.content.decode()
    assert response.status_code == 200
    assert 'data-tabla-src="/editor-ambiente/tabla"' in html
    assert "skeleton" in html
    # the collection is only fetched by the fragment
    assert not backend.requests_for("GET", "/api/consumo-agua")


def test_admin_can_open_the_page(client, backend, login_as):
    login_as("admin")
    assert client.get("/editor-ambiente").status_code == 200


def test_table_fragment_newest_first_with_total(ambiente):
    response = ambiente.get("/editor-ambiente/tabla")
    html = response.content.decode()
    rows = response.context["rows"]
    assert [r["id"] for r in rows] == ["c3", "c2", "c1"]
    assert "30.00 m³" in html
    assert "badge badge-alert" in html


def test_table_sorted_by_quantity_descending(ambiente):
    response = ambiente.get("/editor-ambiente/tabla?orden=cantidad&dir=descending")
    assert [r["cantidad"] for r in response.context["rows"]] == ["15.00", "10.00", "5.00"]


def test_search_narrows_rows_and_total(ambiente):
    response = ambiente.get("/editor-ambiente/tabla?q=fuga")
    assert [r["id"] for r in response.context["rows"]] == ["c2"]
    assert response.context["total"] == 15


def test_search_without_results_offers_clear(ambiente):
    html = ambiente.get("/editor-ambiente/tabla?q=nada-de-nada").content.decode()
    assert "Limpiar búsqueda" in html


def test_load_error_shows_retry(ambiente, backend):
    backend.add("GET", "/api/consumo-agua", status=500, payload={"message": "Base de datos caída"})
    response = ambiente.get("/editor-ambiente/tabla")
    assert response.status_code == 502
    html = response.content.decode()
    assert "Base de datos caída" in html
    assert "Reintentar" in html


def test_dropped_records_are_reported(ambiente, backend):
    backend.add("GET", "/api/consumo-agua", payload=[
        {"id": "c1", "diaRegistro": "2024-03-01", "cantidad": 2, "observaciones": "ok"},
        {"id": "c2", "cantidad": 2},
    ])
    html = ambiente.get("/editor-ambiente/tabla").content.decode()
    assert "1 registros omitidos" in html


# -------------------------
# Create / edit
# -------------------------
def test_new_dialog_defaults_to_today(ambiente):
    response = ambiente.get("/editor-ambiente?nuevo=1")
    assert response.context["dialog"] == "crear"
    assert "Nuevo Registro" in response.content.decode()


def test_create_posts_and_reloads(ambiente, backend):
    response = ambiente.post("/editor-ambiente?q=fuga", {
        "accion": "crear", "diaRegistro": "2024-04-01", "cantidad": "8.5", "observaciones": "Riego",
    })
    assert response.status_code == 302
    assert response.url == "/editor-ambiente"
    post = backend.requests_for("POST", "/api/consumo-agua")[0]
    assert post["json"] == {"diaRegistro": "2024-04-01", "cantidad": 8.5, "observaciones": "Riego"}

    page = ambiente.get(response.url)
    assert "Registro agregado correctamente" in page.content.decode()


def test_invalid_draft_sends_nothing(ambiente, backend):
    response = ambiente.post("/editor-ambiente", {
        "accion": "crear", "diaRegistro": "2024-04-01", "cantidad": "0", "observaciones": "Riego",
    })
    assert response.status_code == 200
    assert "La cantidad debe ser mayor que 0" in response.content.decode()
    assert backend.writes == []


def test_create_failure_keeps_dialog_and_draft(ambiente, backend):
    backend.add("POST", "/api/consumo-agua", status=400, payload={"errors": [{"message": "Fecha duplicada"}]})
    response = ambiente.post("/editor-ambiente", {
        "accion": "crear", "diaRegistro": "2024-04-01", "cantidad": "8", "observaciones": "Riego",
    })
    html = response.content.decode()
    assert response.status_code == 200
    assert response.context["page_error"] == "Fecha duplicada"
    assert response.context["dialog"] == "crear"
    assert 'value="2024-04-01"' in html
    assert "Riego" in html


def test_create_failure_without_message_uses_default(ambiente, backend):
    backend.add("POST", "/api/consumo-agua", status=500, payload={})
    response = ambiente.post("/editor-ambiente", {
        "accion": "crear", "diaRegistro": "2024-04-01", "cantidad": "8", "observaciones": "Riego",
    })
    assert response.context["page_error"] == "Error al agregar el registro"


def test_edit_dialog_is_seeded_from_record(ambiente):
    response = ambiente.get("/editor-ambiente?editar=c2")
    assert response.context["dialog"] == "editar"
    assert response.context["editing_id"] == "c2"
    html = response.content.decode()
    assert 'value="2024-03-02"' in html
    assert "Fuga en el baño" in html


def test_edit_unknown_id(ambiente):
    response = ambiente.get("/editor-ambiente?editar=zzz")
    assert response.context["dialog"] is None
    assert response.context["page_error"] == "ID del registro no válido"


def test_edit_puts_to_record(ambiente, backend):
    response = ambiente.post("/editor-ambiente", {
        "accion": "editar", "id": "c2", "diaRegistro": "2024-03-02", "cantidad": "14", "observaciones": "Fuga reparada",
    })
    assert response.url == "/editor-ambiente"
    put = backend.requests_for("PUT", "/api/consumo-agua/c2")[0]
    assert put["json"]["cantidad"] == 14.0


def test_edit_without_id_fails_without_request(ambiente, backend):
    response = ambiente.post("/editor-ambiente", {
        "accion": "editar", "id": "", "diaRegistro": "2024-03-02", "cantidad": "14", "observaciones": "x",
    })
    assert response.context["page_error"] == "ID del registro no válido"
    assert backend.writes == []


# -------------------------
# Delete
# -------------------------
def test_delete_asks_for_confirmation(ambiente, backend):
    response = ambiente.get("/editor-ambiente?eliminar=c1")
    html = response.content.decode()
    assert "¿Estás seguro de que deseas eliminar el registro de consumo del 01/03/2024?" in html
    assert backend.writes == []


def test_cancelled_delete_sends_nothing(ambiente, backend):
    confirm = ambiente.get("/editor-ambiente?q=riego&eliminar=c1")
    assert confirm.context["cancel_url"] == "/editor-ambiente?q=riego"

    page = ambiente.get(confirm.context["cancel_url"])
    assert page.context["confirm"] is None
    assert backend.requests_for("DELETE") == []


def test_confirmed_delete(ambiente, backend):
    response = ambiente.post("/editor-ambiente", {"accion": "eliminar", "id": "c1", "etiqueta": "x"})
    assert response.url == "/editor-ambiente"
    assert backend.requests_for("DELETE", "/api/consumo-agua/c1")


def test_delete_failure_shows_banner(ambiente, backend):
    backend.add("DELETE", "/api/consumo-agua/c1", status=500, payload={})
    response = ambiente.post("/editor-ambiente", {"accion": "eliminar", "id": "c1", "etiqueta": "el registro"})
    assert response.status_code == 200
    assert response.context["page_error"] == "Error al eliminar el registro"
    assert response.context["confirm"]["id"] == "c1"


def test_unknown_action_is_rejected(ambiente, backend):
    response = ambiente.post("/editor-ambiente", {"accion": "borrar-todo"})
    assert response.status_code == 400
    assert backend.writes == []


# -------------------------
# Access
# -------------------------
def test_catalog_editor_is_refused(client, backend, login_as):
    login_as("editorCatalogo")
    for url in ("/editor-ambiente", "/editor-ambiente/tabla", "/editor-ambiente/exportar/csv"):
        assert client.get(url).url == "/unauthorized"
