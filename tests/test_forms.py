# tests/test_forms.py
from datetime import date

import pytest

from accounts.forms import SignUpForm
from users_ui.editor_ambiente.ambiente_forms import ConsumoAguaForm
from users_ui.editor_catalogo.catalogo_forms import CatalogoItemForm
from utils.validators import password_strength, password_strength_label


# -------------------------
# Water consumption dialog
# -------------------------
@pytest.mark.parametrize("data,message", [
    ({"diaRegistro": "", "cantidad": "0", "observaciones": ""}, "El día de registro es requerido"),
    ({"diaRegistro": "2024-03-01", "cantidad": "0", "observaciones": ""}, "La cantidad debe ser mayor que 0"),
    ({"diaRegistro": "2024-03-01", "cantidad": "-2", "observaciones": "x"}, "La cantidad debe ser mayor que 0"),
    ({"diaRegistro": "2024-03-01", "cantidad": "abc", "observaciones": "x"}, "La cantidad debe ser mayor que 0"),
    ({"diaRegistro": "2024-03-01", "cantidad": "4", "observaciones": "   "}, "Las observaciones son requeridas"),
])
def test_consumo_form_reports_first_failing_rule(data, message):
    form = ConsumoAguaForm(data)
    assert not form.is_valid()
    assert form.error_message == message
    assert len(form.non_field_errors()) == 1


def test_consumo_form_valid_payload():
    form = ConsumoAguaForm({"diaRegistro": "2024-03-01", "cantidad": "12,5", "observaciones": "Riego"})
    assert form.is_valid(), form.errors
    assert form.payload() == {"diaRegistro": "2024-03-01", "cantidad": 12.5, "observaciones": "Riego"}


def test_consumo_form_defaults_and_edit_seed():
    assert ConsumoAguaForm.initial_for() == {
        "diaRegistro": date.today().isoformat(), "cantidad": 0, "observaciones": "",
    }
    seeded = ConsumoAguaForm.initial_for({
        "diaRegistro": "2024-03-01T00:00:00.000Z", "cantidad": 7.0, "observaciones": "Fuga",
    })
    assert seeded == {"diaRegistro": "2024-03-01", "cantidad": 7.0, "observaciones": "Fuga"}


# -------------------------
# Catalog dialog
# -------------------------
@pytest.mark.parametrize("data,message", [
    ({"nombreItem": "  ", "precio": "0"}, "El nombre del item es requerido"),
    ({"nombreItem": "Papel", "precio": "0"}, "El precio debe ser mayor que 0"),
    ({"nombreItem": "Papel", "precio": ""}, "El precio debe ser mayor que 0"),
    ({"nombreItem": "Papel", "precio": "gratis"}, "El precio debe ser mayor que 0"),
])
def test_catalogo_form_reports_first_failing_rule(data, message):
    form = CatalogoItemForm(data)
    assert not form.is_valid()
    assert form.error_message == message


def test_catalogo_form_trims_name():
    form = CatalogoItemForm({"nombreItem": "  Papel reciclado ", "precio": "4.5"})
    assert form.is_valid()
    assert form.payload() == {"nombreItem": "Papel reciclado", "precio": 4.5}


def test_catalogo_form_accepts_long_names():
    nombre = "x" * 201
    form = CatalogoItemForm({"nombreItem": nombre, "precio": "5"})
    assert form.is_valid()
    assert form.error_message is None
    assert form.payload() == {"nombreItem": nombre, "precio": 5.0}


# -------------------------
# Sign-up
# -------------------------
def test_sign_up_requires_role_first():
    form = SignUpForm({
        "name": "Ana", "email": "ana@panel.pe", "password": "a", "confirm_password": "b", "role": "",
    })
    assert not form.is_valid()
    assert form.non_field_errors() == ["Por favor, selecciona un rol"]


def test_sign_up_passwords_must_match():
    form = SignUpForm({
        "name": "Ana", "email": "ana@panel.pe", "password": "Secreta1!", "confirm_password": "Secreta2!",
        "role": "editorAmbiente",
    })
    assert not form.is_valid()
    assert form.non_field_errors() == ["Las contraseñas no coinciden"]


@pytest.mark.parametrize("password,score,label", [
    ("abc", 0, "Muy débil"),
    ("abcdefgh", 1, "Débil"),
    ("Abcdefgh", 2, "Media"),
    ("Abcdefg1", 3, "Fuerte"),
    ("Abcdefg1!", 4, "Muy fuerte"),
])
def test_password_strength(password, score, label):
    assert password_strength(password) == score
    assert password_strength_label(password) == label


def test_empty_password_has_no_label():
    assert password_strength_label("") == ""
