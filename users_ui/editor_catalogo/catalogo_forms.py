# users_ui/editor_catalogo/catalogo_forms.py
from django import forms

from utils.validators import safe_float


class CatalogoItemForm(forms.Form):
    nombreItem = forms.CharField(
        label="Nombre del Item",
        required=False,
        widget=forms.TextInput(attrs={"placeholder": "Ej: Papel reciclado", "class": "form-control"})
    )
    precio = forms.CharField(
        label="Precio (S/.)",
        required=False,
        widget=forms.NumberInput(attrs={"step": "0.01", "min": "0", "class": "form-control"})
    )

    def clean(self):
        cleaned_data = super().clean()

        nombre = (cleaned_data.get("nombreItem") or "").strip()
        if not nombre:
            raise forms.ValidationError("El nombre del item es requerido")

        precio = safe_float(cleaned_data.get("precio")) or 0
        if precio <= 0:
            raise forms.ValidationError("El precio debe ser mayor que 0")

        cleaned_data["nombreItem"] = nombre
        cleaned_data["precio"] = precio
        return cleaned_data

    @property
    def error_message(self):
        errors = self.non_field_errors()
        return errors[0] if errors else None

    def payload(self) -> dict:
        return {"nombreItem": self.cleaned_data["nombreItem"], "precio": self.cleaned_data["precio"]}

    @staticmethod
    def initial_for(record=None) -> dict:
        if record is None:
            return {"nombreItem": "", "precio": 0}
        return {"nombreItem": record.get("nombreItem") or "", "precio": record.get("precio")}
