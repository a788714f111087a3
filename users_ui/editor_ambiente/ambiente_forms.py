# users_ui/editor_ambiente/ambiente_forms.py
from datetime import date

from django import forms

from utils.validators import safe_date, safe_float


class ConsumoAguaForm(forms.Form):
    """
    Dialog for adding or editing a water consumption record.
    Only the first failing rule is reported, in field order.
    """
    diaRegistro = forms.CharField(
        label="Día de Registro",
        required=False,
        widget=forms.DateInput(attrs={"type": "date", "class": "form-control"})
    )
    cantidad = forms.CharField(
        label="Cantidad (m³)",
        required=False,
        widget=forms.NumberInput(attrs={"step": "0.01", "min": "0", "class": "form-control"})
    )
    observaciones = forms.CharField(
        label="Observaciones",
        required=False,
        strip=False,
        widget=forms.Textarea(attrs={"rows": 3, "class": "form-control"})
    )

    def clean(self):
        cleaned_data = super().clean()

        dia = safe_date(cleaned_data.get("diaRegistro"))
        if dia is None:
            raise forms.ValidationError("El día de registro es requerido")

        # Non-numeric input counts as 0
        cantidad = safe_float(cleaned_data.get("cantidad")) or 0
        if cantidad <= 0:
            raise forms.ValidationError("La cantidad debe ser mayor que 0")

        if not (cleaned_data.get("observaciones") or "").strip():
            raise forms.ValidationError("Las observaciones son requeridas")

        cleaned_data["diaRegistro"] = dia.isoformat()
        cleaned_data["cantidad"] = cantidad
        return cleaned_data

    @property
    def error_message(self):
        errors = self.non_field_errors()
        return errors[0] if errors else None

    def payload(self) -> dict:
        data = self.cleaned_data
        return {
            "diaRegistro": data["diaRegistro"],
            "cantidad": data["cantidad"],
            "observaciones": data["observaciones"],
        }

    @staticmethod
    def initial_for(record=None) -> dict:
        """Seed values: today's date for a new record, the stored values when editing."""
        if record is None:
            return {"diaRegistro": date.today().isoformat(), "cantidad": 0, "observaciones": ""}
        dia = safe_date(record.get("diaRegistro"))
        return {
            "diaRegistro": dia.isoformat() if dia else "",
            "cantidad": record.get("cantidad"),
            "observaciones": record.get("observaciones") or "",
        }
