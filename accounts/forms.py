# accounts/forms.py
from django import forms

from accounts.roles import ALL_ROLES, ROLE_LABELS
from utils.validators import password_strength_label


class SignInForm(forms.Form):
    email = forms.EmailField(
        label="Correo electrónico",
        widget=forms.EmailInput(attrs={
            "placeholder": "nombre@ejemplo.com",
            "autocomplete": "email",
            "class": "form-control"
        })
    )
    password = forms.CharField(
        label="Contraseña",
        widget=forms.PasswordInput(attrs={
            "placeholder": "••••••••",
            "autocomplete": "current-password",
            "class": "form-control"
        })
    )


class SignUpForm(forms.Form):
    name = forms.CharField(
        label="Nombre completo",
        max_length=150,
        widget=forms.TextInput(attrs={"class": "form-control"})
    )
    email = forms.EmailField(
        label="Correo electrónico",
        widget=forms.EmailInput(attrs={
            "placeholder": "nombre@ejemplo.com",
            "autocomplete": "email",
            "class": "form-control"
        })
    )
    password = forms.CharField(
        label="Contraseña",
        widget=forms.PasswordInput(attrs={
            "placeholder": "Mínimo 8 caracteres",
            "autocomplete": "new-password",
            "class": "form-control"
        })
    )
    confirm_password = forms.CharField(
        label="Confirmar contraseña",
        widget=forms.PasswordInput(attrs={"autocomplete": "new-password", "class": "form-control"})
    )
    role = forms.ChoiceField(
        label="Rol",
        required=False,
        choices=[("", "Selecciona un rol")] + [(r, ROLE_LABELS[r]) for r in ALL_ROLES],
        widget=forms.Select(attrs={"class": "form-control"})
    )

    def clean(self):
        cleaned_data = super().clean()

        if not cleaned_data.get("role"):
            raise forms.ValidationError("Por favor, selecciona un rol")

        if cleaned_data.get("password") != cleaned_data.get("confirm_password"):
            raise forms.ValidationError("Las contraseñas no coinciden")

        return cleaned_data

    @property
    def strength_label(self):
        return password_strength_label(self.data.get("password", ""))
