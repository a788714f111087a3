# core/core_models.py
from dataclasses import dataclass, field
from typing import Tuple

# Records are never stored locally. Each Resource describes one backend
# collection: where it lives, which fields a usable record must carry and
# how its columns compare when sorted.


@dataclass(frozen=True)
class Resource:
    name: str
    endpoint: str
    required_fields: Tuple[str, ...]
    numeric_fields: Tuple[str, ...] = ()
    date_fields: Tuple[str, ...] = ()
    sortable_fields: Tuple[str, ...] = ()
    default_sort: str = "id"
    default_direction: str = "ascending"
    column_labels: dict = field(default_factory=dict)
    # Singular noun used in default error messages ("el registro", "el item")
    noun: str = "registro"
    load_error: str = "Error al cargar los datos"

    def detail_endpoint(self, record_id) -> str:
        return f"{self.endpoint}/{record_id}"

    def default_error(self, action: str) -> str:
        return f"Error al {action} el {self.noun}"

    @property
    def invalid_id_error(self) -> str:
        return f"ID del {self.noun} no válido"


# -------------------------
# Consumo de agua
# -------------------------
CONSUMO_AGUA = Resource(
    name="consumo_agua",
    endpoint="/api/consumo-agua",
    required_fields=("id", "diaRegistro", "cantidad", "observaciones"),
    numeric_fields=("cantidad",),
    date_fields=("diaRegistro", "createdAt", "updatedAt"),
    sortable_fields=("diaRegistro", "cantidad", "observaciones", "createdAt"),
    default_sort="diaRegistro",
    default_direction="descending",
    column_labels={
        "diaRegistro": "Fecha de Registro",
        "cantidad": "Consumo (m³)",
        "observaciones": "Observaciones",
        "createdAt": "Fecha de Creación",
        "creadoPor": "Creado por",
    },
    noun="registro",
    load_error="Error al cargar los datos de consumo de agua",
)

# Quantities above this are highlighted in the table
CONSUMO_ALTO_M3 = 10


# -------------------------
# Catálogo
# -------------------------
CATALOGO = Resource(
    name="catalogo",
    endpoint="/api/catalogo",
    required_fields=("id", "nombreItem", "precio"),
    numeric_fields=("precio",),
    sortable_fields=("nombreItem", "precio"),
    default_sort="nombreItem",
    default_direction="ascending",
    column_labels={
        "nombreItem": "Nombre del Item",
        "precio": "Precio",
    },
    noun="item",
    load_error="Error al cargar los datos del catálogo",
)
