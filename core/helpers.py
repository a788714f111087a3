# core/helpers.py
import logging
from dataclasses import dataclass
from urllib.parse import urlencode

import pandas as pd
from django.conf import settings

from core.core_models import CONSUMO_ALTO_M3, Resource
from utils.validators import collation_key, normalize_string, plain_number, safe_float

logger = logging.getLogger(__name__)

ASCENDING = "ascending"
DESCENDING = "descending"


# ---------------------------
# Collection coercion
# ---------------------------

def coerce_collection(data) -> list:
    """
    Normalize a list response into a list of records.
    Accepts a bare list, a `{"docs": [...]}` page, or a single object.
    """
    if isinstance(data, list):
        return data
    if isinstance(data, dict):
        docs = data.get("docs")
        if isinstance(docs, list):
            return docs
        return [data]
    return []


def split_valid_records(resource: Resource, records):
    """
    Keep only records carrying every required field with usable numbers.
    Returns (valid_records, dropped_count).
    """
    valid = []
    dropped = 0
    for record in records:
        if not isinstance(record, dict):
            logger.warning("%s: registro inválido descartado: %r", resource.name, record)
            dropped += 1
            continue
        if "id" not in record and "_id" in record:
            record = {**record, "id": record["_id"]}

        missing = [f for f in resource.required_fields if f not in record]
        bad_numbers = [f for f in resource.numeric_fields if f in record and safe_float(record[f]) is None]
        if missing or bad_numbers:
            logger.warning(
                "%s: registro inválido descartado (faltan=%s, no numéricos=%s): %r",
                resource.name, missing, bad_numbers, record,
            )
            dropped += 1
            continue
        valid.append(record)
    return valid, dropped


def records_to_frame(resource: Resource, records) -> pd.DataFrame:
    """Build the table DataFrame; numeric columns as floats, ids as strings."""
    columns = list(dict.fromkeys(["id", *resource.required_fields, *resource.date_fields]))
    df = pd.DataFrame(list(records))
    for col in columns:
        if col not in df.columns:
            df[col] = None
    if df.empty:
        return df

    df["id"] = df["id"].astype(str)
    for col in resource.numeric_fields:
        df[col] = df[col].apply(safe_float).astype("float64")
    return df


# ---------------------------
# Table state (search + sort)
# ---------------------------

@dataclass
class TableState:
    search: str
    sort_key: str
    direction: str

    def query_for(self, key: str) -> dict:
        """Query params after clicking the header of column `key`."""
        params = {"orden": key, "dir": next_direction(self.sort_key, self.direction, key)}
        if self.search:
            params["q"] = self.search
        return params


def next_direction(active_key, active_direction, key) -> str:
    """Clicking the active column flips ascending to descending; anything else sorts ascending."""
    if active_key == key and active_direction == ASCENDING:
        return DESCENDING
    return ASCENDING


def sort_headers(resource: Resource, state: TableState) -> list:
    """Column headers with the query string each header links to."""
    return [
        {
            "key": key,
            "label": resource.column_labels.get(key, key),
            "query": urlencode(state.query_for(key)),
            "active": key == state.sort_key,
            "direction": state.direction if key == state.sort_key else None,
        }
        for key in resource.sortable_fields
    ]


def table_state_from_request(resource: Resource, params) -> TableState:
    sort_key = params.get("orden") or resource.default_sort
    if sort_key not in resource.sortable_fields:
        sort_key = resource.default_sort
    direction = params.get("dir") or resource.default_direction
    if direction not in (ASCENDING, DESCENDING):
        direction = resource.default_direction
    return TableState(search=params.get("q", "") or "", sort_key=sort_key, direction=direction)


# ---------------------------
# Filtering
# ---------------------------

def _consumo_matches(df: pd.DataFrame, term: str) -> pd.Series:
    notes = df["observaciones"].apply(normalize_string)
    fechas = format_registro_dates(df["diaRegistro"])
    return notes.str.contains(normalize_string(term), regex=False) | fechas.str.contains(term, regex=False)


def _catalogo_matches(df: pd.DataFrame, term: str) -> pd.Series:
    names = df["nombreItem"].apply(normalize_string)
    prices = df["precio"].apply(plain_number)
    return names.str.contains(normalize_string(term), regex=False) | prices.str.contains(term, regex=False)


SEARCH_MATCHERS = {
    "consumo_agua": _consumo_matches,
    "catalogo": _catalogo_matches,
}


def filter_records(resource: Resource, df: pd.DataFrame, term: str) -> pd.DataFrame:
    if df.empty or not term:
        return df
    mask = SEARCH_MATCHERS[resource.name](df, term)
    return df[mask.fillna(False).astype(bool)]


# ---------------------------
# Sorting
# ---------------------------

def _sort_key_for(resource: Resource, key: str):
    if key in resource.numeric_fields:
        return lambda s: pd.to_numeric(s, errors="coerce")
    if key in resource.date_fields:
        return lambda s: parse_timestamps(s)
    return lambda s: s.map(collation_key)


def sort_records(resource: Resource, df: pd.DataFrame, key: str, direction: str) -> pd.DataFrame:
    """
    Stable sort on one column. Numbers compare numerically, dates by timestamp,
    everything else as accent/case-insensitive text. Missing values go last.
    """
    if df.empty or key not in df.columns:
        return df
    return df.sort_values(
        by=key,
        ascending=(direction != DESCENDING),
        kind="mergesort",
        na_position="last",
        key=_sort_key_for(resource, key),
    )


def build_table_view(resource: Resource, df: pd.DataFrame, state: TableState) -> pd.DataFrame:
    filtered = filter_records(resource, df, state.search)
    return sort_records(resource, filtered, state.sort_key, state.direction)


# ---------------------------
# Display helpers
# ---------------------------

def parse_timestamps(series: pd.Series) -> pd.Series:
    return pd.to_datetime(series, errors="coerce", utc=True, format="ISO8601")


def format_registro_dates(series: pd.Series) -> pd.Series:
    """dd/mm/yyyy of a calendar date; the UTC date part, never shifted by timezone."""
    return parse_timestamps(series).dt.strftime("%d/%m/%Y").fillna("")


def format_local_timestamps(series: pd.Series) -> pd.Series:
    """dd/mm/yyyy HH:MM in the panel's timezone."""
    ts = parse_timestamps(series)
    return ts.dt.tz_convert(settings.TIME_ZONE).dt.strftime("%d/%m/%Y %H:%M").fillna("")


def consumo_rows(df: pd.DataFrame) -> list:
    if df.empty:
        return []
    fechas = format_registro_dates(df["diaRegistro"])
    creados = format_local_timestamps(df["createdAt"])
    rows = []
    for idx, r in df.iterrows():
        creado_por = r.get("creadoPor")
        rows.append({
            "id": r["id"],
            "fecha": fechas.loc[idx] or "-",
            "cantidad": f"{r['cantidad']:.2f}",
            "consumo_alto": r["cantidad"] > CONSUMO_ALTO_M3,
            "observaciones": r.get("observaciones") or "-",
            "creado": creados.loc[idx] or "-",
            "creado_por": creado_por.get("name") if isinstance(creado_por, dict) else None,
        })
    return rows


def catalogo_stats(df: pd.DataFrame) -> dict:
    total = len(df)
    if total == 0:
        return {"total_items": 0, "precio_promedio": 0.0, "precio_minimo": 0.0, "precio_maximo": 0.0}
    return {
        "total_items": total,
        "precio_promedio": float(df["precio"].mean()),
        "precio_minimo": float(df["precio"].min()),
        "precio_maximo": float(df["precio"].max()),
    }


def catalogo_rows(df: pd.DataFrame, promedio: float) -> list:
    return [
        {
            "id": r["id"],
            "nombreItem": r["nombreItem"],
            "precio": f"S/. {r['precio']:.2f}",
            "sobre_promedio": r["precio"] > promedio,
        }
        for _, r in df.iterrows()
    ]


def consumo_total(df: pd.DataFrame) -> float:
    if df.empty:
        return 0.0
    return float(df["cantidad"].sum())
