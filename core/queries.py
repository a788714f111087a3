# core/queries.py
import logging

import pandas as pd
import requests

from accounts.models import User
from core.api_client import ApiError, call_api, request_or_raise
from core.core_models import CATALOGO, CONSUMO_AGUA, Resource
from core.helpers import coerce_collection, records_to_frame, split_valid_records

logger = logging.getLogger(__name__)

USERS_ENDPOINT = "/api/users"


# -------------------------
# Users / session
# -------------------------
def login(email: str, password: str):
    """
    Sign in against the backend.
    Returns (User, token). Raises ApiError with the server message on failure.
    """
    payload = request_or_raise(
        "POST", f"{USERS_ENDPOINT}/login",
        "Ocurrió un error durante el inicio de sesión",
        json={"email": email, "password": password},
    )
    user = User.from_api(payload)
    if user is None or not user.role:
        raise ApiError("No se pudo determinar el rol del usuario", payload=payload)

    token = payload.get("token") if isinstance(payload, dict) else None
    if not token:
        raise ApiError("No se pudo obtener la sesión del usuario", payload=payload)
    return user, token


def register_user(name: str, email: str, password: str, role: str):
    """Create an account. Raises ApiError with the server message on failure."""
    return request_or_raise(
        "POST", USERS_ENDPOINT,
        "Error al registrar usuario",
        json={"name": name, "email": email, "password": password, "role": role},
    )


def logout(token) -> bool:
    """End the backend session. Returns True when the backend accepted it."""
    try:
        ok, _, error = call_api("POST", f"{USERS_ENDPOINT}/logout", token=token)
    except requests.RequestException as e:
        ok, error = False, str(e)
    if not ok:
        logger.warning("Error al cerrar sesión: %s", error)
    return ok


def get_current_user(token) -> User:
    """
    Resolve the user behind a session token.
    Raises ApiError when the backend does not recognize the session.
    """
    payload = request_or_raise("GET", f"{USERS_ENDPOINT}/me", "Not authenticated", token=token)
    user = User.from_api(payload)
    if user is None:
        raise ApiError("Not authenticated", payload=payload)
    return user


# -------------------------
# Collections
# -------------------------
def load_records(resource: Resource, token):
    """
    Fetch a whole collection as a DataFrame.

    Returns (df, dropped) where `dropped` counts records left out because
    they were missing required fields.
    """
    payload = request_or_raise(
        "GET", resource.endpoint,
        resource.load_error,
        token=token,
    )
    valid, dropped = split_valid_records(resource, coerce_collection(payload))
    return records_to_frame(resource, valid), dropped


def get_consumos(token):
    return load_records(CONSUMO_AGUA, token)


def get_catalogo(token):
    return load_records(CATALOGO, token)


def find_record(resource: Resource, token, record_id):
    """Return one record (as a dict) from the collection, or None."""
    if not record_id:
        return None
    df, _ = load_records(resource, token)
    if df.empty:
        return None
    match = df[df["id"] == str(record_id)]
    if match.empty:
        return None
    row = match.iloc[0].to_dict()
    return {k: (None if _is_missing(v) else v) for k, v in row.items()}


def add_record(resource: Resource, token, body: dict):
    return request_or_raise(
        "POST", resource.endpoint, resource.default_error("agregar"),
        token=token, json=body,
    )


def update_record(resource: Resource, token, record_id, body: dict):
    if not record_id:
        raise ApiError(resource.invalid_id_error)
    return request_or_raise(
        "PUT", resource.detail_endpoint(record_id), resource.default_error("editar"),
        token=token, json=body,
    )


def delete_record(resource: Resource, token, record_id):
    if not record_id:
        raise ApiError(resource.invalid_id_error)
    return request_or_raise(
        "DELETE", resource.detail_endpoint(record_id), resource.default_error("eliminar"),
        token=token,
    )


def _is_missing(val) -> bool:
    if isinstance(val, (list, dict)):
        return False
    try:
        return bool(pd.isna(val))
    except (TypeError, ValueError):
        return False
