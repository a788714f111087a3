# tests/conftest.py
import copy

import pytest

BACKEND_URL = "http://cms.test"

USERS = {
    "tok-admin": {"id": "u1", "name": "Ada Admin", "email": "admin@panel.pe", "role": "admin"},
    "tok-catalogo": {"id": "u2", "name": "Carla Catálogo", "email": "catalogo@panel.pe", "role": "editorCatalogo"},
    "tok-ambiente": {"id": "u3", "name": "Andrés Ambiente", "email": "ambiente@panel.pe", "role": "editorAmbiente"},
    "tok-sinrol": {"id": "u4", "name": "Sin Rol", "email": "sinrol@panel.pe", "role": None},
    "tok-visitante": {"id": "u5", "name": "Visitante", "email": "visita@panel.pe", "role": "visitante"},
}

TOKENS_BY_ROLE = {
    "admin": "tok-admin",
    "editorCatalogo": "tok-catalogo",
    "editorAmbiente": "tok-ambiente",
}

CONSUMOS = [
    {
        "id": "c1",
        "diaRegistro": "2024-03-01T00:00:00.000Z",
        "cantidad": 5,
        "observaciones": "Riego del jardín",
        "createdAt": "2024-03-01T15:30:00.000Z",
        "creadoPor": {"name": "Andrés Ambiente"},
    },
    {
        "id": "c2",
        "diaRegistro": "2024-03-02T00:00:00.000Z",
        "cantidad": 15,
        "observaciones": "Fuga en el baño",
        "createdAt": "2024-03-02T15:30:00.000Z",
    },
    {
        "id": "c3",
        "diaRegistro": "2024-03-03T00:00:00.000Z",
        "cantidad": 10,
        "observaciones": "Limpieza general",
        "createdAt": "2024-03-03T15:30:00.000Z",
    },
]

CATALOGO = [
    {"id": "i1", "nombreItem": "Papel reciclado", "precio": 12.5},
    {"id": "i2", "nombreItem": "Botella reutilizable", "precio": 3},
    {"id": "i3", "nombreItem": "Árbol nativo", "precio": 30},
]


class FakeResponse:
    def __init__(self, status_code=200, payload=None, text=""):
        self.status_code = status_code
        self._payload = payload
        self.text = text

    def json(self):
        if self._payload is None:
            raise ValueError("No JSON body")
        return self._payload


class FakeBackend:
    """
    In-process stand-in for the CMS, installed in place of requests.request.
    Every call is recorded; routes can be overridden per test.
    """

    def __init__(self):
        self.calls = []
        self.users = dict(USERS)
        self.routes = {
            ("GET", "/api/consumo-agua"): FakeResponse(200, {"docs": copy.deepcopy(CONSUMOS)}),
            ("GET", "/api/catalogo"): FakeResponse(200, copy.deepcopy(CATALOGO)),
        }

    def add(self, method, path, status=200, payload=None, exc=None):
        self.routes[(method, path)] = exc if exc is not None else FakeResponse(status, payload)

    def __call__(self, method, url, headers=None, cookies=None, timeout=None, json=None, **kwargs):
        path = url[len(BACKEND_URL):]
        self.calls.append({
            "method": method,
            "path": path,
            "json": json,
            "headers": headers or {},
            "cookies": cookies or {},
            "timeout": timeout,
        })

        route = self.routes.get((method, path))
        if isinstance(route, Exception):
            raise route
        if route is not None:
            return route

        if (method, path) == ("GET", "/api/users/me"):
            token = (headers or {}).get("Authorization", "").replace("Bearer ", "")
            user = self.users.get(token)
            if user is None:
                return FakeResponse(401, {"errors": [{"message": "You are not allowed to perform this action."}]})
            return FakeResponse(200, {"user": user})

        if method in ("POST", "PUT", "DELETE"):
            return FakeResponse(200, {"message": "ok", "doc": json or {}})
        return FakeResponse(404, {"message": "Not Found"})

    def requests_for(self, method, path=None):
        return [
            c for c in self.calls
            if c["method"] == method and (path is None or c["path"] == path)
        ]

    @property
    def writes(self):
        return [c for c in self.calls if c["method"] in ("POST", "PUT", "DELETE")]


@pytest.fixture
def backend(monkeypatch, settings):
    settings.PANEL_BACKEND_URL = BACKEND_URL
    fake = FakeBackend()
    monkeypatch.setattr("core.api_client.requests.request", fake)
    return fake


@pytest.fixture
def login_as(client, settings):
    """Put the session token of `role` in the test client's auth cookie."""
    def _login(role):
        token = TOKENS_BY_ROLE.get(role, role)
        client.cookies[settings.PANEL_AUTH_COOKIE] = token
        return client
    return _login


@pytest.fixture(autouse=True)
def plain_http(settings):
    # The hardening block turns this on when DEBUG is off in the environment
    settings.SECURE_SSL_REDIRECT = False
