from __future__ import annotations

from typing import Any, Optional

import httpx

from .cache import EntityCache

DEFAULT_BASE_URL = "http://localhost:3001/api"


class ApiError(Exception):
    """Non-2xx answer from the API, carrying the server's `error` message."""

    def __init__(self, status_code: int, message: str):
        self.status_code = status_code
        self.message = message
        super().__init__(f"{status_code}: {message}")


class EscalaClient:
    """HTTP client for the Escala de Plantões API.

    Reads are served from per-entity caches; every mutation is sent to the
    server and then the affected collection is reloaded, so the server stays
    the source of truth.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        *,
        transport: Optional[httpx.BaseTransport] = None,
        timeout: float = 10.0,
    ):
        self._http = httpx.Client(base_url=base_url, transport=transport, timeout=timeout)
        self.users = EntityCache()
        self.plantoes = EntityCache()

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> "EscalaClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def _request(self, method: str, path: str, *, json: Any = None) -> Any:
        response = self._http.request(method, path, json=json)
        if response.is_error:
            try:
                message = response.json().get("error") or "Erro na requisição"
            except ValueError:
                message = "Erro na requisição"
            raise ApiError(response.status_code, message)
        return response.json()

    # -- users -------------------------------------------------------------

    def refresh_users(self) -> list[dict]:
        self.users.replace_all(self._request("GET", "/users"))
        return self.users.values()

    def get_users(self) -> list[dict]:
        if not self.users.loaded:
            return self.refresh_users()
        return self.users.values()

    def get_user_by_id(self, user_id: str) -> dict:
        cached = self.users.get(user_id)
        if cached is not None:
            return cached
        user = self._request("GET", f"/users/{user_id}")
        self.users.put(user)
        return user

    def get_users_by_role(self, role: str) -> list[dict]:
        self.get_users()
        return self.users.filter(lambda u: u["role"] == role)

    def get_gestores(self) -> list[dict]:
        return self.get_users_by_role("gestor")

    def get_corretores(self) -> list[dict]:
        return self.get_users_by_role("corretor")

    def get_corretores_by_gestor(self, gestor_id: str) -> list[dict]:
        self.get_users()
        return self.users.filter(lambda u: u["role"] == "corretor" and u.get("gestorId") == gestor_id)

    def register(self, name: str, email: str, password: str) -> dict:
        user = self._request("POST", "/users/register", json={"name": name, "email": email, "password": password})
        self.users.invalidate()
        return user

    def login(self, email: str, password: str) -> dict:
        return self._request("POST", "/users/login", json={"email": email, "password": password})

    def logout(self) -> None:
        self._request("POST", "/users/logout")

    def add_user(self, user: dict) -> dict:
        created = self._request("POST", "/users", json=user)
        self.refresh_users()
        return created

    def update_user(self, user_id: str, updates: dict) -> dict:
        updated = self._request("PUT", f"/users/{user_id}", json=updates)
        self.refresh_users()
        return updated

    def delete_user(self, user_id: str) -> None:
        self._request("DELETE", f"/users/{user_id}")
        self.refresh_users()

    # -- plantões ----------------------------------------------------------

    def refresh_plantoes(self) -> list[dict]:
        self.plantoes.replace_all(self._request("GET", "/plantoes"))
        return self.plantoes.values()

    def get_plantoes(self) -> list[dict]:
        if not self.plantoes.loaded:
            return self.refresh_plantoes()
        return self.plantoes.values()

    def get_plantao_by_id(self, plantao_id: str) -> dict:
        cached = self.plantoes.get(plantao_id)
        if cached is not None:
            return cached
        plantao = self._request("GET", f"/plantoes/{plantao_id}")
        self.plantoes.put(plantao)
        return plantao

    def get_plantoes_by_gestor(self, gestor_id: str) -> list[dict]:
        self.get_plantoes()
        return self.plantoes.filter(lambda p: p.get("gestorId") == gestor_id)

    def get_plantoes_by_corretor(self, corretor_id: str) -> list[dict]:
        self.get_plantoes()
        return self.plantoes.filter(lambda p: p.get("corretorId") == corretor_id)

    def add_plantao(self, plantao: dict) -> dict:
        created = self._request("POST", "/plantoes", json=plantao)
        self.refresh_plantoes()
        return created

    def update_plantao(self, plantao_id: str, updates: dict) -> dict:
        updated = self._request("PUT", f"/plantoes/{plantao_id}", json=updates)
        self.refresh_plantoes()
        return updated

    def delete_plantao(self, plantao_id: str) -> None:
        self._request("DELETE", f"/plantoes/{plantao_id}")
        self.refresh_plantoes()
