from __future__ import annotations

from typing import Any

import httpx

from .credentials import CredentialStore, MemoryCredentialStore


class ApiError(Exception):
    def __init__(self, status_code: int, detail: str, body: Any = None) -> None:
        self.status_code = status_code
        self.detail = detail
        self.body = body
        super().__init__(f"{status_code}: {detail}")


class RecipeShareClient:
    """
    Thin wrapper over the HTTP API.

    ``http`` may be any ``httpx.Client`` (FastAPI's ``TestClient`` included);
    it must already point at the API's base URL.
    """

    def __init__(self, http: httpx.Client, credentials: CredentialStore | None = None) -> None:
        self.http = http
        self.credentials = credentials if credentials is not None else MemoryCredentialStore()

    def _headers(self) -> dict[str, str]:
        token = self.credentials.get()
        return {"Authorization": f"Bearer {token}"} if token else {}

    def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        resp = self.http.request(method, path, headers=self._headers(), **kwargs)
        try:
            body = resp.json()
        except ValueError:
            body = None
        if resp.status_code >= 400:
            detail = body.get("detail", resp.text) if isinstance(body, dict) else resp.text
            if resp.status_code == 401:
                self.credentials.clear()
            raise ApiError(resp.status_code, str(detail), body)
        return body

    # ── Session ──────────────────────────────────────────────────────────

    def register(self, name: str, username: str, email: str, password: str, image: str | None = None) -> dict:
        data = self._request("POST", "/api/auth/register", json={
            "name": name, "username": username, "email": email, "password": password, "image": image,
        })
        self.credentials.set(data["token"])
        return data["user"]

    def login(self, email: str, password: str) -> dict:
        data = self._request("POST", "/api/auth/login", json={"email": email, "password": password})
        self.credentials.set(data["token"])
        return data["user"]

    def logout(self) -> None:
        self.credentials.clear()

    def me(self) -> dict:
        return self._request("GET", "/api/auth/me")

    # ── Recipes ──────────────────────────────────────────────────────────

    def list_recipes(self) -> list[dict]:
        return self._request("GET", "/api/recipes")

    def get_recipe(self, recipe_id: str) -> dict:
        return self._request("GET", f"/api/recipes/{recipe_id}")

    def create_recipe(self, recipe: dict[str, Any]) -> dict:
        return self._request("POST", "/api/recipes", json=recipe)

    def review(self, recipe_id: str, rating: int, comment: str | None = None) -> dict:
        return self._request("POST", f"/api/recipes/{recipe_id}/review", json={"rating": rating, "comment": comment})

    def delete_review(self, recipe_id: str) -> dict:
        return self._request("DELETE", f"/api/recipes/{recipe_id}/review")

    def save_recipe(self, recipe_id: str) -> list[str]:
        return self._request("POST", f"/api/recipes/{recipe_id}/save")["saved_recipes"]

    def saved_recipes(self) -> list[dict]:
        return self._request("GET", "/api/recipes/saved")

    # ── AI and complaints ────────────────────────────────────────────────

    def generate_recipe(self, ingredients: list[str]) -> dict:
        return self._request("POST", "/api/ai/recipe", json={"ingredients": ingredients})

    def file_complaint(self, content: str, reference_url: str = "") -> dict:
        return self._request("POST", "/api/complaints", json={"content": content, "reference_url": reference_url})
