"""HTTP client for the hosted backend's REST and auth gateways."""

from __future__ import annotations

from typing import Any
from urllib.parse import urljoin

import requests
import structlog
from flask import current_app

log = structlog.get_logger(__name__)


class RemoteError(Exception):
    """A call to the hosted backend was rejected or never completed."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


def _error_message(resp: requests.Response) -> str:
    """Pull a readable message out of a REST or auth gateway error body."""
    fallback = resp.reason or f"HTTP {resp.status_code}"
    try:
        body = resp.json()
    except ValueError:
        return fallback
    if isinstance(body, dict):
        for key in ("message", "msg", "error_description", "error"):
            value = body.get(key)
            if isinstance(value, str) and value:
                return value
    return fallback


def _eq_filters(filters: dict[str, Any] | None) -> dict[str, str]:
    return {column: f"eq.{value}" for column, value in (filters or {}).items()}


class RemoteStore:
    """Client for the hosted Postgres REST gateway and its auth gateway.

    Rows go in and come out as plain dicts; parsing them into models is the
    caller's job. Every failure, whether transport or HTTP status, is raised
    as :class:`RemoteError`.
    """

    def __init__(self, app=None, base_url=None, api_key=None, timeout=10.0):
        """Initialize the client.

        Args:
            app (Flask, optional): Application to read settings from.
            base_url (str, optional): Backend project URL.
            api_key (str, optional): Public (anon) API key sent on every call.
            timeout (float, optional): Per-request timeout in seconds.
        """
        self.base_url = base_url
        self.api_key = api_key or ""
        self.timeout = timeout
        self._http = requests.Session()
        if app is not None:
            self.init_app(app)

    def init_app(self, app) -> None:
        base_url = app.config.get("SUPABASE_URL") or self.base_url or "http://localhost:54321"
        if not base_url.startswith(("http://", "https://")):
            base_url = f"https://{base_url}"
        self.base_url = base_url.rstrip("/") + "/"
        self.api_key = app.config.get("SUPABASE_ANON_KEY") or self.api_key
        self.timeout = float(app.config.get("REMOTE_TIMEOUT_SECONDS", self.timeout))
        app.extensions["remote_store"] = self

    def _get_headers(self, token=None, headers=None):
        """Default headers: API key plus the caller's bearer token (or the anon key)."""
        default_headers = {
            "apikey": self.api_key,
            "Authorization": f"Bearer {token or self.api_key}",
            "Accept": "application/json",
        }
        if headers:
            default_headers.update(headers)
        return default_headers

    def _build_url(self, path):
        return urljoin(self.base_url, path.lstrip("/"))

    def _request(self, method, path, *, token=None, params=None, json=None, headers=None) -> Any:
        """Send one request and decode the JSON body.

        Returns:
            The decoded body, or None for empty responses.

        Raises:
            RemoteError: On transport failure, non-2xx status or invalid JSON.
        """
        url = self._build_url(path)
        try:
            resp = self._http.request(
                method,
                url,
                params=params,
                json=json,
                headers=self._get_headers(token, headers),
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            log.warning("remote_request_failed", method=method, path=path, error=str(e))
            raise RemoteError(f"request failed: {e}") from e

        if resp.status_code >= 400:
            message = _error_message(resp)
            log.warning(
                "remote_request_rejected",
                method=method,
                path=path,
                status=resp.status_code,
                message=message,
            )
            raise RemoteError(message, status_code=resp.status_code)

        if resp.status_code == 204 or not resp.content:
            return None
        try:
            return resp.json()
        except ValueError as e:
            raise RemoteError("invalid JSON in response", status_code=resp.status_code) from e

    # REST gateway
    def select(
        self,
        table: str,
        *,
        columns: str = "*",
        order: str | None = None,
        ascending: bool = True,
        limit: int | None = None,
        filters: dict[str, Any] | None = None,
        token: str | None = None,
    ) -> list[dict]:
        params: dict[str, str] = {"select": columns}
        if order:
            params["order"] = f"{order}.{'asc' if ascending else 'desc'}"
        if limit is not None:
            params["limit"] = str(limit)
        params.update(_eq_filters(filters))
        data = self._request("GET", f"rest/v1/{table}", token=token, params=params)
        if not isinstance(data, list):
            raise RemoteError(f"unexpected response for {table} select")
        return data

    def insert(self, table: str, rows: list[dict], *, token: str | None = None) -> list[dict]:
        data = self._request(
            "POST",
            f"rest/v1/{table}",
            token=token,
            json=rows,
            headers={"Prefer": "return=representation"},
        )
        return data or []

    def update(self, table: str, values: dict, *, match: dict[str, Any], token: str | None = None) -> list[dict]:
        # An unfiltered PATCH would touch every row in the table
        if not match:
            raise ValueError("update requires at least one filter")
        data = self._request(
            "PATCH",
            f"rest/v1/{table}",
            token=token,
            params=_eq_filters(match),
            json=values,
            headers={"Prefer": "return=representation"},
        )
        return data or []

    def delete(self, table: str, *, match: dict[str, Any], token: str | None = None) -> list[dict]:
        if not match:
            raise ValueError("delete requires at least one filter")
        data = self._request(
            "DELETE",
            f"rest/v1/{table}",
            token=token,
            params=_eq_filters(match),
            headers={"Prefer": "return=representation"},
        )
        return data or []

    # Auth gateway
    def sign_in_with_password(self, email: str, password: str) -> dict:
        return self._request(
            "POST",
            "auth/v1/token",
            params={"grant_type": "password"},
            json={"email": email, "password": password},
        )

    def refresh_session(self, refresh_token: str) -> dict:
        return self._request(
            "POST",
            "auth/v1/token",
            params={"grant_type": "refresh_token"},
            json={"refresh_token": refresh_token},
        )

    def get_user(self, access_token: str) -> dict:
        return self._request("GET", "auth/v1/user", token=access_token)

    def sign_out(self, access_token: str) -> None:
        self._request("POST", "auth/v1/logout", token=access_token)

    def health(self) -> dict:
        return self._request("GET", "auth/v1/health") or {}


def current_store() -> RemoteStore:
    """The store bound to the active application."""
    return current_app.extensions["remote_store"]
