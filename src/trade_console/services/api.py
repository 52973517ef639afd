"""Admin REST API client: session token, whole-collection fetches and CRUD calls."""

from __future__ import annotations

import json
import logging
import os
from typing import Any, Dict, List, Optional

import requests

from trade_console.config.constants import API_TIMEOUT, API_URL, TOKEN_FILE
from trade_console.models.core import Record
from trade_console.services.collections import as_record_list

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """A failed admin API call (HTTP error status or transport failure)."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class AuthenticationError(ApiError):
    """The session token was rejected (HTTP 401); the stored token has been cleared."""


# --- token persistence ---


def load_token(path: str = TOKEN_FILE) -> Optional[str]:
    """Load the saved access token. Returns None on missing or invalid file."""
    if not os.path.exists(path):
        return None
    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f).get("accessToken")
    except (OSError, ValueError, AttributeError):
        return None


def save_token(access_token: str, refresh_token: Optional[str] = None, path: str = TOKEN_FILE) -> None:
    """Save the token pair. Raises on I/O error (caller may show UI message)."""
    with open(path, "w", encoding="utf-8") as f:
        json.dump({"accessToken": access_token, "refreshToken": refresh_token}, f, indent=4)


def clear_token(path: str = TOKEN_FILE) -> None:
    """Delete the saved token. Ignores a missing file."""
    try:
        os.remove(path)
    except FileNotFoundError:
        pass


def _error_message(response: requests.Response, url: str) -> str:
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return f"HTTP {response.status_code} for {url}"


class AdminApiClient:
    """
    Thin wrapper over requests.Session for the admin endpoints.

    Args:
        base_url: API root; defaults to API_URL.
        token: Bearer token; defaults to the one saved in token_file.
        timeout: Per-request timeout in seconds.
        session: Optional pre-built session (tests pass a mock).
        token_file: Where login() saves and 401 clears the token.
    """

    def __init__(
        self,
        base_url: str = API_URL,
        token: Optional[str] = None,
        timeout: float = API_TIMEOUT,
        session: Optional[requests.Session] = None,
        token_file: str = TOKEN_FILE,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.token_file = token_file
        self.session = session or requests.Session()
        self.session.headers.update({"Content-Type": "application/json"})
        self.token = token if token is not None else load_token(token_file)

    def _url(self, endpoint: str) -> str:
        return f"{self.base_url}/{endpoint.lstrip('/')}"

    def request(self, method: str, endpoint: str, **kwargs: Any) -> Any:
        """
        Send one request and return the decoded JSON body (None for empty bodies).

        Raises:
            AuthenticationError: on 401; the saved token is cleared.
            ApiError: on any other error status or transport failure.
        """
        headers: Dict[str, str] = dict(kwargs.pop("headers", None) or {})
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        url = self._url(endpoint)
        try:
            response = self.session.request(method, url, headers=headers, timeout=self.timeout, **kwargs)
        except requests.RequestException as e:
            logger.warning("%s %s failed: %s", method, url, e)
            raise ApiError(f"Request failed: {e}") from e
        if response.status_code == 401:
            logger.warning("%s %s rejected with 401, clearing session", method, url)
            self.token = None
            clear_token(self.token_file)
            raise AuthenticationError(_error_message(response, url), status_code=401)
        if response.status_code >= 400:
            message = _error_message(response, url)
            logger.warning("%s %s -> %s: %s", method, url, response.status_code, message)
            raise ApiError(message, status_code=response.status_code)
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise ApiError(f"Invalid JSON from {url}", status_code=response.status_code) from e

    def fetch_collection(
        self,
        endpoint: str,
        params: Optional[Dict[str, Any]] = None,
        key: Optional[str] = None,
    ) -> List[Record]:
        """GET endpoint and return its records as a list (see as_record_list)."""
        payload = self.request("GET", endpoint, params=params)
        records = as_record_list(payload, key=key)
        logger.info("Fetched %d record(s) from %s", len(records), endpoint)
        return records

    def get(self, endpoint: str, params: Optional[Dict[str, Any]] = None) -> Any:
        return self.request("GET", endpoint, params=params)

    def create(self, endpoint: str, payload: Dict[str, Any]) -> Any:
        return self.request("POST", endpoint, json=payload)

    def update(self, endpoint: str, payload: Dict[str, Any]) -> Any:
        return self.request("PUT", endpoint, json=payload)

    def patch(self, endpoint: str, payload: Dict[str, Any]) -> Any:
        return self.request("PATCH", endpoint, json=payload)

    def delete(self, endpoint: str) -> Any:
        return self.request("DELETE", endpoint)

    def login(self, email: str, password: str) -> str:
        """Sign in, keep the access token for later calls and persist the pair."""
        body = self.request("POST", "/auth/signin", json={"email": email, "password": password})
        data = (body or {}).get("data") or {}
        access_token = data.get("accessToken")
        if not access_token:
            raise AuthenticationError("Sign-in response did not include an access token")
        self.token = access_token
        save_token(access_token, data.get("refreshToken"), self.token_file)
        logger.info("Signed in as %s", email)
        return access_token

    def logout(self) -> None:
        self.token = None
        clear_token(self.token_file)
