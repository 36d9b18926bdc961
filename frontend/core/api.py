"""
HTTP client for the supply management REST backend.

One `requests.Session` per client carries the base URL, the JSON content type
and the interception points:

- request hooks: callables that take and return a `requests.PreparedRequest`
  (e.g. auth header injection). Empty by default.
- response hooks: the session's own `response` hook list. The default hook logs
  failed responses and hands them back unchanged.

Services get a client passed in; nothing here is a module-level singleton.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Optional

import requests
from pydantic import ValidationError

from frontend.core.config import Settings

logger = logging.getLogger(__name__)

RequestHook = Callable[[requests.PreparedRequest], requests.PreparedRequest]


class ApiError(RuntimeError):
    def __init__(self, method: str, path: str, status_code: int, detail: str = ""):
        self.method = method
        self.path = path
        self.status_code = status_code
        self.detail = detail
        super().__init__(f"{method} {path} failed ({status_code}): {detail}")


# What callers catch around a service call: server rejections and transport failures.
CLIENT_ERRORS = (ApiError, requests.RequestException)
# Adds a 2xx body that does not parse into the expected model.
RESPONSE_ERRORS = CLIENT_ERRORS + (ValidationError,)


def bearer_token_hook(token: str) -> RequestHook:
    def _inject(prepared: requests.PreparedRequest) -> requests.PreparedRequest:
        prepared.headers["Authorization"] = f"Bearer {token}"
        return prepared

    return _inject


def log_error_response(response: requests.Response, *args, **kwargs) -> requests.Response:
    if response.status_code >= 400:
        logger.error(
            "API Error: %s %s -> %s %s",
            response.request.method if response.request else "?",
            response.url,
            response.status_code,
            response.text[:500],
        )
    return response


class ApiClient:
    def __init__(
        self,
        base_url: str,
        headers: Optional[Dict[str, str]] = None,
        timeout: float = 30,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update(
            {
                "Content-Type": "application/json",
                "Accept": "application/json",
            }
        )
        if headers:
            self.session.headers.update(headers)

        self.request_hooks: List[RequestHook] = []
        self.session.hooks["response"].append(log_error_response)

    def url(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    def request(self, method: str, path: str, **kwargs: Any) -> requests.Response:
        req = requests.Request(method, self.url(path), **kwargs)
        prepared = self.session.prepare_request(req)
        for hook in self.request_hooks:
            prepared = hook(prepared)

        send_kwargs = self.session.merge_environment_settings(prepared.url, {}, None, None, None)
        try:
            resp = self.session.send(prepared, timeout=self.timeout, **send_kwargs)
        except requests.RequestException:
            logger.exception("Request failed: %s %s", method, prepared.url)
            raise

        if resp.status_code >= 400:
            raise ApiError(method, path, resp.status_code, resp.text)
        return resp

    def request_json(self, method: str, path: str, **kwargs: Any) -> Any:
        resp = self.request(method, path, **kwargs)
        if resp.status_code == 204 or not resp.content:
            return None
        return resp.json()

    def get(self, path: str, **kwargs: Any) -> Any:
        return self.request_json("GET", path, **kwargs)

    def post(self, path: str, **kwargs: Any) -> Any:
        return self.request_json("POST", path, **kwargs)

    def put(self, path: str, **kwargs: Any) -> Any:
        return self.request_json("PUT", path, **kwargs)

    def delete(self, path: str, **kwargs: Any) -> Any:
        return self.request_json("DELETE", path, **kwargs)

    def close(self) -> None:
        self.session.close()


def build_api_client(settings: Settings, session: Optional[requests.Session] = None) -> ApiClient:
    client = ApiClient(settings.api_base_url, timeout=settings.api_timeout, session=session)
    if settings.api_token:
        client.request_hooks.append(bearer_token_hook(settings.api_token))
    return client
