"""
UpstreamClient — HTTP access to the platform API that owns every entity.

requests.Session with:
  • urllib3 Retry on 5xx, limited to idempotent reads
  • configurable timeout
  • non-OK answers turned into UpstreamError carrying the server message

Writes are sent once; a failed mutation is reported, never replayed.
"""

import logging
from typing import Any
from urllib.parse import urljoin

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from ..exceptions import UpstreamError

logger = logging.getLogger(__name__)

FALLBACK_MESSAGE = "Erro ao processar a solicitação"
UNAVAILABLE_MESSAGE = "Não foi possível comunicar com o servidor"


class UpstreamClient:

    def __init__(
        self,
        *,
        base_url: str,
        timeout: float = 10.0,
        retries: int = 3,
        default_headers: dict[str, str] | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/") + "/"
        self.timeout = timeout

        self.session = requests.Session()
        self.session.headers.update({"Accept": "application/json"})
        if default_headers:
            self.session.headers.update(default_headers)

        retry_cfg = Retry(
            total=retries,
            backoff_factor=0.3,
            status_forcelist=[500, 502, 503, 504],
            allowed_methods=frozenset(["GET", "HEAD"]),
            raise_on_status=False,
        )
        adapter = HTTPAdapter(max_retries=retry_cfg)
        for scheme in ("https://", "http://"):
            self.session.mount(scheme, adapter)

    # ── public API ─────────────────────────────────────────────────────────

    def get(self, path: str, *, params: dict[str, Any] | None = None,
            headers: dict[str, str] | None = None) -> Any:
        return self._request("GET", path, params=params, headers=headers)

    def send(self, method: str, path: str, *, json: Any = None, data: dict | None = None,
             files: dict | None = None, headers: dict[str, str] | None = None) -> Any:
        """Single write request (POST / PUT / PATCH / DELETE)."""
        return self._request(method, path, json=json, data=data, files=files, headers=headers)

    # ── internals ──────────────────────────────────────────────────────────

    def _url(self, path: str) -> str:
        return urljoin(self.base_url, path.lstrip("/"))

    def _request(self, method: str, path: str, **kwargs) -> Any:
        url = self._url(path)
        params = kwargs.get("params")
        if params:
            kwargs["params"] = {k: v for k, v in params.items() if v not in (None, "")}
        logger.debug("[Upstream] %s %s params=%s", method, url, kwargs.get("params"))

        try:
            resp = self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.RequestException as exc:
            logger.error("[Upstream] %s %s failed: %s", method, url, exc)
            raise UpstreamError(
                message=UNAVAILABLE_MESSAGE,
                code="UPSTREAM_UNAVAILABLE",
                detail={"method": method, "path": path},
            ) from exc

        logger.debug("[Upstream] %s %s → %d", method, url, resp.status_code)
        if not resp.ok:
            raise self._error_from_response(method, path, resp)

        if resp.status_code == 204 or not resp.content:
            return None
        try:
            return resp.json()
        except ValueError as exc:
            raise UpstreamError(
                message=FALLBACK_MESSAGE,
                code="UPSTREAM_BAD_PAYLOAD",
                detail={"method": method, "path": path, "status": resp.status_code},
            ) from exc

    @staticmethod
    def server_message(resp: requests.Response) -> str | None:
        """The platform answers errors as {"message": ...} or {"error": ...}."""
        try:
            body = resp.json()
        except ValueError:
            return None
        if isinstance(body, dict):
            message = body.get("message") or body.get("error")
            if isinstance(message, str) and message.strip():
                return message.strip()
        return None

    def _error_from_response(self, method: str, path: str, resp: requests.Response) -> UpstreamError:
        message = self.server_message(resp) or FALLBACK_MESSAGE
        status = resp.status_code
        logger.warning("[Upstream] %s %s answered %d: %s", method, path, status, message)
        return UpstreamError(
            message=message,
            code="UPSTREAM_NOT_FOUND" if status == 404 else "UPSTREAM_ERROR",
            detail={"method": method, "path": path, "status": status},
            http_status=status if 400 <= status < 500 else 502,
        )
