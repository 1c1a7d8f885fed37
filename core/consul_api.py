from __future__ import annotations
import base64
import threading
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import requests

from core.config import Settings


class ConsulError(RuntimeError):
    """Consul answered with an HTTP error status."""

    def __init__(self, status: int, path: str, text: str) -> None:
        self.status = status
        self.path = path
        self.text = text
        detail = (text or "").strip()[:500] or "no response body"
        super().__init__(f"Consul API {status} on {path}: {detail}")


def _flag(enabled: Optional[bool]) -> Optional[str]:
    # Consul only checks that boolean query flags are present.
    return "" if enabled else None


def _segment(value: str) -> str:
    return quote(value, safe="")


def _with_headers(session: requests.Session) -> requests.Session:
    session.headers.update(
        {
            "Accept": "application/json",
            "User-Agent": "consul-mcp-gateway",
        }
    )
    return session


def _decode_value(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    return base64.b64decode(value).decode("utf-8", errors="replace")


class ConsulAPI:
    """Thin client over the Consul HTTP API (``/v1``).

    Every method accepts the common ``dc``/``token``/``consistent``/``stale``
    keywords; ``token`` falls back to the default token given at construction.
    """

    def __init__(
        self,
        host: str = "127.0.0.1",
        port: int = 8500,
        secure: bool = False,
        token: Optional[str] = None,
        timeout: float = 60,
        session: Optional[requests.Session] = None,
    ) -> None:
        scheme = "https" if secure else "http"
        self.base = f"{scheme}://{host}:{port}/v1"
        self.token = (token or "").strip() or None
        self.timeout = timeout
        self._shared = _with_headers(session) if session is not None else None
        self._local = threading.local()

    @property
    def session(self) -> requests.Session:
        """The calling thread's session.

        Tool calls run on worker threads, so each thread gets its own
        ``requests.Session``. A session passed to the constructor is used as-is
        from every thread.
        """
        if self._shared is not None:
            return self._shared
        s = getattr(self._local, "session", None)
        if s is None:
            s = self._local.session = _with_headers(requests.Session())
        return s

    @classmethod
    def from_settings(cls, settings: Settings) -> "ConsulAPI":
        return cls(
            host=settings.consul_host,
            port=settings.consul_port,
            secure=settings.consul_secure,
            token=settings.consul_token,
            timeout=settings.consul_timeout,
        )

    def _req(
        self,
        method: str,
        path: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        token: Optional[str] = None,
        data: Optional[bytes] = None,
        allow_404: bool = False,
    ) -> Optional[requests.Response]:
        headers = {}
        tok = token or self.token
        if tok:
            headers["X-Consul-Token"] = tok
        query = {k: v for k, v in (params or {}).items() if v is not None}

        r = self.session.request(
            method,
            f"{self.base}{path}",
            params=query,
            headers=headers,
            data=data,
            timeout=self.timeout,
        )
        if r.status_code == 404 and allow_404:
            return None
        if r.status_code >= 400:
            raise ConsulError(r.status_code, path, r.text)
        return r

    def _get(self, path: str, *, token: Optional[str] = None, **params: Any) -> Any:
        return self._req("GET", path, params=params, token=token).json()

    @staticmethod
    def _read_params(
        dc: Optional[str] = None,
        consistent: Optional[bool] = None,
        stale: Optional[bool] = None,
    ) -> Dict[str, Any]:
        return {"dc": dc, "consistent": _flag(consistent), "stale": _flag(stale)}

    # -----------------------------
    # Key/value store
    # -----------------------------
    def kv_get(
        self,
        key: str,
        *,
        recurse: Optional[bool] = None,
        raw: Optional[bool] = None,
        buffer: Optional[bool] = None,
        dc: Optional[str] = None,
        token: Optional[str] = None,
        consistent: Optional[bool] = None,
        stale: Optional[bool] = None,
    ) -> Any:
        """Fetch a key. Returns ``None`` when the key does not exist.

        ``raw`` returns the stored value as text, ``recurse`` returns every
        entry under the prefix, and ``buffer`` leaves values base64 encoded.
        """
        params = self._read_params(dc, consistent, stale)
        params.update(recurse=_flag(recurse), raw=_flag(raw))
        r = self._req("GET", f"/kv/{quote(key, safe='/')}", params=params, token=token, allow_404=True)
        if r is None:
            return None
        if raw:
            return r.text

        entries: List[Dict[str, Any]] = r.json() or []
        if not buffer:
            for entry in entries:
                entry["Value"] = _decode_value(entry.get("Value"))
        if recurse:
            return entries
        return entries[0] if entries else None

    def kv_keys(
        self,
        key: str,
        *,
        separator: Optional[str] = None,
        dc: Optional[str] = None,
        token: Optional[str] = None,
        consistent: Optional[bool] = None,
        stale: Optional[bool] = None,
    ) -> List[str]:
        params = self._read_params(dc, consistent, stale)
        params.update(keys="", separator=separator)
        r = self._req("GET", f"/kv/{quote(key, safe='/')}", params=params, token=token, allow_404=True)
        if r is None:
            return []
        return r.json() or []

    def kv_set(
        self,
        key: str,
        value: str,
        *,
        flags: Optional[int] = None,
        cas: Optional[int] = None,
        acquire: Optional[str] = None,
        release: Optional[str] = None,
        dc: Optional[str] = None,
        token: Optional[str] = None,
    ) -> bool:
        params = {
            "dc": dc,
            "flags": flags,
            "cas": cas,
            "acquire": acquire,
            "release": release,
        }
        r = self._req(
            "PUT",
            f"/kv/{quote(key, safe='/')}",
            params=params,
            token=token,
            data=value.encode("utf-8"),
        )
        return bool(r.json())

    # -----------------------------
    # Status
    # -----------------------------
    def status_leader(self) -> str:
        return self._get("/status/leader")

    def status_peers(self) -> List[str]:
        return self._get("/status/peers")

    # -----------------------------
    # Agent
    # -----------------------------
    def agent_members(
        self,
        *,
        wan: Optional[bool] = None,
        dc: Optional[str] = None,
        token: Optional[str] = None,
        consistent: Optional[bool] = None,
        stale: Optional[bool] = None,
    ) -> List[Dict[str, Any]]:
        params = self._read_params(dc, consistent, stale)
        return self._get("/agent/members", token=token, wan=_flag(wan), **params)

    def agent_self(self) -> Dict[str, Any]:
        return self._get("/agent/self")

    # -----------------------------
    # Catalog
    # -----------------------------
    def catalog_datacenters(self) -> List[str]:
        return self._get("/catalog/datacenters")

    def catalog_nodes(self, *, token: Optional[str] = None, **options: Any) -> List[Dict[str, Any]]:
        return self._get("/catalog/nodes", token=token, **self._read_params(**options))

    def catalog_node_services(
        self, node: str, *, token: Optional[str] = None, **options: Any
    ) -> Optional[Dict[str, Any]]:
        return self._get(f"/catalog/node/{_segment(node)}", token=token, **self._read_params(**options))

    def catalog_services(self, *, token: Optional[str] = None, **options: Any) -> Dict[str, List[str]]:
        return self._get("/catalog/services", token=token, **self._read_params(**options))

    def catalog_service_nodes(
        self,
        service: str,
        *,
        tag: Optional[str] = None,
        token: Optional[str] = None,
        **options: Any,
    ) -> List[Dict[str, Any]]:
        return self._get(
            f"/catalog/service/{_segment(service)}",
            token=token,
            tag=tag,
            **self._read_params(**options),
        )

    # -----------------------------
    # Health
    # -----------------------------
    def health_node(self, name: str, *, token: Optional[str] = None, **options: Any) -> List[Dict[str, Any]]:
        return self._get(f"/health/node/{_segment(name)}", token=token, **self._read_params(**options))

    def health_checks(self, service: str, *, token: Optional[str] = None, **options: Any) -> List[Dict[str, Any]]:
        return self._get(f"/health/checks/{_segment(service)}", token=token, **self._read_params(**options))

    def health_service(
        self,
        service: str,
        *,
        tag: Optional[str] = None,
        passing: Optional[bool] = None,
        token: Optional[str] = None,
        **options: Any,
    ) -> List[Dict[str, Any]]:
        return self._get(
            f"/health/service/{_segment(service)}",
            token=token,
            tag=tag,
            passing=_flag(passing),
            **self._read_params(**options),
        )

    def health_state(self, state: str, *, token: Optional[str] = None, **options: Any) -> List[Dict[str, Any]]:
        return self._get(f"/health/state/{_segment(state)}", token=token, **self._read_params(**options))
