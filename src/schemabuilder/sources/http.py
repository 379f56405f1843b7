from __future__ import annotations

from pathlib import Path
from typing import Any
from urllib.parse import urlparse

import httpx

DEFAULT_TIMEOUT_S = 10.0
ACCEPT = "application/schema+json, application/json"


class HttpSource:
    """JSON Schema document served over HTTP(S)."""

    kind = "http"

    def __init__(
        self,
        project_dir: Path | None = None,
        *,
        url: str,
        headers: dict[str, str] | None = None,
        timeout_s: float = DEFAULT_TIMEOUT_S,
    ):
        self.url = url
        self.headers = {"Accept": ACCEPT, **(headers or {})}
        self.timeout_s = timeout_s

    def fetch(self) -> Any:
        response = httpx.get(
            self.url,
            headers=self.headers,
            timeout=self.timeout_s,
            follow_redirects=True,
        )
        response.raise_for_status()
        return response.json()

    def describe(self) -> str:
        parsed = urlparse(self.url)
        host = parsed.hostname or ""
        if parsed.port:
            host = f"{host}:{parsed.port}"
        return f"{host}{parsed.path}"
