"""HTTP client for SeaweedFS: assign file ids, upload, download and delete."""

from __future__ import annotations

from datetime import timedelta
from pathlib import Path

import requests

DEFAULT_HTTP_TIMEOUT = 30.0


class SeaweedFS:
    """Talks to a SeaweedFS master and its volume servers over HTTP."""

    def __init__(self, server_url: str, http_timeout: float | timedelta = 0) -> None:
        seconds = (
            http_timeout.total_seconds()
            if isinstance(http_timeout, timedelta)
            else float(http_timeout)
        )
        self.server_url = server_url
        self.http_timeout = seconds or DEFAULT_HTTP_TIMEOUT
        self._session = requests.Session()

    def get_assign(self, assign_url: str) -> bytes:
        """Request a file id assignment and return the raw response body."""
        response = self._session.get(assign_url)
        return response.content

    def put_object(self, put_url: str, file_path: str | Path) -> bytes:
        """Upload a file as the multipart field ``file``; return the response body."""
        path = Path(file_path)
        with path.open("rb") as handle:
            response = self._session.post(
                put_url,
                files={"file": (path.name, handle)},
                timeout=self.http_timeout,
            )
        return response.content

    def get_object(self, get_url: str) -> bytes:
        """Download an object and return its body."""
        response = self._session.get(get_url)
        return response.content

    def remove_object(self, remove_url: str) -> None:
        """Delete an object."""
        self._session.delete(remove_url, timeout=self.http_timeout)