# This file implements the outbound client that retrieves the policy document.
# It exists so the aggregator can request one document without embedding request details.
# The client converts transport failures into one clear exception type and reports an empty payload as None.
# It performs a single GET per call with no retries and keeps one HTTP session per thread.

from __future__ import annotations

import logging
import threading
from typing import Any, Protocol

import requests

LOGGER = logging.getLogger("policy_cost")


class PolicySourceError(RuntimeError):
    """Raised when the policy source cannot be reached or responds with an error."""


class PolicySource(Protocol):
    def fetch_policy_document(self) -> dict[str, Any] | None: ...


class PolicySourceClient:
    def __init__(
        self,
        *,
        url: str,
        timeout_seconds: float = 10.0,
        session: requests.Session | None = None,
    ) -> None:
        self.url = url
        self.timeout_seconds = timeout_seconds
        self._shared_session = session
        self._local = threading.local()

    @property
    def session(self) -> requests.Session:
        """Injected session, else one per thread; `requests.Session` is not thread-safe."""

        if self._shared_session is not None:
            return self._shared_session
        session = getattr(self._local, "session", None)
        if session is None:
            session = requests.Session()
            self._local.session = session
        return session

    def fetch_policy_document(self) -> dict[str, Any] | None:
        """Return the decoded document, or None when the source supplied no data."""

        try:
            response = self.session.get(self.url, timeout=self.timeout_seconds)
        except requests.RequestException as exc:
            raise PolicySourceError(f"Policy request failed for {self.url}: {exc}") from exc

        if response.status_code >= 400:
            raise PolicySourceError(
                f"Policy request failed with status {response.status_code} for {self.url}"
            )

        if not response.content or not response.content.strip():
            LOGGER.warning("policy source returned an empty body url=%s", self.url)
            return None

        try:
            payload = response.json()
        except ValueError as exc:
            raise PolicySourceError(f"Policy source did not return valid JSON for {self.url}") from exc

        if payload is None:
            LOGGER.warning("policy source returned null url=%s", self.url)
            return None
        if not isinstance(payload, dict):
            raise PolicySourceError(f"Unexpected payload shape from {self.url}")
        return payload
