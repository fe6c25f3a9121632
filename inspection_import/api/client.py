from __future__ import annotations

import logging
import time
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any

import requests

from ..models.inspection_record import InspectionRecord

"""Persistence API client (json-server compatible REST endpoints).

Bulk submission goes through ``POST /inspections/batch`` as a single request
so thousands of rows cost one round trip; the endpoint stores the whole array
or nothing. Every transport problem, non-2xx status or inconsistent
acknowledgement is raised as PersistenceError so the caller can report the
import as failed.
"""

__all__ = [
    "BatchMetrics",
    "BatchResponse",
    "GlobalSettings",
    "InspectionApiClient",
    "PersistenceError",
]

logger = logging.getLogger(__name__)


class PersistenceError(Exception):
    pass


@dataclass(frozen=True)
class BatchMetrics:
    """Timing of one bulk submission."""
    batch_size: int
    elapsed_seconds: float
    start_time: float  # time.time()
    end_time: float


@dataclass(frozen=True)
class BatchResponse:
    success: bool
    count: int


@dataclass(frozen=True)
class GlobalSettings:
    """``/settings/global`` resource."""
    popup_enabled: bool = True
    id: str = "global"

    def to_payload(self) -> dict[str, Any]:
        return {"id": self.id, "popupEnabled": self.popup_enabled}

    @staticmethod
    def from_payload(data: dict[str, Any]) -> GlobalSettings:
        return GlobalSettings(
            popup_enabled=bool(data.get("popupEnabled", True)),
            id=str(data.get("id", "global")),
        )


class InspectionApiClient:
    """Thin requests-based client for the inspection persistence API."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        session: requests.Session | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.headers = {"Content-Type": "application/json"}

    def _request(self, method: str, path: str, payload: Any = None) -> Any:
        url = f"{self.base_url}{path}"
        try:
            response = self.session.request(
                method,
                url,
                json=payload,
                headers=self.headers,
                timeout=self.timeout,
            )
            response.raise_for_status()
        except requests.RequestException as e:
            raise PersistenceError(f"{method} {url} failed: {e}") from e
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise PersistenceError(f"{method} {url} returned non-JSON body") from e

    # -- inspections ---------------------------------------------------------

    def bulk_insert(
        self,
        records: Sequence[InspectionRecord],
        metrics_callback: Callable[[BatchMetrics], None] | None = None,
    ) -> BatchResponse:
        """Submit all records in one ``POST /inspections/batch`` call.

        metrics_callback: Optional callback receiving BatchMetrics for the
            request. Not invoked when ``records`` is empty (no request is made).
        """
        if not records:
            return BatchResponse(success=True, count=0)

        payload = [r.to_payload() for r in records]
        start_time = time.time()
        try:
            body = self._request("POST", "/inspections/batch", payload)
        finally:
            end_time = time.time()
            if metrics_callback is not None:
                metrics_callback(
                    BatchMetrics(
                        batch_size=len(payload),
                        elapsed_seconds=end_time - start_time,
                        start_time=start_time,
                        end_time=end_time,
                    )
                )

        if not isinstance(body, dict):
            raise PersistenceError(f"unexpected batch response: {body!r}")
        try:
            result = BatchResponse(success=bool(body.get("success")), count=int(body.get("count", -1)))
        except (TypeError, ValueError) as e:
            raise PersistenceError(f"unexpected batch response: {body!r}") from e
        if not result.success:
            raise PersistenceError(f"batch rejected by server: {body!r}")
        if result.count != len(payload):
            raise PersistenceError(
                f"batch acknowledged {result.count} records, submitted {len(payload)}"
            )
        logger.debug("batch insert ok count=%d elapsed=%.3fs", result.count, end_time - start_time)
        return result

    def create(self, record: InspectionRecord) -> dict[str, Any]:
        return self._request("POST", "/inspections", record.to_payload())

    def list_inspections(self) -> list[dict[str, Any]]:
        body = self._request("GET", "/inspections")
        if not isinstance(body, list):
            raise PersistenceError(f"unexpected inspections listing: {type(body).__name__}")
        return body

    def update(self, record: InspectionRecord) -> dict[str, Any]:
        return self._request("PUT", f"/inspections/{record.id}", record.to_payload())

    def delete(self, record_id: str) -> None:
        self._request("DELETE", f"/inspections/{record_id}")

    def delete_all(self) -> None:
        self._request("DELETE", "/inspections")

    # -- settings ------------------------------------------------------------

    def get_settings(self) -> GlobalSettings:
        return GlobalSettings.from_payload(self._request("GET", "/settings/global") or {})

    def update_settings(self, settings: GlobalSettings) -> GlobalSettings:
        body = self._request("PUT", "/settings/global", settings.to_payload())
        return GlobalSettings.from_payload(body or settings.to_payload())

    def close(self) -> None:
        self.session.close()

    def __enter__(self) -> InspectionApiClient:
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()
