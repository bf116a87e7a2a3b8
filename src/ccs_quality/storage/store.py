"""Record persistence: one JSON blob in Supabase plus a local cache file.

The remote copy lives in a single row of a PostgREST table (``id`` ->
``data``). Loads fall back to the local cache whenever the remote is
unconfigured, unreachable or answers with an error; saves always write
the cache first.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable

import requests

from ccs_quality.config import StorageConfig
from ccs_quality.models import DailyRecord, DataPoint

logger = logging.getLogger(__name__)

# Raised while building records from JSON that parses but has the wrong shape.
_PAYLOAD_ERRORS = (KeyError, TypeError, ValueError, AttributeError)


def record_to_dict(record: DailyRecord) -> dict[str, Any]:
    return {
        "day": record.day,
        "dateStr": record.date_str,
        "tonnage": record.tonnage,
        "dataPoints": [
            {"timeSlot": p.time_slot, "value": p.value} if p.time_slot is not None else {"value": p.value}
            for p in record.data_points
        ],
    }


def record_from_dict(data: dict[str, Any]) -> DailyRecord:
    return DailyRecord(
        day=int(data.get("day") or 0),
        date_str=str(data["dateStr"]),
        tonnage=float(data.get("tonnage") or 0.0),
        data_points=tuple(
            DataPoint(value=p.get("value"), time_slot=p.get("timeSlot"))
            for p in data.get("dataPoints") or []
        ),
    )


def records_to_json(records: Iterable[DailyRecord]) -> list[dict[str, Any]]:
    return [record_to_dict(r) for r in records]


def records_from_json(data: list[dict[str, Any]]) -> list[DailyRecord]:
    return [record_from_dict(d) for d in data]


@dataclass
class RecordStore:
    cache_path: Path
    base_url: str | None = None
    key: str | None = None
    table: str = "ccs_storage"
    record_id: str = "main_records"
    timeout_sec: float = 5.0

    @classmethod
    def from_config(cls, cfg: StorageConfig) -> "RecordStore":
        """Build a store; credentials come from SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY."""
        url = os.environ.get("SUPABASE_URL")
        key = os.environ.get("SUPABASE_SERVICE_ROLE_KEY") or os.environ.get("SUPABASE_ANON_KEY")
        return cls(
            cache_path=Path(cfg.cache_path),
            base_url=str(url).rstrip("/") if url else None,
            key=str(key).strip() if key else None,
            table=cfg.table,
            record_id=cfg.record_id,
            timeout_sec=cfg.timeout_sec,
        )

    @property
    def is_configured(self) -> bool:
        return bool(self.base_url and self.key)

    @property
    def _rest_url(self) -> str:
        return f"{self.base_url}/rest/v1/{self.table}"

    def _headers(self) -> dict[str, str]:
        return {
            "apikey": self.key or "",
            "Authorization": f"Bearer {self.key}",
            "Content-Type": "application/json",
        }

    def load_local_backup(self) -> list[DailyRecord]:
        if not self.cache_path.exists():
            return []
        try:
            data = json.loads(self.cache_path.read_text(encoding="utf-8"))
            return records_from_json(data) if isinstance(data, list) else []
        except OSError as e:
            logger.warning(f"Local cache {self.cache_path} unreadable: {e}")
        except _PAYLOAD_ERRORS as e:
            logger.warning(f"Local cache {self.cache_path} is malformed: {e!r}")
        return []

    def _write_local_backup(self, payload: list[dict[str, Any]]) -> None:
        self.cache_path.parent.mkdir(parents=True, exist_ok=True)
        self.cache_path.write_text(json.dumps(payload, ensure_ascii=False), encoding="utf-8")

    def load(self) -> list[DailyRecord]:
        """Return the remote snapshot, or the local cache if the remote is unavailable."""
        if not self.is_configured:
            logger.info("Remote storage not configured; using local cache")
            return self.load_local_backup()

        try:
            resp = requests.get(
                self._rest_url,
                headers=self._headers(),
                params={"select": "data", "id": f"eq.{self.record_id}"},
                timeout=self.timeout_sec,
            )
            if not resp.ok:
                if resp.status_code == 404:
                    logger.warning("Storage endpoint not found; running in local mode")
                else:
                    logger.error(f"Storage responded with {resp.status_code}; using local cache")
                return self.load_local_backup()
            rows = resp.json()
        except (requests.RequestException, ValueError) as e:
            logger.error(f"Storage load failed: {e}")
            return self.load_local_backup()

        payload = rows[0].get("data") if isinstance(rows, list) and rows and isinstance(rows[0], dict) else []
        if not isinstance(payload, list):
            return self.load_local_backup()

        try:
            records = records_from_json(payload)
        except _PAYLOAD_ERRORS as e:
            logger.error(f"Stored payload is malformed ({e!r}); using local cache")
            return self.load_local_backup()

        self._write_local_backup(payload)
        return records

    def save(self, records: Iterable[DailyRecord]) -> bool:
        """Write the cache, then upsert the remote row. Returns True on remote success."""
        payload = records_to_json(records)
        self._write_local_backup(payload)

        if not self.is_configured:
            return False

        try:
            resp = requests.post(
                self._rest_url,
                headers={**self._headers(), "Prefer": "resolution=merge-duplicates,return=minimal"},
                params={"on_conflict": "id"},
                data=json.dumps([{"id": self.record_id, "data": payload}], ensure_ascii=False),
                timeout=self.timeout_sec,
            )
        except requests.RequestException as e:
            logger.error(f"Storage save failed: {e}")
            return False
        return bool(resp.ok)
