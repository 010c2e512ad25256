"""Flat JSON record collections.

Each collection is a JSON array stored in ``<data dir>/<name>.json``. Every
mutation reads the full snapshot, changes it in memory and rewrites the whole
file.
"""

from __future__ import annotations

import json
import os
import tempfile
import threading
import time
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Iterator

from . import config
from .errors import StoreError

TUTORS = "usuarios"
VETS = "medicos"
STAFF = "funcionarios"
PETS = "animais"

COLLECTIONS = (TUTORS, VETS, STAFF, PETS)

_lock = threading.RLock()


def collection_path(name: str) -> Path:
    return config.data_dir() / f"{name}.json"


def read_records(name: str) -> list[dict[str, Any]]:
    path = collection_path(name)
    try:
        raw = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return []
    except OSError as exc:
        print(f"[store] read failed collection={name} error={exc}")
        return []

    try:
        parsed = json.loads(raw)
    except json.JSONDecodeError as exc:
        print(f"[store] invalid JSON collection={name} error={exc}")
        return []

    if not isinstance(parsed, list):
        print(f"[store] expected a JSON array collection={name}")
        return []
    return [item for item in parsed if isinstance(item, dict)]


def write_records(name: str, records: list[dict[str, Any]]) -> None:
    path = collection_path(name)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix=f".{name}.", suffix=".tmp", dir=path.parent)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(records, fh, indent=2, ensure_ascii=False)
            os.replace(tmp_name, path)
        except BaseException:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise
    except OSError as exc:
        print(f"[store] write failed collection={name} error={exc}")
        raise StoreError(f"Unable to write collection {name}") from exc


@contextmanager
def mutate(name: str) -> Iterator[list[dict[str, Any]]]:
    """Yield the snapshot of ``name`` and rewrite it when the block succeeds."""

    with _lock:
        records = read_records(name)
        yield records
        write_records(name, records)


def find_index(records: list[dict[str, Any]], key: str, value: Any) -> int:
    wanted = str(value)
    for index, record in enumerate(records):
        if key in record and record[key] is not None and str(record[key]) == wanted:
            return index
    return -1


def find_record(records: list[dict[str, Any]], key: str, value: Any) -> dict[str, Any] | None:
    index = find_index(records, key, value)
    return records[index] if index >= 0 else None


def new_record_id(records: list[dict[str, Any]]) -> int:
    candidate = int(time.time() * 1000)
    existing = [record["id"] for record in records if isinstance(record.get("id"), int)]
    if existing and candidate <= max(existing):
        candidate = max(existing) + 1
    return candidate


def iso_now() -> str:
    now = datetime.now(timezone.utc)
    return now.strftime("%Y-%m-%dT%H:%M:%S.") + f"{now.microsecond // 1000:03d}Z"


def local_stamp() -> str:
    return datetime.now().strftime("%d/%m/%Y, %H:%M:%S")
