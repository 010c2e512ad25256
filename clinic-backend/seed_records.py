"""Seed the JSON record collections with deterministic data for local testing.

Usage:
    cd clinic-backend
    python seed_records.py

Reads seed_data.json (an object mapping collection names to arrays of
records) and rewrites each listed collection under CLINIC_DATA_DIR.
Plain-text passwords in the seed file are hashed before they are stored.
"""

from __future__ import annotations

import json
from pathlib import Path

from dotenv import load_dotenv

from vetclinic import auth, config, records


def _prepare(item: dict) -> dict:
    record = dict(item)
    senha = record.get("senha")
    if isinstance(senha, str) and senha and not auth.is_hashed(senha):
        record["senha"] = auth.hash_password(senha)
    return record


def main() -> None:
    backend_dir = Path(__file__).resolve().parent
    load_dotenv(backend_dir / ".env", override=True)

    seed_file = backend_dir / "seed_data.json"
    if not seed_file.exists():
        raise SystemExit(f"Seed file not found: {seed_file}")

    payload = json.loads(seed_file.read_text(encoding="utf-8"))
    if not isinstance(payload, dict):
        raise SystemExit("seed_data.json must be a JSON object of collection -> records")

    written = 0
    for name, items in payload.items():
        if name not in records.COLLECTIONS or not isinstance(items, list):
            continue
        prepared = [_prepare(item) for item in items if isinstance(item, dict)]
        try:
            records.write_records(name, prepared)
        except records.StoreError as exc:
            raise SystemExit(f"Unable to write {name} into {config.data_dir()}") from exc
        written += len(prepared)

    print(json.dumps({"status": "ok", "written": written, "data_dir": str(config.data_dir())}))


if __name__ == "__main__":
    main()
