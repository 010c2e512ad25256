"""Compatibility shim that re-exports the backend app from clinic-backend/.

The backend package lives in clinic-backend/ so a deployment can target that
folder as its root; this file keeps `python app.py` working from the
repository root by delegating to the actual backend implementation.
"""

from __future__ import annotations

import sys
from pathlib import Path

BACKEND_DIR = Path(__file__).resolve().parent / "clinic-backend"
if str(BACKEND_DIR) not in sys.path:
    sys.path.insert(0, str(BACKEND_DIR))

from vetclinic.app import app, main  # noqa: E402

__all__ = ["app", "main"]


if __name__ == "__main__":
    main()
