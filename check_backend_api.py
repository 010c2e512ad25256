"""Simple helper script to validate a running backend locally.

Start the server (python app.py), optionally seed it, then run:

    set CLINIC_API_URL=http://localhost:3000
    set CLINIC_LOGIN=helena
    set CLINIC_PASSWORD=helena123
    python check_backend_api.py
"""

import json
import os

import requests

CLINIC_API_URL = os.getenv("CLINIC_API_URL", "http://localhost:3000").rstrip("/")
CLINIC_LOGIN = os.getenv("CLINIC_LOGIN")
CLINIC_PASSWORD = os.getenv("CLINIC_PASSWORD")


def _show(label, response):
    print(f"{label} Status Code:", response.status_code)
    try:
        print("Response:", json.dumps(response.json(), indent=2, ensure_ascii=False))
    except Exception as exc:
        print("Error parsing response:", exc)
        print("Raw Response:", response.text)


health = requests.get(f"{CLINIC_API_URL}/", timeout=10)
_show("Health", health)

if not CLINIC_LOGIN or not CLINIC_PASSWORD:
    raise SystemExit("Set CLINIC_LOGIN and CLINIC_PASSWORD to check authentication.")

login = requests.post(
    f"{CLINIC_API_URL}/api/login",
    headers={"Content-Type": "application/json"},
    json={"login": CLINIC_LOGIN, "senha": CLINIC_PASSWORD},
    timeout=10,
)
_show("Login", login)

token = (login.json() or {}).get("token") if login.ok else None
if token:
    me = requests.get(f"{CLINIC_API_URL}/api/me", headers={"Authorization": f"Bearer {token}"}, timeout=10)
    _show("Me", me)
