from __future__ import annotations

import re
from typing import Any, Iterable

from flask import request

from .errors import ApiError

MIN_PASSWORD_LENGTH = 6

_CPF_RE = re.compile(r"[0-9]{11}")
_PHONE_RE = re.compile(r"[0-9]{10,11}")


def validate_cpf(cpf: Any) -> bool:
    return isinstance(cpf, str) and _CPF_RE.fullmatch(cpf) is not None


def validate_phone(phone: Any) -> bool:
    return isinstance(phone, str) and _PHONE_RE.fullmatch(phone) is not None


def missing_fields(data: dict[str, Any], fields: Iterable[str]) -> list[str]:
    missing = []
    for field in fields:
        value = data.get(field)
        if value is None or (isinstance(value, str) and not value.strip()):
            missing.append(field)
    return missing


def require_fields(data: dict[str, Any], fields: Iterable[str], message: str) -> None:
    if missing_fields(data, fields):
        raise ApiError(message, 400)


def check_password(senha: Any) -> None:
    if not isinstance(senha, str) or len(senha) < MIN_PASSWORD_LENGTH:
        raise ApiError(f"A senha deve ter pelo menos {MIN_PASSWORD_LENGTH} caracteres!", 400)


def json_body() -> dict[str, Any]:
    # silent=True so malformed JSON or a missing content-type yields None
    # instead of Flask's BadRequest page.
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ApiError("Corpo JSON inválido ou ausente", 400)
    return data
