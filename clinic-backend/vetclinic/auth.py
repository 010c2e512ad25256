"""Login, password storage and bearer-token access control."""

from __future__ import annotations

import hmac
import time
from functools import wraps
from typing import Any, Callable

import jwt
from flask import g, request
from werkzeug.security import check_password_hash, generate_password_hash

from . import config, records
from .errors import ApiError

TOKEN_ALGORITHM = "HS256"

VET = "medico"
TUTOR = "tutor"
STAFF = "funcionario"

# Search order matters: a login present in several collections resolves to
# the first one whose password matches.
LOGIN_SOURCES = (
    (VET, records.VETS),
    (TUTOR, records.TUTORS),
    (STAFF, records.STAFF),
)

STAFF_PUBLIC_FIELDS = ("id", "nome", "login", "contato", "role", "crmv")

_HASH_PREFIXES = ("scrypt:", "pbkdf2:")


def hash_password(senha: str) -> str:
    return generate_password_hash(senha)


def is_hashed(stored: Any) -> bool:
    return isinstance(stored, str) and stored.startswith(_HASH_PREFIXES)


def verify_password(stored: Any, senha: str) -> bool:
    if not isinstance(stored, str) or not stored:
        return False
    if is_hashed(stored):
        return check_password_hash(stored, senha)
    # Records created before hashing was introduced keep the raw password.
    return hmac.compare_digest(stored.encode("utf-8"), senha.encode("utf-8"))


def public_user(tipo: str, record: dict[str, Any]) -> dict[str, Any]:
    if tipo == STAFF:
        user = {field: record.get(field) for field in STAFF_PUBLIC_FIELDS}
    else:
        user = {key: value for key, value in record.items() if key != "senha"}
    user["tipo"] = tipo
    return user


def login_taken(login: str) -> bool:
    """True when ``login`` already exists in any account collection."""

    return any(records.find_index(records.read_records(name), "login", login) >= 0 for _, name in LOGIN_SOURCES)


def _upgrade_legacy_password(collection: str, login: str, senha: str) -> None:
    with records.mutate(collection) as snapshot:
        index = records.find_index(snapshot, "login", login)
        if index >= 0 and not is_hashed(snapshot[index].get("senha")):
            snapshot[index]["senha"] = hash_password(senha)
    print(f"[auth] upgraded stored password collection={collection} login={login}")


def authenticate(login: str, senha: str) -> dict[str, Any] | None:
    for tipo, collection in LOGIN_SOURCES:
        record = records.find_record(records.read_records(collection), "login", login)
        if record is None or not verify_password(record.get("senha"), senha):
            continue
        if not is_hashed(record.get("senha")):
            _upgrade_legacy_password(collection, login, senha)
        return public_user(tipo, record)
    return None


def issue_token(user: dict[str, Any]) -> str:
    now = int(time.time())
    claims: dict[str, Any] = {
        "sub": str(user["login"]),
        "tipo": user["tipo"],
        "iat": now,
        "exp": now + config.token_ttl_s(),
    }
    if user["tipo"] == STAFF:
        claims["role"] = user.get("role")
    if user["tipo"] == TUTOR:
        claims["cpf"] = user.get("cpf")
    return jwt.encode(claims, config.secret_key(), algorithm=TOKEN_ALGORITHM)


def decode_token(token: str) -> dict[str, Any] | None:
    try:
        return jwt.decode(token, config.secret_key(), algorithms=[TOKEN_ALGORITHM])
    except jwt.InvalidTokenError:
        return None


def _bearer_token() -> str | None:
    header = request.headers.get("Authorization", "")
    if header.startswith("Bearer "):
        return header[7:].strip() or None
    return None


def current_claims() -> dict[str, Any]:
    token = _bearer_token()
    claims = decode_token(token) if token else None
    if not claims or claims.get("tipo") not in (VET, TUTOR, STAFF):
        raise ApiError("Autenticação necessária", 401)

    if claims["tipo"] == STAFF:
        # Roles change over time; trust the stored record, not the token.
        member = records.find_record(records.read_records(records.STAFF), "login", claims["sub"])
        if member is None:
            raise ApiError("Autenticação necessária", 401)
        claims["role"] = member.get("role")
    return claims


def require_roles(*kinds: str, staff_roles: tuple[str, ...] | None = None) -> Callable:
    """Restrict a view to the given account kinds (and staff roles)."""

    def decorator(view: Callable) -> Callable:
        @wraps(view)
        def wrapped(*args, **kwargs):
            claims = current_claims()
            if claims["tipo"] not in kinds:
                raise ApiError("Acesso negado", 403)
            if staff_roles is not None and claims["tipo"] == STAFF and claims.get("role") not in staff_roles:
                raise ApiError("Acesso negado", 403)
            g.user = claims
            return view(*args, **kwargs)

        return wrapped

    return decorator


def login(body: dict[str, Any]) -> dict[str, Any]:
    login_value = body.get("login")
    senha = body.get("senha")
    if not isinstance(login_value, str) or not login_value or not isinstance(senha, str) or not senha:
        raise ApiError("Login e senha são obrigatórios!", 400)

    user = authenticate(login_value, senha)
    if user is None:
        print(f"[auth] login rejected login={login_value}")
        raise ApiError("Usuário ou senha incorretos!", 401)

    print(f"[auth] login ok login={login_value} tipo={user['tipo']}")
    return {"success": True, "user": user, "token": issue_token(user)}
