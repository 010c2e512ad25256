"""Clinic staff accounts and the role-change rules that govern them."""

from __future__ import annotations

from typing import Any

from . import auth, records
from .errors import ApiError
from .validation import check_password, require_fields

VET_ROLE = "Medico vet"
JUNIOR_ROLE = "Vet junior"
INTERN_ROLE = "Estagiario"
RECEPTION_ROLE = "Recepção"
INPATIENT_ROLE = "Internação"

ROLES = (VET_ROLE, JUNIOR_ROLE, INTERN_ROLE, RECEPTION_ROLE, INPATIENT_ROLE)

# Roles allowed to hold a CRMV registration.
VET_ROLES = (JUNIOR_ROLE, VET_ROLE)

# current role -> (roles it may move to, message when it may not).
# An empty tuple locks the role entirely.
ROLE_TRANSITIONS: dict[str, tuple[tuple[str, ...], str]] = {
    VET_ROLE: ((), "Usuário Veterinário não pode ser alterado."),
    RECEPTION_ROLE: ((), "Funcionários de Recepção ou Internação não podem alterar o cargo."),
    INPATIENT_ROLE: ((), "Funcionários de Recepção ou Internação não podem alterar o cargo."),
    INTERN_ROLE: ((JUNIOR_ROLE,), "Estagiário só pode mudar para Vet junior."),
    JUNIOR_ROLE: ((VET_ROLE,), "Vet junior só pode mudar para Medico vet."),
}

STAFF_FIELDS = ("nome", "login", "contato", "senha", "role")

STAFF_NOT_FOUND = "Funcionário não encontrado"


def safe_member(member: dict[str, Any]) -> dict[str, Any]:
    return {key: value for key, value in member.items() if key != "senha"}


def check_role_change(current: str | None, target: str) -> None:
    """Raise ``ApiError`` (403) when ``current`` may not become ``target``."""

    if target == current:
        return
    if target not in ROLES:
        raise ApiError("Cargo inválido!", 400)
    rule = ROLE_TRANSITIONS.get(current or "")
    if rule is None:
        # Legacy members without a known role may be assigned any role.
        return
    allowed, message = rule
    if target not in allowed:
        raise ApiError(message, 403)


def register_staff(body: dict[str, Any]) -> dict[str, Any]:
    require_fields(body, STAFF_FIELDS, "Campos obrigatórios ausentes")
    role = body["role"]
    if role not in ROLES:
        raise ApiError("Cargo inválido!", 400)
    check_password(body["senha"])
    crmv = body.get("crmv") or None
    if role == INTERN_ROLE and crmv:
        raise ApiError("Estagiário não pode ter CRMV.", 400)

    login = body["login"]
    with records.mutate(records.STAFF) as members:
        if auth.login_taken(login):
            raise ApiError("Login já cadastrado", 409)
        member = {
            "id": records.new_record_id(members),
            "nome": body["nome"],
            "login": login,
            "contato": body["contato"],
            "senha": auth.hash_password(body["senha"]),
            "role": role,
            "crmv": crmv,
            "dataCadastro": records.iso_now(),
        }
        members.append(member)

    print(f"[staff] registered id={member['id']} login={login} role={role}")
    return {"success": True, "message": "Funcionário cadastrado com sucesso", "funcionario": safe_member(member)}


def list_staff() -> dict[str, Any]:
    members = [
        {field: member.get(field) for field in auth.STAFF_PUBLIC_FIELDS}
        for member in records.read_records(records.STAFF)
    ]
    return {"success": True, "funcionarios": members}


def update_staff(member_id: Any, body: dict[str, Any]) -> dict[str, Any]:
    changes = {key: value for key, value in body.items() if key not in ("id", "dataCadastro")}

    with records.mutate(records.STAFF) as members:
        index = records.find_index(members, "id", member_id)
        if index < 0:
            raise ApiError(STAFF_NOT_FOUND, 404)
        current = members[index]
        current_role = current.get("role")

        if "role" in changes:
            check_role_change(current_role, changes["role"])

        if current_role == INTERN_ROLE and changes.get("role", current_role) not in VET_ROLES:
            changes.pop("crmv", None)

        if "login" in changes and changes["login"] != current.get("login"):
            if not changes["login"] or auth.login_taken(changes["login"]):
                raise ApiError("Login já cadastrado", 409)

        if "senha" in changes:
            check_password(changes["senha"])
            changes["senha"] = auth.hash_password(changes["senha"])

        current.update(changes)
        updated = safe_member(current)

    if updated.get("role") != current_role:
        print(f"[staff] role changed id={member_id} from={current_role} to={updated.get('role')}")
    return {"success": True, "message": "Funcionário atualizado com sucesso", "funcionario": updated}


def delete_staff(member_id: Any) -> dict[str, Any]:
    with records.mutate(records.STAFF) as members:
        index = records.find_index(members, "id", member_id)
        if index < 0:
            raise ApiError(STAFF_NOT_FOUND, 404)
        if members[index].get("role") == VET_ROLE:
            raise ApiError("Não é permitido excluir usuário Veterinário.", 403)
        del members[index]

    print(f"[staff] deleted id={member_id}")
    return {"success": True, "message": "Funcionário excluído com sucesso"}
