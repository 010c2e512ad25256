"""Self-service registration for tutors and veterinarians."""

from __future__ import annotations

from typing import Any

from . import auth, records
from .errors import ApiError
from .validation import check_password, require_fields, validate_cpf, validate_phone

TUTOR_FIELDS = ("nome", "cpf", "telefone", "endereco", "senha")
VET_FIELDS = ("nome", "login", "crmv", "contato", "senha")

REGISTERED = "Cadastro realizado com sucesso!"


def register_tutor(body: dict[str, Any]) -> dict[str, Any]:
    require_fields(body, TUTOR_FIELDS, "Todos os campos são obrigatórios!")
    cpf = body["cpf"]
    if not validate_cpf(cpf):
        raise ApiError("CPF inválido!", 400)
    if not validate_phone(body["telefone"]):
        raise ApiError("Telefone inválido!", 400)
    check_password(body["senha"])

    with records.mutate(records.TUTORS) as tutors:
        if records.find_index(tutors, "cpf", cpf) >= 0:
            raise ApiError("CPF já cadastrado!", 409)
        if auth.login_taken(cpf):
            raise ApiError("Login já cadastrado!", 409)
        # Tutors log in with their CPF.
        tutors.append(
            {
                "nome": body["nome"],
                "cpf": cpf,
                "telefone": body["telefone"],
                "endereco": body["endereco"],
                "login": cpf,
                "senha": auth.hash_password(body["senha"]),
                "dataCadastro": records.iso_now(),
            }
        )

    print(f"[api] tutor registered cpf={cpf}")
    return {"success": True, "message": REGISTERED}


def register_vet(body: dict[str, Any]) -> dict[str, Any]:
    require_fields(body, VET_FIELDS, "Todos os campos são obrigatórios!")
    check_password(body["senha"])
    if not validate_phone(body["contato"]):
        raise ApiError("Telefone inválido!", 400)

    login = body["login"]
    crmv = body["crmv"]
    with records.mutate(records.VETS) as vets:
        if records.find_index(vets, "login", login) >= 0 or auth.login_taken(login):
            raise ApiError("Login já cadastrado!", 409)
        if records.find_index(vets, "crmv", crmv) >= 0:
            raise ApiError("CRMV já cadastrado!", 409)
        vets.append(
            {
                "nome": body["nome"],
                "login": login,
                "crmv": crmv,
                "contato": body["contato"],
                "senha": auth.hash_password(body["senha"]),
                "dataCadastro": records.iso_now(),
            }
        )

    print(f"[api] veterinarian registered login={login}")
    return {"success": True, "message": REGISTERED}
