"""Pet registration, lookup and general field updates."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Iterator

from . import auth, records
from .errors import ApiError
from .validation import require_fields, validate_cpf

DEFAULT_TAG = "green"

# Fields the server owns on creation; client values are replaced.
_SERVER_FIELDS = ("id", "tag", "anamnese", "observacoes", "dataCadastro")
_IMMUTABLE_FIELDS = ("id", "dataCadastro")

PET_NOT_FOUND = "Pet não encontrado"


@contextmanager
def edit_pet(pet_id: Any) -> Iterator[dict[str, Any]]:
    """Yield the stored pet ``pet_id`` for in-place changes, then persist."""

    with records.mutate(records.PETS) as pets:
        index = records.find_index(pets, "id", pet_id)
        if index < 0:
            raise ApiError(PET_NOT_FOUND, 404)
        yield pets[index]


def create_pet(body: dict[str, Any], user: dict[str, Any]) -> dict[str, Any]:
    require_fields(body, ("nome",), "O nome do pet é obrigatório!")

    fields = {key: value for key, value in body.items() if key not in _SERVER_FIELDS}
    if user["tipo"] == auth.TUTOR:
        fields["tutorCpf"] = user.get("cpf")
    elif not validate_cpf(fields.get("tutorCpf")):
        raise ApiError("CPF do tutor inválido!", 400)

    with records.mutate(records.PETS) as pets:
        pet = {
            "id": records.new_record_id(pets),
            **fields,
            "tag": DEFAULT_TAG,
            "anamnese": None,
            "observacoes": "",
            "dataCadastro": records.iso_now(),
        }
        pets.append(pet)

    print(f"[api] pet registered id={pet['id']} tutorCpf={pet.get('tutorCpf')}")
    return {"success": True, "pet": pet}


def pets_for_tutor(cpf: str, user: dict[str, Any]) -> dict[str, Any]:
    if user["tipo"] == auth.TUTOR and user.get("cpf") != cpf:
        raise ApiError("Acesso negado", 403)
    pets = [pet for pet in records.read_records(records.PETS) if pet.get("tutorCpf") == cpf]
    return {"success": True, "pets": pets}


def all_pets() -> dict[str, Any]:
    return {"success": True, "pets": records.read_records(records.PETS)}


def update_pet(pet_id: Any, body: dict[str, Any]) -> dict[str, Any]:
    changes = {key: value for key, value in body.items() if key not in _IMMUTABLE_FIELDS}
    with edit_pet(pet_id) as pet:
        pet.update(changes)
        updated = dict(pet)
    return {"success": True, "message": "Pet atualizado com sucesso!", "pet": updated}


def change_tag(pet_id: Any, body: dict[str, Any]) -> dict[str, Any]:
    tag = body.get("tag")
    if not isinstance(tag, str) or not tag.strip():
        raise ApiError("Tag inválida!", 400)
    with edit_pet(pet_id) as pet:
        pet["tag"] = tag
    return {"success": True, "message": "Tag alterada com sucesso!"}
