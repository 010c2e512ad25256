"""Medical sub-records appended to a pet.

Each save stamps the change with the clinic's local date format and rewrites
the pets collection.
"""

from __future__ import annotations

from typing import Any

from .pets import edit_pet
from .records import local_stamp


def _section(pet: dict[str, Any], key: str) -> dict[str, Any]:
    value = pet.get(key)
    return dict(value) if isinstance(value, dict) else {}


def _saved(message: str) -> dict[str, Any]:
    return {"success": True, "message": message}


def save_anamnesis(pet_id: Any, body: dict[str, Any]) -> dict[str, Any]:
    with edit_pet(pet_id) as pet:
        pet["anamnese"] = {**body, "data": local_stamp()}
    return _saved("Anamnese salva com sucesso!")


def save_clinical_history(pet_id: Any, body: dict[str, Any]) -> dict[str, Any]:
    with edit_pet(pet_id) as pet:
        exams = _section(pet, "exames")
        exams["historicoClinico"] = body.get("historicoClinico")
        exams["dataHistorico"] = local_stamp()
        pet["exames"] = exams
    return _saved("Histórico clínico salvo com sucesso!")


def save_vaccination(pet_id: Any, body: dict[str, Any]) -> dict[str, Any]:
    with edit_pet(pet_id) as pet:
        pet["exames"] = {**_section(pet, "exames"), **body, "dataVacinacao": local_stamp()}
    return _saved("Vacinação salva com sucesso!")


def save_exams(pet_id: Any, body: dict[str, Any]) -> dict[str, Any]:
    with edit_pet(pet_id) as pet:
        pet["exames"] = {**_section(pet, "exames"), **body, "dataExames": local_stamp()}
    return _saved("Exames salvos com sucesso!")


def save_consultations(pet_id: Any, body: dict[str, Any]) -> dict[str, Any]:
    with edit_pet(pet_id) as pet:
        pet["consultas"] = {**_section(pet, "consultas"), **body, "dataAtualizacao": local_stamp()}
        # Past/upcoming lists are also read from the pet's top level.
        if "consultasPassadas" in body or "consultasFuturas" in body:
            pet["consultasPassadas"] = body.get("consultasPassadas") or []
            pet["consultasFuturas"] = body.get("consultasFuturas") or []
    return _saved("Consultas salvas com sucesso!")


def save_observations(pet_id: Any, body: dict[str, Any]) -> dict[str, Any]:
    with edit_pet(pet_id) as pet:
        pet["observacoes"] = body.get("observacoes")
        pet["dataObservacoes"] = local_stamp()
    return _saved("Observações salvas com sucesso!")
