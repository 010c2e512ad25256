from __future__ import annotations

import pytest

from conftest import bearer
from vetclinic import records


def _stored_pet() -> dict:
    return records.read_records(records.PETS)[0]


def test_anamnesis_replaces_previous(client, vet_token, pet) -> None:
    url = f"/api/salvar-anamnese/{pet['id']}"
    client.put(url, json={"queixa": "vômito", "apetite": "baixo"}, headers=bearer(vet_token))
    response = client.put(url, json={"queixa": "tosse"}, headers=bearer(vet_token))

    assert response.get_json() == {"success": True, "message": "Anamnese salva com sucesso!"}
    anamnese = _stored_pet()["anamnese"]
    assert anamnese["queixa"] == "tosse"
    assert "apetite" not in anamnese
    assert anamnese["data"]


def test_clinical_history_creates_exams_section(client, vet_token, pet) -> None:
    client.put(
        f"/api/salvar-historico-clinico/{pet['id']}",
        json={"historicoClinico": "Cirurgia em 2024", "ignorado": True},
        headers=bearer(vet_token),
    )
    exams = _stored_pet()["exames"]
    assert exams["historicoClinico"] == "Cirurgia em 2024"
    assert "dataHistorico" in exams
    assert "ignorado" not in exams


def test_vaccination_and_exams_merge_into_exams(client, vet_token, pet) -> None:
    headers = bearer(vet_token)
    client.put(f"/api/salvar-historico-clinico/{pet['id']}", json={"historicoClinico": "ok"}, headers=headers)
    client.put(f"/api/salvar-vacinacao/{pet['id']}", json={"v10": "2026-03-01"}, headers=headers)
    client.put(f"/api/salvar-exames/{pet['id']}", json={"hemograma": "normal"}, headers=headers)

    exams = _stored_pet()["exames"]
    assert exams["historicoClinico"] == "ok"
    assert exams["v10"] == "2026-03-01"
    assert exams["hemograma"] == "normal"
    assert {"dataHistorico", "dataVacinacao", "dataExames"} <= set(exams)


def test_consultations_merge_and_mirror_lists(client, vet_token, pet) -> None:
    headers = bearer(vet_token)
    client.put(f"/api/salvar-consultas/{pet['id']}", json={"retorno": "30 dias"}, headers=headers)
    client.put(
        f"/api/salvar-consultas/{pet['id']}",
        json={"consultasPassadas": [{"data": "01/02/2026"}]},
        headers=headers,
    )

    stored = _stored_pet()
    assert stored["consultas"]["retorno"] == "30 dias"
    assert stored["consultas"]["consultasPassadas"] == [{"data": "01/02/2026"}]
    assert "dataAtualizacao" in stored["consultas"]
    assert stored["consultasPassadas"] == [{"data": "01/02/2026"}]
    assert stored["consultasFuturas"] == []


def test_observations(client, vet_token, pet) -> None:
    response = client.put(f"/api/salvar-observacoes/{pet['id']}", json={"observacoes": "Agitado"}, headers=bearer(vet_token))
    assert response.get_json()["message"] == "Observações salvas com sucesso!"
    stored = _stored_pet()
    assert stored["observacoes"] == "Agitado"
    assert stored["dataObservacoes"]


def test_unknown_pet(client, vet_token) -> None:
    response = client.put("/api/salvar-exames/42", json={"x": 1}, headers=bearer(vet_token))
    assert response.status_code == 404


@pytest.mark.parametrize(("role", "status"), [("Vet junior", 200), ("Medico vet", 200), ("Recepção", 403), ("Estagiario", 403)])
def test_clinical_staff_roles(client, make_staff, pet, role, status) -> None:
    _, token = make_staff(role, "membro")
    response = client.put(f"/api/salvar-anamnese/{pet['id']}", json={"queixa": "x"}, headers=bearer(token))
    assert response.status_code == status


def test_tutor_cannot_write_medical_records(client, tutor_token, pet) -> None:
    response = client.put(f"/api/salvar-exames/{pet['id']}", json={"x": 1}, headers=bearer(tutor_token))
    assert response.status_code == 403
    assert "exames" not in _stored_pet()
