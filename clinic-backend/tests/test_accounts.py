from __future__ import annotations

import pytest

from conftest import TUTOR, VET
from vetclinic import records


def test_register_tutor_stores_hashed_password(client) -> None:
    response = client.post("/api/cadastrar-tutor", json=TUTOR)
    assert response.status_code == 201
    assert response.get_json() == {"success": True, "message": "Cadastro realizado com sucesso!"}

    stored = records.read_records(records.TUTORS)
    assert len(stored) == 1
    assert stored[0]["login"] == TUTOR["cpf"]
    assert stored[0]["senha"] != TUTOR["senha"]
    assert stored[0]["dataCadastro"].endswith("Z")


@pytest.mark.parametrize(
    ("override", "message"),
    [
        ({"endereco": ""}, "Todos os campos são obrigatórios!"),
        ({"cpf": "123.456.789-01"}, "CPF inválido!"),
        ({"telefone": "123"}, "Telefone inválido!"),
        ({"senha": "12345"}, "A senha deve ter pelo menos 6 caracteres!"),
    ],
)
def test_register_tutor_validation(client, override, message) -> None:
    response = client.post("/api/cadastrar-tutor", json={**TUTOR, **override})
    assert response.status_code == 400
    assert response.get_json() == {"success": False, "message": message}
    assert records.read_records(records.TUTORS) == []


def test_register_tutor_rejects_duplicate_cpf(client) -> None:
    client.post("/api/cadastrar-tutor", json=TUTOR)
    response = client.post("/api/cadastrar-tutor", json={**TUTOR, "nome": "Outro"})
    assert response.status_code == 409
    assert response.get_json()["message"] == "CPF já cadastrado!"
    assert len(records.read_records(records.TUTORS)) == 1


def test_register_vet(client) -> None:
    response = client.post("/api/cadastrar-vet", json=VET)
    assert response.status_code == 201

    stored = records.read_records(records.VETS)[0]
    assert {key: stored[key] for key in ("nome", "login", "crmv", "contato")} == {
        key: VET[key] for key in ("nome", "login", "crmv", "contato")
    }


def test_register_vet_rejects_duplicate_login_and_crmv(client) -> None:
    client.post("/api/cadastrar-vet", json=VET)

    same_login = client.post("/api/cadastrar-vet", json={**VET, "crmv": "SP-99999"})
    assert same_login.status_code == 409
    assert same_login.get_json()["message"] == "Login já cadastrado!"

    same_crmv = client.post("/api/cadastrar-vet", json={**VET, "login": "outra"})
    assert same_crmv.status_code == 409
    assert same_crmv.get_json()["message"] == "CRMV já cadastrado!"


def test_register_vet_rejects_login_used_by_staff(client, data_dir) -> None:
    records.write_records(records.STAFF, [{"id": 1, "login": VET["login"], "role": "Recepção"}])
    response = client.post("/api/cadastrar-vet", json=VET)
    assert response.status_code == 409


def test_register_vet_validates_contact_and_password(client) -> None:
    assert client.post("/api/cadastrar-vet", json={**VET, "contato": "abc"}).get_json()["message"] == "Telefone inválido!"
    assert client.post("/api/cadastrar-vet", json={**VET, "senha": "curta"}).status_code == 400
    assert client.post("/api/cadastrar-vet", json={**VET, "crmv": None}).status_code == 400


def test_register_tutor_rejects_cpf_used_as_staff_login(client, data_dir) -> None:
    records.write_records(records.STAFF, [{"id": 1, "login": TUTOR["cpf"], "role": "Recepção"}])
    response = client.post("/api/cadastrar-tutor", json=TUTOR)
    assert response.status_code == 409
    assert response.get_json()["message"] == "Login já cadastrado!"
    assert records.read_records(records.TUTORS) == []
