from __future__ import annotations

import os
import sys

import pytest

_BACKEND_ROOT = os.path.dirname(os.path.dirname(__file__))
if _BACKEND_ROOT not in sys.path:
    sys.path.insert(0, _BACKEND_ROOT)

from vetclinic.app import app  # noqa: E402

VET = {
    "nome": "Dra. Helena Prado",
    "login": "helena",
    "crmv": "SP-12345",
    "contato": "11987654321",
    "senha": "helena123",
}

TUTOR = {
    "nome": "Carlos Souza",
    "cpf": "12345678901",
    "telefone": "11912345678",
    "endereco": "Rua das Flores, 10",
    "senha": "carlos123",
}


def bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def data_dir(tmp_path, monkeypatch):
    monkeypatch.setenv("CLINIC_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("SECRET_KEY", "test-secret")
    return tmp_path


@pytest.fixture
def client(data_dir):
    app.config["TESTING"] = True
    with app.test_client() as test_client:
        yield test_client


@pytest.fixture
def login(client):
    def _login(login_value: str, senha: str) -> str:
        response = client.post("/api/login", json={"login": login_value, "senha": senha})
        assert response.status_code == 200, response.get_data(as_text=True)
        return response.get_json()["token"]

    return _login


@pytest.fixture
def vet_token(client, login):
    response = client.post("/api/cadastrar-vet", json=VET)
    assert response.status_code == 201, response.get_data(as_text=True)
    return login(VET["login"], VET["senha"])


@pytest.fixture
def tutor_token(client, login):
    response = client.post("/api/cadastrar-tutor", json=TUTOR)
    assert response.status_code == 201, response.get_data(as_text=True)
    return login(TUTOR["cpf"], TUTOR["senha"])


@pytest.fixture
def make_staff(client, vet_token, login):
    """Register a staff member as the veterinarian and return (member, token)."""

    def _make(role: str, login_value: str, **extra):
        body = {"nome": f"Staff {login_value}", "login": login_value, "contato": "11955554444", "senha": "segredo1", "role": role}
        body.update(extra)
        response = client.post("/api/cadastrar-funcionario", json=body, headers=bearer(vet_token))
        assert response.status_code == 201, response.get_data(as_text=True)
        return response.get_json()["funcionario"], login(login_value, "segredo1")

    return _make


@pytest.fixture
def pet(client, vet_token):
    response = client.post(
        "/api/salvar-pet",
        json={"nome": "Thor", "especie": "Cão", "tutorCpf": TUTOR["cpf"]},
        headers=bearer(vet_token),
    )
    assert response.status_code == 201, response.get_data(as_text=True)
    return response.get_json()["pet"]
