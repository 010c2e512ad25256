"""Flask backend for the veterinary clinic.

Accounts (tutors, veterinarians, staff) and pets are stored as flat JSON
collections under CLINIC_DATA_DIR; see vetclinic.records.
"""

from __future__ import annotations

from flask import Flask, g, jsonify
from flask_cors import CORS
from werkzeug.exceptions import HTTPException

from . import accounts, auth, config, medical, pets, staff
from .auth import STAFF, TUTOR, VET, require_roles
from .errors import ApiError, StoreError
from .validation import json_body

app = Flask(__name__)
CORS(app)

CLINICAL_ROLES = (staff.VET_ROLE, staff.JUNIOR_ROLE)
ADMIN_ROLES = (staff.VET_ROLE,)


@app.errorhandler(ApiError)
def handle_api_error(exc: ApiError):
    return jsonify({"success": False, "message": exc.message}), exc.status


@app.errorhandler(StoreError)
def handle_store_error(exc: StoreError):
    return jsonify({"success": False, "message": "Erro ao salvar dados"}), 500


@app.errorhandler(Exception)
def handle_unexpected(exc: Exception):
    if isinstance(exc, HTTPException):
        return exc
    print(f"[api] unexpected error {type(exc).__name__}: {exc}")
    return jsonify({"success": False, "message": "Erro interno do servidor"}), 500


@app.route("/")
def home():
    return jsonify(
        {
            "status": "running",
            "message": "Veterinary clinic backend is running! 🐾",
            "endpoints": {
                "login": "POST /api/login",
                "me": "GET /api/me",
                "tutors": "POST /api/cadastrar-tutor",
                "vets": "POST /api/cadastrar-vet",
                "pets": "GET /api/pets, POST /api/salvar-pet, GET /api/pets-tutor/<cpf>",
                "pet_updates": "PUT /api/atualizar-pet/<id>, PUT /api/alterar-tag/<id>",
                "medical": (
                    "PUT /api/salvar-anamnese/<id>, /api/salvar-historico-clinico/<id>, "
                    "/api/salvar-vacinacao/<id>, /api/salvar-exames/<id>, "
                    "/api/salvar-consultas/<id>, /api/salvar-observacoes/<id>"
                ),
                "staff": "GET|POST /api/funcionarios, POST /api/cadastrar-funcionario, PUT|DELETE /api/funcionarios/<id>",
            },
        }
    )


# Accounts


@app.route("/api/login", methods=["POST"])
def login():
    return jsonify(auth.login(json_body()))


@app.route("/api/me")
@require_roles(VET, TUTOR, STAFF)
def me():
    return jsonify({"success": True, "user": g.user})


@app.route("/api/cadastrar-tutor", methods=["POST"])
def register_tutor():
    return jsonify(accounts.register_tutor(json_body())), 201


@app.route("/api/cadastrar-vet", methods=["POST"])
def register_vet():
    return jsonify(accounts.register_vet(json_body())), 201


# Pets


@app.route("/api/salvar-pet", methods=["POST"])
@require_roles(TUTOR, VET, STAFF)
def create_pet():
    return jsonify(pets.create_pet(json_body(), g.user)), 201


@app.route("/api/pets-tutor/<cpf>")
@require_roles(TUTOR, VET, STAFF)
def pets_for_tutor(cpf: str):
    return jsonify(pets.pets_for_tutor(cpf, g.user))


@app.route("/api/pets")
@require_roles(VET, STAFF)
def all_pets():
    return jsonify(pets.all_pets())


@app.route("/api/atualizar-pet/<pet_id>", methods=["PUT"])
@require_roles(VET, STAFF)
def update_pet(pet_id: str):
    return jsonify(pets.update_pet(pet_id, json_body()))


@app.route("/api/alterar-tag/<pet_id>", methods=["PUT"])
@require_roles(VET, STAFF)
def change_tag(pet_id: str):
    return jsonify(pets.change_tag(pet_id, json_body()))


# Medical sub-records


@app.route("/api/salvar-anamnese/<pet_id>", methods=["PUT"])
@require_roles(VET, STAFF, staff_roles=CLINICAL_ROLES)
def save_anamnesis(pet_id: str):
    return jsonify(medical.save_anamnesis(pet_id, json_body()))


@app.route("/api/salvar-historico-clinico/<pet_id>", methods=["PUT"])
@require_roles(VET, STAFF, staff_roles=CLINICAL_ROLES)
def save_clinical_history(pet_id: str):
    return jsonify(medical.save_clinical_history(pet_id, json_body()))


@app.route("/api/salvar-vacinacao/<pet_id>", methods=["PUT"])
@require_roles(VET, STAFF, staff_roles=CLINICAL_ROLES)
def save_vaccination(pet_id: str):
    return jsonify(medical.save_vaccination(pet_id, json_body()))


@app.route("/api/salvar-exames/<pet_id>", methods=["PUT"])
@require_roles(VET, STAFF, staff_roles=CLINICAL_ROLES)
def save_exams(pet_id: str):
    return jsonify(medical.save_exams(pet_id, json_body()))


@app.route("/api/salvar-consultas/<pet_id>", methods=["PUT"])
@require_roles(VET, STAFF, staff_roles=CLINICAL_ROLES)
def save_consultations(pet_id: str):
    return jsonify(medical.save_consultations(pet_id, json_body()))


@app.route("/api/salvar-observacoes/<pet_id>", methods=["PUT"])
@require_roles(VET, STAFF, staff_roles=CLINICAL_ROLES)
def save_observations(pet_id: str):
    return jsonify(medical.save_observations(pet_id, json_body()))


# Staff


@app.route("/api/cadastrar-funcionario", methods=["POST"])
@app.route("/api/funcionarios", methods=["POST"])
@require_roles(VET, STAFF, staff_roles=ADMIN_ROLES)
def register_staff():
    return jsonify(staff.register_staff(json_body())), 201


@app.route("/api/funcionarios")
@require_roles(VET, STAFF, staff_roles=ADMIN_ROLES)
def list_staff():
    return jsonify(staff.list_staff())


@app.route("/api/funcionarios/<member_id>", methods=["PUT"])
@require_roles(VET, STAFF, staff_roles=ADMIN_ROLES)
def update_staff(member_id: str):
    return jsonify(staff.update_staff(member_id, json_body()))


@app.route("/api/funcionarios/<member_id>", methods=["DELETE"])
@require_roles(VET, STAFF, staff_roles=ADMIN_ROLES)
def delete_staff(member_id: str):
    return jsonify(staff.delete_staff(member_id))


def main():
    app.run(host="0.0.0.0", port=config.port(), debug=config.debug())


if __name__ == "__main__":
    main()
