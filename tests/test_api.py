from __future__ import annotations

import pytest


def _create(client, **overrides):
    payload = {
        "title": "Plantão Stand Centro",
        "date": "2025-03-10",
        "startTime": "09:00",
        "endTime": "13:00",
        "location": "Stand Centro",
    }
    payload.update(overrides)
    return client.post("/api/plantoes", json=payload)


def test_health(client):
    resp = client.get("/api/health")

    assert resp.status_code == 200
    assert resp.get_json() == {"status": "ok", "message": "Servidor rodando!"}


def test_plantao_full_lifecycle_over_http(client, team):
    resp = _create(client, gestorId=team.gestor.user_id)
    assert resp.status_code == 201
    created = resp.get_json()
    assert created["status"] == "aguardando_corretor"
    assert created["confirmedByCorretor"] is False

    pid = created["id"]

    resp = client.put(f"/api/plantoes/{pid}", json={"corretorId": team.corretor.user_id})
    assert resp.status_code == 200
    assert resp.get_json()["status"] == "aguardando_confirmacao"

    resp = client.put(f"/api/plantoes/{pid}", json={"confirmedByCorretor": True})
    assert resp.get_json()["status"] == "confirmado"

    resp = client.get(f"/api/plantoes/corretor/{team.corretor.user_id}")
    assert [p["id"] for p in resp.get_json()] == [pid]

    resp = client.delete(f"/api/plantoes/{pid}")
    assert resp.status_code == 200
    assert resp.get_json() == {"message": "Plantão deletado com sucesso"}

    assert client.get(f"/api/plantoes/{pid}").status_code == 404


def test_client_supplied_status_is_ignored(client, team):
    resp = _create(client, status="confirmado")

    assert resp.get_json()["status"] == "aguardando_gestor"


def test_list_by_gestor(client, team):
    _create(client, gestorId=team.gestor.user_id)
    _create(client, gestorId=team.outro_gestor.user_id)
    _create(client)

    resp = client.get(f"/api/plantoes/gestor/{team.gestor.user_id}")

    assert len(resp.get_json()) == 1
    assert len(client.get("/api/plantoes").get_json()) == 3


def test_validation_error_is_400_with_error_body(client):
    resp = _create(client, date="10/03/2025")

    assert resp.status_code == 400
    assert "Formato de data inválido" in resp.get_json()["error"]


def test_non_object_body_is_400(client):
    resp = client.post("/api/plantoes", json=["not", "an", "object"])

    assert resp.status_code == 400
    assert resp.get_json() == {"error": "Corpo da requisição deve ser um objeto JSON"}


def test_update_unknown_plantao_is_404(client):
    resp = client.put("/api/plantoes/missing", json={"title": "x"})

    assert resp.status_code == 404
    assert resp.get_json() == {"error": "Plantão não encontrado"}


def test_corretor_from_other_team_is_400(client, team):
    pid = _create(client, gestorId=team.gestor.user_id).get_json()["id"]

    resp = client.put(f"/api/plantoes/{pid}", json={"corretorId": team.corretor_outro_gestor.user_id})

    assert resp.status_code == 400
    assert client.get(f"/api/plantoes/{pid}").get_json()["corretorId"] is None


def test_register_and_duplicate_is_409(client):
    body = {"name": "Fernanda", "email": "fernanda@escala.com", "password": "123456"}

    first = client.post("/api/users/register", json=body)
    second = client.post("/api/users/register", json=body)

    assert first.status_code == 201
    assert first.get_json()["role"] == "pendente"
    assert "password" not in first.get_json()
    assert second.status_code == 409
    assert second.get_json() == {"error": "Este email já está cadastrado"}


def test_login_sets_session(client, team):
    resp = client.post(
        "/api/users/login",
        json={"email": "joao@escala.com", "password": "123456", "rememberMe": True},
    )

    assert resp.status_code == 200
    assert resp.get_json()["id"] == team.gestor.user_id
    with client.session_transaction() as sess:
        assert sess["user_id"] == team.gestor.user_id
        assert sess["role"] == "gestor"

    client.post("/api/users/logout")
    with client.session_transaction() as sess:
        assert "user_id" not in sess


def test_login_wrong_password_is_401(client, team):
    resp = client.post("/api/users/login", json={"email": "joao@escala.com", "password": "errada"})

    assert resp.status_code == 401
    assert resp.get_json() == {"error": "Email ou senha inválidos"}


def test_users_by_role_and_team(client, team):
    gestores = client.get("/api/users/role/gestor").get_json()
    corretores = client.get(f"/api/users/gestor/{team.gestor.user_id}/corretores").get_json()

    assert {u["id"] for u in gestores} == {team.gestor.user_id, team.outro_gestor.user_id}
    assert [u["id"] for u in corretores] == [team.corretor.user_id]
    assert client.get("/api/users/role/chefe").status_code == 400


def test_update_and_delete_user(client, team):
    resp = client.put(f"/api/users/{team.corretor.user_id}", json={"name": "Matheus C."})
    assert resp.get_json()["name"] == "Matheus C."

    resp = client.delete(f"/api/users/{team.corretor.user_id}")
    assert resp.get_json() == {"message": "Usuário deletado com sucesso"}
    assert client.delete(f"/api/users/{team.corretor.user_id}").status_code == 404


def test_unknown_route_and_method(client):
    assert client.get("/api/nada").status_code == 404
    resp = client.patch("/api/plantoes/abc", json={})
    assert resp.status_code == 405
    assert "error" in resp.get_json()


def test_unexpected_error_is_generic_500(client, container, monkeypatch, caplog):
    def boom():
        raise RuntimeError("connection string with secrets")

    monkeypatch.setattr(container.plantao_service, "list_all", boom)

    resp = client.get("/api/plantoes")

    assert resp.status_code == 500
    assert resp.get_json() == {"error": "Erro interno do servidor"}
    assert "secrets" not in resp.get_data(as_text=True)
    assert "unexpected error" in caplog.text


@pytest.mark.parametrize("storage", ["sqlite", ""])
def test_unknown_storage_backend(storage):
    from escala_plantoes.container import build_container

    with pytest.raises(ValueError):
        build_container(db_config={}, storage=storage)


def test_full_record_put_with_new_gestor_can_be_retried(client, team):
    pid = _create(client, gestorId=team.gestor.user_id).get_json()["id"]
    record = client.put(f"/api/plantoes/{pid}", json={"corretorId": team.corretor.user_id}).get_json()

    edited = dict(record, gestorId=team.outro_gestor.user_id)
    first = client.put(f"/api/plantoes/{pid}", json=edited)
    second = client.put(f"/api/plantoes/{pid}", json=edited)

    assert first.status_code == second.status_code == 200
    assert first.get_json() == second.get_json()
    assert second.get_json()["corretorId"] is None
    assert second.get_json()["status"] == "aguardando_corretor"


def test_assign_and_confirm_can_be_retried(client, team):
    pid = _create(client, gestorId=team.gestor.user_id).get_json()["id"]
    body = {"corretorId": team.corretor.user_id, "confirmedByCorretor": True}

    first = client.put(f"/api/plantoes/{pid}", json=body).get_json()
    second = client.put(f"/api/plantoes/{pid}", json=body).get_json()

    assert first == second
    assert second["status"] == "confirmado"


def test_too_long_title_is_400(client, team):
    resp = _create(client, title="x" * 201)
    assert resp.status_code == 400
    assert resp.get_json() == {"error": "Título deve ter no máximo 200 caracteres"}

    pid = _create(client).get_json()["id"]
    resp = client.put(f"/api/plantoes/{pid}", json={"location": "y" * 256})
    assert resp.status_code == 400
    assert resp.get_json() == {"error": "Local deve ter no máximo 255 caracteres"}


def test_numeric_password_is_rejected_not_500(client, team):
    resp = client.post("/api/users/register", json={"name": "Ana", "email": "ana@escala.com", "password": 1234567})
    assert resp.status_code == 400
    assert resp.get_json() == {"error": "Senha deve ter no mínimo 6 caracteres"}

    resp = client.put(f"/api/users/{team.corretor.user_id}", json={"password": 1234567})
    assert resp.status_code == 400

    resp = client.post("/api/users/login", json={"email": "joao@escala.com", "password": 123456})
    assert resp.status_code == 401


def test_numeric_email_is_not_500(client):
    resp = client.post("/api/users/login", json={"email": 42, "password": "123456"})

    assert resp.status_code == 401
