from __future__ import annotations

import httpx
import pytest

from escala_plantoes.client import ApiError, EntityCache, EscalaClient


@pytest.fixture
def api(app):
    with EscalaClient("http://testserver/api", transport=httpx.WSGITransport(app=app)) as c:
        yield c


def _plantao(**overrides):
    data = {"title": "Plantão Sábado", "date": "2025-04-05", "startTime": "08:00", "endTime": "12:00"}
    data.update(overrides)
    return data


def test_entity_cache_basics():
    cache = EntityCache()
    assert not cache.loaded

    cache.replace_all([{"id": "a", "n": 1}, {"id": "b", "n": 2}])
    cache.put({"id": "a", "n": 3})

    assert cache.loaded
    assert len(cache) == 2
    assert cache.get("a") == {"id": "a", "n": 3}
    assert cache.filter(lambda i: i["n"] > 2) == [{"id": "a", "n": 3}]

    cache.invalidate()
    assert not cache.loaded
    assert cache.get("a") is None


def test_mutations_refresh_plantao_cache(api, team):
    created = api.add_plantao(_plantao(gestorId=team.gestor.user_id))

    assert api.get_plantao_by_id(created["id"])["status"] == "aguardando_corretor"

    api.update_plantao(created["id"], {"corretorId": team.corretor.user_id})
    cached = api.get_plantao_by_id(created["id"])
    assert cached["status"] == "aguardando_confirmacao"
    assert api.get_plantoes_by_corretor(team.corretor.user_id) == [cached]
    assert api.get_plantoes_by_gestor(team.outro_gestor.user_id) == []

    api.delete_plantao(created["id"])
    assert api.get_plantoes() == []


def test_user_reads_and_filters(api, team):
    assert {u["id"] for u in api.get_gestores()} == {team.gestor.user_id, team.outro_gestor.user_id}
    assert [u["id"] for u in api.get_corretores_by_gestor(team.gestor.user_id)] == [team.corretor.user_id]

    api.update_user(team.corretor.user_id, {"role": "recepcionista"})

    assert api.get_corretores_by_gestor(team.gestor.user_id) == []
    assert api.get_user_by_id(team.corretor.user_id)["role"] == "recepcionista"


def test_register_then_add_user(api):
    registered = api.register("Ana", "ana@escala.com", "123456")
    assert registered["role"] == "pendente"

    added = api.add_user({"name": "Bia", "email": "bia@escala.com", "password": "123456", "role": "diretor"})

    ids = {u["id"] for u in api.get_users()}
    assert {registered["id"], added["id"]} <= ids


def test_login_and_logout(api, team):
    user = api.login("joao@escala.com", "123456")
    assert user["id"] == team.gestor.user_id
    api.logout()


def test_server_error_message_is_raised(api, team):
    with pytest.raises(ApiError) as exc:
        api.add_plantao(_plantao(startTime="12:00", endTime="08:00"))

    assert exc.value.status_code == 400
    assert exc.value.message == "Hora de fim deve ser maior que hora de início"

    with pytest.raises(ApiError) as exc:
        api.delete_user("nao-existe")
    assert exc.value.status_code == 404


def test_failed_mutation_leaves_cache_untouched(api, team):
    created = api.add_plantao(_plantao(gestorId=team.gestor.user_id))

    with pytest.raises(ApiError):
        api.update_plantao(created["id"], {"corretorId": team.corretor_outro_gestor.user_id})

    assert api.get_plantao_by_id(created["id"])["corretorId"] is None
