from __future__ import annotations

import pytest

from escala_plantoes.main import create_app, get_container

from factories import Team, build_team


@pytest.fixture
def app():
    return create_app("config.testing")


@pytest.fixture
def container(app):
    return get_container(app)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def team(container) -> Team:
    return build_team(container.user_service)
