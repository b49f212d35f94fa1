from __future__ import annotations

from flask import Flask, jsonify, session

from ..common.request_utils import json_body
from ..container import Container
from .service import parse_role


def register(app: Flask, container: Container) -> None:
    users = container.user_service

    @app.route("/api/users/register", methods=["POST"], endpoint="users_register")
    def users_register():
        data = json_body()
        user = users.register(name=data.get("name"), email=data.get("email"), password=data.get("password"))
        return jsonify(user.to_public_dict()), 201

    @app.route("/api/users/login", methods=["POST"], endpoint="users_login")
    def users_login():
        data = json_body()
        s_user = container.auth_service.authenticate(data.get("email") or "", data.get("password") or "")

        session.permanent = bool(data.get("rememberMe"))
        session["user_id"] = s_user.user_id
        session["name"] = s_user.name
        session["role"] = s_user.role.value

        return jsonify(users.get_user(s_user.user_id).to_public_dict())

    @app.route("/api/users/logout", methods=["POST"], endpoint="users_logout")
    def users_logout():
        session.clear()
        return jsonify({"message": "Sessão encerrada"})

    @app.route("/api/users", methods=["GET"], endpoint="users_list")
    def users_list():
        return jsonify([u.to_public_dict() for u in users.list_users()])

    @app.route("/api/users/<user_id>", methods=["GET"], endpoint="users_get")
    def users_get(user_id: str):
        return jsonify(users.get_user(user_id).to_public_dict())

    @app.route("/api/users/role/<role>", methods=["GET"], endpoint="users_by_role")
    def users_by_role(role: str):
        return jsonify([u.to_public_dict() for u in users.list_by_role(role)])

    @app.route("/api/users/gestor/<gestor_id>/corretores", methods=["GET"], endpoint="users_corretores_by_gestor")
    def users_corretores_by_gestor(gestor_id: str):
        return jsonify([u.to_public_dict() for u in users.list_corretores_by_gestor(gestor_id)])

    @app.route("/api/users", methods=["POST"], endpoint="users_create")
    def users_create():
        data = json_body()
        user = users.create_user(
            name=data.get("name"),
            email=data.get("email"),
            password=data.get("password"),
            role=parse_role(data.get("role") or "pendente"),
            gestor_id=data.get("gestorId"),
        )
        return jsonify(user.to_public_dict()), 201

    @app.route("/api/users/<user_id>", methods=["PUT"], endpoint="users_update")
    def users_update(user_id: str):
        user = users.update_user(user_id, json_body())
        return jsonify(user.to_public_dict())

    @app.route("/api/users/<user_id>", methods=["DELETE"], endpoint="users_delete")
    def users_delete(user_id: str):
        users.delete_user(user_id)
        return jsonify({"message": "Usuário deletado com sucesso"})
