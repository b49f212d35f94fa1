from __future__ import annotations

from flask import Flask, jsonify

from ..common.request_utils import json_body
from ..container import Container


def register(app: Flask, container: Container) -> None:
    service = container.plantao_service

    @app.route("/api/plantoes", methods=["GET"], endpoint="plantoes_list")
    def plantoes_list():
        return jsonify([p.to_dict() for p in service.list_all()])

    @app.route("/api/plantoes/<plantao_id>", methods=["GET"], endpoint="plantoes_get")
    def plantoes_get(plantao_id: str):
        return jsonify(service.get(plantao_id).to_dict())

    @app.route("/api/plantoes/gestor/<gestor_id>", methods=["GET"], endpoint="plantoes_by_gestor")
    def plantoes_by_gestor(gestor_id: str):
        return jsonify([p.to_dict() for p in service.list_by_gestor(gestor_id)])

    @app.route("/api/plantoes/corretor/<corretor_id>", methods=["GET"], endpoint="plantoes_by_corretor")
    def plantoes_by_corretor(corretor_id: str):
        return jsonify([p.to_dict() for p in service.list_by_corretor(corretor_id)])

    @app.route("/api/plantoes", methods=["POST"], endpoint="plantoes_create")
    def plantoes_create():
        plantao = service.create(json_body())
        return jsonify(plantao.to_dict()), 201

    @app.route("/api/plantoes/<plantao_id>", methods=["PUT"], endpoint="plantoes_update")
    def plantoes_update(plantao_id: str):
        plantao = service.update(plantao_id, json_body())
        return jsonify(plantao.to_dict())

    @app.route("/api/plantoes/<plantao_id>", methods=["DELETE"], endpoint="plantoes_delete")
    def plantoes_delete(plantao_id: str):
        service.delete(plantao_id)
        return jsonify({"message": "Plantão deletado com sucesso"})
