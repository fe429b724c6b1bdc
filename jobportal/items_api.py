"""
REST API for the items collection.

Routes (all JSON):
    GET    /api/items        list every item
    POST   /api/items        create an item, 201
    PUT    /api/items/<id>   update name/quantity, 404 if missing
    DELETE /api/items/<id>   delete an item
"""
from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

from flask import Blueprint, Flask, current_app, jsonify, request

from jobportal.items_repo import ItemRepository, serialize_item
from jobportal.log import get_logger

log = get_logger(__name__)

items_bp = Blueprint("items", __name__, url_prefix="/api/items")

EDITABLE_FIELDS = ("name", "quantity")


def _get_repo() -> ItemRepository:
    repo = current_app.config.get("ITEM_REPO")
    if repo is None:
        repo = ItemRepository.from_config()
        current_app.config["ITEM_REPO"] = repo
    return repo


def _error(message: str, status: int):
    return jsonify({"error": message}), status


def _validate(body: Dict[str, Any], partial: bool) -> Tuple[Dict[str, Any], Optional[str]]:
    """Pick the editable fields out of a request body.

    Returns (fields, error); error is a message when validation fails.
    """
    fields: Dict[str, Any] = {}
    if "name" in body or not partial:
        name = body.get("name")
        if not isinstance(name, str) or not name.strip():
            return {}, "name is required"
        fields["name"] = name.strip()
    if "quantity" in body:
        quantity = body["quantity"]
        if quantity is not None and (
            isinstance(quantity, bool) or not isinstance(quantity, (int, float))
        ):
            return {}, "quantity must be a number"
        fields["quantity"] = quantity
    return fields, None


@items_bp.route("", methods=["GET"])
def list_items():
    items = _get_repo().list()
    return jsonify([serialize_item(i) for i in items])


@items_bp.route("", methods=["POST"])
def create_item():
    body = request.get_json(silent=True)
    if not isinstance(body, dict):
        return _error("JSON object body required", 400)
    fields, error = _validate(body, partial=False)
    if error:
        return _error(error, 400)
    item = _get_repo().create(fields["name"], fields.get("quantity"))
    log.info("Created item %s (%s)", item["_id"], item["name"])
    return jsonify(serialize_item(item)), 201


@items_bp.route("/<item_id>", methods=["PUT"])
def update_item(item_id: str):
    body = request.get_json(silent=True)
    if not isinstance(body, dict):
        return _error("JSON object body required", 400)
    fields, error = _validate(body, partial=True)
    if error:
        return _error(error, 400)
    if not fields:
        return _error("nothing to update", 400)
    updated = _get_repo().update(item_id, fields)
    if updated is None:
        return _error("Item not found", 404)
    log.info("Updated item %s", item_id)
    return jsonify(serialize_item(updated))


@items_bp.route("/<item_id>", methods=["DELETE"])
def delete_item(item_id: str):
    if _get_repo().delete(item_id):
        log.info("Deleted item %s", item_id)
    return jsonify({"message": "Item deleted"})


def create_app(repo: Optional[ItemRepository] = None) -> Flask:
    app = Flask(__name__)
    app.config["ITEM_REPO"] = repo
    app.register_blueprint(items_bp)

    @app.after_request
    def allow_cross_origin(response):
        response.headers["Access-Control-Allow-Origin"] = "*"
        response.headers["Access-Control-Allow-Headers"] = "Content-Type"
        response.headers["Access-Control-Allow-Methods"] = "GET, POST, PUT, DELETE, OPTIONS"
        return response

    return app
