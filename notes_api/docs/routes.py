# notes_api/docs/routes.py
from flask import Blueprint, jsonify, current_app
from .spec import build_spec

bp = Blueprint("docs", __name__)

@bp.get("/openapi.json")
def openapi_json():
    return jsonify(build_spec(current_app.config["NOTES_URL_PREFIX"]))
