from flask import Blueprint, request, jsonify, current_app

bp = Blueprint("notes", __name__)


def _store():
    return current_app.extensions["note_store"]

def _respond(envelope: dict):
    status = envelope["status"]
    # 204: pas de corps HTTP, les lignes supprimées restent dans l'enveloppe
    if status == 204:
        return ("", 204)
    return jsonify(envelope["data"]), status

@bp.get("/")
def list_notes():
    return jsonify(_store().read_all()), 200

@bp.post("/")
def create_note():
    payload = request.get_json(silent=True) or {}
    return _respond(_store().create(payload))

@bp.get("/<int(signed=True):note_id>")
def get_note(note_id):
    return _respond(_store().read_one(note_id))

@bp.put("/<int(signed=True):note_id>")
def update_note(note_id):
    payload = request.get_json(silent=True) or {}
    return _respond(_store().update(note_id, payload))

@bp.delete("/<int(signed=True):note_id>")
def delete_note(note_id):
    return _respond(_store().delete(note_id))
