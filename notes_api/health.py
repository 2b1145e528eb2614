from flask import Blueprint, current_app, jsonify

bp = Blueprint("health", __name__)


@bp.get("/healthz")
def healthz():
    # liveness: le processus répond, sans toucher la base
    return jsonify({"status": "ok", "env": current_app.config["ENV_NAME"]})


@bp.get("/readyz")
def readyz():
    # readiness: le NoteStore obtient une connexion du pool
    db_up = current_app.extensions["note_store"].ping()
    body = {"status": "ok" if db_up else "error", "db": "up" if db_up else "down"}
    return jsonify(body), (200 if db_up else 503)
