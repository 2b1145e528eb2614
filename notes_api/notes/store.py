import logging
from collections.abc import Mapping

from markupsafe import escape
from marshmallow import ValidationError
from sqlalchemy import delete, insert, select, text, update
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from notes_api.notes.models import Note
from notes_api.notes.schemas import NoteIn, NoteOut, field_errors

logger = logging.getLogger(__name__)

NOT_FOUND = {"error": "Note not found"}

# bornes de la colonne INTEGER (id); au-delà, aucune ligne ne peut correspondre
ID_MIN, ID_MAX = -(2 ** 31), 2 ** 31 - 1

note_in = NoteIn()
note_out_many = NoteOut(many=True)
notes = Note.__table__


def _sanitize(value):
    """Échappe le HTML des chaînes; les autres valeurs passent telles quelles."""
    if isinstance(value, str):
        return str(escape(value))
    return value


def _dump(rows):
    return note_out_many.dump([dict(row) for row in rows])


def _id_in_range(note_id) -> bool:
    return ID_MIN <= note_id <= ID_MAX


class NoteStore:
    """
    Accès aux données des notes.

    Chaque opération emprunte une connexion au pool de l'engine pour une seule
    requête SQL (``engine.begin()``) et la rend à la sortie du bloc, y compris
    en cas d'exception. Les résultats sont des enveloppes ``{status, data}``,
    sauf ``read_all`` qui renvoie la liste brute.
    """

    def __init__(self, engine: Engine):
        self.engine = engine

    def _validate(self, note):
        """Retourne (data, errors); errors est une liste de {field, error}."""
        if not isinstance(note, Mapping):
            note = {}
        try:
            return note_in.load(note), []
        except ValidationError as e:
            return None, field_errors(e.messages)

    def ping(self) -> bool:
        """SELECT 1 sur une connexion du pool; False si la base ne répond pas."""
        try:
            with self.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
        except SQLAlchemyError:
            logger.warning("note_store_unreachable", exc_info=True)
            return False
        return True

    def create(self, note) -> dict:
        data, errors = self._validate(note)
        if errors:
            return {"status": 400, "data": errors}

        values = {key: _sanitize(value) for key, value in data.items()}
        stmt = insert(notes).values(**values).returning(*notes.c)
        try:
            with self.engine.begin() as conn:
                rows = conn.execute(stmt).mappings().all()
        except SQLAlchemyError:
            logger.exception("note_create_failed")
            raise

        if not rows:
            return {"status": 500, "data": "Internal error"}
        return {"status": 201, "data": _dump(rows)}

    def read_all(self) -> list:
        stmt = select(notes).order_by(notes.c.id)
        try:
            with self.engine.connect() as conn:
                rows = conn.execute(stmt).mappings().all()
        except SQLAlchemyError:
            logger.exception("note_read_all_failed")
            raise
        return _dump(rows)

    def read_one(self, note_id: int) -> dict:
        if not _id_in_range(note_id):
            return {"status": 404, "data": dict(NOT_FOUND)}
        stmt = select(notes).where(notes.c.id == note_id)
        try:
            with self.engine.connect() as conn:
                rows = conn.execute(stmt).mappings().all()
        except SQLAlchemyError:
            logger.exception("note_read_one_failed", extra={"note_id": note_id})
            raise

        if not rows:
            return {"status": 404, "data": dict(NOT_FOUND)}
        return {"status": 200, "data": _dump(rows)}

    def update(self, note_id: int, note) -> dict:
        data, errors = self._validate(note)
        if errors:
            return {"status": 400, "data": errors}

        note_id = _sanitize(note_id)
        if not _id_in_range(note_id):
            return {"status": 404, "data": dict(NOT_FOUND)}
        values = {key: _sanitize(value) for key, value in data.items()}
        stmt = (
            update(notes)
            .where(notes.c.id == note_id)
            .values(**values)
            .returning(*notes.c)
        )
        try:
            with self.engine.begin() as conn:
                rows = conn.execute(stmt).mappings().all()
        except SQLAlchemyError:
            logger.exception("note_update_failed", extra={"note_id": note_id})
            raise

        if not rows:
            return {"status": 404, "data": dict(NOT_FOUND)}
        return {"status": 200, "data": _dump(rows)}

    def delete(self, note_id: int) -> dict:
        if not _id_in_range(note_id):
            return {"status": 404, "data": dict(NOT_FOUND)}
        stmt = delete(notes).where(notes.c.id == note_id).returning(*notes.c)
        try:
            with self.engine.begin() as conn:
                rows = conn.execute(stmt).mappings().all()
        except SQLAlchemyError:
            logger.exception("note_delete_failed", extra={"note_id": note_id})
            raise

        if not rows:
            return {"status": 404, "data": dict(NOT_FOUND)}
        return {"status": 204, "data": _dump(rows)}
