# notes_api/docs/spec.py
from apispec import APISpec
from apispec.ext.marshmallow import MarshmallowPlugin

from notes_api.notes.schemas import NoteIn, NoteOut, FieldError, NotFound

def _ref(name: str):
    return {"$ref": f"#/components/schemas/{name}"}

def _json(schema, many=False):
    if many:
        schema = {"type": "array", "items": schema}
    return {"application/json": {"schema": schema}}

_ID_PARAM = {"in": "path", "name": "id", "required": True, "schema": {"type": "integer"}}

def build_spec(prefix: str = "/api/v1/notes"):
    spec = APISpec(
        title="Notes API",
        version="1.0.0",
        openapi_version="3.0.3",
        info={"description": "Notes CRUD service — OpenAPI spec"},
        plugins=[MarshmallowPlugin()],
    )

    # Composants
    spec.components.schema("NoteIn", schema=NoteIn)
    spec.components.schema("NoteOut", schema=NoteOut)
    spec.components.schema("FieldError", schema=FieldError)
    spec.components.schema("NotFound", schema=NotFound)

    invalid = {"description": "Validation failed", "content": _json(_ref("FieldError"), many=True)}
    not_found = {"description": "Not found", "content": _json(_ref("NotFound"))}

    spec.path(
        path=f"{prefix}/",
        operations={
            "get": {
                "summary": "List notes",
                "responses": {"200": {"description": "OK", "content": _json(_ref("NoteOut"), many=True)}},
            },
            "post": {
                "summary": "Create note",
                "requestBody": {"required": True, "content": _json(_ref("NoteIn"))},
                "responses": {
                    "201": {"description": "Created", "content": _json(_ref("NoteOut"), many=True)},
                    "400": invalid,
                },
            },
        },
    )

    spec.path(
        path=f"{prefix}/{{id}}",
        operations={
            "get": {
                "summary": "Get note by id",
                "parameters": [_ID_PARAM],
                "responses": {
                    "200": {"description": "OK", "content": _json(_ref("NoteOut"), many=True)},
                    "404": not_found,
                },
            },
            "put": {
                "summary": "Replace note",
                "parameters": [_ID_PARAM],
                "requestBody": {"required": True, "content": _json(_ref("NoteIn"))},
                "responses": {
                    "200": {"description": "OK", "content": _json(_ref("NoteOut"), many=True)},
                    "400": invalid,
                    "404": not_found,
                },
            },
            "delete": {
                "summary": "Delete note",
                "parameters": [_ID_PARAM],
                "responses": {"204": {"description": "No content"}, "404": not_found},
            },
        },
    )

    return spec.to_dict()
