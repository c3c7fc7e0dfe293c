"""OpenAPI Hook — completes the schema generated from described REST routes.

Invariants:
    - Operation parameters are added when routes are registered (rest.router);
      this hook only supplies the shared components they reference
    - An `ErrorResponse` component exists for the 404 responses the describer adds
    - The schema is generated once and cached on app.openapi_schema
"""

from fastapi import FastAPI
from fastapi.openapi.utils import get_openapi

ERROR_RESPONSE_SCHEMA = {
    "title": "ErrorResponse",
    "type": "object",
    "properties": {
        "error": {
            "type": "object",
            "properties": {
                "code": {"type": "string"},
                "message": {"type": "string"},
                "category": {"type": "string"},
                "severity": {"type": "string"},
            },
            "required": ["code", "message"],
        },
    },
    "required": ["error"],
}


def install_rest_openapi(app: FastAPI) -> None:
    """Replace app.openapi with a generator that adds the REST error component."""

    def openapi() -> dict:
        if app.openapi_schema:
            return app.openapi_schema
        schema = get_openapi(
            title=app.title,
            version=app.version,
            description=app.description,
            routes=app.routes,
        )
        schema.setdefault("components", {}).setdefault("schemas", {})[
            "ErrorResponse"
        ] = ERROR_RESPONSE_SCHEMA
        app.openapi_schema = schema
        return schema

    app.openapi = openapi
