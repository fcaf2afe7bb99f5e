from typing import Any

from fastapi import FastAPI
from fastapi.openapi.utils import get_openapi
from pydantic import BaseModel, Field

from bbrecords.core.modules.session.models import SESSION_COOKIE_NAME
from bbrecords.web.gate import is_public_path


def set_custom_openapi(app: FastAPI) -> None:
    def custom_openapi() -> dict[str, Any]:
        if app.openapi_schema:
            return app.openapi_schema

        openapi_schema = get_openapi(
            title="BB Records API",
            version="0.1.0",
            summary="Patient records with password-protected share links",
            routes=app.routes,
        )

        openapi_schema.setdefault("components", {})["securitySchemes"] = {
            "SessionCookie": {
                "type": "apiKey",
                "in": "cookie",
                "name": SESSION_COOKIE_NAME,
                "description": "Signed staff session issued by /login",
            },
        }
        openapi_schema["security"] = [{"SessionCookie": []}]

        # Paths the request gate lets through need no session
        for path, path_item in openapi_schema["paths"].items():
            if not is_public_path(path):
                continue
            for operation in path_item.values():
                operation["security"] = []

        app.openapi_schema = openapi_schema
        return app.openapi_schema

    app.openapi = custom_openapi  # type: ignore[method-assign]


class ErrorResponse(BaseModel):
    """Standard error response format."""

    message: str = Field(..., description="Human-readable error message")
    type: str = Field(..., description="Machine-readable error type")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"message": "Senha incorreta ou link inválido/expirado", "type": "authentication_error"},
                {"message": "Paciente não encontrado", "type": "not_found"},
                {"message": "Sistema não configurado corretamente", "type": "configuration_error"},
            ]
        }
    }
