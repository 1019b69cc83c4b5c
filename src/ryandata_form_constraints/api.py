"""Minimal FastAPI service exposing manual validation over HTTP."""

from __future__ import annotations

from typing import Any, Optional

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel

from ryandata_form_constraints.models import RyanDataConstraintError
from ryandata_form_constraints.service import ConstraintService, get_default_service

app = FastAPI(title="RyanData Form Constraints API", version="0.1.0")
service: Optional[ConstraintService] = None


class FieldValidationRequest(BaseModel):
    type_name: str
    field_name: str
    value: Any = None


def _service() -> ConstraintService:
    return service or get_default_service()


def _config_error(exc: RyanDataConstraintError) -> HTTPException:
    return HTTPException(status_code=422, detail={"type": exc.type, "message": exc.message()})


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/validators")
def validators() -> dict[str, list[str]]:
    return {"validators": _service().available_validators()}


@app.get("/constraints")
def constraints() -> dict[str, Any]:
    return _service().constraint_registry.to_dict()


@app.post("/validate")
def validate_field(request: FieldValidationRequest) -> dict[str, Any]:
    """Validate one value against a field's constraints."""
    try:
        errors = _service().validate(request.type_name, request.field_name, request.value)
    except RyanDataConstraintError as exc:
        raise _config_error(exc) from exc
    return {"is_valid": errors is None, "errors": errors}


@app.post("/validate/{type_name}")
def validate_model(type_name: str, model: dict[str, Any]) -> dict[str, Any]:
    """Validate every field of a JSON object; errors are keyed by field."""
    try:
        group = _service().create_form_group(model, type_name)
    except RyanDataConstraintError as exc:
        raise _config_error(exc) from exc
    errors = group.errors
    return {"is_valid": not errors, "errors": errors}


# To run: uvicorn ryandata_form_constraints.api:app --host 0.0.0.0 --port 8000
