from typing import Any, Dict, Optional

from fastapi import Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel

# (field, pydantic error type) -> message shown to clients
FIELD_MESSAGES = {
    ("name", "missing"): "Product name is required",
    ("price", "missing"): "Price is required",
    ("price", "greater_than_equal"): "Price must be non-negative",
    ("quantity", "missing"): "Quantity is required",
    ("quantity", "greater_than_equal"): "Quantity cannot be negative",
    ("body", "missing"): "Request body is required",
}


def _dump(data: Any) -> Any:
    if isinstance(data, BaseModel):
        return data.model_dump(mode="json", by_alias=True)
    if isinstance(data, list):
        return [_dump(d) for d in data]
    return jsonable_encoder(data)


def ok(message: str, data: Any = None, status_code: int = 200) -> JSONResponse:
    """Success envelope. ``data`` is left out of the body when None."""
    body: Dict[str, Any] = {"success": True, "message": message}
    if data is not None:
        body["data"] = _dump(data)
    return JSONResponse(status_code=status_code, content=body)


def fail(
    message: str, status_code: int, errors: Optional[Dict[str, str]] = None
) -> JSONResponse:
    body: Dict[str, Any] = {"success": False, "message": message}
    if errors:
        body["errors"] = errors
    return JSONResponse(status_code=status_code, content=body)


def _field_error(err: dict) -> tuple:
    if err.get("type") == "json_invalid":
        return "body", "Malformed JSON request body"
    loc = [str(part) for part in err.get("loc", ())]
    # drop the "body"/"query"/"path" prefix unless it is all there is
    field = loc[-1] if len(loc) > 1 else (loc[0] if loc else "request")
    err_type = err.get("type")
    # an explicit null on a required field reads the same as a missing one
    if "input" in err and err["input"] is None and (field, "missing") in FIELD_MESSAGES:
        err_type = "missing"
    message = FIELD_MESSAGES.get((field, err_type))
    if message is None:
        message = err.get("msg", "Invalid value")
        if message.startswith("Value error, "):
            message = message[len("Value error, "):]
    return field, message


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors: Dict[str, str] = {}
    for err in exc.errors():
        field, message = _field_error(err)
        errors.setdefault(field, message)
    return fail("Validation failed", 400, errors=errors)
