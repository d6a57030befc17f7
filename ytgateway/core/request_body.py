"""Request Body — JSON decoding and schema validation for action payloads.

Invariants:
    - Unparseable bodies and empty scalar values (null, false, 0, "") raise InvalidJSONBodyError
    - Empty objects and arrays are NOT rejected here; the schema rejects them with field details
    - Schema failures raise InvalidRequestParamsError with {field: [messages]}
    - Errors not attached to a field (e.g. body is a list) are left out of details
"""

import json
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from ytgateway.core.errors import InvalidJSONBodyError, InvalidRequestParamsError

ModelT = TypeVar("ModelT", bound=BaseModel)


def _is_empty_value(value: Any) -> bool:
    if value is None or value is False:
        return True
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value == 0
    return isinstance(value, str) and value == ""


def decode_json_body(raw: bytes) -> Any:
    """Decode raw request bytes as JSON."""
    try:
        parsed = json.loads(raw)
    except ValueError:
        raise InvalidJSONBodyError()
    if _is_empty_value(parsed):
        raise InvalidJSONBodyError()
    return parsed


def flatten_field_errors(errors: list[dict]) -> dict[str, list[str]]:
    """Group Pydantic error entries by top-level field name."""
    grouped: dict[str, list[str]] = {}
    for err in errors:
        loc = err.get("loc") or ()
        if not loc:
            continue
        grouped.setdefault(str(loc[0]), []).append(err["msg"])
    return grouped


def validate_body(model: type[ModelT], payload: Any) -> ModelT:
    """Validate a decoded body against `model`."""
    try:
        return model.model_validate(payload)
    except ValidationError as e:
        raise InvalidRequestParamsError(flatten_field_errors(e.errors()))
