from typing import Any, Dict, Iterable, List, Type, TypeVar

from pydantic import BaseModel, ValidationError

ModelT = TypeVar("ModelT", bound=BaseModel)

_LOCATION_PREFIXES = {"body", "query", "path", "header"}


class PayloadValidationError(Exception):
    """Raised when a payload does not match its declared shape."""

    def __init__(self, errors: List[Dict[str, str]]):
        self.errors = errors
        super().__init__("; ".join(f"{e['field']}: {e['message']}" for e in errors))


def _field_name(loc: Iterable[Any]) -> str:
    parts = [str(part) for part in loc]
    if len(parts) > 1 and parts[0] in _LOCATION_PREFIXES:
        parts = parts[1:]
    return ".".join(parts) or "body"


def _message(error: Dict[str, Any]) -> str:
    message = str(error.get("msg", "Invalid value"))
    # pydantic prefixes custom validator messages
    return message.removeprefix("Value error, ")


def field_errors(errors: Iterable[Dict[str, Any]]) -> List[Dict[str, str]]:
    """Flatten pydantic error dicts into [{"field", "message"}] pairs."""
    return [{"field": _field_name(e.get("loc", ())), "message": _message(e)} for e in errors]


def validate_payload(model: Type[ModelT], payload: Any) -> ModelT:
    if not isinstance(payload, dict):
        raise PayloadValidationError([{"field": "body", "message": "Payload must be a JSON object"}])
    try:
        return model.model_validate(payload)
    except ValidationError as e:
        raise PayloadValidationError(field_errors(e.errors())) from e
