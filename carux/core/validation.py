"""
Payload parsing for service entry points.

Services accept either a ready model or a raw mapping; pydantic
ValidationError is surfaced as InvalidInputException.
"""

from typing import Any, Type, TypeVar

from pydantic import BaseModel, ValidationError

from carux.core.exceptions import InvalidInputException

M = TypeVar("M", bound=BaseModel)


def parse_payload(model: Type[M], payload: Any) -> M:
    if isinstance(payload, model):
        return payload
    if isinstance(payload, BaseModel):
        payload = payload.model_dump(exclude_unset=True)
    try:
        return model.model_validate(payload)
    except ValidationError as e:
        errors = [
            {
                "field": ".".join(str(part) for part in err.get("loc", ())),
                "type": err.get("type", ""),
                "message": err.get("msg", ""),
            }
            for err in e.errors()
        ]
        first = errors[0] if errors else {"field": "", "message": "invalid payload"}
        raise InvalidInputException(
            f"Invalid {model.__name__}: {first['field'] or 'payload'} - {first['message']}",
            errors=errors,
        ) from e
