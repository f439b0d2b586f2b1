"""Shared pydantic configuration and payload parsing."""

from typing import Annotated, Any, Optional, Type, TypeVar

from pydantic import BaseModel, BeforeValidator, ConfigDict
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel

from ..errors import ValidationError

ModelT = TypeVar("ModelT", bound=BaseModel)


class CamelModel(BaseModel):
    """Snake_case attributes, camelCase on the wire."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


def blank_to_none(value: Any) -> Any:
    """Treat empty strings as absent, as the HTTP clients send them."""
    if isinstance(value, str) and not value.strip():
        return None
    return value


# Optional text column; "" is stored as NULL
OptionalText = Annotated[Optional[str], BeforeValidator(blank_to_none)]


def describe_errors(exc) -> str:
    """Stable, field-level summary of a pydantic or request validation failure."""
    missing = []
    other: Optional[str] = None
    for error in exc.errors():
        field = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        if error.get("type") in ("missing", "string_too_short"):
            missing.append(field)
        elif other is None:
            other = f"{field}: {error.get('msg')}" if field else str(error.get("msg"))
    if missing:
        return f"Missing required fields: {', '.join(missing)}"
    return other or "Invalid request"


def parse(model: Type[ModelT], payload: Any) -> ModelT:
    """Validate ``payload`` into ``model``, raising the core ``ValidationError``."""
    try:
        return model.model_validate(payload)
    except PydanticValidationError as exc:
        raise ValidationError(describe_errors(exc)) from exc
