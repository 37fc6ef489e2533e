"""Translate pydantic validation failures into field-level input errors."""

from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict, ValidationError

from .exceptions import InvalidInputError

ModelT = TypeVar("ModelT", bound=BaseModel)


def field_errors(error: ValidationError) -> dict[str, str]:
    """
    Flatten a pydantic ValidationError into ``{field_path: message}``.

    Nested locations are joined with dots, e.g. ``expenses.0.amount``.
    Model-level errors (raised by model validators) use the key ``__root__``.
    """
    errors: dict[str, str] = {}
    for item in error.errors():
        field = ".".join(str(part) for part in item["loc"]) or "__root__"
        message = item["msg"]
        # "Value error, X" -> "X" for errors raised inside validators
        if message.startswith("Value error, "):
            message = message[len("Value error, ") :]
        errors.setdefault(field, message)
    return errors


def validate_input(model: type[ModelT], **values: Any) -> ModelT:
    """
    Build and validate an input model.

    Raises:
        InvalidInputError: with one message per offending field
    """
    try:
        return model(**values)
    except ValidationError as e:
        raise InvalidInputError(field_errors(e)) from e


class CalculatorInput(BaseModel):
    """Base for calculator input schemas: finite numbers, no unknown fields."""

    model_config = ConfigDict(allow_inf_nan=False, extra="forbid")
