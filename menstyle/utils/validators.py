"""Form validation on top of pydantic models.

Forms are declared as pydantic models; ``validate_form`` turns pydantic's
error list into the store's ``ValidationError`` with one message per field.
"""
from typing import Any, Mapping, Type, TypeVar

from pydantic import BaseModel, ValidationError as PydanticValidationError

from menstyle.errors import ValidationError

FormT = TypeVar("FormT", bound=BaseModel)


def validate_form(
    form_cls: Type[FormT],
    data: Mapping[str, Any] | BaseModel,
    messages: Mapping[str, str],
) -> FormT:
    """
    Validate ``data`` against ``form_cls``.

    Args:
        form_cls: Pydantic model describing the form
        data: Raw field values (or an already-built model)
        messages: Message per field; ``"field.error_type"`` keys override
            the message for one pydantic error type (e.g. ``"price.missing"``)

    Returns:
        The validated form

    Raises:
        ValidationError: listing every failing field
    """
    if isinstance(data, form_cls):
        return data
    if isinstance(data, BaseModel):
        data = data.model_dump()

    try:
        return form_cls.model_validate(dict(data))
    except PydanticValidationError as e:
        fields: dict[str, str] = {}
        for error in e.errors():
            name = str(error["loc"][0]) if error["loc"] else "form"
            message = (
                messages.get(f"{name}.{error['type']}")
                or messages.get(name)
                or error["msg"]
            )
            fields.setdefault(name, message)
        raise ValidationError(fields) from e
