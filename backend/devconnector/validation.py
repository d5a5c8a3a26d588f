"""Request field validation helpers and the 400 field-error shape.

Every write endpoint reports bad input the same way::

    {"errors": [{"msg": "...", "param": "status", "location": "body", "value": null}]}
"""

from typing import Annotated, Any

from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel, BeforeValidator, model_validator
from pydantic.networks import validate_email
from pydantic_core import PydanticCustomError


class RequestModel(BaseModel):
    """Request body whose absent keys are validated as explicit nulls.

    Missing required fields then fail in their own validator, under the key
    the client uses (the alias, e.g. ``from``), with the field's message.
    """

    @model_validator(mode="before")
    @classmethod
    def fill_missing_keys(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        data = dict(data)
        for name, field in cls.model_fields.items():
            if field.default is None:
                data.setdefault(field.alias or name, None)
        return data


def _blank_to_none(value: Any) -> Any:
    return None if value == "" else value


def _blank_to_false(value: Any) -> Any:
    return False if value in ("", None) else value


def optional(tp: Any = str) -> Any:
    """Annotated optional type where an empty string means "not set"."""
    return Annotated[tp | None, BeforeValidator(_blank_to_none)]


# Checkbox-style flag: "" and null read as false
Flag = Annotated[bool, BeforeValidator(_blank_to_false)]


def required(message: str, tp: Any = str) -> Any:
    """Annotated type that rejects missing or empty values with ``message``.

    Declare with a ``None`` default on a ``RequestModel``.
    """

    def check(value: Any) -> Any:
        if value is None or value == "":
            raise PydanticCustomError("required", message)
        return value

    return Annotated[tp | None, BeforeValidator(check)]


def present(message: str) -> Any:
    """Annotated str type that only requires the key to be sent."""

    def check(value: Any) -> Any:
        if value is None:
            raise PydanticCustomError("required", message)
        return value

    return Annotated[str | None, BeforeValidator(check)]


def email_address(message: str) -> Any:
    """Annotated str type accepting only a bare, syntactically valid address."""

    def check(value: Any) -> Any:
        if not isinstance(value, str):
            raise PydanticCustomError("email", message)
        try:
            _, address = validate_email(value)
        except PydanticCustomError:
            raise PydanticCustomError("email", message) from None
        # validate_email also accepts "Name <address>"
        if address.lower() != value.strip().lower():
            raise PydanticCustomError("email", message)
        return value

    return Annotated[str | None, BeforeValidator(check)]


def field_errors(exc: RequestValidationError) -> list[dict[str, Any]]:
    """Flatten FastAPI validation errors into field error objects."""
    errors = []
    for err in exc.errors():
        loc = err.get("loc") or ()
        errors.append(
            {
                "msg": err.get("msg", ""),
                "param": str(loc[-1]) if loc else "",
                "location": str(loc[0]) if loc else "",
                "value": err.get("input"),
            }
        )
    return errors
