"""Common Marshmallow building blocks shared across resources.

Field errors are written as the *rule* part of a detail string so that
:func:`validation_details` only has to prefix them with the dotted field path
(``"restaurant.contact.email must be a valid email address"``).
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterator, Mapping, Sequence
from typing import Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from marshmallow import EXCLUDE, Schema, ValidationError, fields, pre_load, validate

MSG_REQUIRED = "is required"
MSG_EMAIL = "must be a valid email address"
MSG_MIN_LENGTH = "must be at least {min} characters long"
MSG_MAX_LENGTH = "must not exceed {max} characters long"
MSG_PASSWORD = "must be a valid password with at least {min} characters long"
MSG_INVALID = "is invalid"
# Marker for JSON type mismatches; these make the whole body an invalid request
MSG_WRONG_TYPE = "has the wrong type"

KNOWN_RULES = (
    MSG_REQUIRED,
    MSG_EMAIL,
    "must be at least ",
    "must not exceed ",
    "must be a valid password",
    MSG_INVALID,
)

_SCALAR_ERRORS = {
    "required": MSG_REQUIRED,
    "null": MSG_REQUIRED,
    "invalid": MSG_WRONG_TYPE,
}

PHONE_PREFIX_RE = re.compile(r"^\+\d{1,4}$")
PHONE_NUMBER_RE = re.compile(r"^\d{4,14}$")

PASSWORD_MIN_LENGTH = 8
PASSWORD_MAX_LENGTH = 128


class BaseSchema(Schema):
    """
    Request schema ignoring unknown keys.

    Missing nested objects are loaded as empty objects so that every missing
    inner field is reported individually (``restaurant.vat_code is required``).
    """

    class Meta:
        unknown = EXCLUDE

    @pre_load
    def _fill_missing_objects(self, data: Any, **_: Any) -> Any:
        if not isinstance(data, Mapping):
            return data
        missing = [
            name
            for name, field in self.load_fields.items()
            if isinstance(field, fields.Nested) and name not in data
        ]
        if missing:
            data = {**data, **{name: {} for name in missing}}
        return data


# --------------------------------------------------------------------------- #
# Field factories
# --------------------------------------------------------------------------- #


def text(
    *,
    min_length: int | None = None,
    max_length: int | None = None,
    rules: Sequence[Callable[[str], Any]] = (),
) -> fields.String:
    """
    Required, non-empty string.

    Checks run in order (presence, ``rules``, minimum, maximum) and only the
    first failure of a field is reported.
    """
    validators: list[Any] = [validate.Length(min=1, error=MSG_REQUIRED), *rules]
    if min_length is not None:
        validators.append(validate.Length(min=min_length, error=MSG_MIN_LENGTH))
    if max_length is not None:
        validators.append(validate.Length(max=max_length, error=MSG_MAX_LENGTH))
    return fields.String(required=True, validate=validators, error_messages=_SCALAR_ERRORS)


def optional_text(*, max_length: int) -> fields.String:
    return fields.String(
        load_default="",
        validate=validate.Length(max=max_length, error=MSG_MAX_LENGTH),
        error_messages={**_SCALAR_ERRORS, "null": MSG_INVALID},
    )


def email() -> fields.String:
    """Required email address, at most 254 characters."""
    return fields.String(
        required=True,
        validate=[
            validate.Length(min=1, error=MSG_REQUIRED),
            validate.Email(error=MSG_EMAIL),
            validate.Length(max=254, error=MSG_MAX_LENGTH),
        ],
        error_messages=_SCALAR_ERRORS,
    )


def password() -> fields.String:
    """Required password of at least eight characters."""
    validators = [
        validate.Length(min=1, error=MSG_REQUIRED),
        validate.Length(min=PASSWORD_MIN_LENGTH, error=MSG_PASSWORD),
        validate.Length(max=PASSWORD_MAX_LENGTH, error=MSG_MAX_LENGTH),
    ]
    return fields.String(
        required=True, load_only=True, validate=validators, error_messages=_SCALAR_ERRORS
    )


def country_code() -> fields.String:
    return text(min_length=2, max_length=2)


def postal_code() -> fields.String:
    return text(min_length=5, max_length=32)


def nested(schema: type[Schema]) -> fields.Nested:
    return fields.Nested(
        schema,
        required=True,
        error_messages={"required": MSG_REQUIRED, "null": MSG_REQUIRED, "type": MSG_WRONG_TYPE},
    )


# --------------------------------------------------------------------------- #
# Validators
# --------------------------------------------------------------------------- #


def validate_timezone(value: str) -> None:
    """Accept IANA zone names only (``Europe/Madrid``, ``UTC``)."""
    if not value:
        return
    try:
        ZoneInfo(value)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise ValidationError(MSG_INVALID) from exc


def validate_phone_prefix(value: str) -> None:
    if value and not PHONE_PREFIX_RE.match(value):
        raise ValidationError(MSG_INVALID)


def validate_phone_number(value: str) -> None:
    if value and not PHONE_NUMBER_RE.match(value):
        raise ValidationError(MSG_INVALID)


# --------------------------------------------------------------------------- #
# Error flattening
# --------------------------------------------------------------------------- #


def _walk(messages: Any, path: tuple[str, ...]) -> Iterator[tuple[tuple[str, ...], str]]:
    if isinstance(messages, Mapping):
        for key, value in messages.items():
            segment = () if key == "_schema" else (str(key),)
            yield from _walk(value, path + segment)
    elif isinstance(messages, (list, tuple)):
        for value in messages:
            yield from _walk(value, path)
    else:
        yield path, str(messages)


def has_type_errors(messages: Any) -> bool:
    """Return ``True`` when any field received a value of the wrong JSON type."""
    return any(
        msg == MSG_WRONG_TYPE or msg == "Invalid input type." for _, msg in _walk(messages, ())
    )


def validation_details(messages: Any) -> list[str]:
    """
    Flatten marshmallow messages into ``"<dotted.path> <rule>"`` strings.

    Messages that are not one of the known rules collapse to ``"is invalid"``.
    Only the first failing rule of each field is reported; field order is
    preserved.

    :param messages: ``ValidationError.normalized_messages()`` output.
    :returns: Detail strings.
    :rtype: list[str]
    """
    details: dict[tuple[str, ...], str] = {}
    for path, msg in _walk(messages, ()):
        if path in details:
            continue
        rule = msg if msg.startswith(KNOWN_RULES) else MSG_INVALID
        details[path] = f"{'.'.join(path)} {rule}".strip()
    return list(details.values())
