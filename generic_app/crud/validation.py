"""Config-driven validation and coercion of submitted form values."""
import logging
import math
import re
from typing import Any, Callable, Dict, List, Optional, Tuple
from generic_app.config.domain import EntityConfig, FieldDefinition, FieldKind
from generic_app.crud.types import FormData

log = logging.getLogger(__name__)

TRUTHY_TOKENS = frozenset({"true", "on"})

# name -> callable returning an error message, or None when the value is valid
CustomValidator = Callable[[Any], Optional[str]]
CUSTOM_VALIDATORS: Dict[str, CustomValidator] = {}


def register_validator(name: str) -> Callable[[CustomValidator], CustomValidator]:
    """Register a named rule usable as ``FieldValidation.custom``."""
    def decorator(func: CustomValidator) -> CustomValidator:
        CUSTOM_VALIDATORS[name] = func
        return func
    return decorator


def is_empty(value: Any) -> bool:
    return value is None or value == ""


def _parse_number(raw: Any) -> float:
    text = str(raw).strip()
    try:
        return int(text)
    except ValueError:
        value = float(text)
    # "nan", "inf" and overflowing literals parse but are not numbers to store
    if not math.isfinite(value):
        raise ValueError(f"{text!r} is not a finite number")
    return value


def coerce_value(field: FieldDefinition, raw: Any) -> Any:
    """Convert a raw form value to the field's kind; raises ValueError for bad numbers."""
    if field.kind == FieldKind.NUMBER.value:
        return _parse_number(raw)
    if field.kind == FieldKind.BOOLEAN.value:
        return str(raw) in TRUTHY_TOKENS
    return raw


def _check_rules(field: FieldDefinition, raw: Any, value: Any) -> List[str]:
    rules = field.validation
    if rules is None:
        return []
    messages = []
    length = len(str(raw))
    if rules.min and length < rules.min:
        messages.append(f"{field.name} must be at least {rules.min} characters")
    if rules.max and length > rules.max:
        messages.append(f"{field.name} must be at most {rules.max} characters")
    if rules.pattern and not re.fullmatch(rules.pattern, str(raw)):
        messages.append(f"{field.name} has an invalid format")
    if rules.custom:
        validator = CUSTOM_VALIDATORS.get(rules.custom)
        if validator is None:
            log.warning("Unknown custom validator %s on field %s", rules.custom, field.name)
        else:
            message = validator(value)
            if message:
                messages.append(message)
    return messages


def validate_submission(entity: EntityConfig, form: FormData) -> Tuple[Dict[str, Any], Dict[str, List[str]]]:
    """
    Validate every editable field of a submission.

    Returns:
        (data, errors): the coerced values of the fields that were submitted,
        and field name -> messages for every field that failed
    """
    data: Dict[str, Any] = {}
    errors: Dict[str, List[str]] = {}

    for field in entity.editable_fields():
        raw = form.get(field.name)

        if is_empty(raw):
            if field.required:
                errors[field.name] = [f"{field.name} is required"]
            continue

        try:
            value = coerce_value(field, raw)
        except ValueError:
            errors[field.name] = [f"{field.name} must be a number"]
            continue

        messages = _check_rules(field, raw, value)
        if messages:
            errors[field.name] = messages
        data[field.name] = value

    return data, errors
