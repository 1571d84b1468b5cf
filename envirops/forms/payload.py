"""
JSON payload validation with WTForms.

Request bodies are flattened into a MultiDict using the WTForms naming
scheme (``items-0-quantity``) so the regular field coercion, validators and
nested FieldList/FormField handling apply to JSON APIs too.
"""
from typing import Any, Dict, List, Tuple

from werkzeug.datastructures import MultiDict
from wtforms import Field

from envirops.exceptions import ValidationError


def _scalar(value: Any) -> str:
    if isinstance(value, bool):
        return 'true' if value else 'false'
    return str(value)


def _flatten(payload: Dict[str, Any], prefix: str, pairs: List[Tuple[str, str]], objects: Dict[str, Any]) -> None:
    for key, value in payload.items():
        name = f"{prefix}{key}"
        if value is None:
            continue
        if isinstance(value, dict):
            # Free-form objects (equipment components) go through form ``data``
            if not prefix:
                objects[key] = value
            continue
        if isinstance(value, list):
            for index, entry in enumerate(value):
                if isinstance(entry, dict):
                    _flatten(entry, f"{name}-{index}-", pairs, objects)
                elif entry is not None:
                    pairs.append((name, _scalar(entry)))
            continue
        pairs.append((name, _scalar(value)))


def flatten_payload(payload: Dict[str, Any]) -> Tuple[MultiDict, Dict[str, Any]]:
    """
    Turn a JSON object into (formdata, objects).

    Example:
        {'client_id': 1, 'items': [{'quantity': 2}]}
        -> MultiDict([('client_id', '1'), ('items-0-quantity', '2')]), {}
    """
    pairs: List[Tuple[str, str]] = []
    objects: Dict[str, Any] = {}
    _flatten(payload, '', pairs, objects)
    return MultiDict(pairs), objects


def validate_payload(form_class, payload: Any, partial: bool = False) -> Dict[str, Any]:
    """
    Validate a JSON body and return the cleaned values of the keys it carries.

    Args:
        form_class: WTForms ``Form`` subclass describing the resource
        payload: decoded JSON body
        partial: PUT semantics, only the fields present are validated

    Raises:
        ValidationError: with ``{field: [messages]}``
    """
    if not isinstance(payload, dict):
        raise ValidationError({'body': ['Se esperaba un objeto JSON']})

    formdata, objects = flatten_payload(payload)
    form = form_class(formdata=formdata, data=objects)
    present = set(payload.keys())

    if partial:
        for name in list(form._fields):
            if name not in present:
                del form[name]

    errors = {}
    if partial:
        # Optional() lets null through; these columns cannot be cleared
        for name in getattr(form_class, 'not_null_fields', ()):
            if name in form._fields and form[name].data is None:
                errors[name] = ['Este campo no puede quedar vacío']

    for name in present & set(form._fields):
        if _is_list_field(form[name]) and payload[name] is not None and not isinstance(payload[name], list):
            errors[name] = ['Se esperaba una lista']

    if not form.validate() or errors:
        errors.update(form.errors)
        raise ValidationError(errors)

    cleaned = {name: field.data for name, field in form._fields.items() if name in present}
    if not partial:
        # Explicit nulls on create fall back to column defaults
        cleaned = {name: value for name, value in cleaned.items() if value is not None}
    return cleaned


def _is_list_field(field: Field) -> bool:
    return field.type == 'FieldList'
