"""
Field-type inference for form controls that carry no explicit FieldType.
"""

from typing import Iterable

from formguard.input.validator import FieldType, FormField

KIND_TYPES = {
    "email": FieldType.EMAIL,
    "tel": FieldType.PHONE,
}


def infer_field_type(field: FormField, name_keywords: Iterable[str] = ("nom", "name")) -> FieldType:
    """
    Pick the validation rule for a field.

    An explicit ``field_type`` always wins. Otherwise the control kind
    decides for email and tel inputs, and a field called ``name`` or whose
    placeholder mentions one of ``name_keywords`` is treated as a person's
    name. This is a best-effort default; everything else is free text.
    """
    if field.field_type is not None:
        return field.field_type

    if field.kind in KIND_TYPES:
        return KIND_TYPES[field.kind]

    placeholder = field.placeholder.lower()
    if field.name == "name" or any(k.lower() in placeholder for k in name_keywords):
        return FieldType.NAME

    return FieldType.TEXT


def display_name(field: FormField) -> str:
    """Name used in messages and as the result key (repeats get a "#2", "#3" suffix): name, else kind, else "field"."""
    return field.name or field.kind or "field"
