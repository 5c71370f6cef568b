from __future__ import annotations

"""Coercion of inspector input against a field's declared constraints.

Form widgets hand back strings; these helpers turn them into the scalar type
the field declares and enforce min/max and option sets. Imported documents
are not passed through here.
"""

import math
import re
from typing import Any

from .models import FieldSpec

__all__ = ["coerce_value", "is_json_scalar"]

_HEX_COLOR = re.compile(r"^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")
_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off", ""}


def coerce_value(spec: FieldSpec, value: Any) -> Any:
    """Return *value* converted for *spec*.

    Numbers are clamped into ``[min, max]``. Raises ValueError when the value
    cannot be represented (non-numeric number, option outside the set,
    malformed colour).
    """
    if spec.kind == "number":
        return _clamp(spec, _to_number(value))
    if spec.kind == "checkbox":
        return _to_bool(value)
    if spec.kind == "select":
        for option in spec.options:
            if option == value or str(option) == str(value):
                return option
        raise ValueError(f"'{value}' is not one of {list(spec.options)} for '{spec.key}'")
    if spec.kind == "color":
        text = str(value).strip()
        if not _HEX_COLOR.match(text):
            raise ValueError(f"'{value}' is not a hex colour for '{spec.key}'")
        return text
    return "" if value is None else str(value)


def is_json_scalar(value: Any) -> bool:
    """True for values that can be stored in props: str, int, float, bool or None."""
    return value is None or isinstance(value, (str, int, float, bool))


def _to_number(value: Any) -> Any:
    if isinstance(value, bool):
        raise ValueError(f"Expected a number, got {value!r}")
    if isinstance(value, (int, float)):
        number = value
    else:
        text = str(value).strip()
        try:
            number = int(text)
        except ValueError:
            try:
                number = float(text)
            except ValueError:
                raise ValueError(f"Expected a number, got {value!r}") from None
    if isinstance(number, float):
        if not math.isfinite(number):
            raise ValueError(f"Expected a finite number, got {value!r}")
        if number.is_integer():
            number = int(number)
    return number


def _clamp(spec: FieldSpec, number: Any) -> Any:
    if spec.min is not None and number < spec.min:
        number = spec.min
    if spec.max is not None and number > spec.max:
        number = spec.max
    return number


def _to_bool(value: Any) -> bool:
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE:
            return True
        if lowered in _FALSE:
            return False
        raise ValueError(f"Expected a boolean, got {value!r}")
    return bool(value)
