from __future__ import annotations

from typing import Any

from json_to_proto.models import TypeSignature

INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1


def classify(value: Any) -> TypeSignature:
    """Map a decoded JSON value to its TypeSignature.

    Integral floats (1.0) classify as INT, matching JSON's single number type.
    bool is checked before the numeric types since it subclasses int.
    """
    if value is None:
        return TypeSignature.NULL
    if isinstance(value, list):
        return TypeSignature.ARRAY
    if isinstance(value, bool):
        return TypeSignature.BOOL
    if isinstance(value, int):
        return TypeSignature.INT
    if isinstance(value, float):
        return TypeSignature.INT if value.is_integer() else TypeSignature.DOUBLE
    if isinstance(value, str):
        return TypeSignature.STRING
    if isinstance(value, dict):
        return TypeSignature.OBJECT
    raise TypeError(f"Not a JSON value: {type(value).__name__}")


def fits_int64(value: Any) -> bool:
    return INT64_MIN <= value <= INT64_MAX
