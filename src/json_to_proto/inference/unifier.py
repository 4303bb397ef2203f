"""Reduces the observed values of a field to one proto type and a label.

Ambiguity is never an error: it degrades to google.protobuf.Value (or Any for
arrays that never had an element) and records a warning for the field path.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Optional

from json_to_proto.inference.aggregator import FieldObservation, collect_elements
from json_to_proto.inference.classifier import fits_int64
from json_to_proto.inference.context import BuildContext
from json_to_proto.models import (
    ANY_IMPORT,
    ANY_TYPE,
    SCALAR_TYPE_MAP,
    STRUCT_IMPORT,
    VALUE_TYPE,
    TypeSignature,
)
from json_to_proto.naming import message_name_for

_NUMERIC = {TypeSignature.INT, TypeSignature.DOUBLE}


@dataclass
class FieldShape:
    """Unified type of a field.

    When message_name is set the field needs a nested message synthesized from
    contributions, and type_name is filled in by the synthesizer.
    """

    type_name: Optional[str] = None
    is_repeated: bool = False
    message_name: Optional[str] = None
    contributions: List[Any] = field(default_factory=list)


def unify_field(obs: FieldObservation, path: str, ctx: BuildContext) -> FieldShape:
    present = obs.present_values
    if not present:
        ctx.add_import(STRUCT_IMPORT)
        ctx.warn(f"Field '{path}' is null in every sample; using {VALUE_TYPE}.")
        return FieldShape(VALUE_TYPE)

    # A null next to one concrete type is an absent value, not an ambiguity
    signatures = _distinct_signatures(present, ctx)
    if len(signatures) > 1:
        return _widen_or_fallback(signatures, path, ctx, is_repeated=False)

    signature = signatures[0]
    if signature is TypeSignature.ARRAY:
        return unify_elements(obs.name, collect_elements(present), path, ctx)
    if signature is TypeSignature.OBJECT:
        return FieldShape(message_name=message_name_for(obs.name), contributions=present)
    return _scalar(signature, present, path, ctx, is_repeated=False)


def unify_elements(name: str, elements: List[Any], path: str, ctx: BuildContext) -> FieldShape:
    """Unify the elements of every array observed for a repeated field."""
    if not elements:
        ctx.add_import(ANY_IMPORT)
        ctx.warn(f"Field '{path}' is always an empty array; using repeated {ANY_TYPE}.")
        return FieldShape(ANY_TYPE, is_repeated=True)

    if any(e is None for e in elements):
        ctx.add_import(STRUCT_IMPORT)
        if all(e is None for e in elements):
            ctx.warn(f"Field '{path}' is null in every sample; using {VALUE_TYPE}.")
        else:
            ctx.warn(f"Field '{path}' contains null elements; using repeated {VALUE_TYPE}.")
        return FieldShape(VALUE_TYPE, is_repeated=True)

    signatures = _distinct_signatures(elements, ctx)
    if len(signatures) > 1:
        return _widen_or_fallback(signatures, path, ctx, is_repeated=True)

    signature = signatures[0]
    if signature in (TypeSignature.OBJECT, TypeSignature.ARRAY):
        return FieldShape(
            is_repeated=True,
            message_name=message_name_for(name, plural=True),
            contributions=elements,
        )
    return _scalar(signature, elements, path, ctx, is_repeated=True)


def _distinct_signatures(values: List[Any], ctx: BuildContext) -> List[TypeSignature]:
    signatures: List[TypeSignature] = []
    for value in values:
        signature = ctx.classify(value)
        if signature not in signatures:
            signatures.append(signature)
    return signatures


def _widen_or_fallback(
    signatures: List[TypeSignature],
    path: str,
    ctx: BuildContext,
    is_repeated: bool,
) -> FieldShape:
    if set(signatures) == _NUMERIC:
        return FieldShape(SCALAR_TYPE_MAP[TypeSignature.DOUBLE], is_repeated=is_repeated)

    ctx.add_import(STRUCT_IMPORT)
    listing = ", ".join(s.value for s in signatures)
    ctx.warn(f"Field '{path}' has mixed types ({listing}); using {VALUE_TYPE}.")
    return FieldShape(VALUE_TYPE, is_repeated=is_repeated)


def _scalar(
    signature: TypeSignature,
    values: List[Any],
    path: str,
    ctx: BuildContext,
    is_repeated: bool,
) -> FieldShape:
    if signature is TypeSignature.INT and not all(fits_int64(v) for v in values):
        ctx.warn(f"Field '{path}' has integers outside the int64 range.")
    return FieldShape(SCALAR_TYPE_MAP[signature], is_repeated=is_repeated)
