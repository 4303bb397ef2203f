"""Optional refinement of object fields into map<string, V> fields.

Off by default. A field becomes a map either because it is named in
GenerateOptions.map_fields ("Message.field") or, with detect_maps, because
every key of its objects looks like data rather than an identifier
(ids, dates, e-mail addresses). Message is the name derived from the JSON
key, before any clash suffix: "Item.tags" also applies to Item2.
"""

from __future__ import annotations

import re

from json_to_proto.inference.aggregator import FieldObservation
from json_to_proto.inference.context import BuildContext
from json_to_proto.inference.unifier import FieldShape, unify_field
from json_to_proto.models import STRUCT_IMPORT, VALUE_TYPE, GenerateOptions
from json_to_proto.naming import message_name_for

MAP_KEY_TYPE = "string"

_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


def is_map_field(message_name: str, obs: FieldObservation, options: GenerateOptions) -> bool:
    present = obs.present_values
    if not present or not all(isinstance(v, dict) for v in present):
        return False
    if f"{message_name}.{obs.name}" in options.map_fields:
        return True
    if options.detect_maps:
        keys = [key for value in present for key in value]
        return bool(keys) and not any(_IDENTIFIER.match(key) for key in keys)
    return False


def unify_map_values(obs: FieldObservation, path: str, ctx: BuildContext) -> FieldShape:
    """Unify every value under every key of a map field into one value type."""
    values = [v for entry in obs.present_values for v in entry.values()]
    if not values or any(isinstance(v, list) for v in values):
        return _value_fallback(path, ctx)

    shape = unify_field(FieldObservation(name=obs.name, values=values), path, ctx)
    if shape.message_name is not None:
        shape.message_name = message_name_for(obs.name, plural=True)
    return shape


def _value_fallback(path: str, ctx: BuildContext) -> FieldShape:
    ctx.add_import(STRUCT_IMPORT)
    ctx.warn(f"Map field '{path}' has values that cannot share one type; using {VALUE_TYPE}.")
    return FieldShape(VALUE_TYPE)
