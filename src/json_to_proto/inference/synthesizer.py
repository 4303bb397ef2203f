"""Builds the message descriptor tree from aggregated field observations.

Nested messages are owned by the message whose field introduced them and are
referenced from fields by name only. Within one parent, a nested message with
the same name and the same shape as an already registered one is reused
instead of being emitted twice; a same-named message with a different shape
gets a numeric suffix (Item, Item2). With merge_identical_messages, any
structurally identical sibling collapses to the first one regardless of name.
"""

from __future__ import annotations

from typing import Any, List, Optional

from json_to_proto.errors import NestingTooDeepError, UnsupportedRootTypeError
from json_to_proto.inference.aggregator import FieldObservation, aggregate_fields
from json_to_proto.inference.classifier import classify
from json_to_proto.inference.context import BuildContext
from json_to_proto.inference.refinement import MAP_KEY_TYPE, is_map_field, unify_map_values
from json_to_proto.inference.unifier import unify_field
from json_to_proto.models import DEFAULT_MESSAGE_NAME, ProtoField, ProtoMessage
from json_to_proto.naming import message_name_for, to_lower_camel, to_pascal_case

# Field that carries a root document which is not a JSON object
ROOT_VALUE_FIELD = "value"


def root_message_name(requested: str) -> str:
    if not to_pascal_case(requested or ""):
        return DEFAULT_MESSAGE_NAME
    return message_name_for(requested)


def synthesize_root(documents: List[Any], ctx: BuildContext) -> ProtoMessage:
    """Synthesize the root message, merging all documents as samples of one shape.

    A document that is not an object (scalar, null or array) contributes a
    single synthetic field named `value`.
    """
    name = root_message_name(ctx.options.message_name)
    contributions = []
    for doc in documents:
        if isinstance(doc, dict):
            contributions.append(doc)
        elif not ctx.options.allow_scalar_root:
            raise UnsupportedRootTypeError(classify(doc).value)
        else:
            contributions.append({ROOT_VALUE_FIELD: doc})

    path = ".".join(p for p in (ctx.options.package_name.strip(), name) if p)
    return synthesize_message(name, contributions, path, ctx)


def synthesize_message(
    name: str,
    contributions: List[Any],
    path: str,
    ctx: BuildContext,
    depth: int = 0,
) -> ProtoMessage:
    if depth > ctx.options.max_depth:
        raise NestingTooDeepError(path, ctx.options.max_depth)

    message = ProtoMessage(name=name)
    observations = aggregate_fields(contributions)

    for number, obs in enumerate(observations.values(), start=1):
        field_path = f"{path}.{obs.name}"
        key_type = None
        if is_map_field(name, obs, ctx.options):
            shape = unify_map_values(obs, field_path, ctx)
            key_type = MAP_KEY_TYPE
        else:
            shape = unify_field(obs, field_path, ctx)

        type_name = shape.type_name
        if shape.message_name is not None:
            nested = synthesize_message(
                shape.message_name, shape.contributions, field_path, ctx, depth + 1
            )
            type_name = _register_nested(message, nested, path, ctx)

        message.fields.append(
            ProtoField(
                name=obs.name,
                type_name=type_name,
                number=number,
                is_repeated=shape.is_repeated,
                json_name=_json_name(obs, ctx),
                key_type=key_type,
            )
        )

    return message


def _register_nested(
    parent: ProtoMessage,
    candidate: ProtoMessage,
    scope: str,
    ctx: BuildContext,
) -> str:
    """Attach candidate to parent unless an identical sibling exists; return its name."""
    signature = candidate.signature()
    if ctx.options.merge_identical_messages:
        key = (scope, signature)
    else:
        key = (scope, candidate.name, signature)

    cached = ctx.message_cache.get(key)
    if cached is not None:
        return cached

    base = candidate.name
    suffix = 2
    while parent.find_nested(candidate.name) is not None:
        candidate.name = f"{base}{suffix}"
        suffix += 1

    parent.nested_messages.append(candidate)
    ctx.message_cache[key] = candidate.name
    return candidate.name


def _json_name(obs: FieldObservation, ctx: BuildContext) -> Optional[str]:
    if not ctx.options.emit_json_name:
        return None
    key = obs.json_keys[0]
    if key == to_lower_camel(obs.name):
        return None
    return key
