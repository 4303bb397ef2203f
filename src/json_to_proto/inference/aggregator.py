from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Set

from json_to_proto.naming import to_snake_case


@dataclass
class FieldObservation:
    """Every raw value seen for one field at one nesting position."""

    name: str
    json_keys: List[str] = field(default_factory=list)
    values: List[Any] = field(default_factory=list)

    @property
    def present_values(self) -> List[Any]:
        return [v for v in self.values if v is not None]


def _entries(contribution: Any) -> Iterable:
    if isinstance(contribution, dict):
        return contribution.items()
    # Inner arrays of an array-of-arrays field are positional tuples
    if isinstance(contribution, list):
        return ((str(i), v) for i, v in enumerate(contribution))
    return ()


def aggregate_fields(contributions: Iterable[Any]) -> Dict[str, FieldObservation]:
    """Group the values of all contributions by normalized field name.

    Keys are kept in first-seen order across contributions. A key missing from
    a contribution is simply not observed there; only an explicit null is
    recorded as a value.
    """
    contributions = list(contributions)
    taken = {to_snake_case(key) for c in contributions for key, _ in _entries(c)}
    fields: Dict[str, FieldObservation] = {}
    for contribution in contributions:
        for key, value in _entries(contribution):
            name = to_snake_case(key) or _fallback_name(fields, key, taken)
            obs = fields.get(name)
            if obs is None:
                obs = FieldObservation(name=name)
                fields[name] = obs
            if key not in obs.json_keys:
                obs.json_keys.append(key)
            obs.values.append(value)
    return fields


def _fallback_name(fields: Dict[str, FieldObservation], key: str, taken: Set[str]) -> str:
    """Name for a key with no identifier characters ("", "$$").

    Never one of the names that real keys normalize to.
    """
    for obs in fields.values():
        if key in obs.json_keys:
            return obs.name
    name = f"field_{len(fields) + 1}"
    while name in fields or name in taken:
        name += "_"
    return name


def collect_elements(values: Iterable[Any]) -> List[Any]:
    """Flatten the list values of a repeated field into one element list."""
    elements: List[Any] = []
    for value in values:
        if isinstance(value, list):
            elements.extend(value)
    return elements
