from __future__ import annotations

from typing import Any, Dict, List, Tuple

from json_to_proto.inference.classifier import classify
from json_to_proto.models import GenerateOptions, TypeSignature

DOUBLE_WARNING = (
    "Numbers with a fractional part are mapped to double; "
    "precision beyond 2^53 is not guaranteed."
)


class BuildContext:
    """Mutable state of a single generate call.

    One instance is created per call and passed down the recursive synthesis,
    so concurrent calls never share imports, warnings or the message cache.
    """

    def __init__(self, options: GenerateOptions) -> None:
        self.options = options
        self.imports: Dict[str, None] = {}
        self.warnings: List[str] = []
        # (scope path, [name,] signature) -> registered nested message name
        self.message_cache: Dict[Tuple, str] = {}

    def classify(self, value: Any) -> TypeSignature:
        signature = classify(value)
        if signature is TypeSignature.DOUBLE:
            self.warn(DOUBLE_WARNING)
        return signature

    def add_import(self, path: str) -> None:
        self.imports[path] = None

    def warn(self, text: str) -> None:
        if text not in self.warnings:
            self.warnings.append(text)

    def sorted_imports(self) -> List[str]:
        return sorted(self.imports)
