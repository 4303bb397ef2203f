from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Optional, Tuple

DEFAULT_MESSAGE_NAME = "RootMessage"

VALUE_TYPE = "google.protobuf.Value"
ANY_TYPE = "google.protobuf.Any"

STRUCT_IMPORT = "google/protobuf/struct.proto"
ANY_IMPORT = "google/protobuf/any.proto"


class TypeSignature(Enum):
    """Closed set of shapes a single JSON value can have."""

    NULL = "null"
    ARRAY = "array"
    INT = "int"
    DOUBLE = "double"
    BOOL = "bool"
    STRING = "string"
    OBJECT = "object"


# TypeSignature -> proto3 scalar type
SCALAR_TYPE_MAP = {
    TypeSignature.INT: "int64",
    TypeSignature.DOUBLE: "double",
    TypeSignature.BOOL: "bool",
    TypeSignature.STRING: "string",
}

_ESCAPES = {"\n": "\\n", "\r": "\\r", "\t": "\\t", '"': '\\"', "\\": "\\\\"}


def escape_string(text: str) -> str:
    """Escape text for a double-quoted .proto string literal, as protoc's CEscape does."""
    out = []
    for ch in text:
        if ch in _ESCAPES:
            out.append(_ESCAPES[ch])
        elif ord(ch) < 0x20 or ord(ch) == 0x7F:
            out.append(f"\\{ord(ch):03o}")
        else:
            out.append(ch)
    return "".join(out)


@dataclass
class ProtoField:
    """A field declaration: [repeated] Type name = number;"""

    name: str
    type_name: str
    number: int
    is_repeated: bool = False
    json_name: Optional[str] = None
    key_type: Optional[str] = None

    @property
    def is_map(self) -> bool:
        return self.key_type is not None

    @property
    def declaration(self) -> str:
        if self.is_map:
            decl = f"map<{self.key_type}, {self.type_name}> {self.name} = {self.number}"
        else:
            rule = "repeated " if self.is_repeated else ""
            decl = f"{rule}{self.type_name} {self.name} = {self.number}"
        if self.json_name is not None:
            decl += f' [json_name = "{escape_string(self.json_name)}"]'
        return decl + ";"


@dataclass
class ProtoMessage:
    """A message definition, owning its nested messages."""

    name: str
    fields: List[ProtoField] = field(default_factory=list)
    nested_messages: List[ProtoMessage] = field(default_factory=list)

    def signature(self) -> Tuple:
        """Shape of the message, independent of its own name."""
        return (
            tuple((f.name, f.type_name, f.is_repeated, f.key_type) for f in self.fields),
            tuple((m.name, m.signature()) for m in self.nested_messages),
        )

    def find_nested(self, name: str) -> Optional[ProtoMessage]:
        for nested in self.nested_messages:
            if nested.name == name:
                return nested
        return None


@dataclass
class ProtoFile:
    """Top-level descriptor tree for one generated .proto file."""

    package: str = ""
    imports: List[str] = field(default_factory=list)
    messages: List[ProtoMessage] = field(default_factory=list)


@dataclass
class GenerateOptions:
    package_name: str = ""
    message_name: str = DEFAULT_MESSAGE_NAME
    emit_json_name: bool = False
    merge_identical_messages: bool = False
    map_fields: Tuple[str, ...] = ()
    detect_maps: bool = False
    allow_scalar_root: bool = True
    max_depth: int = 64


@dataclass
class GenerationResult:
    proto_text: str = ""
    warnings: List[str] = field(default_factory=list)
    proto_file: Optional[ProtoFile] = None
    error: Optional[Any] = None

    @property
    def ok(self) -> bool:
        return self.error is None
