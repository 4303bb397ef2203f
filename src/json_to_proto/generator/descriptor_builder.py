"""Export of the descriptor tree through the protobuf runtime.

build_file_descriptor produces the FileDescriptorProto protoc would emit for
the rendered .proto text; load_file_descriptor adds it to a fresh
DescriptorPool, which rejects a malformed schema.
"""

from __future__ import annotations

from google.protobuf import any_pb2, struct_pb2
from google.protobuf import descriptor_pb2 as d2
from google.protobuf import descriptor_pool

from json_to_proto.models import ANY_TYPE, VALUE_TYPE, ProtoField, ProtoFile, ProtoMessage
from json_to_proto.naming import to_lower_camel

SCALAR_TYPES = {
    "string": d2.FieldDescriptorProto.TYPE_STRING,
    "int64": d2.FieldDescriptorProto.TYPE_INT64,
    "double": d2.FieldDescriptorProto.TYPE_DOUBLE,
    "bool": d2.FieldDescriptorProto.TYPE_BOOL,
}

WELL_KNOWN_TYPES = {
    VALUE_TYPE: f".{VALUE_TYPE}",
    ANY_TYPE: f".{ANY_TYPE}",
}

# Import path -> generated module holding that file's descriptor
_DEPENDENCIES = {
    struct_pb2.DESCRIPTOR.name: struct_pb2,
    any_pb2.DESCRIPTOR.name: any_pb2,
}


def build_file_descriptor(proto_file: ProtoFile, file_name: str = "generated.proto") -> d2.FileDescriptorProto:
    fdp = d2.FileDescriptorProto(name=file_name, syntax="proto3")
    if proto_file.package:
        fdp.package = proto_file.package
    fdp.dependency.extend(proto_file.imports)

    scope = f".{proto_file.package}" if proto_file.package else ""
    for message in proto_file.messages:
        fdp.message_type.append(_build_message(message, scope))
    return fdp


def build_descriptor_set(proto_file: ProtoFile, file_name: str = "generated.proto") -> d2.FileDescriptorSet:
    """FileDescriptorSet of the generated file preceded by its imports."""
    fds = d2.FileDescriptorSet()
    for path in proto_file.imports:
        fds.file.append(d2.FileDescriptorProto.FromString(_DEPENDENCIES[path].DESCRIPTOR.serialized_pb))
    fds.file.append(build_file_descriptor(proto_file, file_name))
    return fds


def load_file_descriptor(fdp: d2.FileDescriptorProto):
    """Add fdp and its well-known dependencies to a new pool; return the FileDescriptor."""
    pool = descriptor_pool.DescriptorPool()
    for path in fdp.dependency:
        pool.AddSerializedFile(_DEPENDENCIES[path].DESCRIPTOR.serialized_pb)
    pool.AddSerializedFile(fdp.SerializeToString())
    return pool.FindFileByName(fdp.name)


def _build_message(message: ProtoMessage, scope: str) -> d2.DescriptorProto:
    full_name = f"{scope}.{message.name}"
    desc = d2.DescriptorProto(name=message.name)
    for nested in message.nested_messages:
        desc.nested_type.append(_build_message(nested, full_name))

    for field in message.fields:
        fd = desc.field.add(
            name=field.name,
            number=field.number,
            json_name=field.json_name or to_lower_camel(field.name),
        )
        if field.is_map:
            entry = _build_map_entry(field, full_name)
            desc.nested_type.append(entry)
            fd.label = d2.FieldDescriptorProto.LABEL_REPEATED
            fd.type = d2.FieldDescriptorProto.TYPE_MESSAGE
            fd.type_name = f"{full_name}.{entry.name}"
            continue

        if field.is_repeated:
            fd.label = d2.FieldDescriptorProto.LABEL_REPEATED
        else:
            fd.label = d2.FieldDescriptorProto.LABEL_OPTIONAL
        _set_type(fd, field.type_name, full_name)

    return desc


def _build_map_entry(field: ProtoField, scope: str) -> d2.DescriptorProto:
    """Synthesized <FieldName>Entry type backing a map<K, V> field."""
    camel = to_lower_camel(field.name)
    entry = d2.DescriptorProto(name=f"{camel[:1].upper()}{camel[1:]}Entry")
    entry.options.map_entry = True

    key = entry.field.add(name="key", number=1, json_name="key")
    key.label = d2.FieldDescriptorProto.LABEL_OPTIONAL
    _set_type(key, field.key_type, scope)

    value = entry.field.add(name="value", number=2, json_name="value")
    value.label = d2.FieldDescriptorProto.LABEL_OPTIONAL
    _set_type(value, field.type_name, scope)
    return entry


def _set_type(fd: d2.FieldDescriptorProto, type_name: str, scope: str) -> None:
    if type_name in SCALAR_TYPES:
        fd.type = SCALAR_TYPES[type_name]
    elif type_name in WELL_KNOWN_TYPES:
        fd.type = d2.FieldDescriptorProto.TYPE_MESSAGE
        fd.type_name = WELL_KNOWN_TYPES[type_name]
    else:
        # Message references always point at a direct nested type of the scope
        fd.type = d2.FieldDescriptorProto.TYPE_MESSAGE
        fd.type_name = f"{scope}.{type_name}"

