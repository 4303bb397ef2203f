import json

from google.protobuf import descriptor_pb2 as d2
from google.protobuf import json_format, message_factory

from json_to_proto.engine import generate
from json_to_proto.generator.descriptor_builder import (
    build_descriptor_set,
    build_file_descriptor,
    load_file_descriptor,
)
from json_to_proto.models import GenerateOptions


def _load(raw, **kwargs):
    result = generate(raw, GenerateOptions(**kwargs))
    assert result.ok, result.error
    return load_file_descriptor(build_file_descriptor(result.proto_file, "sample.proto"))


class TestFileDescriptor:
    def test_package_and_nested_types(self):
        fd = _load('{"users": [{"id": 1}, {"id": 2, "name": "x"}]}', package_name="shop")
        assert fd.package == "shop"
        root = fd.message_types_by_name["RootMessage"]
        users = root.fields_by_name["users"]
        root_proto = d2.DescriptorProto()
        root.CopyToProto(root_proto)
        assert root_proto.field[0].label == d2.FieldDescriptorProto.LABEL_REPEATED
        assert users.message_type.full_name == "shop.RootMessage.User"
        user = root.nested_types_by_name["User"]
        assert user.fields_by_name["id"].type == user.fields_by_name["id"].TYPE_INT64
        assert user.fields_by_name["name"].number == 2

    def test_well_known_dependencies(self):
        fd = _load('{"a": null, "b": []}')
        root = fd.message_types_by_name["RootMessage"]
        assert root.fields_by_name["a"].message_type.full_name == "google.protobuf.Value"
        assert root.fields_by_name["b"].message_type.full_name == "google.protobuf.Any"

    def test_map_field_entry(self):
        fd = _load('{"prices": {"apple": 1.5}}', map_fields=("RootMessage.prices",))
        prices = fd.message_types_by_name["RootMessage"].fields_by_name["prices"]
        entry = prices.message_type
        assert entry.name == "PricesEntry"
        assert entry.GetOptions().map_entry is True
        assert entry.fields_by_name["value"].type == entry.fields_by_name["value"].TYPE_DOUBLE

    def test_json_name(self):
        result = generate('{"first-name": "x"}', GenerateOptions(emit_json_name=True))
        fdp = build_file_descriptor(result.proto_file)
        assert fdp.message_type[0].field[0].json_name == "first-name"

    def test_default_json_name(self):
        result = generate('{"userId": 1}')
        fdp = build_file_descriptor(result.proto_file)
        assert fdp.message_type[0].field[0].json_name == "userId"


class TestDescriptorSet:
    def test_includes_imports_first(self):
        result = generate('{"a": null}')
        fds = build_descriptor_set(result.proto_file, "sample.proto")
        assert [f.name for f in fds.file] == ["google/protobuf/struct.proto", "sample.proto"]

    def test_round_trips_through_bytes(self):
        result = generate('{"a": 1}')
        data = build_descriptor_set(result.proto_file).SerializeToString()
        fds = d2.FileDescriptorSet.FromString(data)
        assert fds.file[0].message_type[0].name == "RootMessage"


class TestSamplesConform:
    def test_samples_parse_into_generated_message(self):
        raw = '{"orderId": 7, "total": 9.5, "items": [{"sku": "a"}, {"sku": "b", "qty": 2}]}'
        fd = _load(raw, package_name="shop")
        cls = message_factory.GetMessageClass(fd.message_types_by_name["RootMessage"])
        msg = json_format.ParseDict(json.loads(raw), cls())
        assert msg.order_id == 7
        assert msg.total == 9.5
        assert [item.sku for item in msg.items] == ["a", "b"]
        assert msg.items[1].qty == 2
