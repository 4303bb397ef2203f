import pytest

from json_to_proto.inference.aggregator import aggregate_fields, collect_elements
from json_to_proto.inference.classifier import classify, fits_int64
from json_to_proto.models import TypeSignature


class TestClassify:
    @pytest.mark.parametrize(
        "value, expected",
        [
            (None, TypeSignature.NULL),
            ([], TypeSignature.ARRAY),
            ([1, "a"], TypeSignature.ARRAY),
            (0, TypeSignature.INT),
            (-5, TypeSignature.INT),
            (2.0, TypeSignature.INT),
            (2.5, TypeSignature.DOUBLE),
            (True, TypeSignature.BOOL),
            (False, TypeSignature.BOOL),
            ("", TypeSignature.STRING),
            ({}, TypeSignature.OBJECT),
        ],
    )
    def test_signature(self, value, expected):
        assert classify(value) is expected

    def test_int64_bounds(self):
        assert fits_int64(2 ** 63 - 1)
        assert not fits_int64(2 ** 63)
        assert fits_int64(-(2 ** 63))


class TestAggregateFields:
    def test_first_seen_order(self):
        fields = aggregate_fields([{"b": 1, "a": 2}, {"c": 3, "a": 4}])
        assert list(fields) == ["b", "a", "c"]
        assert fields["a"].values == [2, 4]

    def test_absent_keys_are_not_null(self):
        fields = aggregate_fields([{"a": 1}, {"b": None}])
        assert fields["a"].values == [1]
        assert fields["b"].values == [None]
        assert fields["b"].present_values == []

    def test_json_keys_recorded(self):
        fields = aggregate_fields([{"userId": 1}, {"user_id": 2}, {"userId": 3}])
        assert fields["user_id"].json_keys == ["userId", "user_id"]

    def test_lists_are_positional(self):
        fields = aggregate_fields([[1, "a"], [2]])
        assert list(fields) == ["_0", "_1"]
        assert fields["_0"].values == [1, 2]
        assert fields["_1"].values == ["a"]

    def test_fallback_names_avoid_real_keys(self):
        fields = aggregate_fields([{"": 1, "$": 2, "field_1": 3}])
        assert list(fields) == ["field_1_", "field_2", "field_1"]
        assert fields["field_1"].values == [3]
        assert fields["field_1_"].json_keys == [""]

    def test_scalars_contribute_nothing(self):
        assert aggregate_fields([1, "x", None]) == {}

    def test_collect_elements(self):
        assert collect_elements([[1, 2], None, [3]]) == [1, 2, 3]
