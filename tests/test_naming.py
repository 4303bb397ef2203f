import pytest

from json_to_proto.naming import (
    message_name_for,
    singularize,
    to_lower_camel,
    to_pascal_case,
    to_snake_case,
)


class TestSnakeCase:
    @pytest.mark.parametrize(
        "key, expected",
        [
            ("id", "id"),
            ("userId", "user_id"),
            ("UserID", "user_id"),
            ("HTTPServer", "http_server"),
            ("getHTTPResponse", "get_http_response"),
            ("user-name", "user_name"),
            ("first name", "first_name"),
            ("a1B", "a1_b"),
            ("__private__", "private"),
            ("2fa", "_2fa"),
            ("123", "_123"),
            ("price($)", "price"),
        ],
    )
    def test_conversion(self, key, expected):
        assert to_snake_case(key) == expected

    def test_empty(self):
        assert to_snake_case("") == ""

    def test_symbols_only(self):
        assert to_snake_case("$$-!") == ""

    @pytest.mark.parametrize("key", ["userId", "HTTPServer", "2fa", "a--b", "_x_"])
    def test_idempotent(self, key):
        once = to_snake_case(key)
        assert to_snake_case(once) == once


class TestPascalCase:
    @pytest.mark.parametrize(
        "name, expected",
        [
            ("user", "User"),
            ("user_id", "UserId"),
            ("order item", "OrderItem"),
            ("userId", "UserId"),
            ("RootMessage", "RootMessage"),
            ("user-id", "Userid"),
            ("_0", "0"),
        ],
    )
    def test_conversion(self, name, expected):
        assert to_pascal_case(name) == expected

    def test_empty(self):
        assert to_pascal_case("") == ""

    def test_symbols_only(self):
        assert to_pascal_case("$%&") == ""

    @pytest.mark.parametrize("name", ["line_items", "a b c", "XMLDoc"])
    def test_idempotent(self, name):
        once = to_pascal_case(name)
        assert to_pascal_case(once) == once


class TestLowerCamel:
    def test_snake_name(self):
        assert to_lower_camel("user_id") == "userId"

    def test_single_word(self):
        assert to_lower_camel("name") == "name"

    def test_leading_underscore(self):
        assert to_lower_camel("_0") == "0"


class TestSingularize:
    def test_plural(self):
        assert singularize("users") == "user"

    def test_ies_plural(self):
        assert singularize("categories") == "category"

    def test_last_segment_only(self):
        assert singularize("line_items") == "line_item"

    def test_already_singular(self):
        assert singularize("user") == "user"

    def test_positional_name_untouched(self):
        assert singularize("_0") == "_0"


class TestMessageNameFor:
    def test_object_field(self):
        assert message_name_for("shipping_address") == "ShippingAddress"

    def test_repeated_field(self):
        assert message_name_for("users", plural=True) == "User"

    def test_leading_digit(self):
        assert message_name_for("_0") == "Message0"

    def test_empty(self):
        assert message_name_for("") == "Message"
