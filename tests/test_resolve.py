"""Tests for bindpath.resolve — {{path}} substitution in strings and prop trees."""

import pytest

from bindpath.resolve import Resolver, is_resolved, lookup, parse_path, resolve, resolve_deep, stringify
from bindpath.settings import BindingSettings


class TestParsePath:
    def test_dotted(self):
        assert parse_path("customer.name") == ["customer", "name"]

    def test_trims_segments(self):
        assert parse_path("  customer . name ") == ["customer", "name"]

    def test_bracket_index_alias(self):
        assert parse_path("items[0].price") == ["items", "0", "price"]

    def test_empty(self):
        assert parse_path("   ") == []


class TestLookup:
    def test_bare_reference(self):
        assert lookup({"name": "myapp"}, "name") == "myapp"

    def test_deeply_nested(self):
        assert lookup({"a": {"b": {"c": "deep"}}}, "a.b.c") == "deep"

    def test_array_index(self):
        data = {"items": [{"price": 1}, {"price": 2}]}
        assert lookup(data, "items.1.price") == 2

    def test_out_of_bounds_unresolved(self):
        assert not is_resolved(lookup({"items": [1]}, "items.3"))

    def test_non_numeric_index_on_list_unresolved(self):
        assert not is_resolved(lookup({"items": [1]}, "items.first"))

    def test_non_ascii_digit_index_unresolved(self):
        assert not is_resolved(lookup({"items": [1, 2, 3]}, "items.\u00b2"))

    def test_numeric_key_on_mapping(self):
        assert lookup({"codes": {"0": "zero"}}, "codes.0") == "zero"

    def test_missing_key_unresolved(self):
        assert not is_resolved(lookup({"a": {}}, "a.b"))

    def test_through_none_unresolved(self):
        assert not is_resolved(lookup({"a": None}, "a.b"))

    def test_terminal_none_resolves(self):
        value = lookup({"a": None}, "a")
        assert is_resolved(value)
        assert value is None

    def test_indexing_scalar_unresolved(self):
        assert not is_resolved(lookup({"name": "John"}, "name.first"))

    def test_indexing_string_by_position_unresolved(self):
        assert not is_resolved(lookup({"name": "John"}, "name.0"))

    def test_blocked_keys_never_traversed(self):
        data = {"constructor": "x", "obj": {"__proto__": {"polluted": True}}}
        assert not is_resolved(lookup(data, "constructor"))
        assert not is_resolved(lookup(data, "obj.__proto__.polluted"))


class TestStringify:
    def test_string(self):
        assert stringify("John") == "John"

    def test_numbers(self):
        assert stringify(42) == "42"
        assert stringify(29.99) == "29.99"

    def test_bool_and_none(self):
        assert stringify(True) == "true"
        assert stringify(False) == "false"
        assert stringify(None) == "null"

    def test_containers_compact_json(self):
        assert stringify({"a": 1, "b": [1, 2]}) == '{"a":1,"b":[1,2]}'

    def test_key_order_preserved(self):
        assert stringify({"z": 1, "a": 2}) == '{"z":1,"a":2}'

    def test_cyclic_container_does_not_raise(self):
        items: list = [1]
        items.append(items)
        assert isinstance(stringify(items), str)


class TestResolve:
    def test_substitution(self):
        assert resolve("Hi {{customer.name}}", {"customer": {"name": "John"}}) == "Hi John"

    @pytest.mark.parametrize("data", [None, {}, {"a": 1}, [1, 2], "scalar", 0])
    def test_identity_without_tokens(self, data):
        assert resolve("plain text with } and {", data) == "plain text with } and {"

    def test_unresolved_path_is_empty(self):
        assert resolve("{{a.b}}", {"a": {}}) == ""

    def test_unresolved_inside_text(self):
        assert resolve("Dear {{missing}}, hi", {"name": "x"}) == "Dear , hi"

    def test_interior_is_trimmed(self):
        assert resolve("{{  name  }}", {"name": "John"}) == "John"

    def test_multiple_tokens(self):
        data = {"host": "localhost", "port": 8080}
        assert resolve("{{host}}:{{port}}", data) == "localhost:8080"

    def test_array_path(self):
        data = {"items": [{"price": 29.99}]}
        assert resolve("Price: {{items.0.price}}", data) == "Price: 29.99"

    def test_object_value_stringified(self):
        assert resolve("{{c}}", {"c": {"n": 1}}) == '{"n":1}'

    def test_unclosed_token_left_untouched(self):
        assert resolve("Hi {{name", {"name": "John"}) == "Hi {{name"

    def test_unclosed_after_valid_token(self):
        data = {"a": "A", "b": "B"}
        assert resolve("{{a}} and {{b", data) == "A and {{b"

    def test_unmatched_open_before_valid_token(self):
        # the first {{ pairs with the first }} that follows it
        assert resolve("{{ x {{a}}", {"a": "A"}) == ""

    def test_empty_token(self):
        assert resolve("[{{}}]", {"a": 1}) == "[]"

    def test_stray_closer_untouched(self):
        assert resolve("a }} b", {"a": 1}) == "a }} b"

    def test_non_ascii_digit_segment_is_empty(self):
        assert resolve("[{{items.\u00b2}}]", {"items": [1]}) == "[]"

    def test_no_data_passthrough(self):
        assert resolve("Hi {{customer.name}}", None) == "Hi {{customer.name}}"

    def test_non_string_input_returned(self):
        assert resolve(42, {"a": 1}) == 42  # type: ignore[arg-type]


class TestResolveDeep:
    def test_simple_dict(self):
        assert resolve_deep({"title": "{{name}}"}, {"name": "app"}) == {"title": "app"}

    def test_nested_and_lists(self):
        data = {"x": "a", "y": "b"}
        props = {"outer": {"items": ["{{x}}", {"label": "{{y}}"}]}}
        assert resolve_deep(props, data) == {"outer": {"items": ["a", {"label": "b"}]}}

    def test_non_string_values_untouched(self):
        props = {"count": 5, "flag": True, "ratio": 3.14, "empty": None}
        assert resolve_deep(props, {"name": "app"}) == props

    def test_key_order_preserved(self):
        props = {"z": "{{a}}", "a": "{{a}}", "m": 1}
        assert list(resolve_deep(props, {"a": "A"})) == ["z", "a", "m"]

    def test_tuple_shape_preserved(self):
        assert resolve_deep(("{{a}}", 1), {"a": "A"}) == ("A", 1)

    def test_original_not_mutated(self):
        props = {"title": "{{name}}"}
        resolve_deep(props, {"name": "app"})
        assert props == {"title": "{{name}}"}

    def test_no_data_returns_same_object(self):
        props = {"title": "{{name}}", "rows": ["{{a}}"]}
        assert resolve_deep(props, None) is props

    def test_depth_guard_leaves_subtree_unresolved(self):
        settings = BindingSettings(max_resolve_depth=3)
        deep = {"l1": {"l2": {"l3": {"text": "{{a}}"}}}}
        result = resolve_deep({"top": "{{a}}", **deep}, {"a": "A"}, settings=settings)
        assert result["top"] == "A"
        assert result["l1"]["l2"]["l3"] == {"text": "{{a}}"}

    def test_cyclic_props_do_not_overflow(self):
        props: dict = {"text": "{{a}}"}
        props["self"] = props
        result = resolve_deep(props, {"a": "A"})
        assert result["text"] == "A"
        assert result["self"]["text"] == "A"

    def test_pathological_depth_does_not_raise(self):
        node: object = "{{a}}"
        for _ in range(5000):
            node = [node]
        resolve_deep(node, {"a": "A"})

    def test_deep_tuples_stop_at_maximum_depth(self):
        node: object = "{{a}}"
        for _ in range(5000):
            node = (node,)
        settings = BindingSettings(max_resolve_depth=512)
        resolve_deep(node, {"a": "A"}, settings=settings)

    def test_recursion_overflow_fails_closed(self, monkeypatch):
        node = [["{{a}}"]]
        resolver = Resolver({"a": "A"})

        def overflow(obj, depth):
            raise RecursionError

        monkeypatch.setattr(resolver, "_walk", overflow)
        assert resolver.resolve(node) is node


class TestResolver:
    def test_has_data(self):
        assert Resolver({"a": 1}).has_data
        assert not Resolver().has_data

    def test_empty_mapping_is_data(self):
        assert Resolver({}).resolve_text("{{a}}") == ""

    def test_resolver_is_reusable(self):
        r = Resolver({"a": "A"})
        assert r.resolve_text("{{a}}") == "A"
        assert r.resolve({"k": "{{a}}"}) == {"k": "A"}
