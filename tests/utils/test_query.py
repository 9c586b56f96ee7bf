from typing import Any
from urllib.parse import unquote_plus

import pytest

from apiservice import QueryMapping, QueryScalar, QuerySequence, encode_query
from apiservice._utils import QueryEncoder, to_query_value


def _decode(query: str) -> dict[str, Any]:
    """Rebuild nested data from a bracket-notation query string."""
    result: dict[str, Any] = {}
    for pair in query.split("&"):
        raw_key, _, raw_value = pair.partition("=")
        key, value = unquote_plus(raw_key), unquote_plus(raw_value)
        head, *rest = key.split("[")
        path = [head] + [part.rstrip("]") for part in rest]

        node: Any = result
        for part, following in zip(path, path[1:]):
            node = node.setdefault(part, [] if following == "" else {})
        if path[-1] == "":
            node.append(value)
        else:
            node[path[-1]] = value
    return result


class TestToQueryValue:
    def test_builds_tagged_values(self):
        value = to_query_value({"a": [1, {"b": None}], "c": (2,)})

        assert value == QueryMapping(
            {
                "a": QuerySequence(
                    [QueryScalar(1), QueryMapping({"b": QueryScalar(None)})]
                ),
                "c": QuerySequence([QueryScalar(2)]),
            }
        )

    def test_tagged_values_pass_through(self):
        value = QueryScalar("x")

        assert to_query_value(value) is value


class TestEncodeQuery:
    def test_arrays_and_flags(self):
        assert (
            encode_query({"ids": [1, 2], "active": True})
            == "ids%5B%5D=1&ids%5B%5D=2&active=true"
        )

    def test_top_level_keeps_every_key_in_order(self):
        assert encode_query({"b": 1, "a": 2, "c": 3}) == "b=1&a=2&c=3"

    def test_spaces_become_plus(self):
        assert encode_query({"q": "hello big world"}) == "q=hello+big+world"

    @pytest.mark.parametrize("value", [None, QueryScalar()])
    def test_null_is_empty(self, value):
        assert encode_query({"a": value}) == "a="

    def test_callable_is_invoked(self):
        assert encode_query({"a": lambda: "x y"}) == "a=x+y"

    def test_callable_returning_none_is_empty(self):
        assert encode_query({"a": lambda: None}) == "a="

    def test_numbers(self):
        assert encode_query({"a": 2.0, "b": 2.5, "c": 0}) == "a=2&b=2.5&c=0"

    def test_uri_component_escaping(self):
        assert encode_query({"a&b": "c=d/e"}) == "a%26b=c%3Dd%2Fe"
        assert encode_query({"s": "it's (ok)!*~"}) == "s=it's+(ok)!*~"

    def test_unicode(self):
        assert encode_query({"city": "Zürich"}) == "city=Z%C3%BCrich"

    def test_nested_mapping_reversed_without_first_key(self):
        query = encode_query({"filter": {"first": 1, "second": 2, "third": 3}})

        assert query == "filter%5Bthird%5D=3&filter%5Bsecond%5D=2"

    def test_nested_mapping_every_key_when_skip_disabled(self):
        query = encode_query(
            {"filter": {"first": 1, "second": 2}}, skip_first_nested_key=False
        )

        assert query == "filter%5Bfirst%5D=1&filter%5Bsecond%5D=2"

    def test_single_key_nested_mapping_is_dropped(self):
        assert encode_query({"page": 1, "sort": {"name": "asc"}}) == "page=1"

    def test_sequence_of_mappings_is_indexed(self):
        query = encode_query({"items": [{"id": 1, "name": "a"}]})

        assert query == "items%5B0%5D%5Bname%5D=a"

    def test_sequence_null_items_are_indexed(self):
        assert encode_query({"v": [None, 1]}) == "v%5B0%5D=&v%5B%5D=1"

    def test_nested_sequences(self):
        assert encode_query({"m": [[1, 2]]}) == "m%5B0%5D%5B%5D=1&m%5B0%5D%5B%5D=2"

    def test_bracketed_key_emits_items_directly(self):
        assert encode_query({"tags[]": ["a", "b"]}) == "tags%5B%5D=a&tags%5B%5D=b"

    def test_top_level_sequence_uses_indices(self):
        assert encode_query(["x", "y"]) == "0=x&1=y"

    def test_top_level_scalar_is_empty(self):
        assert encode_query(5) == ""
        assert encode_query({}) == ""

    def test_tagged_input(self):
        value = QueryMapping({"ids": QuerySequence([QueryScalar(3)])})

        assert encode_query(value) == "ids%5B%5D=3"


class TestQueryEncoder:
    def test_pairs_keep_percent_twenty(self):
        encoder = QueryEncoder()

        assert encoder.pairs(to_query_value({"q": "a b"})) == ["q=a%20b"]

    @pytest.mark.parametrize(
        "value",
        [
            {"user": {"name": "Ann Lee", "role": "admin"}, "tags": ["x", "y"]},
            {"page": 2, "filter": {"status": ["open", "closed"], "q": "a&b"}},
            {"items": [{"id": 1, "name": "a"}, {"id": 2, "name": "b"}]},
        ],
    )
    def test_decodes_to_original_structure(self, value):
        query = QueryEncoder(skip_first_nested_key=False).encode(to_query_value(value))

        assert _decode(query) == _expected(value)

    def test_decoded_structure_misses_first_nested_key(self):
        value = {"user": {"id": 1, "name": "Ann", "role": "admin"}, "page": 1}

        assert _decode(encode_query(value)) == {
            "user": {"role": "admin", "name": "Ann"},
            "page": "1",
        }


def _expected(value: Any) -> Any:
    # the query string only carries text; indexed sequences decode as mappings
    if isinstance(value, dict):
        return {k: _expected(v) for k, v in value.items()}
    if isinstance(value, list):
        if any(isinstance(v, (dict, list)) for v in value):
            return {str(i): _expected(v) for i, v in enumerate(value)}
        return [_expected(v) for v in value]
    return str(value)
