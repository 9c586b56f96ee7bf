"""Bracket-notation query string encoding.

Values are described with a small tagged variant so the encoder never has to
guess whether something is a mapping or a list:

    >>> encode_query(to_query_value({"ids": [1, 2], "active": True}))
    'ids%5B%5D=1&ids%5B%5D=2&active=true'

Nested mappings are visited in reverse key order and their first key is
skipped. Existing servers depend on that payload shape, so it stays the
default; pass ``skip_first_nested_key=False`` to encode every key in its
own order.
"""

from dataclasses import dataclass, field
from typing import Any, Union
from urllib.parse import quote

# characters encodeURIComponent leaves untouched
_URI_COMPONENT_SAFE = "-_.!~*'()"


@dataclass(frozen=True)
class QueryScalar:
    value: Any = None


@dataclass(frozen=True)
class QuerySequence:
    items: list["QueryValue"] = field(default_factory=list)


@dataclass(frozen=True)
class QueryMapping:
    items: dict[str, "QueryValue"] = field(default_factory=dict)


QueryValue = Union[QueryScalar, QuerySequence, QueryMapping]


def to_query_value(obj: Any) -> QueryValue:
    """Build a tagged query value from plain Python data.

    ``dict`` becomes a mapping, ``list`` and ``tuple`` become a sequence and
    everything else (including callables) is a scalar. Values that are already
    tagged are returned as they are.
    """
    if isinstance(obj, (QueryScalar, QuerySequence, QueryMapping)):
        return obj
    if isinstance(obj, dict):
        return QueryMapping({str(k): to_query_value(v) for k, v in obj.items()})
    if isinstance(obj, (list, tuple)):
        return QuerySequence([to_query_value(v) for v in obj])
    return QueryScalar(obj)


def _stringify(value: Any) -> str:
    if callable(value):
        value = value()
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _encode_component(value: str) -> str:
    return quote(value, safe=_URI_COMPONENT_SAFE)


def _needs_index(item: QueryValue) -> bool:
    if isinstance(item, QueryScalar):
        return item.value is None
    return True


class QueryEncoder:
    def __init__(self, skip_first_nested_key: bool = True) -> None:
        self.skip_first_nested_key = skip_first_nested_key

    def pairs(self, value: QueryValue) -> list[str]:
        """Flatten ``value`` into ordered, encoded ``key=value`` strings."""
        out: list[str] = []
        self._build("", value, out)
        return out

    def encode(self, value: QueryValue) -> str:
        return "&".join(self.pairs(value)).replace("%20", "+")

    def _build(self, prefix: str, value: QueryValue, out: list[str]) -> None:
        if not prefix:
            for key, item in _top_level_items(value):
                self._build(key, item, out)
            return

        if isinstance(value, QuerySequence):
            for i, item in enumerate(value.items):
                if prefix.endswith("[]"):
                    self._add(prefix, item, out)
                else:
                    index = i if _needs_index(item) else ""
                    self._build(f"{prefix}[{index}]", item, out)
        elif isinstance(value, QueryMapping):
            keys = list(value.items)
            if self.skip_first_nested_key:
                keys = keys[:0:-1]
            for key in keys:
                self._build(f"{prefix}[{key}]", value.items[key], out)
        else:
            self._add(prefix, value, out)

    def _add(self, key: str, value: QueryValue, out: list[str]) -> None:
        raw = _untag(value)
        out.append(f"{_encode_component(key)}={_encode_component(_stringify(raw))}")


def _top_level_items(value: QueryValue) -> list[tuple[str, QueryValue]]:
    if isinstance(value, QueryMapping):
        return list(value.items.items())
    if isinstance(value, QuerySequence):
        return [(str(i), item) for i, item in enumerate(value.items)]
    return []


def encode_query(value: Any, *, skip_first_nested_key: bool = True) -> str:
    """Encode ``value`` (tagged or plain data) into a query string."""
    return QueryEncoder(skip_first_nested_key).encode(to_query_value(value))


def _untag(value: QueryValue) -> Any:
    # containers reached through a "[]" prefix are flattened to text
    if isinstance(value, QueryScalar):
        return value.value
    if isinstance(value, QuerySequence):
        return ",".join(_stringify(_untag(item)) for item in value.items)
    return {key: _untag(item) for key, item in value.items.items()}
