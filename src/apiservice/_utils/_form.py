from typing import Any, Mapping

FormEntries = list[tuple[str, Any]]


def to_form_data(data: Mapping[str, Any]) -> FormEntries:
    """Convert a flat mapping into multipart entries.

    One entry per key, no flattening of nested values. Keys come out in
    reverse order of the mapping.
    """
    return [(key, data[key]) for key in reversed(list(data))]


def _is_file(value: Any) -> bool:
    # bytes, httpx (filename, content[, type]) tuples and open binary files
    return isinstance(value, (bytes, bytearray, tuple)) or hasattr(value, "read")


def _field_text(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, list):
        return ",".join(_field_text(item) for item in value)
    if value is None:
        return "null"
    return str(value)


def to_multipart(entries: FormEntries) -> FormEntries:
    """Shape entries for httpx's ``files=``.

    File-like values stay file parts. Everything else is sent as a plain text
    field, a part without a filename.
    """
    return [
        (key, value) if _is_file(value) else (key, (None, _field_text(value)))
        for key, value in entries
    ]
