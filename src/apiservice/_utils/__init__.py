from ._form import to_form_data, to_multipart
from ._query import (
    QueryEncoder,
    QueryMapping,
    QueryScalar,
    QuerySequence,
    QueryValue,
    encode_query,
    to_query_value,
)
from ._request_spec import RequestSpec

__all__ = [
    "QueryEncoder",
    "QueryMapping",
    "QueryScalar",
    "QuerySequence",
    "QueryValue",
    "RequestSpec",
    "encode_query",
    "to_form_data",
    "to_multipart",
    "to_query_value",
]
