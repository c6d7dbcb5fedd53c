"""Directory utility modules."""

from advocates.services.directory.utils.pagination import (
    CursorError,
    CursorPayload,
    decode_cursor,
    encode_cursor,
    hash_filters,
    paginate,
    validate_cursor,
)
from advocates.services.directory.utils.query_builder import (
    AdvocateQuery,
    FilterBuilder,
    build_advocate_query,
)

__all__ = [
    'AdvocateQuery',
    'CursorError',
    'CursorPayload',
    'FilterBuilder',
    'build_advocate_query',
    'decode_cursor',
    'encode_cursor',
    'hash_filters',
    'paginate',
    'validate_cursor',
]
