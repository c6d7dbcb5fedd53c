"""Directory handler mixins package.

Domain-specific handler mixins combined into the Directory class via
multiple inheritance:

- AdvocateHandlersMixin: Advocate listing (search, filters, cursor pagination)
"""

from advocates.services.directory.handlers.advocates import AdvocateHandlersMixin

__all__ = [
    'AdvocateHandlersMixin',
]
