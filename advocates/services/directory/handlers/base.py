"""Base class for Directory handler mixins."""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import asyncpg


class HandlerMixin:
    """Base mixin providing access to Directory dependencies.

    Handler mixins inherit from this to access shared resources.
    The actual implementations of these properties come from the
    Directory class that inherits from the mixins.

    Type hints are provided for IDE support.
    """

    # Provided by Directory class
    pool: 'asyncpg.Pool'
