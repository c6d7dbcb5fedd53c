"""Directory service: searchable, cursor-paginated advocate listing."""

from advocates.services.directory.core import Directory

__all__ = ['Directory']
