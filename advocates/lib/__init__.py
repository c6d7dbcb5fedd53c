"""Shared library code for advocates services."""
