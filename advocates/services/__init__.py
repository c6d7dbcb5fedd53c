"""Advocates services."""
