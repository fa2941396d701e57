"""Functional modules."""
