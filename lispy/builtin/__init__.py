"""Builtin library: the fixed registry of primitive operations."""
