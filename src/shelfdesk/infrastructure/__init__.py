"""Adapters to external systems (search backends)."""
