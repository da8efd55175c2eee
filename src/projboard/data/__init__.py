"""Persistence and remote store adapters."""
