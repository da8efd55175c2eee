"""Adapters between the dashboard controller and a presentation layer."""
