"""Wayfarer: a data-driven text adventure runtime."""
