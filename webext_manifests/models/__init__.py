"""Typed manifest models and the enums shared across the package."""
