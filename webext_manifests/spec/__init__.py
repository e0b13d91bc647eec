"""Structural definition of the three manifest kinds.

1. Schema: JSON Schema describing each manifest kind
2. Schema validator: checks parsed JSON against those schemas
"""
