"""
Heroes bounded context: application layer.

Use cases: create, get, list, update, delete heroes.
"""
