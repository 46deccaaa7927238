"""
Application layer package.

Contains use case orchestration. Coordinates domain validation and
repository ports without holding business rules of its own.
"""
