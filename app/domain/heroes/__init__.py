"""
Heroes bounded context: domain layer.

This module contains all domain logic for hero management:
- The Hero entity and its versioning invariant
- Payload validation rules
- The repository port
- The error taxonomy
"""
