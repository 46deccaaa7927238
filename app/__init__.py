"""
Hero Manager: versioned hero records over a relational store.

Application package root. This is a small service using
hexagonal architecture (ports & adapters) with domain-driven design.

Bounded contexts:
    - heroes: Hero CRUD with optimistic concurrency control.

Layers:
    - domain: Pure business logic, entities, validation, ports (ABCs), errors.
    - application: Use case orchestration (HeroService).
    - infrastructure: Adapters (SQLAlchemy) implementing domain ports.
    - interfaces: FastAPI routers, Pydantic schemas.
    - shared: Cross-cutting concerns (errors, security, logging, timeouts).
"""
