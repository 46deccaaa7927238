"""
Infrastructure adapters for the heroes bounded context.

Each adapter implements a domain port (ABC) and connects
to external systems, here the relational hero store.
"""
