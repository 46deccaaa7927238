"""
Interface layer package.

FastAPI routers, dependency wiring and Pydantic schemas.
Routes translate HTTP into use case calls and nothing more.
"""
