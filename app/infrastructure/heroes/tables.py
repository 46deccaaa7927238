"""
SQLAlchemy table definition for the heroes store.

Mirrors db/migrations/0001_create_heroes_table.sql. On PostgreSQL the
abilities column is a text[]; other dialects (SQLite in tests) store JSON.
"""

from sqlalchemy import (
    BigInteger,
    Boolean,
    Column,
    DateTime,
    Integer,
    JSON,
    MetaData,
    Table,
    Text,
    UniqueConstraint,
    false,
    text,
)
from sqlalchemy.dialects import postgresql

NAME_UNIQUE_CONSTRAINT = "uq_heroes_name"

metadata = MetaData()

heroes = Table(
    "heroes",
    metadata,
    Column(
        "id",
        BigInteger().with_variant(Integer, "sqlite"),
        primary_key=True,
        autoincrement=True,
    ),
    Column("first_seen", DateTime(timezone=True), nullable=False),
    Column("name", Text, nullable=False),
    Column("can_fly", Boolean, nullable=False, server_default=false()),
    Column("real_name", Text, nullable=True),
    Column(
        "abilities",
        JSON().with_variant(postgresql.ARRAY(Text), "postgresql"),
        nullable=False,
    ),
    Column("version", Integer, nullable=False, server_default=text("1")),
    UniqueConstraint("name", name=NAME_UNIQUE_CONSTRAINT),
    sqlite_autoincrement=True,
)
