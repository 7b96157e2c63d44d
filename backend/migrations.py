# backend/migrations.py
"""
Forward-only schema management applied on every process start.

MIGRATIONS is an ordered list of named steps. Each step inspects the live
schema first and only acts when something is missing, so the whole list can
be re-run against an up-to-date database without side effects. Any error
propagates to the caller and aborts startup.
"""
import logging
from typing import Callable, List, Tuple

import sqlalchemy as sa
from alembic.migration import MigrationContext
from alembic.operations import Operations
from sqlalchemy.engine import Connection, Engine

from models.delegation import Delegation
from models.users import PROFILE_FIELDS, User

logger = logging.getLogger(__name__)

# A step returns True when it changed the schema
Step = Callable[[Operations, Connection], bool]


def _create_users_table(op: Operations, conn: Connection) -> bool:
    if sa.inspect(conn).has_table("users"):
        return False
    # Shape of the first release; profile columns are added by later steps
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("email", sa.String(255), nullable=False, unique=True),
        sa.Column("password", sa.String(255), nullable=False),
    )
    return True


def _add_column(table: str, column_name: str, column_type) -> Step:
    def step(op: Operations, conn: Connection) -> bool:
        existing = {c["name"] for c in sa.inspect(conn).get_columns(table)}
        if column_name in existing:
            return False
        op.add_column(table, sa.Column(column_name, column_type, nullable=True))
        return True

    return step


def _create_delegations_table(op: Operations, conn: Connection) -> bool:
    if sa.inspect(conn).has_table("delegations"):
        return False
    Delegation.__table__.create(conn)
    return True


MIGRATIONS: List[Tuple[str, Step]] = [
    ("create_users", _create_users_table),
    *[
        (f"add_users_{name}", _add_column("users", name, User.__table__.c[name].type))
        for name in PROFILE_FIELDS
    ],
    ("create_delegations", _create_delegations_table),
]


def apply_migrations(engine: Engine) -> List[str]:
    """Run every step in order; return the names of the steps that did work."""
    applied = []
    with engine.begin() as conn:
        op = Operations(MigrationContext.configure(conn))
        for name, step in MIGRATIONS:
            if step(op, conn):
                logger.info(f"Applied migration step {name}")
                applied.append(name)
    if not applied:
        logger.info("Schema up to date")
    return applied
