"""Client and provider profile repository.

Both roles share one code path; the role only selects the table through
PROFILE_TABLES and the writable columns through PROFILE_FIELDS.
"""

import asyncpg
import structlog
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any
from config.constants import PROFILE_FIELDS, PROFILE_TABLES, Role
from profiles.errors import ProfileExists, StoreUnavailable

log = structlog.get_logger(__name__)

_STORE_ERRORS = (asyncpg.PostgresError, asyncpg.InterfaceError, OSError, TimeoutError)


class ProfileRepository:
    def __init__(self, pool: asyncpg.Pool) -> None:
        self._pool = pool

    @asynccontextmanager
    async def _connection(self, op: str, role: Role) -> AsyncIterator[asyncpg.Connection]:
        try:
            async with self._pool.acquire() as conn:
                yield conn
        except _STORE_ERRORS as e:
            log.error("profile_store_error", op=op, role=role.value, error=str(e))
            raise StoreUnavailable(f"{op} on {PROFILE_TABLES[role]} failed") from e

    @staticmethod
    def _columns(role: Role, fields: dict[str, Any]) -> list[str]:
        allowed = PROFILE_FIELDS[role]
        return [col for col in allowed if col in fields]

    async def exists(self, role: Role, user_id: str) -> bool:
        table = PROFILE_TABLES[role]
        async with self._connection("exists", role) as conn:
            found = await conn.fetchval(
                f"SELECT EXISTS(SELECT 1 FROM {table} WHERE user_id = $1)", user_id
            )
        return bool(found)

    async def fetch(self, role: Role, user_id: str) -> dict[str, Any] | None:
        table = PROFILE_TABLES[role]
        async with self._connection("fetch", role) as conn:
            row = await conn.fetchrow(
                f"SELECT * FROM {table} WHERE user_id = $1", user_id
            )
        return dict(row) if row else None

    async def create(self, role: Role, user_id: str, fields: dict[str, Any]) -> dict[str, Any]:
        """Insert the profile. Raises ProfileExists if the user already has one."""
        table = PROFILE_TABLES[role]
        cols = self._columns(role, fields)
        col_list = ", ".join(["user_id", *cols])
        values_list = ", ".join(f"${i}" for i in range(1, len(cols) + 2))
        async with self._connection("create", role) as conn:
            try:
                row = await conn.fetchrow(
                    f"INSERT INTO {table} ({col_list}) VALUES ({values_list}) RETURNING *",
                    user_id,
                    *(fields[c] for c in cols),
                )
            except asyncpg.UniqueViolationError as e:
                raise ProfileExists(f"{role.value} profile already exists") from e
        log.info("profile_created", role=role.value, user_id=user_id)
        return dict(row) if row else {"user_id": user_id, **{c: fields[c] for c in cols}}

    async def update(self, role: Role, user_id: str, fields: dict[str, Any]) -> dict[str, Any] | None:
        """Update the profile in place. Returns None if the user has none."""
        table = PROFILE_TABLES[role]
        cols = self._columns(role, fields)
        assignments = [f"{c} = ${i}" for i, c in enumerate(cols, start=2)]
        assignments.append("updated_at = NOW()")
        async with self._connection("update", role) as conn:
            row = await conn.fetchrow(
                f"UPDATE {table} SET {', '.join(assignments)} WHERE user_id = $1 RETURNING *",
                user_id,
                *(fields[c] for c in cols),
            )
        if row is None:
            return None
        log.info("profile_updated", role=role.value, user_id=user_id)
        return dict(row)
