"""SQLite schema for the document collections (code-first approach)."""

import logging

import aiosqlite


logger = logging.getLogger(__name__)


# Central list of all collections in the schema
COLLECTIONS = [
    "users",
    "tasks",
]


_TABLES = {
    "users": """
        CREATE TABLE IF NOT EXISTS users (
            _id TEXT PRIMARY KEY,
            auth0_id TEXT NOT NULL,
            email TEXT NOT NULL,
            name TEXT NOT NULL,
            created_at TEXT NOT NULL
        )
    """,
    "tasks": """
        CREATE TABLE IF NOT EXISTS tasks (
            _id TEXT PRIMARY KEY,
            title TEXT NOT NULL,
            description TEXT NOT NULL,
            status TEXT NOT NULL DEFAULT 'pending' CHECK (status IN ('pending', 'completed')),
            user_id TEXT NOT NULL,
            created_at TEXT NOT NULL,
            deleted_at TEXT
        )
    """,
}


_INDEXES = {
    "users": [
        "CREATE UNIQUE INDEX IF NOT EXISTS idx_users_auth0_id ON users (auth0_id)",
    ],
    "tasks": [
        "CREATE INDEX IF NOT EXISTS idx_tasks_user_id ON tasks (user_id)",
        "CREATE INDEX IF NOT EXISTS idx_tasks_user_deleted ON tasks (user_id, deleted_at)",
    ],
}


async def init_db(conn: aiosqlite.Connection) -> None:
    """Create all collections and their indexes if they do not exist yet."""
    for collection in COLLECTIONS:
        await conn.execute(_TABLES[collection])
        for index in _INDEXES[collection]:
            await conn.execute(index)
    await conn.commit()
    logger.info("Schema initialized", extra={"collections": COLLECTIONS})
