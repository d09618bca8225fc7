"""
SQL DDL statements for all application tables.
Tables are created in dependency order so foreign keys resolve correctly.

Migration helpers run ALTER TABLE only when a column does not yet exist,
making them safe to call on every startup (idempotent).
"""
from elearning.db.database import get_connection

# ---------------------------------------------------------------------------
# DDL
# ---------------------------------------------------------------------------

CREATE_USERS_TABLE = """
CREATE TABLE IF NOT EXISTS users (
    id                INTEGER PRIMARY KEY AUTOINCREMENT,
    name              TEXT    NOT NULL,
    email             TEXT    NOT NULL UNIQUE,
    hashed_password   TEXT    NOT NULL,
    role              TEXT    NOT NULL DEFAULT 'USER'
                              CHECK(role IN ('USER', 'ADMIN')),
    profile_picture   TEXT,
    reset_token       TEXT,
    created_at        TEXT    NOT NULL DEFAULT (datetime('now')),
    updated_at        TEXT    NOT NULL DEFAULT (datetime('now'))
);
"""

CREATE_COURSES_TABLE = """
CREATE TABLE IF NOT EXISTS courses (
    id           INTEGER PRIMARY KEY AUTOINCREMENT,
    title        TEXT    NOT NULL,
    category     TEXT    NOT NULL,
    level        TEXT    NOT NULL
                         CHECK(level IN ('BEGINNER', 'INTERMEDIATE')),
    description  TEXT    NOT NULL,
    instructor   TEXT    NOT NULL,
    duration     INTEGER NOT NULL CHECK(duration >= 0),
    price        REAL    NOT NULL CHECK(price >= 0),
    created_by   INTEGER REFERENCES users(id) ON DELETE SET NULL,
    created_at   TEXT    NOT NULL DEFAULT (datetime('now')),
    updated_at   TEXT    NOT NULL DEFAULT (datetime('now'))
);
"""

CREATE_ENROLLMENTS_TABLE = """
CREATE TABLE IF NOT EXISTS enrollments (
    id          INTEGER PRIMARY KEY AUTOINCREMENT,
    user_id     INTEGER NOT NULL REFERENCES users(id) ON DELETE CASCADE,
    course_id   INTEGER NOT NULL REFERENCES courses(id) ON DELETE CASCADE,
    created_at  TEXT    NOT NULL DEFAULT (datetime('now')),
    UNIQUE(user_id, course_id)
);
"""

CREATE_INDEXES = [
    "CREATE INDEX IF NOT EXISTS ix_courses_category ON courses(category)",
    "CREATE INDEX IF NOT EXISTS ix_enrollments_user_id ON enrollments(user_id)",
]

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

ALL_TABLES = [
    CREATE_USERS_TABLE,
    CREATE_COURSES_TABLE,
    CREATE_ENROLLMENTS_TABLE,
]


def create_tables() -> None:
    """Create all tables and indexes; safe to run on every startup."""
    conn = get_connection()
    try:
        cursor = conn.cursor()

        for ddl in ALL_TABLES:
            cursor.execute(ddl)
        for ddl in CREATE_INDEXES:
            cursor.execute(ddl)

        conn.commit()
    finally:
        conn.close()
