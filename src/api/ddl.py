"""DDL helpers for the content tables."""

from __future__ import annotations

from sqlalchemy.engine import Engine

BLOG_TABLE = "blogs"
SERVICE_TABLE = "services"
TEAM_TABLE = "team_members"
CLIENTAGE_TABLE = "clientage_categories"
CONTACT_TABLE = "contacts"

CONTENT_TABLES: tuple[str, ...] = (
    BLOG_TABLE,
    SERVICE_TABLE,
    TEAM_TABLE,
    CLIENTAGE_TABLE,
    CONTACT_TABLE,
)

# Array columns hold JSON text; timestamps hold UTC ISO-8601 strings.
CONTENT_DDL: list[str] = [
    f"""
    CREATE TABLE IF NOT EXISTS {BLOG_TABLE} (
        id VARCHAR(32) PRIMARY KEY,
        title VARCHAR(300) NOT NULL,
        content TEXT NOT NULL,
        author VARCHAR(200) NOT NULL,
        image_url TEXT,
        image_public_id VARCHAR(300),
        category VARCHAR(200),
        tags_json TEXT NOT NULL DEFAULT '[]',
        is_published BOOLEAN NOT NULL DEFAULT TRUE,
        read_time INTEGER NOT NULL DEFAULT 1,
        created_at VARCHAR(40) NOT NULL,
        updated_at VARCHAR(40) NOT NULL
    )
    """,
    f"CREATE INDEX IF NOT EXISTS ix_{BLOG_TABLE}_category ON {BLOG_TABLE} (category)",
    f"""
    CREATE TABLE IF NOT EXISTS {SERVICE_TABLE} (
        id VARCHAR(32) PRIMARY KEY,
        service_name VARCHAR(100) NOT NULL,
        image_url TEXT NOT NULL,
        image_public_id VARCHAR(300),
        description TEXT NOT NULL,
        detail_benefits_json TEXT NOT NULL DEFAULT '[]',
        beneficiary TEXT NOT NULL,
        is_active BOOLEAN NOT NULL DEFAULT TRUE,
        created_at VARCHAR(40) NOT NULL,
        updated_at VARCHAR(40) NOT NULL
    )
    """,
    f"CREATE INDEX IF NOT EXISTS ix_{SERVICE_TABLE}_is_active ON {SERVICE_TABLE} (is_active)",
    f"""
    CREATE TABLE IF NOT EXISTS {TEAM_TABLE} (
        id VARCHAR(32) PRIMARY KEY,
        emp_id VARCHAR(32) NOT NULL UNIQUE,
        name VARCHAR(200) NOT NULL,
        qualification_json TEXT NOT NULL,
        experience INTEGER NOT NULL,
        expertise_json TEXT NOT NULL,
        department VARCHAR(200),
        role VARCHAR(200) NOT NULL,
        info TEXT NOT NULL,
        about_me TEXT NOT NULL,
        image_public_id VARCHAR(300) NOT NULL,
        image_url TEXT NOT NULL,
        is_active BOOLEAN NOT NULL DEFAULT TRUE,
        created_at VARCHAR(40) NOT NULL,
        updated_at VARCHAR(40) NOT NULL
    )
    """,
    f"CREATE INDEX IF NOT EXISTS ix_{TEAM_TABLE}_department ON {TEAM_TABLE} (department)",
    f"CREATE INDEX IF NOT EXISTS ix_{TEAM_TABLE}_role ON {TEAM_TABLE} (role)",
    f"""
    CREATE TABLE IF NOT EXISTS {CLIENTAGE_TABLE} (
        id VARCHAR(32) PRIMARY KEY,
        category_name VARCHAR(100) NOT NULL UNIQUE,
        client_types_json TEXT NOT NULL DEFAULT '[]',
        created_at VARCHAR(40) NOT NULL,
        updated_at VARCHAR(40) NOT NULL
    )
    """,
    (
        f"CREATE UNIQUE INDEX IF NOT EXISTS ux_{CLIENTAGE_TABLE}_name_ci "
        f"ON {CLIENTAGE_TABLE} (LOWER(category_name))"
    ),
    f"""
    CREATE TABLE IF NOT EXISTS {CONTACT_TABLE} (
        id VARCHAR(32) PRIMARY KEY,
        first_name VARCHAR(50) NOT NULL,
        last_name VARCHAR(50) NOT NULL,
        mobile_no VARCHAR(30) NOT NULL,
        email VARCHAR(320) NOT NULL,
        service VARCHAR(100) NOT NULL,
        query TEXT NOT NULL,
        status VARCHAR(20) NOT NULL DEFAULT 'pending',
        is_read BOOLEAN NOT NULL DEFAULT FALSE,
        created_at VARCHAR(40) NOT NULL,
        updated_at VARCHAR(40) NOT NULL
    )
    """,
    f"CREATE INDEX IF NOT EXISTS ix_{CONTACT_TABLE}_email ON {CONTACT_TABLE} (email)",
    f"CREATE INDEX IF NOT EXISTS ix_{CONTACT_TABLE}_status ON {CONTACT_TABLE} (status)",
    f"CREATE INDEX IF NOT EXISTS ix_{CONTACT_TABLE}_created_at ON {CONTACT_TABLE} (created_at)",
]


def apply_content_ddl(engine: Engine) -> None:
    """Apply content DDL statements in deterministic order."""

    with engine.begin() as connection:
        for statement in CONTENT_DDL:
            connection.exec_driver_sql(statement)
