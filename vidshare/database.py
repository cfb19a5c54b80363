# database.py
import logging
from typing import Any, Dict, List, Optional, Protocol, Sequence, Union

from fastapi import Request
from psycopg.rows import dict_row
from psycopg_pool import AsyncConnectionPool

logger = logging.getLogger(__name__)

Rows = List[Dict[str, Any]]


class Database(Protocol):
    """Runs one parameterized statement; returns its rows, or the affected row count."""

    async def execute(self, statement: str, params: Sequence[Any] = ()) -> Union[Rows, int]:
        ...


class PostgresDatabase:
    def __init__(self, conninfo: str, min_size: int = 1, max_size: int = 10):
        self.conninfo = conninfo
        self.min_size = min_size
        self.max_size = max_size
        self.pool: Optional[AsyncConnectionPool] = None

    async def create_pool(self):
        """Create a connection pool to PostgreSQL using psycopg (async)"""
        if self.pool is not None:
            return self.pool

        try:
            self.pool = AsyncConnectionPool(
                conninfo=self.conninfo,
                min_size=self.min_size,
                max_size=self.max_size,
                open=False  # opened explicitly below
            )
            await self.pool.open()
            logger.info("Database connection pool created")
            return self.pool
        except Exception:
            logger.exception("Failed to create database pool")
            self.pool = None
            raise

    async def close_pool(self):
        if self.pool:
            await self.pool.close()
            logger.info("Database connection pool closed")
            self.pool = None

    async def execute(self, statement: str, params: Sequence[Any] = ()) -> Union[Rows, int]:
        if not self.pool:
            await self.create_pool()

        # The pool commits when the block exits cleanly and rolls back otherwise.
        async with self.pool.connection() as conn:
            async with conn.cursor(row_factory=dict_row) as cursor:
                await cursor.execute(statement, params)
                if cursor.description is None:
                    return cursor.rowcount
                return await cursor.fetchall()


# Dependency function for FastAPI
def get_database(request: Request) -> Database:
    return request.app.state.database


async def create_tables(db: Database):
    """Create all necessary tables"""
    await db.execute('''
        CREATE TABLE IF NOT EXISTS users (
            id SERIAL PRIMARY KEY,
            username VARCHAR(255) NOT NULL,
            email VARCHAR(255) NOT NULL,
            password_hash VARCHAR(255) NOT NULL,
            role VARCHAR(50),
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        );
    ''')

    # creator_id, video_id and user_id are plain integers: nothing checks they exist
    await db.execute('''
        CREATE TABLE IF NOT EXISTS videos (
            id SERIAL PRIMARY KEY,
            title VARCHAR(255),
            publisher VARCHAR(255),
            genre VARCHAR(100),
            age_rating VARCHAR(20),
            blob_url VARCHAR(1000) NOT NULL,
            creator_id INTEGER,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        );
    ''')

    await db.execute('''
        CREATE TABLE IF NOT EXISTS comments (
            id SERIAL PRIMARY KEY,
            video_id INTEGER,
            user_id INTEGER,
            comment_text TEXT,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        );
    ''')

    await db.execute('''
        CREATE TABLE IF NOT EXISTS ratings (
            id SERIAL PRIMARY KEY,
            video_id INTEGER,
            user_id INTEGER,
            stars INTEGER NOT NULL,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        );
    ''')

    await db.execute('CREATE UNIQUE INDEX IF NOT EXISTS idx_users_email_lower ON users (lower(email));')
    await db.execute('CREATE INDEX IF NOT EXISTS idx_videos_created_at ON videos(created_at DESC);')
    await db.execute('CREATE INDEX IF NOT EXISTS idx_comments_video_id ON comments(video_id);')
    await db.execute('CREATE INDEX IF NOT EXISTS idx_ratings_video_id ON ratings(video_id);')

    logger.info("Database tables created/verified successfully")
