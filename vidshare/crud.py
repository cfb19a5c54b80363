# crud.py
import logging
from typing import Any, Dict, List, Optional

from vidshare.database import Database

logger = logging.getLogger(__name__)

# Columns are stored snake_case and returned under the service's wire names
VIDEO_FIELDS = {
    "id": "VideoID",
    "title": "Title",
    "publisher": "Publisher",
    "genre": "Genre",
    "age_rating": "AgeRating",
    "blob_url": "BlobURL",
    "creator_id": "CreatorID",
    "created_at": "CreatedAt",
}
COMMENT_FIELDS = {
    "id": "CommentID",
    "video_id": "VideoID",
    "user_id": "UserID",
    "comment_text": "CommentText",
    "created_at": "CreatedAt",
}
USER_FIELDS = {
    "id": "UserID",
    "username": "Username",
    "email": "Email",
    "password_hash": "PasswordHash",
    "role": "Role",
    "created_at": "CreatedAt",
}


def select_list(fields: Dict[str, str]) -> str:
    return ", ".join(f'{column} AS "{alias}"' for column, alias in fields.items())


# --- Statements ---
INSERT_VIDEO = """
    INSERT INTO videos (title, publisher, genre, age_rating, blob_url, creator_id, created_at)
    VALUES (%s, %s, %s, %s, %s, %s, CURRENT_TIMESTAMP)
"""
SELECT_LATEST_VIDEOS = f"SELECT {select_list(VIDEO_FIELDS)} FROM videos ORDER BY created_at DESC LIMIT %s"

INSERT_COMMENT = """
    INSERT INTO comments (video_id, user_id, comment_text, created_at)
    VALUES (%s, %s, %s, CURRENT_TIMESTAMP)
"""
SELECT_COMMENTS_FOR_VIDEO = (
    f"SELECT {select_list(COMMENT_FIELDS)} FROM comments WHERE video_id = %s ORDER BY created_at DESC"
)

INSERT_RATING = """
    INSERT INTO ratings (video_id, user_id, stars, created_at)
    VALUES (%s, %s, %s, CURRENT_TIMESTAMP)
"""
SELECT_RATING_SUMMARY = """
    SELECT AVG(stars::float) AS "AvgRating", COUNT(*) AS "TotalRatings"
    FROM ratings
    WHERE video_id = %s
"""

INSERT_USER = """
    INSERT INTO users (username, email, password_hash, role, created_at)
    VALUES (%s, %s, %s, %s, CURRENT_TIMESTAMP)
"""
SELECT_USER_BY_CREDENTIALS = f"""
    SELECT {select_list(USER_FIELDS)} FROM users
    WHERE lower(email) = lower(%s)
      AND password_hash = %s
"""
SELECT_USERS = f"SELECT {select_list(USER_FIELDS)} FROM users"

LATEST_VIDEOS_LIMIT = 10


# --- Video CRUD ---
async def create_video(db: Database, title: Optional[str], publisher: Optional[str], genre: Optional[str],
                       age_rating: Optional[str], blob_url: str, creator_id: Optional[int]) -> int:
    count = await db.execute(INSERT_VIDEO, (title, publisher, genre, age_rating, blob_url, creator_id))
    logger.info("Created video %r at %s", title, blob_url)
    return count


async def get_latest_videos(db: Database, limit: int = LATEST_VIDEOS_LIMIT) -> List[Dict[str, Any]]:
    return await db.execute(SELECT_LATEST_VIDEOS, (limit,))


# --- Comment CRUD ---
async def create_comment(db: Database, video_id: int, user_id: Optional[int], comment_text: Optional[str]) -> int:
    count = await db.execute(INSERT_COMMENT, (video_id, user_id, comment_text))
    logger.info("Created comment on video %s by user %s", video_id, user_id)
    return count


async def get_comments_for_video(db: Database, video_id: int) -> List[Dict[str, Any]]:
    return await db.execute(SELECT_COMMENTS_FOR_VIDEO, (video_id,))


# --- Rating CRUD ---
async def create_rating(db: Database, video_id: int, user_id: Optional[int], stars: int) -> int:
    count = await db.execute(INSERT_RATING, (video_id, user_id, stars))
    logger.info("Created rating for video %s by user %s: %s", video_id, user_id, stars)
    return count


async def get_rating_summary(db: Database, video_id: int) -> Dict[str, Any]:
    """AvgRating is NULL when the video has no ratings; TotalRatings is then 0."""
    rows = await db.execute(SELECT_RATING_SUMMARY, (video_id,))
    return rows[0]


# --- User CRUD ---
async def create_user(db: Database, username: Optional[str], email: Optional[str],
                      password_hash: Optional[str], role: Optional[str]) -> int:
    count = await db.execute(INSERT_USER, (username, email, password_hash, role))
    logger.info("Created user: %s", username)
    return count


async def get_user_by_credentials(db: Database, email: str, password_hash: str) -> Optional[Dict[str, Any]]:
    rows = await db.execute(SELECT_USER_BY_CREDENTIALS, (email, password_hash))
    return rows[0] if rows else None


async def get_users(db: Database) -> List[Dict[str, Any]]:
    return await db.execute(SELECT_USERS)
