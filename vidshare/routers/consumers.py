# routers/consumers.py
from typing import Any, Dict, List

from fastapi import APIRouter, Depends

from vidshare import crud, schemas
from vidshare.database import Database, get_database
from vidshare.errors import ValidationError, dependency_errors

router = APIRouter()

STARS_MESSAGE = "Stars must be between 1 and 5"


def parse_stars(value: Any) -> int:
    """Whole numbers 1 to 5, sent as a JSON number or a numeric string."""
    if value is None or isinstance(value, bool):
        raise ValidationError(STARS_MESSAGE)
    try:
        stars = float(value)
    except (TypeError, ValueError):
        raise ValidationError(STARS_MESSAGE)
    if not stars.is_integer() or not (1 <= stars <= 5):
        raise ValidationError(STARS_MESSAGE)
    return int(stars)


@router.get("/latest", response_model=List[Dict[str, Any]])
async def list_latest_videos(db: Database = Depends(get_database)):
    """The ten most recently uploaded videos, newest first."""
    async with dependency_errors("Fetch failed"):
        return await crud.get_latest_videos(db)


@router.post("/{video_id}/comments", response_model=schemas.MessageResponse)
async def add_comment_to_video(
    video_id: int,
    comment: schemas.CommentCreate,
    db: Database = Depends(get_database),
):
    # No check that the video or the user exists
    async with dependency_errors("Failed to add comment"):
        await crud.create_comment(
            db,
            video_id=video_id,
            user_id=comment.user_id,
            comment_text=comment.comment_text,
        )
    return {"message": "Comment added"}


@router.get("/{video_id}/comments", response_model=List[Dict[str, Any]])
async def list_comments_for_video(video_id: int, db: Database = Depends(get_database)):
    async with dependency_errors("Failed to fetch comments"):
        return await crud.get_comments_for_video(db, video_id=video_id)


@router.post("/{video_id}/rate", response_model=schemas.MessageResponse)
async def rate_video(
    video_id: int,
    rating: schemas.RatingCreate,
    db: Database = Depends(get_database),
):
    stars = parse_stars(rating.stars)

    async with dependency_errors("Failed to rate video"):
        await crud.create_rating(db, video_id=video_id, user_id=rating.user_id, stars=stars)
    return {"message": "Rating submitted"}


@router.get("/{video_id}/ratings")
async def get_video_ratings(video_id: int, db: Database = Depends(get_database)):
    """Average stars and rating count; AvgRating is null for an unrated video."""
    async with dependency_errors("Failed to fetch ratings"):
        return await crud.get_rating_summary(db, video_id)
