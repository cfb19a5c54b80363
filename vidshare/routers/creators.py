# routers/creators.py
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile

from vidshare import crud, schemas
from vidshare.blob_storage import ObjectStore, get_object_store, make_blob_name
from vidshare.database import Database, get_database
from vidshare.errors import ValidationError, dependency_errors

router = APIRouter()


@router.post("/upload", response_model=schemas.UploadResponse)
async def upload_video(
    video: Optional[UploadFile] = File(None),
    title: Optional[str] = Form(None),
    publisher: Optional[str] = Form(None),
    genre: Optional[str] = Form(None),
    age_rating: Optional[str] = Form(None, alias="ageRating"),
    creator_id: Optional[int] = Form(None, alias="creatorId"),
    db: Database = Depends(get_database),
    store: ObjectStore = Depends(get_object_store),
):
    """Upload a video file and its metadata.

    The blob is written before the row is inserted; a failed insert leaves
    the blob behind.
    """
    if video is None:
        raise ValidationError("No video uploaded")

    async with dependency_errors("Upload failed"):
        blob_name = make_blob_name(video.filename)
        blob_url = await store.put(blob_name, await video.read())

        await crud.create_video(
            db,
            title=title,
            publisher=publisher,
            genre=genre,
            age_rating=age_rating,
            blob_url=blob_url,
            creator_id=creator_id,
        )

    return {"message": "Video uploaded successfully", "url": blob_url}
