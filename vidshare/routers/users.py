# routers/users.py
from typing import Any, Dict, List

from fastapi import APIRouter, Depends

from vidshare import crud, schemas
from vidshare.database import Database, get_database
from vidshare.errors import AuthenticationError, dependency_errors

router = APIRouter()


@router.post("/signup", response_model=schemas.MessageResponse)
async def signup_user(user: schemas.UserCreate, db: Database = Depends(get_database)):
    # Duplicate emails are left to the unique index on users
    async with dependency_errors("Signup failed"):
        await crud.create_user(
            db,
            username=user.username,
            email=user.email,
            password_hash=user.password_hash,
            role=user.role,
        )
    return {"message": "User registered successfully"}


@router.post("/login")
async def login_user(credentials: schemas.UserLogin, db: Database = Depends(get_database)):
    """Email matches case-insensitively, the password hash exactly.

    The returned user is the full row, password_hash included.
    """
    email = credentials.email.strip()
    password_hash = credentials.password_hash.strip()

    async with dependency_errors("Login failed"):
        user = await crud.get_user_by_credentials(db, email=email, password_hash=password_hash)

    if user is None:
        raise AuthenticationError("Invalid credentials")

    return {"message": "Login successful", "user": user}


@router.get("", response_model=List[Dict[str, Any]])
async def list_users(db: Database = Depends(get_database)):
    """Every user row, password hashes included. No authorization."""
    async with dependency_errors("Failed to fetch users"):
        return await crud.get_users(db)
