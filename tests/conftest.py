import itertools
from datetime import datetime, timedelta

import pytest
from fastapi.testclient import TestClient

from vidshare import crud
from vidshare.config import Settings
from vidshare.main import create_app


class InMemoryDatabase:
    """Database double that understands the statements in vidshare.crud."""

    def __init__(self):
        self.tables = {"videos": [], "comments": [], "ratings": [], "users": []}
        self.statements = []
        self.fail_on = set()
        self._ids = itertools.count(1)
        self._clock = itertools.count()

    def _now(self):
        return datetime(2024, 1, 1) + timedelta(seconds=next(self._clock))

    def _insert(self, table, **values):
        row = {"id": next(self._ids), **values, "created_at": self._now()}
        self.tables[table].append(row)
        return 1

    @staticmethod
    def _newest_first(rows):
        return sorted(rows, key=lambda row: row["created_at"], reverse=True)

    @staticmethod
    def _aliased(row, fields):
        return {alias: row.get(column) for column, alias in fields.items()}

    async def execute(self, statement, params=()):
        self.statements.append((statement, tuple(params)))
        if statement in self.fail_on:
            raise RuntimeError("connection reset by peer")

        if statement is crud.INSERT_VIDEO:
            title, publisher, genre, age_rating, blob_url, creator_id = params
            return self._insert("videos", title=title, publisher=publisher, genre=genre,
                                age_rating=age_rating, blob_url=blob_url, creator_id=creator_id)
        if statement is crud.SELECT_LATEST_VIDEOS:
            (limit,) = params
            rows = self._newest_first(self.tables["videos"])[:limit]
            return [self._aliased(row, crud.VIDEO_FIELDS) for row in rows]
        if statement is crud.INSERT_COMMENT:
            video_id, user_id, comment_text = params
            return self._insert("comments", video_id=video_id, user_id=user_id, comment_text=comment_text)
        if statement is crud.SELECT_COMMENTS_FOR_VIDEO:
            (video_id,) = params
            rows = [row for row in self.tables["comments"] if row["video_id"] == video_id]
            return [self._aliased(row, crud.COMMENT_FIELDS) for row in self._newest_first(rows)]
        if statement is crud.INSERT_RATING:
            video_id, user_id, stars = params
            return self._insert("ratings", video_id=video_id, user_id=user_id, stars=stars)
        if statement is crud.SELECT_RATING_SUMMARY:
            (video_id,) = params
            stars = [row["stars"] for row in self.tables["ratings"] if row["video_id"] == video_id]
            avg = float(sum(stars)) / len(stars) if stars else None
            return [{"AvgRating": avg, "TotalRatings": len(stars)}]
        if statement is crud.INSERT_USER:
            username, email, password_hash, role = params
            return self._insert("users", username=username, email=email,
                                password_hash=password_hash, role=role)
        if statement is crud.SELECT_USER_BY_CREDENTIALS:
            email, password_hash = params
            return [self._aliased(row, crud.USER_FIELDS) for row in self.tables["users"]
                    if row["email"].lower() == email.lower() and row["password_hash"] == password_hash]
        if statement is crud.SELECT_USERS:
            return [self._aliased(row, crud.USER_FIELDS) for row in self.tables["users"]]
        raise AssertionError(f"unexpected statement: {statement}")


class InMemoryObjectStore:
    def __init__(self):
        self.objects = {}
        self.fail = False

    async def put(self, name, data):
        if self.fail:
            raise RuntimeError("The specified container does not exist.")
        self.objects[name] = data
        return f"https://vidshare.blob.core.windows.net/videos/{name}"


@pytest.fixture
def db():
    return InMemoryDatabase()


@pytest.fixture
def store():
    return InMemoryObjectStore()


@pytest.fixture
def client(db, store):
    app = create_app(database=db, object_store=store, settings=Settings(_env_file=None))
    return TestClient(app)
