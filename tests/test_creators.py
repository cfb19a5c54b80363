from vidshare import crud

FORM = {
    "title": "Sunset",
    "publisher": "Harbour Films",
    "genre": "Documentary",
    "ageRating": "PG",
    "creatorId": "7",
}


def upload(client, filename="sunset.mp4", data=b"\x00\x01video-bytes", form=FORM):
    return client.post(
        "/creator/upload",
        data=form,
        files={"video": (filename, data, "video/mp4")},
    )


def test_upload_stores_blob_then_inserts_video(client, db, store):
    response = upload(client)

    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "Video uploaded successfully"

    (name, data), = store.objects.items()
    assert name.endswith("-sunset.mp4")
    assert name.split("-", 1)[0].isdigit()
    assert data == b"\x00\x01video-bytes"
    assert body["url"].endswith(name)

    (video,) = db.tables["videos"]
    assert video["blob_url"] == body["url"]
    assert video["title"] == "Sunset"
    assert video["publisher"] == "Harbour Films"
    assert video["genre"] == "Documentary"
    assert video["age_rating"] == "PG"
    assert video["creator_id"] == 7


def test_upload_without_creator_id(client, db):
    form = {key: value for key, value in FORM.items() if key != "creatorId"}
    response = upload(client, form=form)

    assert response.status_code == 200
    assert db.tables["videos"][0]["creator_id"] is None


def test_upload_without_file_is_rejected_before_any_write(client, db, store):
    response = client.post("/creator/upload", data=FORM)

    assert response.status_code == 400
    assert response.text == "No video uploaded"
    assert store.objects == {}
    assert db.statements == []


def test_uploaded_video_is_listed_as_latest(client):
    url = upload(client).json()["url"]

    latest = client.get("/videos/latest").json()
    assert [video["BlobURL"] for video in latest].count(url) == 1
    assert latest[0]["BlobURL"] == url
    assert set(latest[0]) == set(crud.VIDEO_FIELDS.values())
    assert latest[0]["Title"] == "Sunset"
    assert latest[0]["AgeRating"] == "PG"
    assert latest[0]["CreatorID"] == 7
    assert latest[0]["CreatedAt"] is not None


def test_failed_insert_leaves_orphaned_blob(client, db, store):
    db.fail_on.add(crud.INSERT_VIDEO)

    response = upload(client)

    assert response.status_code == 500
    assert response.text == "Upload failed: connection reset by peer"
    assert len(store.objects) == 1
    assert db.tables["videos"] == []


def test_blob_store_failure_skips_insert(client, db, store):
    store.fail = True

    response = upload(client)

    assert response.status_code == 500
    assert response.text.startswith("Upload failed: ")
    assert "container does not exist" in response.text
    assert db.statements == []


def test_non_integer_creator_id_is_a_bad_request(client, db, store):
    response = upload(client, form={**FORM, "creatorId": "seven"})

    assert response.status_code == 400
    assert response.text.startswith("Invalid request: ")
    assert "creatorId" in response.text
    assert store.objects == {}
    assert db.statements == []
