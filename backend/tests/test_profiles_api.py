"""
ProfileDesk Backend — Profile Ingest & Image Endpoint Tests
============================================================

What we test:
    ✅ multipart ingest stores the row and the exact image bytes
    ✅ rejection order: 415 → 413 → missing fields → missing file
    ✅ a rejected upload leaves no row behind
    ✅ a repeated image part or a second file field → 400
    ✅ POST and GET render timestamps the same way (UTC)
    ✅ image fetch: malformed id → 400, unknown id / no image → 404
    ✅ listing is newest first and never carries image bytes
"""

import uuid
from datetime import datetime, timedelta, timezone

import pytest

from conftest import PNG_SIGNATURE
from helpers import create_profile
from profiledesk.models.profile import Profile


async def _count_profiles(client) -> int:
    response = await client.get("/api/users")
    return response.json()["count"]


class TestCreateProfile:

    @pytest.mark.asyncio
    async def test_create_and_fetch_image(self, test_client, sample_png_bytes):
        response = await create_profile(test_client, sample_png_bytes)

        assert response.status_code == 201
        body = response.json()
        assert body["success"] is True
        assert body["message"] == "User created successfully"
        assert body["data"]["name"] == "Ann"
        assert body["data"]["mobile"] == "1234567890"
        assert body["data"]["has_image"] is True
        assert "image_data" not in body["data"]

        image = await test_client.get(f"/api/users/{body['data']['id']}/image")
        assert image.status_code == 200
        assert image.headers["content-type"] == "image/png"
        assert image.content == sample_png_bytes

    @pytest.mark.asyncio
    async def test_fields_are_trimmed(self, test_client, sample_png_bytes):
        response = await create_profile(test_client, sample_png_bytes, name="  Ann  ")
        assert response.status_code == 201
        assert response.json()["data"]["name"] == "Ann"

    @pytest.mark.asyncio
    async def test_oversized_image_rejected(self, test_client):
        big = PNG_SIGNATURE + b"\0" * (6 * 1024 * 1024)

        response = await create_profile(test_client, big)

        assert response.status_code == 413
        assert response.json()["message"] == "File too large. Maximum size is 5MB"
        assert await _count_profiles(test_client) == 0

    @pytest.mark.asyncio
    async def test_non_image_rejected(self, test_client):
        response = await create_profile(test_client, b"just some text", content_type="text/plain")

        assert response.status_code == 415
        assert response.json()["message"] == "Only image files are allowed!"
        assert await _count_profiles(test_client) == 0

    @pytest.mark.asyncio
    async def test_type_is_checked_before_size(self, test_client):
        big_text = b"x" * (6 * 1024 * 1024)
        response = await create_profile(test_client, big_text, content_type="text/plain")
        assert response.status_code == 415

    @pytest.mark.asyncio
    @pytest.mark.parametrize("missing", ["name", "mobile", "address"])
    async def test_missing_text_field(self, test_client, sample_png_bytes, missing):
        response = await create_profile(test_client, sample_png_bytes, **{missing: ""})

        assert response.status_code == 400
        assert response.json()["message"] == "Name, mobile, and address are required"
        assert await _count_profiles(test_client) == 0

    @pytest.mark.asyncio
    async def test_missing_file(self, test_client):
        response = await test_client.post(
            "/api/users",
            data={"name": "Ann", "mobile": "1234567890", "address": "1 Main St"},
        )

        assert response.status_code == 400
        assert response.json()["message"] == "Image is required"

    @pytest.mark.asyncio
    async def test_repeated_image_part_rejected(self, test_client, sample_png_bytes):
        response = await test_client.post(
            "/api/users",
            data={"name": "Ann", "mobile": "1234567890", "address": "1 Main St"},
            files=[
                ("image", ("a.txt", b"plain text", "text/plain")),
                ("image", ("b.png", sample_png_bytes, "image/png")),
            ],
        )

        assert response.status_code == 400
        assert response.json()["message"] == "Only one image file is allowed"
        assert await _count_profiles(test_client) == 0

    @pytest.mark.asyncio
    async def test_second_file_field_rejected(self, test_client, sample_png_bytes):
        response = await test_client.post(
            "/api/users",
            data={"name": "Ann", "mobile": "1234567890", "address": "1 Main St"},
            files=[
                ("image", ("b.png", sample_png_bytes, "image/png")),
                ("other", ("c.png", sample_png_bytes, "image/png")),
            ],
        )

        assert response.status_code == 400
        assert response.json()["message"] == "Unexpected file field: other"
        assert await _count_profiles(test_client) == 0

    @pytest.mark.asyncio
    async def test_missing_fields_reported_before_missing_file(self, test_client):
        response = await test_client.post("/api/users", data={"name": "Ann"})

        assert response.status_code == 400
        assert response.json()["message"] == "Name, mobile, and address are required"


class TestReadProfiles:

    @pytest.mark.asyncio
    async def test_image_with_malformed_id(self, test_client):
        response = await test_client.get("/api/users/not-an-id/image")

        assert response.status_code == 400
        assert response.json()["message"] == "Invalid user ID format"

    @pytest.mark.asyncio
    async def test_image_for_unknown_id(self, test_client):
        response = await test_client.get(f"/api/users/{uuid.uuid4()}/image")

        assert response.status_code == 404
        assert response.json()["message"] == "Image not found"

    @pytest.mark.asyncio
    async def test_image_for_profile_without_image(self, test_client, app):
        async with app.state.context.session_factory() as session:
            profile = Profile(name="Bob", mobile="555", address="2 Side St")
            session.add(profile)
            await session.commit()
            profile_id = profile.id

        response = await test_client.get(f"/api/users/{profile_id}/image")

        assert response.status_code == 404
        assert response.json()["message"] == "Image not found"

    @pytest.mark.asyncio
    async def test_get_metadata(self, test_client, sample_png_bytes):
        created = (await create_profile(test_client, sample_png_bytes)).json()["data"]

        response = await test_client.get(f"/api/users/{created['id']}")

        assert response.status_code == 200
        assert response.json()["data"]["id"] == created["id"]
        assert response.json()["data"]["image_content_type"] == "image/png"

    @pytest.mark.asyncio
    async def test_timestamps_match_between_create_and_read(self, test_client, sample_png_bytes):
        created = (await create_profile(test_client, sample_png_bytes)).json()["data"]

        fetched = (await test_client.get(f"/api/users/{created['id']}")).json()["data"]
        listed = (await test_client.get("/api/users")).json()["data"][0]

        assert fetched["created_at"] == created["created_at"] == listed["created_at"]
        assert fetched["updated_at"] == created["updated_at"]
        assert created["created_at"].endswith("Z")

    @pytest.mark.asyncio
    @pytest.mark.parametrize("raw_id", ["not-an-id", str(uuid.uuid4())])
    async def test_get_metadata_missing(self, test_client, raw_id):
        response = await test_client.get(f"/api/users/{raw_id}")

        assert response.status_code == 404
        assert response.json()["message"] == "User not found"

    @pytest.mark.asyncio
    async def test_list_newest_first_without_bytes(self, test_client, app):
        base = datetime(2024, 1, 1, tzinfo=timezone.utc)
        async with app.state.context.session_factory() as session:
            for offset, name in enumerate(["first", "second", "third"]):
                session.add(Profile(
                    name=name,
                    mobile="555",
                    address="Somewhere",
                    image_data=PNG_SIGNATURE,
                    image_content_type="image/png",
                    created_at=base + timedelta(minutes=offset),
                ))
            await session.commit()

        response = await test_client.get("/api/users")

        assert response.status_code == 200
        body = response.json()
        assert body["count"] == 3
        assert [p["name"] for p in body["data"]] == ["third", "second", "first"]
        for item in body["data"]:
            assert "image_data" not in item

    @pytest.mark.asyncio
    async def test_list_skip_and_limit(self, test_client, sample_png_bytes):
        for name in ("a", "b", "c"):
            await create_profile(test_client, sample_png_bytes, name=name)

        response = await test_client.get("/api/users", params={"skip": 1, "limit": 1})

        assert response.json()["count"] == 1

    @pytest.mark.asyncio
    async def test_list_empty(self, test_client):
        response = await test_client.get("/api/users")

        assert response.status_code == 200
        assert response.json()["data"] == []
