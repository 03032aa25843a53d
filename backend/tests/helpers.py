"""HTTP helpers shared by the API tests."""

from httpx import AsyncClient


async def signup(client: AsyncClient, name="Ann", email="ann@mail.com", password="secret123"):
    return await client.post(
        "/signup",
        json={"name": name, "email": email, "password": password},
    )


async def create_profile(client: AsyncClient, image: bytes, content_type="image/png", **fields):
    data = {"name": "Ann", "mobile": "1234567890", "address": "1 Main St"}
    data.update(fields)
    return await client.post(
        "/api/users",
        data=data,
        files={"image": ("photo.png", image, content_type)},
    )
