"""Tests for place endpoints."""

import uuid

import pytest
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from staybook.models.place import Place
from staybook.models.user import User

pytestmark = pytest.mark.asyncio


# ---------------------------------------------------------------------------
# POST /api/places
# ---------------------------------------------------------------------------


class TestCreatePlace:
    """Tests for publishing places."""

    async def test_create_success(self, client: AsyncClient, auth_headers: dict, test_user: User) -> None:
        response = await client.post(
            "/api/places",
            json={
                "title": "Cabin by the lake",
                "address": "Lakeside Road 4",
                "photos": ["http://testserver/uploads/images/1.jpg", "http://testserver/uploads/images/2.jpg"],
                "description": "Wooden cabin with a sauna",
                "perks": ["parking", "pets", "parking"],
                "extra_info": "Bring towels",
                "check_in": "15:00",
                "check_out": "10:00",
                "max_guests": 5,
                "price": 140.0,
            },
            headers=auth_headers,
        )
        assert response.status_code == 200
        data = response.json()
        assert data["title"] == "Cabin by the lake"
        assert data["owner_id"] == str(test_user.id)
        assert data["photos"] == [
            "http://testserver/uploads/images/1.jpg",
            "http://testserver/uploads/images/2.jpg",
        ]
        assert data["perks"] == ["parking", "pets"]
        assert data["check_in"] == "15:00"
        assert data["max_guests"] == 5
        assert float(data["price"]) == 140.0
        assert "id" in data

    async def test_create_minimal(self, client: AsyncClient, auth_headers: dict) -> None:
        response = await client.post("/api/places", json={"title": "Just a title"}, headers=auth_headers)
        assert response.status_code == 200
        data = response.json()
        assert data["photos"] == []
        assert data["perks"] == []
        assert data["price"] is None

    async def test_owner_from_session_not_body(
        self, client: AsyncClient, auth_headers: dict, test_user: User, other_user: User
    ) -> None:
        response = await client.post(
            "/api/places",
            json={"title": "Sneaky", "owner_id": str(other_user.id)},
            headers=auth_headers,
        )
        assert response.status_code == 200
        assert response.json()["owner_id"] == str(test_user.id)

    async def test_create_unauthenticated(self, client: AsyncClient) -> None:
        response = await client.post("/api/places", json={"title": "No Auth"})
        assert response.status_code == 401
        assert response.json() == {"message": "Invalid token!"}

    async def test_create_missing_title(self, client: AsyncClient, auth_headers: dict) -> None:
        response = await client.post("/api/places", json={"address": "Nowhere"}, headers=auth_headers)
        assert response.status_code == 422

    async def test_create_invalid_max_guests(self, client: AsyncClient, auth_headers: dict) -> None:
        response = await client.post("/api/places", json={"title": "Tiny", "max_guests": 0}, headers=auth_headers)
        assert response.status_code == 422


# ---------------------------------------------------------------------------
# GET /api/user-places and GET /api/places
# ---------------------------------------------------------------------------


class TestListPlaces:
    async def test_user_places_returns_own_only(
        self, client: AsyncClient, auth_headers: dict, other_auth_headers: dict
    ) -> None:
        await client.post("/api/places", json={"title": "Mine 1"}, headers=auth_headers)
        await client.post("/api/places", json={"title": "Mine 2"}, headers=auth_headers)
        await client.post("/api/places", json={"title": "Theirs"}, headers=other_auth_headers)

        response = await client.get("/api/user-places", headers=auth_headers)
        assert response.status_code == 200
        titles = sorted(p["title"] for p in response.json())
        assert titles == ["Mine 1", "Mine 2"]

    async def test_user_places_unauthenticated(self, client: AsyncClient) -> None:
        response = await client.get("/api/user-places")
        assert response.status_code == 401

    async def test_list_all_is_public(self, client: AsyncClient, auth_headers: dict, other_auth_headers: dict) -> None:
        await client.post("/api/places", json={"title": "Mine"}, headers=auth_headers)
        await client.post("/api/places", json={"title": "Theirs"}, headers=other_auth_headers)

        response = await client.get("/api/places")
        assert response.status_code == 200
        assert sorted(p["title"] for p in response.json()) == ["Mine", "Theirs"]

    async def test_list_all_empty(self, client: AsyncClient) -> None:
        response = await client.get("/api/places")
        assert response.status_code == 200
        assert response.json() == []


# ---------------------------------------------------------------------------
# GET /api/places/{id}
# ---------------------------------------------------------------------------


class TestGetPlace:
    async def test_get_returns_stored_fields(self, client: AsyncClient, test_place: dict) -> None:
        response = await client.get(f"/api/places/{test_place['id']}")
        assert response.status_code == 200
        assert response.json() == test_place

    async def test_get_unknown_id(self, client: AsyncClient) -> None:
        response = await client.get(f"/api/places/{uuid.uuid4()}")
        assert response.status_code == 404
        assert response.json() == {"message": "Place not found!"}

    async def test_get_malformed_id(self, client: AsyncClient) -> None:
        response = await client.get("/api/places/not-a-uuid")
        assert response.status_code == 404


# ---------------------------------------------------------------------------
# PUT /api/places
# ---------------------------------------------------------------------------


class TestUpdatePlace:
    async def test_owner_update(self, client: AsyncClient, auth_headers: dict, test_place: dict) -> None:
        response = await client.put(
            "/api/places",
            json={"id": test_place["id"], "title": "Renamed Loft", "price": 99.5, "perks": ["wifi"]},
            headers=auth_headers,
        )
        assert response.status_code == 200
        assert response.json() == "ok"

        updated = (await client.get(f"/api/places/{test_place['id']}")).json()
        assert updated["title"] == "Renamed Loft"
        assert float(updated["price"]) == 99.5
        assert updated["perks"] == ["wifi"]
        # Fields not sent are left alone
        assert updated["address"] == test_place["address"]
        assert updated["photos"] == test_place["photos"]

    async def test_non_owner_forbidden_and_unchanged(
        self,
        client: AsyncClient,
        other_auth_headers: dict,
        test_place: dict,
        db_session: AsyncSession,
    ) -> None:
        response = await client.put(
            "/api/places",
            json={"id": test_place["id"], "title": "Hijacked"},
            headers=other_auth_headers,
        )
        assert response.status_code == 403
        assert response.json() == {"message": "You don't have permission to update this place!"}

        place = await db_session.get(Place, uuid.UUID(test_place["id"]))
        assert place is not None
        assert place.title == "Test Loft"

    async def test_update_unknown_place(self, client: AsyncClient, auth_headers: dict) -> None:
        response = await client.put(
            "/api/places",
            json={"id": str(uuid.uuid4()), "title": "Ghost"},
            headers=auth_headers,
        )
        assert response.status_code == 404

    async def test_update_unauthenticated(self, client: AsyncClient, test_place: dict) -> None:
        response = await client.put("/api/places", json={"id": test_place["id"], "title": "Anon"})
        assert response.status_code == 401

    async def test_update_without_id(self, client: AsyncClient, auth_headers: dict) -> None:
        response = await client.put("/api/places", json={"title": "No id"}, headers=auth_headers)
        assert response.status_code == 422

    @pytest.mark.parametrize("field", ["title", "photos", "perks"])
    async def test_null_for_required_field_rejected(
        self, client: AsyncClient, auth_headers: dict, test_place: dict, field: str
    ) -> None:
        response = await client.put(
            "/api/places",
            json={"id": test_place["id"], field: None},
            headers=auth_headers,
        )
        assert response.status_code == 422
        assert response.json()["message"] == "Invalid request!"

        # The listing is untouched and still readable.
        detail = await client.get(f"/api/places/{test_place['id']}")
        assert detail.status_code == 200
        assert detail.json()[field] == test_place[field]
        assert (await client.get("/api/places")).status_code == 200

    async def test_nullable_field_can_be_cleared(
        self, client: AsyncClient, auth_headers: dict, test_place: dict
    ) -> None:
        response = await client.put(
            "/api/places",
            json={"id": test_place["id"], "address": None},
            headers=auth_headers,
        )
        assert response.status_code == 200
        detail = (await client.get(f"/api/places/{test_place['id']}")).json()
        assert detail["address"] is None
        assert detail["title"] == "Test Loft"
