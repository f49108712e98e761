"""
VRCX Companion API — HTTP Endpoint Tests
=========================================

What:  End-to-end request → handler → service → SQLite → response checks.
How:   HTTPX AsyncClient over ASGITransport; storage failures are injected by
       overriding the get_db_session dependency with a failing mock session.

What we test:
    ✅ Probes: /health, /healthz, /v1/ping
    ✅ POST /api/notes → 204, then GET ?user_id= returns a one-element array
    ✅ Concurrent POSTs for one user leave exactly one submitted memo
    ✅ Malformed bodies → 400 with an empty body
    ✅ Empty-state: every list endpoint returns [] on a fresh schema
    ✅ Feed limit parsing and clamping over HTTP
    ✅ Storage failures → 500 text/plain naming the operation
    ✅ /v1/users → 200 [] even when storage fails
"""

import asyncio
from datetime import datetime

import pytest

from vrcx_api import __version__
from vrcx_api.database import get_db_session
from vrcx_api.models.user import User
from vrcx_api.services.favorite_service import favorite_service
from vrcx_api.services.feed_service import feed_service


@pytest.fixture
def broken_storage(test_app, failing_db_session):
    async def _failing_session():
        yield failing_db_session

    test_app.dependency_overrides[get_db_session] = _failing_session
    yield
    test_app.dependency_overrides.clear()


class TestProbes:

    @pytest.mark.asyncio
    async def test_health(self, test_client):
        response = await test_client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"ok": True}

    @pytest.mark.asyncio
    async def test_healthz_reports_version_and_time(self, test_client):
        response = await test_client.get("/healthz")
        assert response.status_code == 200
        body = response.json()
        assert body["ok"] is True
        assert body["version"] == __version__
        assert datetime.fromisoformat(body["time"]).utcoffset().total_seconds() == 0

    @pytest.mark.asyncio
    async def test_ping(self, test_client):
        response = await test_client.get("/v1/ping")
        assert response.status_code == 200
        assert response.json() == {"pong": True}

    @pytest.mark.asyncio
    async def test_request_id_is_echoed(self, test_client):
        response = await test_client.get("/api/notes", headers={"X-Request-ID": "abc12345"})
        assert response.headers["X-Request-ID"] == "abc12345"


class TestNotesEndpoints:

    @pytest.mark.asyncio
    async def test_post_then_get_single_user(self, test_client):
        response = await test_client.post("/api/notes", json={"user_id": "u1", "memo": "hello"})
        assert response.status_code == 204
        assert response.content == b""

        response = await test_client.get("/api/notes", params={"user_id": "u1"})
        assert response.status_code == 200
        body = response.json()
        assert len(body) == 1
        assert body[0]["user_id"] == "u1"
        assert body[0]["memo"] == "hello"
        datetime.fromisoformat(body[0]["edited_at"])

    @pytest.mark.asyncio
    async def test_unknown_user_is_empty_array(self, test_client):
        response = await test_client.get("/api/notes", params={"user_id": "ghost"})
        assert response.status_code == 200
        assert response.json() == []

    @pytest.mark.asyncio
    async def test_post_overwrites_and_lists_recent(self, test_client):
        await test_client.post("/api/notes", json={"user_id": "u1", "memo": "first"})
        await test_client.post("/api/notes", json={"user_id": "u2", "memo": "other"})
        await test_client.post("/api/notes", json={"user_id": "u1", "memo": "second"})

        body = (await test_client.get("/api/notes")).json()
        assert [(n["user_id"], n["memo"]) for n in body] == [("u1", "second"), ("u2", "other")]

    @pytest.mark.asyncio
    async def test_concurrent_posts_leave_one_submitted_value(self, test_client):
        submitted = [f"m{i}" for i in range(8)]

        responses = await asyncio.gather(*(
            test_client.post("/api/notes", json={"user_id": "racer", "memo": memo})
            for memo in submitted
        ))
        assert [r.status_code for r in responses] == [204] * len(submitted)

        body = (await test_client.get("/api/notes", params={"user_id": "racer"})).json()
        assert len(body) == 1
        assert body[0]["memo"] in submitted

    @pytest.mark.asyncio
    async def test_extra_fields_are_ignored(self, test_client):
        response = await test_client.post(
            "/api/notes", json={"user_id": "u1", "memo": "m", "edited_at": "1999-01-01"}
        )
        assert response.status_code == 204

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "payload",
        [
            {"user_id": "u1"},
            {"memo": "no user"},
            {"user_id": 42, "memo": "numeric id"},
            {"user_id": "u1", "memo": None},
            ["u1", "hello"],
        ],
    )
    async def test_wrong_shape_is_400(self, test_client, payload):
        response = await test_client.post("/api/notes", json=payload)
        assert response.status_code == 400
        assert response.content == b""

    @pytest.mark.asyncio
    async def test_invalid_json_is_400(self, test_client):
        response = await test_client.post(
            "/api/notes",
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )
        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_storage_failure_on_post_is_500(self, test_client, broken_storage):
        response = await test_client.post("/api/notes", json={"user_id": "u1", "memo": "x"})
        assert response.status_code == 500
        assert response.headers["content-type"].startswith("text/plain")
        assert response.text == "save memo failed"

    @pytest.mark.asyncio
    async def test_storage_failure_on_get_is_500(self, test_client, broken_storage):
        response = await test_client.get("/api/notes")
        assert response.status_code == 500
        assert response.text == "list recent memos failed"


class TestEmptyState:

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "path",
        [
            "/api/notes",
            "/api/favorites/worlds",
            "/api/favorites/avatars",
            "/api/feed/recent",
            "/v1/users",
        ],
    )
    async def test_lists_are_empty_arrays(self, test_client, path):
        response = await test_client.get(path)
        assert response.status_code == 200
        assert response.json() == []


class TestFavoritesEndpoints:

    @pytest.mark.asyncio
    async def test_worlds_newest_first(self, test_client, db_session):
        await favorite_service.add_favorite(
            db_session, "world", "wrld_1", group_name="worlds1", created_at="2024-01-01T00:00:00Z"
        )
        await favorite_service.add_favorite(
            db_session, "world", "wrld_2", created_at="2024-01-02T00:00:00Z"
        )
        await db_session.commit()

        body = (await test_client.get("/api/favorites/worlds")).json()
        assert body == [
            {"id": 2, "created_at": "2024-01-02T00:00:00Z", "item_id": "wrld_2", "group_name": None},
            {"id": 1, "created_at": "2024-01-01T00:00:00Z", "item_id": "wrld_1", "group_name": "worlds1"},
        ]

    @pytest.mark.asyncio
    async def test_avatars(self, test_client, db_session):
        await favorite_service.add_favorite(db_session, "avatar", "avtr_1")
        await db_session.commit()

        body = (await test_client.get("/api/favorites/avatars")).json()
        assert [item["item_id"] for item in body] == ["avtr_1"]

    @pytest.mark.asyncio
    async def test_storage_failure_is_500(self, test_client, broken_storage):
        response = await test_client.get("/api/favorites/avatars")
        assert response.status_code == 500
        assert response.text == "list favorite avatars failed"


class TestFeedEndpoint:

    @pytest.fixture
    def seed_feed(self, db_session):
        async def _seed(count):
            for i in range(count):
                await feed_service.record_event(
                    db_session, f"2024-05-01T12:00:{i:02d}Z", f'{{"type":"OnPlayerJoined","n":{i}}}'
                )
        return _seed

    @pytest.mark.asyncio
    async def test_entries_are_triples_newest_first(self, test_client, seed_feed):
        await seed_feed(2)

        body = (await test_client.get("/api/feed/recent")).json()
        assert body == [
            [2, "2024-05-01T12:00:01Z", '{"type":"OnPlayerJoined","n":1}'],
            [1, "2024-05-01T12:00:00Z", '{"type":"OnPlayerJoined","n":0}'],
        ]

    @pytest.mark.asyncio
    async def test_huge_limit_returns_all_rows(self, test_client, seed_feed):
        await seed_feed(10)

        response = await test_client.get("/api/feed/recent", params={"limit": "9999"})
        assert response.status_code == 200
        assert len(response.json()) == 10

    @pytest.mark.asyncio
    @pytest.mark.parametrize("limit, expected", [("3", 3), ("0", 1), ("-1", 1), ("abc", 10)])
    async def test_limit_parsing(self, test_client, seed_feed, limit, expected):
        await seed_feed(10)

        response = await test_client.get("/api/feed/recent", params={"limit": limit})
        assert response.status_code == 200
        assert len(response.json()) == expected

    @pytest.mark.asyncio
    async def test_default_limit(self, test_client, seed_feed):
        await seed_feed(60)

        response = await test_client.get("/api/feed/recent")
        assert len(response.json()) == 50

    @pytest.mark.asyncio
    async def test_storage_failure_is_500(self, test_client, broken_storage):
        response = await test_client.get("/api/feed/recent", params={"limit": "5"})
        assert response.status_code == 500
        assert response.text == "list recent feed failed"


class TestUsersEndpoint:

    @pytest.mark.asyncio
    async def test_users_ordered_by_name(self, test_client, db_session):
        db_session.add_all([User(name="Zed"), User(name="Amy")])
        await db_session.commit()

        body = (await test_client.get("/v1/users")).json()
        assert [u["name"] for u in body] == ["Amy", "Zed"]
        assert all(len(u["id"]) == 36 for u in body)

    @pytest.mark.asyncio
    async def test_storage_failure_is_empty_200(self, test_client, broken_storage):
        response = await test_client.get("/v1/users")
        assert response.status_code == 200
        assert response.json() == []
