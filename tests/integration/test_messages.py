"""Tests for the admin message inbox."""

import asyncio
import math

import pytest
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from src.portfolio_api.models import ContactMessage, MessageStatus
from src.portfolio_api.repositories.query import MAX_OFFSET
from tests.factories import ContactMessageFactory
from tests.utils.db import before_local_midnight, persist, reload

pytestmark = [pytest.mark.integration, pytest.mark.asyncio]


class TestListMessages:
    async def test_requires_token(self, client: AsyncClient) -> None:
        response = await client.get("/api/messages")

        assert response.status_code == 401
        assert response.json() == {"error": "Access token required"}

    async def test_pages_partition_the_result(
        self, client: AsyncClient, db_session: AsyncSession, auth_headers: dict
    ) -> None:
        await persist(db_session, *ContactMessageFactory.batch(25))

        seen: list[int] = []
        for page in (1, 2, 3):
            response = await client.get(
                "/api/messages", params={"page": page, "limit": 10}, headers=auth_headers
            )
            assert response.status_code == 200
            body = response.json()
            assert body["success"] is True
            assert body["pagination"] == {"page": page, "limit": 10, "total": 25, "pages": 3}
            assert len(body["messages"]) <= 10
            seen.extend(m["id"] for m in body["messages"])

        assert len(seen) == 25
        assert len(set(seen)) == 25

    async def test_page_past_the_end_is_empty(
        self, client: AsyncClient, db_session: AsyncSession, auth_headers: dict
    ) -> None:
        await persist(db_session, *ContactMessageFactory.batch(3))

        response = await client.get("/api/messages", params={"page": 5}, headers=auth_headers)

        body = response.json()
        assert body["messages"] == []
        assert body["pagination"]["total"] == 3
        assert body["pagination"]["pages"] == 1

    async def test_enormous_page_is_clamped_not_an_error(
        self, client: AsyncClient, db_session: AsyncSession, auth_headers: dict
    ) -> None:
        await persist(db_session, *ContactMessageFactory.batch(2))

        response = await client.get(
            "/api/messages", params={"page": "9" * 20}, headers=auth_headers
        )

        assert response.status_code == 200
        body = response.json()
        assert body["messages"] == []
        assert body["pagination"]["page"] == MAX_OFFSET // 10 + 1
        assert body["pagination"]["total"] == 2

    async def test_empty_inbox_has_zero_pages(
        self, client: AsyncClient, auth_headers: dict
    ) -> None:
        response = await client.get("/api/messages", headers=auth_headers)

        body = response.json()
        assert body["messages"] == []
        assert body["pagination"] == {"page": 1, "limit": 10, "total": 0, "pages": 0}

    @pytest.mark.parametrize(
        ("page", "limit", "expected_page", "expected_limit"),
        [
            ("abc", "xyz", 1, 10),
            ("0", "0", 1, 10),
            ("-4", "-1", 1, 1),
            ("2abc", "5.7", 2, 5),
            ("1", "1000", 1, 100),
        ],
    )
    async def test_malformed_pagination_is_clamped(
        self,
        client: AsyncClient,
        auth_headers: dict,
        page: str,
        limit: str,
        expected_page: int,
        expected_limit: int,
    ) -> None:
        response = await client.get(
            "/api/messages", params={"page": page, "limit": limit}, headers=auth_headers
        )

        assert response.status_code == 200
        pagination = response.json()["pagination"]
        assert pagination["page"] == expected_page
        assert pagination["limit"] == expected_limit

    async def test_status_filter_and_count_agree(
        self, client: AsyncClient, db_session: AsyncSession, auth_headers: dict
    ) -> None:
        await persist(
            db_session,
            *ContactMessageFactory.batch(7, status=MessageStatus.READ.value),
            *ContactMessageFactory.batch(4, status=MessageStatus.UNREAD.value),
        )

        total_rows = 0
        response = await client.get(
            "/api/messages", params={"status": "read", "limit": 3}, headers=auth_headers
        )
        body = response.json()
        total = body["pagination"]["total"]
        assert total == 7
        assert body["pagination"]["pages"] == math.ceil(7 / 3)

        for page in range(1, body["pagination"]["pages"] + 1):
            response = await client.get(
                "/api/messages",
                params={"status": "read", "limit": 3, "page": page},
                headers=auth_headers,
            )
            rows = response.json()["messages"]
            assert all(row["status"] == "read" for row in rows)
            total_rows += len(rows)

        assert total_rows == total

    @pytest.mark.parametrize("status", ["all", ""])
    async def test_status_all_or_empty_means_no_filter(
        self, client: AsyncClient, db_session: AsyncSession, auth_headers: dict, status: str
    ) -> None:
        await persist(
            db_session,
            ContactMessageFactory.build(status=MessageStatus.READ.value),
            ContactMessageFactory.build(status=MessageStatus.ARCHIVED.value),
        )

        response = await client.get(
            "/api/messages", params={"status": status}, headers=auth_headers
        )

        assert response.json()["pagination"]["total"] == 2

    async def test_unknown_status_matches_nothing(
        self, client: AsyncClient, db_session: AsyncSession, auth_headers: dict
    ) -> None:
        await persist(db_session, *ContactMessageFactory.batch(2))

        response = await client.get(
            "/api/messages", params={"status": "bogus'; DROP TABLE x;--"}, headers=auth_headers
        )

        assert response.status_code == 200
        assert response.json()["pagination"]["total"] == 0

    async def test_search_is_case_insensitive_union_of_fields(
        self, client: AsyncClient, db_session: AsyncSession, auth_headers: dict
    ) -> None:
        by_name, by_email, by_message, _other = await persist(
            db_session,
            ContactMessageFactory.build(name="Widget Fan"),
            ContactMessageFactory.build(email="widgets@example.com"),
            ContactMessageFactory.build(message="I need a WIDGET dashboard"),
            ContactMessageFactory.build(name="Nobody", message="Unrelated"),
        )

        response = await client.get(
            "/api/messages", params={"search": "  wIdGeT "}, headers=auth_headers
        )

        ids = {m["id"] for m in response.json()["messages"]}
        assert ids == {by_name.id, by_email.id, by_message.id}

    async def test_search_treats_wildcards_literally(
        self, client: AsyncClient, db_session: AsyncSession, auth_headers: dict
    ) -> None:
        percent, _plain = await persist(
            db_session,
            ContactMessageFactory.build(message="Discount of 50% please"),
            ContactMessageFactory.build(message="No discount"),
        )

        response = await client.get(
            "/api/messages", params={"search": "%"}, headers=auth_headers
        )

        assert [m["id"] for m in response.json()["messages"]] == [percent.id]

    async def test_search_combines_with_status(
        self, client: AsyncClient, db_session: AsyncSession, auth_headers: dict
    ) -> None:
        match, _wrong_status = await persist(
            db_session,
            ContactMessageFactory.build(name="Target", status=MessageStatus.REPLIED.value),
            ContactMessageFactory.build(name="Target", status=MessageStatus.UNREAD.value),
        )

        response = await client.get(
            "/api/messages",
            params={"search": "target", "status": "replied"},
            headers=auth_headers,
        )

        assert [m["id"] for m in response.json()["messages"]] == [match.id]

    async def test_sort_by_name_ascending(
        self, client: AsyncClient, db_session: AsyncSession, auth_headers: dict
    ) -> None:
        await persist(
            db_session,
            ContactMessageFactory.build(name="Charlie"),
            ContactMessageFactory.build(name="Alice"),
            ContactMessageFactory.build(name="Bob"),
        )

        response = await client.get(
            "/api/messages", params={"sortBy": "name", "sortOrder": "asc"}, headers=auth_headers
        )

        assert [m["name"] for m in response.json()["messages"]] == ["Alice", "Bob", "Charlie"]

    async def test_unknown_sort_falls_back_to_newest_first(
        self, client: AsyncClient, db_session: AsyncSession, auth_headers: dict
    ) -> None:
        older, newer = await persist(
            db_session,
            ContactMessageFactory.build(created_at=before_local_midnight(days=2)),
            ContactMessageFactory.build(created_at=before_local_midnight(days=1)),
        )

        response = await client.get(
            "/api/messages",
            params={"sortBy": "id; DROP TABLE contact_messages", "sortOrder": "sideways"},
            headers=auth_headers,
        )

        assert response.status_code == 200
        assert [m["id"] for m in response.json()["messages"]] == [newer.id, older.id]

    async def test_listing_stats_cover_whole_table(
        self, client: AsyncClient, db_session: AsyncSession, auth_headers: dict
    ) -> None:
        await persist(
            db_session,
            ContactMessageFactory.build(status=MessageStatus.UNREAD.value),
            ContactMessageFactory.build(status=MessageStatus.UNREAD.value),
            ContactMessageFactory.build(status=MessageStatus.REPLIED.value),
            ContactMessageFactory.build(
                status=MessageStatus.READ.value, created_at=before_local_midnight(days=3)
            ),
        )

        response = await client.get(
            "/api/messages", params={"status": "replied"}, headers=auth_headers
        )

        body = response.json()
        assert body["pagination"]["total"] == 1
        assert body["stats"] == {"total": 4, "unread": 2, "replied": 1, "today": 3}


class TestGetMessage:
    async def test_first_fetch_marks_read(
        self, client: AsyncClient, db_session: AsyncSession, auth_headers: dict
    ) -> None:
        (message,) = await persist(db_session, ContactMessageFactory.build())

        response = await client.get(f"/api/messages/{message.id}", headers=auth_headers)

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["message"]["status"] == "read"
        assert body["message"]["read_at"] is not None

        stored = await reload(db_session, ContactMessage, message.id)
        assert stored is not None
        assert stored.status == MessageStatus.READ.value
        assert stored.read_at is not None

    async def test_second_fetch_changes_nothing(
        self, client: AsyncClient, db_session: AsyncSession, auth_headers: dict
    ) -> None:
        (message,) = await persist(db_session, ContactMessageFactory.build())

        first = (await client.get(f"/api/messages/{message.id}", headers=auth_headers)).json()
        second = (await client.get(f"/api/messages/{message.id}", headers=auth_headers)).json()

        assert second["message"]["read_at"] == first["message"]["read_at"]
        assert second["message"]["updated_at"] == first["message"]["updated_at"]

    async def test_non_unread_status_is_left_alone(
        self, client: AsyncClient, db_session: AsyncSession, auth_headers: dict
    ) -> None:
        (message,) = await persist(
            db_session, ContactMessageFactory.build(status=MessageStatus.ARCHIVED.value)
        )

        response = await client.get(f"/api/messages/{message.id}", headers=auth_headers)

        assert response.json()["message"]["status"] == "archived"
        assert response.json()["message"]["read_at"] is None

    async def test_concurrent_first_reads_both_succeed(
        self, client: AsyncClient, db_session: AsyncSession, auth_headers: dict
    ) -> None:
        (message,) = await persist(db_session, ContactMessageFactory.build())

        responses = await asyncio.gather(
            client.get(f"/api/messages/{message.id}", headers=auth_headers),
            client.get(f"/api/messages/{message.id}", headers=auth_headers),
        )

        assert all(r.status_code == 200 for r in responses)
        assert all(r.json()["message"]["status"] == "read" for r in responses)

    async def test_invalid_id(self, client: AsyncClient, auth_headers: dict) -> None:
        response = await client.get("/api/messages/abc", headers=auth_headers)

        assert response.status_code == 400
        assert response.json() == {"success": False, "message": "Invalid message ID"}

    async def test_missing_message(self, client: AsyncClient, auth_headers: dict) -> None:
        response = await client.get("/api/messages/9999", headers=auth_headers)

        assert response.status_code == 404
        assert response.json() == {"success": False, "message": "Message not found"}


class TestUpdateMessage:
    async def test_replied_stamps_once(
        self, client: AsyncClient, db_session: AsyncSession, auth_headers: dict
    ) -> None:
        (message,) = await persist(db_session, ContactMessageFactory.build())

        first = await client.put(
            f"/api/messages/{message.id}", json={"status": "replied"}, headers=auth_headers
        )
        assert first.status_code == 200
        data = first.json()["data"]
        assert data["status"] == "replied"
        assert data["replied_at"] is not None
        # Leaving unread also stamps read_at
        assert data["read_at"] is not None

        second = await client.put(
            f"/api/messages/{message.id}", json={"status": "replied"}, headers=auth_headers
        )
        assert second.json()["data"]["replied_at"] == data["replied_at"]
        assert second.json()["data"]["read_at"] == data["read_at"]

    async def test_admin_notes_only(
        self, client: AsyncClient, db_session: AsyncSession, auth_headers: dict
    ) -> None:
        (message,) = await persist(db_session, ContactMessageFactory.build())

        response = await client.put(
            f"/api/messages/{message.id}",
            json={"admin_notes": "Call back on Monday"},
            headers=auth_headers,
        )

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["data"]["admin_notes"] == "Call back on Monday"
        assert body["data"]["status"] == "unread"

    async def test_admin_notes_can_be_cleared(
        self, client: AsyncClient, db_session: AsyncSession, auth_headers: dict
    ) -> None:
        (message,) = await persist(
            db_session, ContactMessageFactory.build(admin_notes="old note")
        )

        response = await client.put(
            f"/api/messages/{message.id}", json={"admin_notes": None}, headers=auth_headers
        )

        assert response.status_code == 200
        assert response.json()["data"]["admin_notes"] is None

    @pytest.mark.parametrize("payload", [{}, {"status": ""}, {"status": None}])
    async def test_no_fields(
        self, client: AsyncClient, db_session: AsyncSession, auth_headers: dict, payload: dict
    ) -> None:
        (message,) = await persist(db_session, ContactMessageFactory.build())

        response = await client.put(
            f"/api/messages/{message.id}", json=payload, headers=auth_headers
        )

        assert response.status_code == 400
        assert response.json() == {"success": False, "message": "No fields to update"}

    async def test_invalid_status(
        self, client: AsyncClient, db_session: AsyncSession, auth_headers: dict
    ) -> None:
        (message,) = await persist(db_session, ContactMessageFactory.build())

        response = await client.put(
            f"/api/messages/{message.id}", json={"status": "deleted"}, headers=auth_headers
        )

        assert response.status_code == 400
        assert response.json() == {"success": False, "message": "Invalid status"}

    async def test_missing_message(self, client: AsyncClient, auth_headers: dict) -> None:
        response = await client.put(
            "/api/messages/424242", json={"status": "read"}, headers=auth_headers
        )

        assert response.status_code == 404


class TestDeleteMessage:
    async def test_delete_then_gone(
        self, client: AsyncClient, db_session: AsyncSession, auth_headers: dict
    ) -> None:
        (message,) = await persist(db_session, ContactMessageFactory.build())

        response = await client.delete(f"/api/messages/{message.id}", headers=auth_headers)
        assert response.status_code == 200
        assert response.json()["success"] is True

        again = await client.delete(f"/api/messages/{message.id}", headers=auth_headers)
        assert again.status_code == 404
        assert again.json() == {"success": False, "message": "Message not found"}


class TestMessageStats:
    async def test_summary_windows(
        self, client: AsyncClient, db_session: AsyncSession, auth_headers: dict
    ) -> None:
        await persist(
            db_session,
            ContactMessageFactory.build(status=MessageStatus.UNREAD.value),
            ContactMessageFactory.build(
                status=MessageStatus.REPLIED.value, created_at=before_local_midnight(hours=12)
            ),
            ContactMessageFactory.build(
                status=MessageStatus.READ.value, created_at=before_local_midnight(days=3)
            ),
            ContactMessageFactory.build(
                status=MessageStatus.UNREAD.value, created_at=before_local_midnight(days=20)
            ),
            ContactMessageFactory.build(
                status=MessageStatus.ARCHIVED.value, created_at=before_local_midnight(days=40)
            ),
        )

        response = await client.get("/api/messages/stats/summary", headers=auth_headers)

        assert response.status_code == 200
        assert response.json() == {
            "success": True,
            "stats": {
                "total": 5,
                "unread": 2,
                "replied": 1,
                "today": 1,
                "yesterday": 1,
                "last7Days": 3,
                "last30Days": 4,
            },
        }

    async def test_unread_count(
        self, client: AsyncClient, db_session: AsyncSession, auth_headers: dict
    ) -> None:
        await persist(
            db_session,
            *ContactMessageFactory.batch(3, status=MessageStatus.UNREAD.value),
            ContactMessageFactory.build(status=MessageStatus.READ.value),
        )

        response = await client.get("/api/messages/count/unread", headers=auth_headers)

        assert response.json() == {"success": True, "count": 3}

    async def test_stats_routes_are_not_captured_as_ids(
        self, client: AsyncClient, auth_headers: dict
    ) -> None:
        summary = await client.get("/api/messages/stats/summary", headers=auth_headers)
        unread = await client.get("/api/messages/count/unread", headers=auth_headers)

        assert summary.status_code == 200
        assert unread.status_code == 200
