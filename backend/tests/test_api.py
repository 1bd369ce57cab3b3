"""
RetroBoard Backend — API Tests
================================

What:  End-to-end tests through the full middleware stack, routes, services
       and a temporary SQLite store, using HTTPX's ASGITransport.

What we test:
    ✅ Register / login contract (200, 400, 401, 409)
    ✅ Board and note CRUD, including the nested columns shape
    ✅ Error bodies always carry an `error` field
    ✅ CORS headers, OPTIONS preflight, X-Request-ID
    ✅ Unexpected faults still answer 500 with CORS headers and X-Request-ID
    ✅ Body parser limits and malformed JSON
"""

from datetime import datetime, timedelta
from unittest.mock import AsyncMock, patch

import pytest

from retroboard.exceptions import DatabaseError
from retroboard.services.board_service import board_service


async def _add_note(client, board_id, column_name, text):
    response = await client.post(
        f"/boards/{board_id}/notes", json={"columnName": column_name, "text": text}
    )
    assert response.status_code == 200, response.text
    return response.json()


async def _list(client, user_id):
    response = await client.get("/boards", params={"userId": user_id})
    assert response.status_code == 200
    return response.json()


class TestAuthEndpoints:

    @pytest.mark.asyncio
    async def test_register_returns_summary_without_password(self, test_client):
        response = await test_client.post(
            "/register", json={"email": "eve@example.com", "password": "pw"}
        )

        assert response.status_code == 200
        body = response.json()
        assert set(body) == {"id", "email", "createdAt"}
        assert body["email"] == "eve@example.com"

    @pytest.mark.asyncio
    async def test_register_twice_conflicts(self, test_client, registered_user):
        response = await test_client.post(
            "/register", json={"email": "alice@example.com", "password": "another"}
        )

        assert response.status_code == 409
        assert response.json()["error"] == "Email already registered"

    @pytest.mark.asyncio
    async def test_register_missing_password(self, test_client):
        response = await test_client.post("/register", json={"email": "eve@example.com"})

        assert response.status_code == 400
        assert response.json()["error"] == "email/password required"

    @pytest.mark.asyncio
    async def test_login_returns_registration_id(self, test_client, registered_user):
        response = await test_client.post(
            "/login", json={"email": "alice@example.com", "password": "s3cret"}
        )

        assert response.status_code == 200
        assert response.json()["id"] == registered_user["id"]
        assert "password" not in response.json()

    @pytest.mark.asyncio
    async def test_login_wrong_password(self, test_client, registered_user):
        response = await test_client.post(
            "/login", json={"email": "alice@example.com", "password": "wrong"}
        )

        assert response.status_code == 401
        assert "error" in response.json()


class TestBoardEndpoints:

    @pytest.mark.asyncio
    async def test_create_board_starts_with_empty_columns(self, test_client, registered_user):
        response = await test_client.post(
            "/boards", json={"userId": registered_user["id"], "title": "Sprint 1"}
        )

        assert response.status_code == 200
        board = response.json()
        assert board["userId"] == registered_user["id"]
        assert board["title"] == "Sprint 1"
        assert board["columns"] == {"Start": [], "Stop": [], "Continue": []}
        assert board["createdAt"] == board["updatedAt"]

    @pytest.mark.asyncio
    async def test_timestamps_carry_utc_offset(self, test_client, board):
        created = datetime.fromisoformat(board["createdAt"])

        assert board["createdAt"].endswith("+00:00")
        assert created.utcoffset() == timedelta(0)

    @pytest.mark.asyncio
    async def test_create_board_missing_title(self, test_client, registered_user):
        response = await test_client.post("/boards", json={"userId": registered_user["id"]})

        assert response.status_code == 400
        assert response.json()["error"] == "userId and title required"

    @pytest.mark.asyncio
    async def test_create_board_unknown_user(self, test_client):
        response = await test_client.post("/boards", json={"userId": "u1", "title": "Sprint 1"})

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_list_requires_user_id(self, test_client):
        response = await test_client.get("/boards")

        assert response.status_code == 400
        assert response.json()["error"] == "userId required"

    @pytest.mark.asyncio
    async def test_list_only_owner_boards_with_partitioned_notes(self, test_client, registered_user, board):
        other = (await test_client.post(
            "/register", json={"email": "bob@example.com", "password": "pw"}
        )).json()
        await test_client.post("/boards", json={"userId": other["id"], "title": "Bob's"})

        first = await _add_note(test_client, board["id"], "Start", "first")
        stop = await _add_note(test_client, board["id"], "Stop", "meetings")
        second = await _add_note(test_client, board["id"], "Start", "second")

        boards = await _list(test_client, registered_user["id"])

        assert [b["id"] for b in boards] == [board["id"]]
        columns = boards[0]["columns"]
        assert [n["id"] for n in columns["Start"]] == [first["id"], second["id"]]
        assert [n["id"] for n in columns["Stop"]] == [stop["id"]]
        assert columns["Continue"] == []
        assert set(columns["Start"][0]) == {"id", "text", "createdAt"}

    @pytest.mark.asyncio
    async def test_boards_listed_newest_first(self, test_client, registered_user, board):
        newer = (await test_client.post(
            "/boards", json={"userId": registered_user["id"], "title": "Sprint 2"}
        )).json()

        boards = await _list(test_client, registered_user["id"])

        assert [b["id"] for b in boards] == [newer["id"], board["id"]]

    @pytest.mark.asyncio
    async def test_rename_board(self, test_client, board):
        response = await test_client.put(f"/boards/{board['id']}", json={"title": "Renamed"})

        assert response.status_code == 200
        updated = response.json()
        assert updated["title"] == "Renamed"
        assert datetime.fromisoformat(updated["updatedAt"]) > datetime.fromisoformat(board["updatedAt"])

    @pytest.mark.asyncio
    async def test_rename_unknown_board(self, test_client):
        response = await test_client.put("/boards/nope", json={"title": "Renamed"})

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_delete_board_removes_notes(self, test_client, registered_user, board):
        note = await _add_note(test_client, board["id"], "Continue", "demos")

        response = await test_client.delete(f"/boards/{board['id']}")
        assert response.status_code == 200
        assert response.json() == {"ok": True}

        assert await _list(test_client, registered_user["id"]) == []
        gone = await test_client.put(
            f"/boards/{board['id']}/notes/{note['id']}", json={"text": "still here?"}
        )
        assert gone.status_code == 404

    @pytest.mark.asyncio
    async def test_delete_unknown_board(self, test_client):
        response = await test_client.delete("/boards/nope")

        assert response.status_code == 404


class TestNoteEndpoints:

    @pytest.mark.asyncio
    async def test_create_note(self, test_client, board):
        note = await _add_note(test_client, board["id"], "Stop", "long standups")

        assert set(note) == {"id", "boardId", "columnName", "text", "createdAt"}
        assert note["boardId"] == board["id"]
        assert note["columnName"] == "Stop"

    @pytest.mark.asyncio
    async def test_create_note_invalid_column(self, test_client, board):
        response = await test_client.post(
            f"/boards/{board['id']}/notes", json={"columnName": "Done", "text": "x"}
        )

        assert response.status_code == 400
        assert "columnName" in response.json()["error"]

    @pytest.mark.asyncio
    async def test_create_note_missing_text(self, test_client, board):
        response = await test_client.post(
            f"/boards/{board['id']}/notes", json={"columnName": "Start"}
        )

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_create_note_unknown_board(self, test_client):
        response = await test_client.post(
            "/boards/nope/notes", json={"columnName": "Start", "text": "x"}
        )

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_move_note_advances_board_updated_at(self, test_client, registered_user, board):
        note = await _add_note(test_client, board["id"], "Start", "retro notes")
        [before] = await _list(test_client, registered_user["id"])

        response = await test_client.put(
            f"/boards/{board['id']}/notes/{note['id']}", json={"columnName": "Continue"}
        )
        assert response.status_code == 200
        assert response.json()["columnName"] == "Continue"
        assert response.json()["text"] == "retro notes"

        [after] = await _list(test_client, registered_user["id"])
        assert after["columns"]["Start"] == []
        assert [n["id"] for n in after["columns"]["Continue"]] == [note["id"]]
        assert datetime.fromisoformat(after["updatedAt"]) > datetime.fromisoformat(before["updatedAt"])

    @pytest.mark.asyncio
    async def test_edit_note_text(self, test_client, board):
        note = await _add_note(test_client, board["id"], "Start", "draft")

        response = await test_client.put(
            f"/boards/{board['id']}/notes/{note['id']}", json={"text": "final"}
        )

        assert response.status_code == 200
        assert response.json()["text"] == "final"
        assert response.json()["columnName"] == "Start"

    @pytest.mark.asyncio
    async def test_update_note_without_fields(self, test_client, board):
        note = await _add_note(test_client, board["id"], "Start", "draft")

        response = await test_client.put(f"/boards/{board['id']}/notes/{note['id']}", json={})

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_delete_note(self, test_client, registered_user, board):
        note = await _add_note(test_client, board["id"], "Stop", "x")

        response = await test_client.delete(f"/boards/{board['id']}/notes/{note['id']}")

        assert response.status_code == 200
        assert response.json() == {"ok": True}
        [listed] = await _list(test_client, registered_user["id"])
        assert listed["columns"]["Stop"] == []

    @pytest.mark.asyncio
    async def test_delete_unknown_note(self, test_client, board):
        response = await test_client.delete(f"/boards/{board['id']}/notes/nope")

        assert response.status_code == 404


class TestBodyParsing:

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "method,path",
        [
            ("POST", "/register"),
            ("POST", "/login"),
            ("POST", "/boards"),
            ("PUT", "/boards/{board_id}"),
            ("POST", "/boards/{board_id}/notes"),
            ("PUT", "/boards/{board_id}/notes/some-note"),
        ],
    )
    async def test_malformed_json_is_400(self, test_client, board, method, path):
        response = await test_client.request(
            method,
            path.format(board_id=board["id"]),
            content=b'{"title": ',
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert response.json()["error"] == "invalid json"

    @pytest.mark.asyncio
    async def test_non_object_json_is_400(self, test_client):
        response = await test_client.post("/register", json=["alice@example.com", "pw"])

        assert response.status_code == 400
        assert "error" in response.json()

    @pytest.mark.asyncio
    async def test_wrong_field_type_is_400(self, test_client, registered_user):
        response = await test_client.post(
            "/boards", json={"userId": registered_user["id"], "title": 42}
        )

        assert response.status_code == 400
        assert response.json()["error"].startswith("title")

    @pytest.mark.asyncio
    async def test_oversized_body_is_rejected(self, test_client):
        padding = "x" * 1_000_001
        response = await test_client.post(
            "/register", json={"email": "a@b.c", "password": padding}
        )

        assert response.status_code == 413
        assert "error" in response.json()

    @pytest.mark.asyncio
    async def test_empty_body_reads_as_empty_object(self, test_client):
        response = await test_client.post("/login")

        assert response.status_code == 400
        assert response.json()["error"] == "email/password required"

    @pytest.mark.asyncio
    async def test_deeply_nested_json_is_400(self, test_client):
        response = await test_client.post(
            "/register",
            content=b"[" * 100_000,
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert response.json()["error"] == "invalid json"
        assert response.headers["Access-Control-Allow-Origin"] == "*"


class TestTransportConcerns:

    @pytest.mark.asyncio
    async def test_unknown_route_is_404(self, test_client):
        response = await test_client.get("/nowhere")

        assert response.status_code == 404
        assert response.json()["error"] == "Not Found"

    @pytest.mark.asyncio
    async def test_wrong_method_is_404(self, test_client):
        response = await test_client.patch("/boards/abc")

        assert response.status_code == 404
        assert response.json()["error"] == "Not Found"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("path", ["/boards", "/boards/abc/notes/def", "/anything"])
    async def test_preflight_answered_everywhere(self, test_client, path):
        response = await test_client.options(path)

        assert response.status_code == 204
        assert response.headers["Access-Control-Allow-Origin"] == "*"
        assert response.headers["Access-Control-Allow-Methods"] == "GET, POST, PUT, DELETE, OPTIONS"
        assert response.headers["Access-Control-Allow-Headers"] == "Content-Type"

    @pytest.mark.asyncio
    async def test_cors_headers_on_success_and_error(self, test_client):
        ok = await test_client.get("/health")
        error = await test_client.get("/boards")

        assert ok.headers["Access-Control-Allow-Origin"] == "*"
        assert error.status_code == 400
        assert error.headers["Access-Control-Allow-Origin"] == "*"

    @pytest.mark.asyncio
    async def test_request_id_round_trip(self, test_client):
        response = await test_client.get("/boards", headers={"X-Request-ID": "abc12345"})

        assert response.headers["X-Request-ID"] == "abc12345"
        assert response.json()["request_id"] == "abc12345"

    @pytest.mark.asyncio
    async def test_storage_fault_is_generic_500(self, test_client):
        with patch.object(
            board_service,
            "list_boards",
            AsyncMock(side_effect=DatabaseError(context={"sql": "SELECT secret"})),
        ):
            response = await test_client.get("/boards", params={"userId": "u1"})

        assert response.status_code == 500
        body = response.json()
        assert body["error"] == "A database error occurred. Please try again later."
        assert "SELECT" not in response.text

    @pytest.mark.asyncio
    async def test_unexpected_fault_keeps_cors_and_request_id(self, test_client):
        with patch.object(
            board_service, "list_boards", AsyncMock(side_effect=RuntimeError("boom"))
        ):
            response = await test_client.get(
                "/boards", params={"userId": "u1"}, headers={"X-Request-ID": "fault123"}
            )

        assert response.status_code == 500
        assert response.json() == {"error": "Server Error", "request_id": "fault123"}
        assert response.headers["X-Request-ID"] == "fault123"
        assert response.headers["Access-Control-Allow-Origin"] == "*"
        assert response.headers["Access-Control-Allow-Methods"] == "GET, POST, PUT, DELETE, OPTIONS"
        assert "boom" not in response.text

    @pytest.mark.asyncio
    async def test_health(self, test_client):
        response = await test_client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["database"] == "connected"
        assert "uptimeSeconds" in body
