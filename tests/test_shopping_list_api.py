"""
Shoplist Backend: Shopping List Endpoint Tests
===============================================

What:  HTTP-level tests for /shopping-list through the full app (middleware,
       exception handlers, serialization).
How:   httpx AsyncClient over ASGITransport; a fresh app per test.
"""

import logging
import re

import pytest

from shoplist.middleware.request_id import RequestIDLogFilter, request_id_var


class TestShoppingListCreate:

    @pytest.mark.asyncio
    async def test_create_returns_201_with_id(self, test_client):
        response = await test_client.post("/shopping-list", json={"name": "Broccoli"})

        assert response.status_code == 201
        body = response.json()
        assert body["name"] == "Broccoli"
        assert body["checked"] is False
        assert "dueDate" not in body
        assert isinstance(body["id"], str) and body["id"]

    @pytest.mark.asyncio
    async def test_created_item_is_listed(self, test_client):
        created = (await test_client.post("/shopping-list", json={"name": "Broccoli"})).json()

        response = await test_client.get("/shopping-list")

        assert response.status_code == 200
        assert response.json() == [created]

    @pytest.mark.asyncio
    async def test_create_with_due_date_uses_camel_case(self, test_client):
        response = await test_client.post(
            "/shopping-list", json={"name": "Cake", "dueDate": "2026-12-24", "checked": True}
        )

        assert response.status_code == 201
        assert response.json()["dueDate"] == "2026-12-24"
        assert response.json()["checked"] is True

    @pytest.mark.asyncio
    async def test_create_missing_name_returns_400(self, test_client):
        response = await test_client.post("/shopping-list", json={})

        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "validation_error"
        assert "Missing `name`" in body["message"]
        assert body["details"]["field"] == "name"
        assert body["request_id"]

        assert (await test_client.get("/shopping-list")).json() == []

    @pytest.mark.asyncio
    async def test_create_without_body_returns_400(self, test_client):
        response = await test_client.post("/shopping-list")

        assert response.status_code == 400
        assert response.json()["error"] == "validation_error"

    @pytest.mark.asyncio
    async def test_create_with_malformed_json_returns_400(self, test_client):
        response = await test_client.post(
            "/shopping-list",
            content=b'{"name": ',
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert response.json()["message"] == "Request body is not valid JSON"

    @pytest.mark.asyncio
    async def test_list_preserves_insertion_order(self, test_client):
        for name in ["beans", "tomatoes", "peppers"]:
            await test_client.post("/shopping-list", json={"name": name})

        names = [item["name"] for item in (await test_client.get("/shopping-list")).json()]

        assert names == ["beans", "tomatoes", "peppers"]


class TestShoppingListUpdate:

    @pytest.mark.asyncio
    async def test_update_returns_204_and_changes_only_supplied_fields(self, test_client):
        created = (
            await test_client.post("/shopping-list", json={"name": "Milk", "dueDate": "2026-10-20"})
        ).json()

        response = await test_client.put(f"/shopping-list/{created['id']}", json={"checked": True})

        assert response.status_code == 204
        assert response.content == b""
        listed = (await test_client.get("/shopping-list")).json()
        assert listed == [{**created, "checked": True}]

    @pytest.mark.asyncio
    async def test_update_with_matching_body_id(self, test_client):
        created = (await test_client.post("/shopping-list", json={"name": "Milk"})).json()

        response = await test_client.put(
            f"/shopping-list/{created['id']}", json={"id": created["id"], "name": "Oat milk"}
        )

        assert response.status_code == 204
        assert (await test_client.get("/shopping-list")).json()[0]["name"] == "Oat milk"

    @pytest.mark.asyncio
    async def test_update_id_mismatch_returns_400(self, test_client):
        created = (await test_client.post("/shopping-list", json={"name": "Milk"})).json()

        response = await test_client.put(
            f"/shopping-list/{created['id']}", json={"id": "not-it", "name": "Juice"}
        )

        assert response.status_code == 400
        assert "must match" in response.json()["message"]
        assert (await test_client.get("/shopping-list")).json()[0]["name"] == "Milk"

    @pytest.mark.asyncio
    async def test_update_unknown_id_returns_404(self, test_client):
        response = await test_client.put("/shopping-list/abc123", json={"checked": True})

        assert response.status_code == 404
        assert response.json()["error"] == "not_found"
        assert "abc123" in response.json()["message"]

    @pytest.mark.asyncio
    async def test_update_null_name_returns_400(self, test_client):
        created = (await test_client.post("/shopping-list", json={"name": "Milk"})).json()

        response = await test_client.put(f"/shopping-list/{created['id']}", json={"name": None})

        assert response.status_code == 400


class TestShoppingListDelete:

    @pytest.mark.asyncio
    async def test_delete_returns_204_and_removes_item(self, test_client):
        ids = [
            (await test_client.post("/shopping-list", json={"name": n})).json()["id"]
            for n in ["a", "b", "c"]
        ]

        response = await test_client.delete(f"/shopping-list/{ids[1]}")

        assert response.status_code == 204
        listed = (await test_client.get("/shopping-list")).json()
        assert [item["id"] for item in listed] == [ids[0], ids[2]]

    @pytest.mark.asyncio
    async def test_delete_unknown_id_returns_404(self, test_client):
        response = await test_client.delete("/shopping-list/nope")
        assert response.status_code == 404


class TestMiddleware:

    @pytest.mark.asyncio
    async def test_response_carries_generated_request_id(self, test_client):
        response = await test_client.get("/shopping-list")
        assert len(response.headers["X-Request-ID"]) == 8

    @pytest.mark.asyncio
    async def test_inbound_request_id_is_echoed(self, test_client):
        response = await test_client.put(
            "/shopping-list/missing", json={}, headers={"X-Request-ID": "trace-42"}
        )

        assert response.headers["X-Request-ID"] == "trace-42"
        assert response.json()["request_id"] == "trace-42"

    @pytest.mark.asyncio
    async def test_access_log_uses_common_log_format(self, test_client, caplog):
        with caplog.at_level(logging.INFO, logger="shoplist.access"):
            await test_client.post("/shopping-list", json={"name": "Broccoli"})

        lines = [r.getMessage() for r in caplog.records if r.name == "shoplist.access"]
        assert len(lines) == 1
        assert re.match(
            r'^\S+ - - \[\d{2}/\w{3}/\d{4}:\d{2}:\d{2}:\d{2} [+-]\d{4}\] '
            r'"POST /shopping-list HTTP/1\.1" 201 \d+$',
            lines[0],
        )

    @pytest.mark.asyncio
    async def test_client_errors_logged_as_warning(self, test_client, caplog):
        with caplog.at_level(logging.INFO, logger="shoplist.access"):
            await test_client.delete("/shopping-list/nope")

        records = [r for r in caplog.records if r.name == "shoplist.access"]
        assert records[0].levelno == logging.WARNING
        assert records[0].status == 404

    @pytest.mark.asyncio
    @pytest.mark.parametrize("inbound", ["has spaces in it", "x" * 65, "semi;colon"])
    async def test_malformed_inbound_request_id_is_replaced(self, test_client, inbound):
        response = await test_client.get("/shopping-list", headers={"X-Request-ID": inbound})

        rid = response.headers["X-Request-ID"]
        assert rid != inbound
        assert len(rid) == 8


class TestRequestIDLogFilter:

    @staticmethod
    def _record(**extra):
        record = logging.LogRecord("shoplist.test", logging.INFO, __file__, 1, "hello", None, None)
        record.__dict__.update(extra)
        return record

    def test_copies_current_request_id(self):
        token = request_id_var.set("abc123")
        try:
            record = self._record()
            assert RequestIDLogFilter().filter(record) is True
        finally:
            request_id_var.reset(token)

        assert record.request_id == "abc123"

    def test_outside_a_request_uses_dash(self):
        record = self._record()
        RequestIDLogFilter().filter(record)
        assert record.request_id == "-"

    def test_keeps_request_id_passed_as_extra(self):
        token = request_id_var.set("from-context")
        try:
            record = self._record(request_id="from-extra")
            RequestIDLogFilter().filter(record)
        finally:
            request_id_var.reset(token)

        assert record.request_id == "from-extra"

    @pytest.mark.asyncio
    async def test_request_id_is_unbound_after_the_request(self, test_client):
        await test_client.get("/shopping-list", headers={"X-Request-ID": "trace-42"})
        assert request_id_var.get() == ""


class TestTrailingSlash:

    @pytest.mark.asyncio
    async def test_post_and_get_with_trailing_slash(self, test_client):
        created = await test_client.post("/shopping-list/", json={"name": "Broccoli"})

        assert created.status_code == 201
        assert "dueDate" not in created.json()

        listed = await test_client.get("/shopping-list/")
        assert listed.status_code == 200
        assert listed.json() == [created.json()]

    @pytest.mark.asyncio
    async def test_trailing_slash_post_still_validates(self, test_client):
        response = await test_client.post("/shopping-list/", json={})

        assert response.status_code == 400
        assert response.json()["error"] == "validation_error"


class TestRouterErrors:

    @pytest.mark.asyncio
    async def test_unknown_path_returns_error_envelope(self, test_client):
        response = await test_client.get("/no-such-thing", headers={"X-Request-ID": "trace-404"})

        assert response.status_code == 404
        body = response.json()
        assert body["error"] == "not_found"
        assert body["message"]
        assert body["request_id"] == "trace-404"
        assert "detail" not in body

    @pytest.mark.asyncio
    async def test_wrong_method_returns_error_envelope(self, test_client):
        response = await test_client.patch("/shopping-list/abc", json={"checked": True})

        assert response.status_code == 405
        body = response.json()
        assert body["error"] == "method_not_allowed"
        assert body["message"] == "Method Not Allowed"
        assert body["request_id"] == response.headers["X-Request-ID"]
        assert "PUT" in response.headers["allow"]
