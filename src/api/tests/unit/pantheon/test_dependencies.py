"""Unit tests for Pantheon dependency injection."""

import json
from unittest.mock import MagicMock

import pytest
from starlette.requests import Request

from infrastructure.settings import DatabaseSettings
from pantheon.application.unit_of_work import UnitOfWork
from pantheon.dependencies import get_observation_context, get_unit_of_work


def make_request(
    headers: dict[str, str] | None = None,
    method: str = "POST",
    body: bytes = b"",
    query_string: bytes = b"",
) -> Request:
    raw = [(k.lower().encode(), v.encode()) for k, v in (headers or {}).items()]

    async def receive():
        return {"type": "http.request", "body": body, "more_body": False}

    scope = {
        "type": "http",
        "method": method,
        "headers": raw,
        "query_string": query_string,
    }
    return Request(scope, receive)


def graphql_post(payload, headers: dict[str, str] | None = None) -> Request:
    body = payload if isinstance(payload, bytes) else json.dumps(payload).encode()
    return make_request(
        {"content-type": "application/json", **(headers or {})}, body=body
    )


class TestObservationContext:
    """Tests for get_observation_context."""

    @pytest.mark.asyncio
    async def test_uses_request_id_header(self):
        context = await get_observation_context(
            make_request({"X-Request-ID": "req-42"})
        )

        assert context.request_id == "req-42"

    @pytest.mark.asyncio
    async def test_generates_request_id_when_missing(self):
        first = await get_observation_context(make_request())
        second = await get_observation_context(make_request())

        assert first.request_id
        assert first.request_id != second.request_id

    @pytest.mark.asyncio
    async def test_operation_name_from_json_body(self):
        request = graphql_post(
            {"query": "mutation NewZeus { newGod }", "operationName": "NewZeus"}
        )

        context = await get_observation_context(request)

        assert context.operation == "NewZeus"

    @pytest.mark.asyncio
    async def test_body_still_readable_after_operation_lookup(self):
        payload = {"query": "query Gods { gods { name } }", "operationName": "Gods"}
        request = graphql_post(payload)

        await get_observation_context(request)

        assert await request.json() == payload

    @pytest.mark.asyncio
    async def test_operation_name_from_query_string(self):
        request = make_request(method="GET", query_string=b"operationName=Gods")

        context = await get_observation_context(request)

        assert context.operation == "Gods"

    @pytest.mark.asyncio
    async def test_anonymous_operation_has_no_name(self):
        context = await get_observation_context(graphql_post({"query": "{ gods }"}))

        assert context.operation is None
        assert "operation" not in context.as_dict()

    @pytest.mark.asyncio
    async def test_malformed_body_has_no_operation(self):
        context = await get_observation_context(graphql_post(b"{not json"))

        assert context.operation is None

    @pytest.mark.asyncio
    async def test_non_json_body_is_not_read(self):
        request = make_request({"content-type": "multipart/form-data"}, body=b"--x")

        context = await get_observation_context(request)

        assert context.operation is None


class TestUnitOfWork:
    """Tests for get_unit_of_work."""

    def test_uses_configured_timeout(self):
        session = MagicMock()
        settings = DatabaseSettings(statement_timeout_seconds=2.5)

        uow = get_unit_of_work(session=session, settings=settings)

        assert isinstance(uow, UnitOfWork)
        assert uow.session is session
        assert uow._timeout_seconds == 2.5
