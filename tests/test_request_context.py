"""Request context: request id binding and log record stamping."""

import logging

from httpx import ASGITransport, AsyncClient

from taskdesk.middleware import RequestIDMiddleware
from taskdesk.shared.context import (
    bind_request,
    get_request_context,
    reset_request,
    set_current_actor,
)
from taskdesk.shared.logging import RequestContextFilter

POLICY_LOGGER = "taskdesk.application.services.access_policy"


def _record() -> logging.LogRecord:
    return logging.LogRecord("taskdesk.test", logging.INFO, __file__, 1, "msg", None, None)


def test_filter_uses_placeholders_outside_a_request() -> None:
    record = _record()
    assert RequestContextFilter().filter(record)
    assert record.request_id == "-"
    assert record.actor_id == "-"


def test_filter_stamps_bound_request_and_actor() -> None:
    tokens = bind_request("req-1")
    try:
        set_current_actor("profile-1")
        record = _record()
        RequestContextFilter().filter(record)
    finally:
        reset_request(tokens)

    assert record.request_id == "req-1"
    assert record.actor_id == "profile-1"
    assert get_request_context().request_id is None
    assert get_request_context().actor_id is None


async def test_middleware_binds_request_id_for_the_downstream_app() -> None:
    seen = {}

    async def inner(scope, receive, send) -> None:
        seen["context"] = get_request_context()
        seen["state"] = scope["state"]["request_id"]
        await send({"type": "http.response.start", "status": 204, "headers": []})
        await send({"type": "http.response.body", "body": b""})

    app = RequestIDMiddleware(inner)
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        response = await ac.get("/", headers={"X-Request-ID": "trace-42"})

    assert response.headers["X-Request-ID"] == "trace-42"
    assert seen["context"].request_id == "trace-42"
    assert seen["context"].actor_id is None
    assert seen["state"] == "trace-42"
    assert get_request_context().request_id is None


async def test_denial_log_carries_request_id_and_actor(
    client: AsyncClient, employee, employee_headers, caplog
) -> None:
    caplog.set_level(logging.WARNING, logger=POLICY_LOGGER)
    caplog.handler.addFilter(RequestContextFilter())

    response = await client.post(
        "/api/v1/tasks",
        json={
            "title": "Not allowed",
            "assigned_to": employee.id,
            "start_date": "2024-01-01",
            "deadline_date": "2024-01-10",
        },
        headers={**employee_headers, "X-Request-ID": "deny-7"},
    )

    assert response.status_code == 403
    denials = [r for r in caplog.records if r.name == POLICY_LOGGER]
    assert denials
    assert denials[-1].request_id == "deny-7"
    assert denials[-1].actor_id == employee.id
