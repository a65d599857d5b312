"""WebSocket subscription, relay and event delivery, end to end."""

import time
from contextlib import ExitStack
from uuid import UUID, uuid4

import pytest
from fastapi.testclient import TestClient

from src.kanban.main import create_app

pytestmark = pytest.mark.integration


def _wait_subscribed(ws, peers=()):
    """Block until `ws` is registered with its project.

    A socket's own hello comes back only once it is subscribed; peers already
    in the project receive the hello too and are drained here.
    """
    ws.send_json({"hello": True})
    assert ws.receive_json()["hello"] is True
    for peer in peers:
        assert peer.receive_json()["hello"] is True


def _wait_until(condition, timeout=2.0):
    """Poll `condition`; socket teardown finishes on the app side after the client closes."""
    deadline = time.monotonic() + timeout
    while not condition() and time.monotonic() < deadline:
        time.sleep(0.01)


def test_relay_reaches_every_subscriber_with_timestamp(schema):
    app = create_app()
    url = f"/ws?projectId={uuid4()}"
    with TestClient(app) as client, client.websocket_connect(url) as a:
        _wait_subscribed(a)
        with client.websocket_connect(url) as b:
            _wait_subscribed(b, peers=[a])

            a.send_json({"foo": 1})
            received = [a.receive_json(), b.receive_json()]

            for message in received:
                assert message["foo"] == 1
                assert "timestamp" in message
            assert received[0]["timestamp"] == received[1]["timestamp"]
            assert app.state.registry.connection_count == 2


def test_projects_do_not_hear_each_other(schema):
    app = create_app()
    with (
        TestClient(app) as client,
        client.websocket_connect(f"/ws?projectId={uuid4()}") as a,
        client.websocket_connect(f"/ws?projectId={uuid4()}") as b,
    ):
        _wait_subscribed(a)
        _wait_subscribed(b)

        a.send_json({"foo": 1})
        b.send_json({"bar": 2})

        assert "foo" in a.receive_json()
        assert "bar" in b.receive_json()
        assert app.state.registry.project_count == 2


def test_connection_without_project_is_inert(schema):
    app = create_app()
    with (
        TestClient(app) as client,
        client.websocket_connect(f"/ws?projectId={uuid4()}") as member,
    ):
        _wait_subscribed(member)
        with client.websocket_connect("/ws?projectId=not-a-uuid") as inert:
            inert.send_json({"foo": 1})
            member.send_json({"ping": 1})

            assert member.receive_json()["ping"] == 1
            assert app.state.registry.connection_count == 1


def test_malformed_message_keeps_connection_open(schema):
    with (
        TestClient(create_app()) as client,
        client.websocket_connect(f"/ws?projectId={uuid4()}") as ws,
    ):
        _wait_subscribed(ws)

        ws.send_text("not json")
        ws.send_text("[1, 2]")
        ws.send_json({"ok": True})

        assert ws.receive_json()["ok"] is True


def test_mutations_are_broadcast_to_project(schema):
    with TestClient(create_app()) as client:
        project = client.post("/api/v1/projects", json={"name": "Site"}).json()
        with client.websocket_connect(f"/ws?projectId={project['id']}") as ws:
            _wait_subscribed(ws)

            created = client.post(
                f"/api/v1/projects/{project['id']}/columns", json={"name": "QA"}
            ).json()
            assert ws.receive_json() == {"type": "column_created", "data": created}

            client.delete(f"/api/v1/columns/{created['id']}")
            event = ws.receive_json()
            assert event["type"] == "column_deleted"
            assert event["data"] == {"id": created["id"], "project_id": project["id"]}


def test_card_move_event_names_both_columns(schema):
    with TestClient(create_app()) as client:
        project = client.post("/api/v1/projects", json={"name": "Site"}).json()
        columns = client.get(f"/api/v1/projects/{project['id']}").json()["columns"]
        card = client.post(
            f"/api/v1/columns/{columns[0]['id']}/cards", json={"title": "Design"}
        ).json()
        with client.websocket_connect(f"/ws?projectId={project['id']}") as ws:
            _wait_subscribed(ws)

            client.post(
                f"/api/v1/cards/{card['id']}/move",
                json={"column_id": columns[1]["id"], "position": 0},
            )

            event = ws.receive_json()
            assert event["type"] == "card_moved"
            assert event["data"] == {
                "card_id": card["id"],
                "from_column_id": columns[0]["id"],
                "column_id": columns[1]["id"],
                "position": 0,
            }


def test_closing_every_socket_empties_the_registry(schema):
    app = create_app()
    registry = app.state.registry
    project_id = uuid4()
    url = f"/ws?projectId={project_id}"
    with TestClient(app) as client:
        with ExitStack() as stack:
            sockets = []
            for _ in range(3):
                ws = stack.enter_context(client.websocket_connect(url))
                _wait_subscribed(ws, peers=sockets)
                sockets.append(ws)
            assert registry.connection_count == 3

        _wait_until(lambda: project_id not in registry)
        assert project_id not in registry
        assert registry.connection_count == 0


def test_disconnect_during_broadcast_is_cleaned_up(schema):
    app = create_app()
    registry = app.state.registry
    with TestClient(app) as client:
        project_id = UUID(client.post("/api/v1/projects", json={"name": "Site"}).json()["id"])
        url = f"/ws?projectId={project_id}"
        with client.websocket_connect(url) as stays:
            _wait_subscribed(stays)
            with client.websocket_connect(url) as leaves:
                _wait_subscribed(leaves, peers=[stays])
                leaves.close(1006)
                response = client.post(
                    f"/api/v1/projects/{project_id}/columns", json={"name": "QA"}
                )

            assert response.status_code == 201
            assert stays.receive_json()["type"] == "column_created"
            _wait_until(lambda: registry.connection_count == 1)
            assert registry.connection_count == 1

        _wait_until(lambda: project_id not in registry)
        assert project_id not in registry
        assert registry.connection_count == 0
