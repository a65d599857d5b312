"""HTTP API tests: board lifecycle, errors and the acting user."""

from uuid import uuid4

import pytest

from src.kanban.core.config import get_settings

pytestmark = pytest.mark.integration

API = "/api/v1"


async def _create_project(client, name="Site"):
    response = await client.post(f"{API}/projects", json={"name": name})
    assert response.status_code == 201
    return response.json()


async def _board(client, project_id):
    response = await client.get(f"{API}/projects/{project_id}")
    assert response.status_code == 200
    return response.json()


async def test_site_board_scenario(client):
    project = await _create_project(client)
    board = await _board(client, project["id"])
    columns = board["columns"]
    assert [c["name"] for c in columns] == ["Backlog", "Em Progresso", "Em Revisão", "Concluído"]
    assert [c["position"] for c in columns] == [0, 1, 2, 3]
    backlog = columns[0]["id"]

    design = await client.post(f"{API}/columns/{backlog}/cards", json={"title": "Design"})
    copy = await client.post(f"{API}/columns/{backlog}/cards", json={"title": "Copy"})
    assert design.status_code == 201
    assert design.json()["position"] == 0
    assert copy.json()["position"] == 1

    moved = await client.post(
        f"{API}/cards/{copy.json()['id']}/move", json={"column_id": backlog, "position": 0}
    )
    assert moved.status_code == 200
    assert moved.json()["column_id"] == backlog
    assert moved.json()["position"] == 0

    board = await _board(client, project["id"])
    backlog_cards = board["columns"][0]["cards"]
    assert {c["title"] for c in backlog_cards} == {"Design", "Copy"}
    assert all(c["position"] == 0 for c in backlog_cards)
    assert board["counts"] == {"cards": 2, "completed_cards": 0}


async def test_projects_list_is_scoped_to_acting_user(client):
    other = await client.post(f"{API}/users", json={"email": "other@example.com"})
    other_id = other.json()["id"]
    await _create_project(client, "Mine")
    response = await client.post(
        f"{API}/projects", json={"name": "Theirs"}, headers={"X-User-ID": other_id}
    )
    assert response.status_code == 201

    mine = await client.get(f"{API}/projects")
    theirs = await client.get(f"{API}/projects", headers={"X-User-ID": other_id})

    assert [p["name"] for p in mine.json()["items"]] == ["Mine"]
    assert [p["name"] for p in theirs.json()["items"]] == ["Theirs"]


async def test_default_user_is_created_on_first_use(client):
    response = await client.get(f"{API}/users/me")

    assert response.status_code == 200
    assert response.json()["id"] == str(get_settings().default_user_id)


async def test_malformed_user_header(client):
    response = await client.get(f"{API}/users/me", headers={"X-User-ID": "not-a-uuid"})

    assert response.status_code == 400
    assert response.json()["field"] == "X-User-ID"


async def test_unknown_user_header(client):
    response = await client.post(
        f"{API}/projects", json={"name": "Site"}, headers={"X-User-ID": str(uuid4())}
    )

    assert response.status_code == 400
    assert response.json()["field"] == "X-User-ID"


async def test_duplicate_email(client):
    first = await client.post(f"{API}/users", json={"email": "dup@example.com"})
    second = await client.post(f"{API}/users", json={"email": "dup@example.com"})

    assert first.status_code == 201
    assert second.status_code == 400
    assert second.json()["field"] == "email"


async def test_validation_error_names_field(client):
    response = await client.post(f"{API}/projects", json={"name": "   "})

    body = response.json()
    assert response.status_code == 400
    assert body["field"] == "name"
    assert body["request_id"]


async def test_invalid_color_rejected(client):
    project = await _create_project(client)

    response = await client.post(
        f"{API}/projects/{project['id']}/columns", json={"name": "QA", "color": "blue"}
    )

    assert response.status_code == 400
    assert response.json()["field"] == "color"


async def test_null_required_field_rejected(client):
    project = await _create_project(client)

    response = await client.patch(f"{API}/projects/{project['id']}", json={"name": None})

    assert response.status_code == 400
    assert response.json()["field"] == "name"


async def test_unknown_ids_return_404(client):
    missing = uuid4()

    responses = [
        await client.get(f"{API}/projects/{missing}"),
        await client.patch(f"{API}/columns/{missing}", json={"name": "x"}),
        await client.post(f"{API}/columns/{missing}/cards", json={"title": "x"}),
        await client.get(f"{API}/cards/{missing}"),
        await client.delete(f"{API}/comments/{missing}"),
    ]

    assert [r.status_code for r in responses] == [404] * len(responses)
    assert all(r.json()["request_id"] for r in responses)


async def test_request_id_is_echoed(client):
    request_id = str(uuid4())

    response = await client.get(f"{API}/projects/{uuid4()}", headers={"X-Request-ID": request_id})

    assert response.headers["X-Request-ID"] == request_id
    assert response.json()["request_id"] == request_id


async def test_update_and_complete_card(client):
    project = await _create_project(client)
    backlog = (await _board(client, project["id"]))["columns"][0]["id"]
    card = (await client.post(f"{API}/columns/{backlog}/cards", json={"title": "Design"})).json()

    response = await client.patch(
        f"{API}/cards/{card['id']}", json={"priority": "high", "completed": True}
    )

    assert response.status_code == 200
    assert response.json()["priority"] == "high"
    assert response.json()["completed"] is True
    board = await _board(client, project["id"])
    assert board["counts"] == {"cards": 1, "completed_cards": 1}


async def test_reorder_endpoints(client):
    project = await _create_project(client)
    columns = (await _board(client, project["id"]))["columns"]
    orders = [{"id": c["id"], "position": 3 - c["position"]} for c in columns]

    response = await client.post(
        f"{API}/projects/{project['id']}/columns/reorder", json={"column_orders": orders}
    )

    assert response.status_code == 200
    assert response.json() == {"success": True, "updated": 4}
    reordered = (await _board(client, project["id"]))["columns"]
    assert [c["name"] for c in reordered][0] == "Concluído"


async def test_card_content_and_detail(client):
    project = await _create_project(client)
    backlog = (await _board(client, project["id"]))["columns"][0]["id"]
    card = (await client.post(f"{API}/columns/{backlog}/cards", json={"title": "Design"})).json()

    item = await client.post(f"{API}/cards/{card['id']}/checklist", json={"title": "Wireframe"})
    await client.patch(f"{API}/checklist/{item.json()['id']}", json={"completed": True})
    comment = await client.post(f"{API}/cards/{card['id']}/comments", json={"content": "Looks good"})
    assert item.status_code == 201
    assert comment.status_code == 201

    detail = (await client.get(f"{API}/cards/{card['id']}")).json()
    assert [c["content"] for c in detail["comments"]] == ["Looks good"]
    assert detail["comments"][0]["author"]["id"] == str(get_settings().default_user_id)
    assert detail["counts"]["checklist_items"] == 1
    assert detail["counts"]["completed_checklist_items"] == 1

    summary = (await _board(client, project["id"]))["columns"][0]["cards"][0]
    assert summary["counts"]["comments"] == 1
    assert [i["title"] for i in summary["checklist_items"]] == ["Wireframe"]


async def test_tags_link_within_project_only(client):
    project = await _create_project(client)
    other = await _create_project(client, "Other")
    backlog = (await _board(client, project["id"]))["columns"][0]["id"]
    card = (await client.post(f"{API}/columns/{backlog}/cards", json={"title": "Design"})).json()
    tag = (
        await client.post(
            f"{API}/projects/{project['id']}/tags", json={"name": "urgent", "color": "#FF0000"}
        )
    ).json()
    foreign = (
        await client.post(
            f"{API}/projects/{other['id']}/tags", json={"name": "urgent", "color": "#FF0000"}
        )
    ).json()

    linked = await client.post(f"{API}/cards/{card['id']}/tags/{tag['id']}")
    again = await client.post(f"{API}/cards/{card['id']}/tags/{tag['id']}")
    rejected = await client.post(f"{API}/cards/{card['id']}/tags/{foreign['id']}")

    assert linked.status_code == 201
    assert again.json()["id"] == linked.json()["id"]
    assert rejected.status_code == 400
    assert rejected.json()["field"] == "tag_id"
    summary = (await _board(client, project["id"]))["columns"][0]["cards"][0]
    assert [t["tag"]["name"] for t in summary["tags"]] == ["urgent"]

    removed = await client.delete(f"{API}/cards/{card['id']}/tags/{tag['id']}")
    missing = await client.delete(f"{API}/cards/{card['id']}/tags/{tag['id']}")
    assert removed.status_code == 204
    assert missing.status_code == 404


async def test_entities_link_to_cards(client):
    project = await _create_project(client)
    backlog = (await _board(client, project["id"]))["columns"][0]["id"]
    card = (await client.post(f"{API}/columns/{backlog}/cards", json={"title": "Lease"})).json()
    entity = await client.post(
        f"{API}/projects/{project['id']}/entities",
        json={"name": "Rua Augusta 100", "type": "property", "data": {"rooms": 3}},
    )
    assert entity.status_code == 201

    linked = await client.post(f"{API}/cards/{card['id']}/entities/{entity.json()['id']}")

    assert linked.status_code == 201
    assert linked.json()["entity"]["data"] == {"rooms": 3}


async def test_delete_project_cascades(client):
    project = await _create_project(client)
    backlog = (await _board(client, project["id"]))["columns"][0]["id"]
    card = (await client.post(f"{API}/columns/{backlog}/cards", json={"title": "Design"})).json()
    tag = (
        await client.post(
            f"{API}/projects/{project['id']}/tags", json={"name": "urgent", "color": "#FF0000"}
        )
    ).json()
    await client.post(f"{API}/cards/{card['id']}/tags/{tag['id']}")
    await client.post(f"{API}/cards/{card['id']}/comments", json={"content": "hi"})

    response = await client.delete(f"{API}/projects/{project['id']}")

    assert response.status_code == 204
    assert (await client.get(f"{API}/projects/{project['id']}")).status_code == 404
    assert (await client.get(f"{API}/cards/{card['id']}")).status_code == 404
    assert (await client.patch(f"{API}/tags/{tag['id']}", json={"name": "x"})).status_code == 404


async def test_delete_column_removes_its_cards(client):
    project = await _create_project(client)
    backlog = (await _board(client, project["id"]))["columns"][0]["id"]
    card = (await client.post(f"{API}/columns/{backlog}/cards", json={"title": "Design"})).json()

    response = await client.delete(f"{API}/columns/{backlog}")

    assert response.status_code == 204
    assert (await client.get(f"{API}/cards/{card['id']}")).status_code == 404
    assert len((await _board(client, project["id"]))["columns"]) == 3


async def test_activity_feed(client):
    project = await _create_project(client)
    columns = (await _board(client, project["id"]))["columns"]
    card = (
        await client.post(f"{API}/columns/{columns[0]['id']}/cards", json={"title": "Design"})
    ).json()
    await client.post(
        f"{API}/cards/{card['id']}/move", json={"column_id": columns[1]["id"], "position": 0}
    )

    project_feed = (await client.get(f"{API}/projects/{project['id']}/activity")).json()
    card_feed = (await client.get(f"{API}/cards/{card['id']}/activity")).json()

    assert {e["action"] for e in project_feed["items"]} == {
        "project_created",
        "card_created",
        "card_moved",
    }
    assert {e["action"] for e in card_feed["items"]} == {"card_created", "card_moved"}
    created = next(e for e in project_feed["items"] if e["action"] == "project_created")
    assert created["description"] == 'Project "Site" was created'
    assert created["details"] == {"projectName": "Site"}


async def test_projects_list_pages_without_gaps(client):
    names = {f"P{i}" for i in range(5)}
    for name in names:
        await _create_project(client, name)

    seen, cursor = [], None
    while True:
        params = {"limit": 2} | ({"cursor": cursor} if cursor else {})
        page = (await client.get(f"{API}/projects", params=params)).json()
        seen.extend(p["name"] for p in page["items"])
        if not page["has_more"]:
            assert page["next_cursor"] is None
            break
        cursor = page["next_cursor"]

    assert sorted(seen) == sorted(names)


async def test_invalid_cursor_is_rejected(client):
    response = await client.get(f"{API}/projects", params={"cursor": "not-a-cursor"})

    assert response.status_code == 400
    assert response.json()["field"] == "cursor"


async def test_health(client):
    response = await client.get("/health")

    body = response.json()
    assert response.status_code == 200
    assert body["database"] == "healthy"
    assert body["uploads"] == "healthy"
    assert body["websocket"] == {"projects": 0, "connections": 0}
