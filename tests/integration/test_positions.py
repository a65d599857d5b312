"""Position invariants for columns and cards, exercised against the database."""

import asyncio

import pytest
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from src.kanban.core.db import get_session
from src.kanban.core.exceptions import NotFoundError, PersistenceError, ValidationError
from src.kanban.models import BoardColumn
from src.kanban.repositories import CardRepository, ColumnRepository, PositionStore
from src.kanban.schemas.card import CardCreate
from src.kanban.schemas.column import ColumnCreate
from src.kanban.schemas.label import TagCreate
from src.kanban.schemas.position import PositionUpdate
from src.kanban.schemas.project import ProjectCreate
from src.kanban.services.project_service import DEFAULT_COLUMNS
from tests.factories import generate_uuid
from tests.helpers import FakeSubscriber, build_board

pytestmark = pytest.mark.integration


async def _project_with_columns(board, user):
    project = await board.projects.create_project(ProjectCreate(name="Site"), owner_id=user.id)
    columns = await board.columns.list_columns(project.id)
    return project, columns


async def test_new_project_has_default_columns(board, user):
    _, columns = await _project_with_columns(board, user)

    assert [(c.name, c.color) for c in columns] == list(DEFAULT_COLUMNS)
    assert [c.position for c in columns] == [0, 1, 2, 3]


async def test_sequential_columns_append_after_max(board, user):
    project, _ = await _project_with_columns(board, user)

    created = [
        await board.columns.create_column(project.id, ColumnCreate(name=f"Extra {i}"))
        for i in range(3)
    ]

    assert [c.position for c in created] == [4, 5, 6]


async def test_positions_are_not_renumbered_after_delete(board, user):
    project, columns = await _project_with_columns(board, user)

    await board.columns.delete_column(columns[1].id)
    remaining = await board.columns.list_columns(project.id)
    extra = await board.columns.create_column(project.id, ColumnCreate(name="QA"))

    assert [c.position for c in remaining] == [0, 2, 3]
    assert extra.position == 4


async def test_cards_append_within_their_column(board, user):
    _, columns = await _project_with_columns(board, user)
    backlog, doing = columns[0], columns[1]

    first = await board.cards.create_card(backlog.id, CardCreate(title="Design"), user.id)
    second = await board.cards.create_card(backlog.id, CardCreate(title="Copy"), user.id)
    other = await board.cards.create_card(doing.id, CardCreate(title="Build"), user.id)

    assert (first.position, second.position) == (0, 1)
    assert other.position == 0


async def test_reorder_applies_every_pair(board, user):
    project, columns = await _project_with_columns(board, user)
    orders = [PositionUpdate(id=c.id, position=3 - i) for i, c in enumerate(columns)]

    updated = await board.columns.reorder_columns(project.id, orders)

    reordered = await board.columns.list_columns(project.id)
    assert updated == 4
    assert [c.id for c in reordered] == [c.id for c in reversed(columns)]


async def test_reorder_ignores_ids_from_other_scopes(board, user):
    project, columns = await _project_with_columns(board, user)
    _, foreign_columns = await _project_with_columns(board, user)
    orders = [
        PositionUpdate(id=columns[0].id, position=9),
        PositionUpdate(id=foreign_columns[0].id, position=9),
    ]

    updated = await board.columns.reorder_columns(project.id, orders)

    assert updated == 1
    untouched = await board.columns.get_column(foreign_columns[0].id)
    assert untouched.position == 0


async def test_reorder_failure_changes_nothing(monkeypatch, engine, db_session, board, user):
    project, columns = await _project_with_columns(board, user)
    column_ids = [c.id for c in columns]
    orders = [PositionUpdate(id=c_id, position=3 - i) for i, c_id in enumerate(column_ids)]

    original_execute = AsyncSession.execute
    calls = 0

    async def flaky_execute(self, statement, *args, **kwargs):
        nonlocal calls
        calls += 1
        if calls == 2:
            raise OperationalError("UPDATE columns", {}, Exception("connection lost"))
        return await original_execute(self, statement, *args, **kwargs)

    monkeypatch.setattr(AsyncSession, "execute", flaky_execute)
    store = PositionStore(db_session, BoardColumn, "project_id")

    with pytest.raises(PersistenceError):
        await store.reorder(project.id, orders)
    monkeypatch.undo()

    async with get_session(engine) as session:
        persisted = await ColumnRepository(session).list_by_project(project.id)
    assert [c.id for c in persisted] == column_ids
    assert [c.position for c in persisted] == [0, 1, 2, 3]


async def test_move_keeps_sibling_positions(board, user):
    _, columns = await _project_with_columns(board, user)
    backlog, doing = columns[0], columns[1]
    design = await board.cards.create_card(backlog.id, CardCreate(title="Design"), user.id)
    copy = await board.cards.create_card(backlog.id, CardCreate(title="Copy"), user.id)

    moved = await board.cards.move_card(copy.id, doing.id, 0, actor_id=user.id)
    unchanged = await board.cards.get_card(design.id)

    assert (moved.column_id, moved.position) == (doing.id, 0)
    assert (unchanged.column_id, unchanged.position) == (backlog.id, 0)


async def test_move_to_unknown_column(board, user):
    _, columns = await _project_with_columns(board, user)
    card = await board.cards.create_card(columns[0].id, CardCreate(title="Design"), user.id)

    with pytest.raises(NotFoundError):
        await board.cards.move_card(card.id, generate_uuid(), 0, actor_id=user.id)


async def test_move_to_another_projects_column_is_rejected(board, registry, user):
    source, source_columns = await _project_with_columns(board, user)
    target = await board.projects.create_project(ProjectCreate(name="Other"), owner_id=user.id)
    target_columns = await board.columns.list_columns(target.id)
    card = await board.cards.create_card(source_columns[0].id, CardCreate(title="Design"), user.id)
    tag = await board.labels.create_tag(source.id, TagCreate(name="urgent", color="#FF0000"))
    await board.labels.add_card_tag(card.id, tag.id)
    watchers = [FakeSubscriber(source.id), FakeSubscriber(target.id)]
    for watcher in watchers:
        registry.subscribe(watcher.project_id, watcher)

    with pytest.raises(ValidationError) as exc_info:
        await board.cards.move_card(card.id, target_columns[0].id, 0, actor_id=user.id)

    assert exc_info.value.field == "column_id"
    assert all(watcher.sent == [] for watcher in watchers)
    unchanged = await board.cards.get_card(card.id)
    assert (unchanged.column_id, unchanged.position) == (source_columns[0].id, 0)
    view = await board.view.get_project_view(source.id)
    assert [t.tag.id for t in view.columns[0].cards[0].tags] == [tag.id]
    assert (await board.view.get_project_view(target.id)).counts.cards == 0


async def test_concurrent_moves_leave_card_in_one_column(engine, board, user):
    _, columns = await _project_with_columns(board, user)
    card = await board.cards.create_card(columns[0].id, CardCreate(title="Design"), user.id)
    requests = [(columns[1].id, 0), (columns[2].id, 3)]

    async def move(column_id, position):
        async with get_session(engine) as session:
            service = build_board(session).cards
            await service.move_card(card.id, column_id, position, actor_id=user.id)

    await asyncio.gather(*(move(column_id, position) for column_id, position in requests))

    async with get_session(engine) as session:
        repo = CardRepository(session)
        final = await repo.get_by_id(card.id)
        listed = await repo.list_by_columns([c.id for c in columns])
    assert (final.column_id, final.position) in requests
    assert [c.column_id for c in listed if c.id == card.id] == [final.column_id]


async def test_reorder_cards_within_column(board, user):
    _, columns = await _project_with_columns(board, user)
    backlog = columns[0]
    cards = [
        await board.cards.create_card(backlog.id, CardCreate(title=title), user.id)
        for title in ("Design", "Copy", "Launch")
    ]
    orders = [PositionUpdate(id=c.id, position=2 - i) for i, c in enumerate(cards)]

    updated = await board.cards.reorder_cards(backlog.id, orders)

    view = await board.view.get_project_view(backlog.project_id)
    assert updated == 3
    assert [c.title for c in view.columns[0].cards] == ["Launch", "Copy", "Design"]
