"""Denormalized project view assembled over rows seeded directly."""

import pytest
from sqlalchemy import event

from tests.factories import CardFactory, ColumnFactory, ProjectFactory, UserFactory

pytestmark = pytest.mark.integration


async def _seed(db_session, owner, cards_per_column):
    assignee = UserFactory.anonymous()
    project = ProjectFactory.build(owner_id=owner.id)
    columns = [
        ColumnFactory.build(project_id=project.id, position=position, name=name)
        for position, name in ((1, "Doing"), (0, "Todo"))
    ]
    cards = []
    for column in columns:
        for position in range(cards_per_column):
            cards.append(
                CardFactory.build(
                    column_id=column.id,
                    created_by_id=owner.id,
                    assignee_id=assignee.id,
                    position=cards_per_column - position,
                )
            )
    cards.append(
        CardFactory.completed_card(column_id=columns[1].id, created_by_id=owner.id, position=0)
    )
    db_session.add_all([assignee, project, *columns, *cards])
    await db_session.commit()
    return project, assignee


async def test_project_view_orders_and_inlines(db_session, board, user):
    project, assignee = await _seed(db_session, user, cards_per_column=2)

    view = await board.view.get_project_view(project.id)

    assert [c.name for c in view.columns] == ["Todo", "Doing"]
    todo = view.columns[0].cards
    assert [c.position for c in todo] == [0, 1, 2]
    assert todo[0].completed
    assert todo[0].assignee is None
    assert todo[1].assignee.id == assignee.id
    assert todo[1].assignee.email is None
    assert todo[1].created_by.id == user.id
    assert view.owner.id == user.id
    assert view.counts.model_dump() == {"cards": 5, "completed_cards": 1}


async def test_project_view_query_count_independent_of_card_count(db_session, engine, board, user):
    small, _ = await _seed(db_session, user, cards_per_column=1)
    large, _ = await _seed(db_session, user, cards_per_column=10)

    statements = []

    def count(conn, cursor, statement, parameters, context, executemany):
        statements.append(statement)

    event.listen(engine.sync_engine, "before_cursor_execute", count)
    try:
        db_session.expire_all()
        await board.view.get_project_view(small.id)
        small_queries = len(statements)
        statements.clear()
        db_session.expire_all()
        await board.view.get_project_view(large.id)
    finally:
        event.remove(engine.sync_engine, "before_cursor_execute", count)

    assert len(statements) == small_queries


async def test_project_view_loads_users_in_one_query(db_session, engine, board, user):
    project, _ = await _seed(db_session, user, cards_per_column=2)
    user_queries = []

    def record(conn, cursor, statement, parameters, context, executemany):
        if "FROM users" in statement:
            user_queries.append(statement)

    event.listen(engine.sync_engine, "before_cursor_execute", record)
    try:
        view = await board.view.get_project_view(project.id)
    finally:
        event.remove(engine.sync_engine, "before_cursor_execute", record)

    assert len(user_queries) == 1
    assert view.owner.id == user.id


async def test_project_view_owner_without_cards(db_session, board, user):
    project = ProjectFactory.build(owner_id=user.id)
    db_session.add(project)
    await db_session.commit()

    view = await board.view.get_project_view(project.id)

    assert view.owner.id == user.id
    assert view.counts.cards == 0
