"""Project, column and card factories for test data generation."""

from polyfactory import Use

from src.kanban.models import BoardColumn, Card, Project
from src.kanban.models.enums import Priority
from tests.factories.base import BaseFactory, generate_uuid, utc_now


class ProjectFactory(BaseFactory):
    """Factory for generating Project test data. `owner_id` must be set explicitly."""

    __model__ = Project

    id = Use(generate_uuid)
    name = Use(lambda: f"Project {generate_uuid().hex[:8]}")
    description = None
    color = "#0066CC"
    icon = "project-diagram"
    progress = 0
    deadline = None
    owner_id = None
    created_at = Use(utc_now)
    updated_at = Use(utc_now)


class ColumnFactory(BaseFactory):
    """Factory for generating BoardColumn test data. `project_id` must be set explicitly."""

    __model__ = BoardColumn

    id = Use(generate_uuid)
    name = Use(lambda: f"Column {generate_uuid().hex[:6]}")
    color = "#6B7280"
    position = 0
    project_id = None
    created_at = Use(utc_now)
    updated_at = Use(utc_now)


class CardFactory(BaseFactory):
    """Factory for generating Card test data. `column_id` and `created_by_id` must be set."""

    __model__ = Card

    id = Use(generate_uuid)
    title = Use(lambda: f"Card {generate_uuid().hex[:6]}")
    description = None
    priority = Priority.MEDIUM.value
    position = 0
    deadline = None
    completed = False
    column_id = None
    assignee_id = None
    created_by_id = None
    created_at = Use(utc_now)
    updated_at = Use(utc_now)

    @classmethod
    def completed_card(cls, **kwargs):
        return cls.build(completed=True, **kwargs)
