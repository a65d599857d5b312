"""Shared enums for models."""

from enum import Enum


class Priority(str, Enum):
    """Card priority."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class EntityType(str, Enum):
    """Kind of domain record a board entity cross-references."""

    PROPERTY = "property"
    PERSON = "person"
    CONTRACT = "contract"


class ActivityAction(str, Enum):
    """Activity log action types."""

    PROJECT_CREATED = "project_created"
    CARD_CREATED = "card_created"
    CARD_MOVED = "card_moved"
    CARD_COMPLETED = "card_completed"
    COMMENT_ADDED = "comment_added"
    ATTACHMENT_ADDED = "attachment_added"
