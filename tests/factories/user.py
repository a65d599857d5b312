"""User factory for test data generation."""

from polyfactory import Use

from src.kanban.models import User
from tests.factories.base import BaseFactory, generate_uuid, utc_now


class UserFactory(BaseFactory):
    """Factory for generating User test data."""

    __model__ = User

    id = Use(generate_uuid)
    email = Use(lambda: f"user_{generate_uuid().hex[-8:]}@example.com")
    first_name = "Test"
    last_name = "User"
    profile_image_url = None
    created_at = Use(utc_now)
    updated_at = Use(utc_now)

    @classmethod
    def anonymous(cls, **kwargs):
        """Create a user without an email."""
        return cls.build(email=None, **kwargs)
