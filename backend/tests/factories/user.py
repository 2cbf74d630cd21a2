"""Factory Boy definition for :class:`authgate.models.user.User`."""

from __future__ import annotations

import factory
from authgate.models.user import User

from tests.factories import BaseFactory


class UserFactory(BaseFactory):
    """Build persisted, active :class:`authgate.models.user.User` instances."""

    class Meta:
        model = User

    id = None  # let autoincrement handle it
    login = factory.Sequence(lambda n: f"user{n}")
    email = factory.LazyAttribute(lambda o: f"{o.login}@example.com")
    display_name = factory.LazyAttribute(lambda o: o.login.capitalize())
    is_active = True
