"""Factory Boy definition for :class:`cook_service.models.cook.Cook`."""

from __future__ import annotations

from cook_service.models import Cook
from werkzeug.security import generate_password_hash

import factory
from tests.factories import BaseFactory

DEFAULT_SECRET = "Passw0rd!"


class CookFactory(BaseFactory):
    """
    Build persisted :class:`Cook` rows with a locally hashed secret.

    Notes
    -----
    - ``id`` is left to the model default (UUID string).
    - Pass ``secret=...`` to store an external marker instead of a hash.
    """

    class Meta:
        model = Cook

    name = factory.Sequence(lambda n: f"cook{n}")
    email = factory.Sequence(lambda n: f"cook{n}@example.com")
    secret = factory.LazyFunction(
        lambda: generate_password_hash(DEFAULT_SECRET, method="pbkdf2:sha256:1000")
    )
    avatar = None
