"""Factory Boy definition for :class:`pawpong.models.adopter.Adopter`."""

from __future__ import annotations

import factory
from pawpong.models import AccountStatus, Adopter, AuthProvider
from werkzeug.security import generate_password_hash

from tests.factories import BaseFactory

DEFAULT_PASSWORD = "Passw0rd!"
DEFAULT_PASSWORD_HASH = generate_password_hash(DEFAULT_PASSWORD, method="pbkdf2:sha256:1000")


class AdopterFactory(BaseFactory):
    """
    Build persisted adopters with a local password.

    Notes
    -----
    - Pass ``password_hash=None`` for a pure social account.
    - Use the ``social`` trait to link a Kakao identity.
    """

    class Meta:
        model = Adopter

    id = None  # let autoincrement handle it
    email = factory.Sequence(lambda n: f"adopter{n}@example.com")
    full_name = factory.Sequence(lambda n: f"입양자{n}")
    nickname = factory.Sequence(lambda n: f"adopter{n}")
    phone = "010-1234-5678"
    account_status = AccountStatus.ACTIVE
    password_hash = DEFAULT_PASSWORD_HASH

    class Params:
        social = factory.Trait(
            auth_provider=AuthProvider.KAKAO,
            provider_user_id=factory.Sequence(lambda n: f"kakao-{n}"),
            provider_email=factory.SelfAttribute("email"),
        )
