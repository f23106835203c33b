"""Role-neutral view over the two account models.

Adopter and Breeder share no base class. Services read them through
:class:`AccountView` so the token, response and logging code never branches
on the concrete type.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, TypeAlias, TypeVar

from pawpong.models.adopter import Adopter
from pawpong.models.breeder import Breeder
from pawpong.models.enums import AccountStatus, AuthProvider, Role
from pawpong.services._shared.errors import BadRequestError

if TYPE_CHECKING:
    from pawpong.uow.base import UnitOfWork

Account: TypeAlias = Adopter | Breeder


@dataclass(frozen=True, slots=True)
class AccountView:
    """
    Normalized, detached snapshot of an account.

    :param user_id: Primary key rendered as string (the token ``sub``).
    :param email: Login email.
    :param role: Account variant.
    :param name: Real name (adopter ``full_name`` / breeder ``name``).
    :param nickname: Adopter nickname or breeder business name.
    :param account_status: Lifecycle status.
    :param profile_image_url: Optional avatar URL.
    """

    user_id: str
    email: str
    role: Role
    name: str
    nickname: str | None
    account_status: AccountStatus
    profile_image_url: str | None = None

    def to_user_info(self) -> dict[str, Any]:
        """Return the ``userInfo`` block shared by every auth response."""
        return {
            "userId": self.user_id,
            "emailAddress": self.email,
            "nickname": self.nickname,
            "name": self.name,
            "userRole": self.role.value,
            "accountStatus": self.account_status.value,
            "profileImageUrl": self.profile_image_url,
        }


def view_of(account: Account) -> AccountView:
    """Build an :class:`AccountView` from either account model."""
    if isinstance(account, Adopter):
        return AccountView(
            user_id=str(account.id),
            email=account.email,
            role=Role.ADOPTER,
            name=account.full_name,
            nickname=account.nickname,
            account_status=account.account_status,
            profile_image_url=account.profile_image_url,
        )
    return AccountView(
        user_id=str(account.id),
        email=account.email,
        role=Role.BREEDER,
        name=account.name,
        nickname=account.breeder_name,
        account_status=account.account_status,
        profile_image_url=account.profile_image_url,
    )


# ----------------------------- Cross-table lookups ----------------------------


def find_social_account(
    uow: UnitOfWork, provider: AuthProvider, provider_id: str
) -> Account | None:
    """
    Resolve a provider identity across both tables, adopters first.

    :param uow: Open unit of work (read-only is enough).
    :param provider: OAuth provider.
    :param provider_id: Provider-side user id.
    :returns: The linked account or ``None``.
    """
    account: Account | None = uow.adopters.find_by_social(provider, provider_id)
    if account is None:
        account = uow.breeders.find_by_social(provider, provider_id)
    return account


def email_taken(uow: UnitOfWork, email: str) -> bool:
    """Return ``True`` if either table already holds ``email``."""
    return uow.adopters.email_exists(email) or uow.breeders.email_exists(email)


E = TypeVar("E", bound=Enum)


def parse_choice(enum_cls: type[E], value: Any, message: str, default: E | None = None) -> E:
    """
    Coerce a client-supplied value into ``enum_cls``.

    :param default: Returned when ``value`` is empty.
    :raises BadRequestError: With ``message`` if the value is not a member.
    """
    if value in (None, "") and default is not None:
        return default
    try:
        return enum_cls(value)
    except ValueError as exc:
        raise BadRequestError(message) from exc
