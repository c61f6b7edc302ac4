"""
Mock Session Service

There is no real authentication. Signing in creates a fixed demo user
for the chosen provider; "subscribing" flips its pro flag.

The pro flag gates CSV export and cloud sync. Gated operations call
check_premium() once at their boundary and act on the tagged result;
no prompt or UI side effect happens here.
"""

from typing import Optional

from pocket_ledger.models.session import (
    Allowed,
    Denied,
    GateResult,
    PremiumFeature,
    User,
)
from pocket_ledger.services.storage import SessionStorageInterface


SUPPORTED_PROVIDERS = ("google", "email")


class SessionError(Exception):
    """Session operation not possible in the current state."""
    pass


def check_premium(user: Optional[User], feature: PremiumFeature) -> GateResult:
    """Allowed for pro users, Denied for everyone else."""
    if user is not None and user.is_pro:
        return Allowed(feature=feature)
    return Denied(feature=feature, reason="upgrade required")


def mock_user(provider: str) -> User:
    """The demo user handed out for a login provider."""
    if provider not in SUPPORTED_PROVIDERS:
        raise ValueError(
            f"Unsupported login provider: {provider}. Allowed: {SUPPORTED_PROVIDERS}"
        )
    if provider == "google":
        return User(
            id="user_123",
            name="Google User",
            email="user@gmail.com",
            avatar="https://api.dicebear.com/7.x/avataaars/svg?seed=Felix",
        )
    return User(
        id="user_123",
        name="Email User",
        email="user@email.com",
    )


class SessionService:
    """
    Holds the signed-in user and remembers it in session storage.
    """

    def __init__(self, storage: Optional[SessionStorageInterface] = None):
        self._storage = storage
        self._user: Optional[User] = None

    @property
    def current_user(self) -> Optional[User]:
        return self._user

    @property
    def is_signed_in(self) -> bool:
        return self._user is not None

    async def restore(self) -> Optional[User]:
        """Pick up the user remembered from a previous run, if any."""
        if self._storage:
            self._user = await self._storage.load_user()
        return self._user

    async def login(self, provider: str) -> User:
        """Sign in as the demo user for a provider."""
        self._user = mock_user(provider)
        await self._persist()
        return self._user

    async def logout(self) -> None:
        """Sign out and forget the remembered user."""
        self._user = None
        if self._storage:
            await self._storage.clear_user()

    async def subscribe(self) -> User:
        """
        Upgrade the signed-in user to pro.

        Raises:
            SessionError: If nobody is signed in
        """
        if self._user is None:
            raise SessionError("Sign in before upgrading")
        self._user = self._user.model_copy(update={"is_pro": True})
        await self._persist()
        return self._user

    def check(self, feature: PremiumFeature) -> GateResult:
        return check_premium(self._user, feature)

    async def _persist(self) -> None:
        if self._storage and self._user:
            await self._storage.save_user(self._user)
