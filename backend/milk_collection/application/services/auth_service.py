"""Application service for sign-in, sign-up and the bootstrap administrator."""

import logging

from milk_collection.application.interfaces import (
    PasswordHasher,
    TokenProvider,
    UserRepository,
)
from milk_collection.application.schemas.auth import SignUpRequest
from milk_collection.domain.entities import Actor, Role, User
from milk_collection.domain.exceptions import (
    DuplicateEntityError,
    InvalidCredentialsError,
    PermissionDeniedError,
)

logger = logging.getLogger(__name__)


class AuthService:
    """Turns credentials into access tokens and tokens back into actors."""

    def __init__(
        self,
        users: UserRepository,
        hasher: PasswordHasher,
        tokens: TokenProvider,
        allow_admin_signup: bool = False,
    ):
        self._users = users
        self._hasher = hasher
        self._tokens = tokens
        self._allow_admin_signup = allow_admin_signup

    async def sign_in(self, username: str, password: str) -> tuple[User, str]:
        """Return the account and a fresh token; unknown user and wrong password fail alike."""
        user = await self._users.get_by_username(username)
        if user is None or not self._hasher.verify(password, user.password_hash):
            logger.warning("Failed sign-in for '%s'", username)
            raise InvalidCredentialsError()
        token = self._tokens.issue(str(user.id))
        logger.info("User %s signed in", user.username)
        return user, token

    async def sign_up(self, data: SignUpRequest) -> User:
        if await self._users.get_by_username(data.username) is not None:
            raise DuplicateEntityError("User", "username", data.username)
        if await self._users.get_by_email(data.email) is not None:
            raise DuplicateEntityError("User", "email", data.email)

        roles = set(data.roles or [Role.USER])
        if Role.ADMIN in roles and not self._allow_admin_signup:
            # The first account may claim ADMIN so a fresh install can be administered.
            if await self._users.count() > 0:
                raise PermissionDeniedError("Administrator accounts cannot be self-registered")

        user = await self._users.create(
            User(
                username=data.username,
                email=data.email,
                password_hash=self._hasher.hash(data.password),
                phone_number=data.phone_number,
                roles=roles,
            )
        )
        logger.info("User %s registered with roles %s", user.username, sorted(r.value for r in roles))
        return user

    async def resolve_actor(self, token: str) -> Actor | None:
        """Map a bearer token to the actor it identifies, or None when invalid or stale.

        Tokens carry the account id rather than the username, which can change.
        """
        subject = self._tokens.read_subject(token)
        if subject is None or not subject.isdigit():
            return None
        user = await self._users.get_by_id(int(subject))
        if user is None:
            logger.warning("Token subject %s no longer exists", subject)
            return None
        return Actor.from_user(user)

    async def ensure_admin(self, username: str, email: str, password: str) -> User | None:
        """Create the bootstrap administrator unless an account with that name exists."""
        existing = await self._users.get_by_username(username)
        if existing is not None:
            logger.debug("Bootstrap administrator '%s' already exists", username)
            return None
        user = await self._users.create(
            User(
                username=username,
                email=email,
                password_hash=self._hasher.hash(password),
                roles={Role.ADMIN, Role.USER},
            )
        )
        logger.info("Seeded bootstrap administrator '%s'", username)
        return user
