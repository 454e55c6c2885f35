import json
from collections.abc import Sequence
from datetime import UTC, datetime, timedelta
from typing import Any

import jwt
from jwt import InvalidKeyError, InvalidTokenError
from pydantic import ValidationError
from sqlmodel.ext.asyncio.session import AsyncSession
from src.core.config import settings
from src.core.exceptions import errors
from src.core.logging import get_logger
from src.domain.models import Account
from src.domain.repositories import AccountRepository
from src.domain.schemas import AuthSessionState, PermissionGrant, PermissionScope

logger = get_logger(__name__)

ALGORITHM = "HS256"


class SecurityService:
    """
    Service for account lookups, permission evaluation and bearer tokens.
    """

    def __init__(self, session: AsyncSession):
        self.session = session
        self.account_repository = AccountRepository(session=session)
        self.algorithm = ALGORITHM
        self.secret_key = settings.AUTH_SECRET_KEY

    def create_jwt_token(
        self,
        subject: AuthSessionState,
        expiry_time_in_secs: timedelta = timedelta(seconds=settings.AUTH_TOKEN_MAX_AGE),
    ) -> str:
        """
        Create a JWT token for the given session state.

        Args:
            subject: The authenticated caller the token stands for
            expiry_time_in_secs: Token expiry time in seconds

        Returns:
            Encoded JWT token string
        """
        now = datetime.now(UTC)
        payload = {
            "aud": settings.APP_NAME,
            "exp": now + expiry_time_in_secs,
            "iat": now,
            "nbf": now,
            "sub": json.dumps(subject.model_dump(exclude_none=True)),
        }
        return jwt.encode(payload, self.secret_key, algorithm=self.algorithm)

    def decode_jwt_token(self, token: str) -> dict[str, Any]:
        """
        Decode and validate a JWT token.

        Raises:
            InvalidTokenError: If the token is invalid or expired
        """
        try:
            return jwt.decode(
                jwt=token,
                audience=settings.APP_NAME,
                key=self.secret_key,
                options={"require": ["exp", "iat", "nbf", "sub", "aud"]},
                algorithms=[self.algorithm],
            )
        except (InvalidTokenError, InvalidKeyError) as error:
            raise errors.InvalidTokenError() from error

    def get_session_state(self, decoded_token: dict[str, Any]) -> AuthSessionState:
        """
        Parse the subject of a decoded token into the caller's session state.

        The subject is either a JSON encoded `AuthSessionState` or the bare user name.

        Raises:
            InvalidTokenError: If the subject is missing or malformed
        """
        subject = decoded_token.get("sub")
        if not subject:
            raise errors.InvalidTokenError()

        try:
            subject_data = json.loads(subject)
        except json.JSONDecodeError:
            subject_data = {"user_name": subject}

        if not isinstance(subject_data, dict):
            subject_data = {"user_name": subject}

        try:
            return AuthSessionState(**subject_data)
        except ValidationError as e:
            logger.debug(f"{__name__}.get_session_state:: malformed token subject", exc_info=True)
            raise errors.InvalidTokenError() from e

    def _grants_of(self, account: Account) -> list[PermissionGrant]:
        return [
            PermissionGrant(
                id=permission.permission_id,
                assigned_scopes=[PermissionScope(**scope) for scope in permission.scopes or []],
            )
            for permission in account.permissions
        ]

    async def find_by_id(self, id: str) -> Account | None:
        """Get an account by id, None when it does not exist."""
        return await self.account_repository.find_one_by(id)

    async def find_by_name(self, user_name: str) -> Account | None:
        """Get an account by user name, None when it does not exist."""
        if not user_name:
            return None
        return await self.account_repository.get_by_user_name(user_name)

    async def get_user_permissions(self, user_name: str) -> list[PermissionGrant]:
        """
        Get the permissions granted to a user along with their assigned scopes.

        Args:
            user_name (str): The user name of the account

        Returns:
            list[PermissionGrant]: The grants, empty when the account does not exist
        """
        account = await self.find_by_name(user_name)
        if account is None:
            return []

        return self._grants_of(account)

    async def user_has_any_permission(
        self,
        user_name: str,
        scopes: Sequence[str] | None,
        *permission_ids: str,
    ) -> bool:
        """
        Check whether a user holds any of `permission_ids`, globally or for one of `scopes`.

        Unknown and unapproved accounts never pass, administrators always do.
        Otherwise the names the user's grants satisfy are intersected with the
        checked names: every permission id, plus `<id>:<scope>` for each scope.

        Args:
            user_name (str): The user name of the account
            scopes (Sequence[str] | None): Scope strings such as `StoreSelectedScope:<id>`
            *permission_ids (str): The permissions any of which grants access

        Returns:
            bool: True if access is granted
        """
        account = await self.find_by_name(user_name)

        if account is None or not account.is_approved():
            return False

        if account.is_administrator:
            return True

        granted_names = {name for grant in self._grants_of(account) for name in grant.combination_names()}

        checked_names = set(permission_ids)
        for permission_id in permission_ids:
            checked_names.update(f"{permission_id}:{scope}" for scope in scopes or [])

        return not granted_names.isdisjoint(checked_names)
