"""Persistence operations for accounts."""

import uuid

from libs.common.errors import NotFoundError
from libs.common.logging import get_logger
from services.accounts_service.models import Account
from services.accounts_service.schemas import AccountCreate, AccountResponse
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

logger = get_logger(__name__)


class AccountNotFoundError(NotFoundError):
    """No account matched the lookup."""


class AccountsResource:
    """Create and look up accounts."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(self, account_body: AccountCreate) -> AccountResponse:
        account = Account(**account_body.model_dump())

        self.db.add(account)
        try:
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise
        await self.db.refresh(account)

        logger.info("Created account %s", account.id)
        return AccountResponse.model_validate(account)

    async def get(self, account_id: uuid.UUID) -> AccountResponse:
        result = await self.db.execute(select(Account).where(Account.id == account_id))
        account = result.scalar_one_or_none()

        if account is None:
            raise AccountNotFoundError(f"no account with id {account_id} found", 404)
        return AccountResponse.model_validate(account)
