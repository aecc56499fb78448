"""Open account use case"""
import logging

from casino_engine.application.ports.account_repository_port import AccountRepositoryPort
from casino_engine.domain.entities.account import PLAYER, Account

logger = logging.getLogger(__name__)


class OpenAccountUseCase:
    """Get the account for an authenticated user, creating it with the starting balance"""

    def __init__(self, account_repository: AccountRepositoryPort, default_balance: float):
        self.account_repository = account_repository
        self.default_balance = default_balance

    def execute(self, user_id: str, username: str, role: str = PLAYER) -> Account:
        account = self.account_repository.get(user_id)
        if account:
            return account

        account = self.account_repository.create(Account(
            id=user_id,
            username=username,
            balance=self.default_balance,
            role=role
        ))
        logger.info(f"Opened account {user_id} with balance {self.default_balance}")
        return account
