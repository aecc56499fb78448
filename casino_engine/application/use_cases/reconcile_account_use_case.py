"""Replay an account's ledger against its stored balance"""
from casino_engine.application.ports.account_repository_port import AccountRepositoryPort
from casino_engine.application.ports.transaction_repository_port import TransactionRepositoryPort
from casino_engine.domain.exceptions import AccountNotFound
from casino_engine.domain.invariants import entry_is_consistent, ledger_balance, ledger_is_consistent
from casino_engine.domain.money import round_currency


class ReconcileAccountUseCase:
    """Report whether the ledger chain for an account still lands on its balance"""

    def __init__(
        self,
        account_repository: AccountRepositoryPort,
        transaction_repository: TransactionRepositoryPort,
        opening_balance: float
    ):
        self.account_repository = account_repository
        self.transaction_repository = transaction_repository
        self.opening_balance = opening_balance

    def execute(self, user_id: str) -> dict:
        account = self.account_repository.get(user_id)
        if account is None:
            raise AccountNotFound()

        entries = self.transaction_repository.list_by_user(user_id, limit=None)
        expected = ledger_balance(self.opening_balance, entries)
        return {
            "user_id": user_id,
            "balance": account.balance,
            "ledger_balance": expected,
            "discrepancy": round_currency(account.balance - expected),
            "entries": len(entries),
            "broken_entries": [entry.id for entry in entries if not entry_is_consistent(entry)],
            "consistent": ledger_is_consistent(self.opening_balance, entries, account.balance)
        }
