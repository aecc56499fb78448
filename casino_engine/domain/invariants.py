"""Balance and ledger rules

Pure predicates that gate a wager or an admin adjustment, plus the bookkeeping
checks used to reconcile an account's ledger against its balance.
"""
from dataclasses import dataclass
from typing import Iterable, Optional

from casino_engine.domain.entities.game_type import GameConfig
from casino_engine.domain.entities.transaction import Transaction
from casino_engine.domain.exceptions import InsufficientFunds, InvalidAmount
from casino_engine.domain.money import is_currency_amount, round_currency

LEDGER_TOLERANCE = 0.005


def can_afford(balance: float, stake: float) -> bool:
    return stake <= balance


def in_range(stake: float, min_bet: float, max_bet: float) -> bool:
    return min_bet <= stake <= max_bet


def check_wager(balance: float, stake: float, config: GameConfig) -> None:
    """Raise InsufficientFunds or InvalidAmount when a stake may not be placed

    Affordability is checked first so an over-balance stake always reports as
    insufficient funds, whatever the table limits are.
    """
    if not is_currency_amount(stake) or stake <= 0:
        raise InvalidAmount("Bet amount must be a positive amount with at most 2 decimals")
    if not can_afford(balance, stake):
        raise InsufficientFunds()
    if not in_range(stake, config.min_bet, config.max_bet):
        raise InvalidAmount(f"Bet amount must be between {config.min_bet} and {config.max_bet}")


@dataclass(frozen=True)
class AdjustmentCheck:
    ok: bool
    new_balance: float
    error: Optional[str] = None


def validate_admin_adjustment(current_balance: float, delta: float,
                              max_balance: float) -> AdjustmentCheck:
    new_balance = round_currency(current_balance + delta)
    if new_balance < 0:
        return AdjustmentCheck(False, new_balance, "Cannot reduce balance below zero")
    if new_balance > max_balance:
        return AdjustmentCheck(False, new_balance, f"Cannot increase balance above {max_balance}")
    return AdjustmentCheck(True, new_balance)


def entry_is_consistent(entry: Transaction) -> bool:
    """balance_after == balance_before + amount"""
    return abs(entry.balance_before + entry.amount - entry.balance_after) < LEDGER_TOLERANCE


def ledger_balance(opening_balance: float, entries: Iterable[Transaction]) -> float:
    return round_currency(opening_balance + sum(entry.amount for entry in entries))


def ledger_is_consistent(opening_balance: float, entries: Iterable[Transaction],
                         current_balance: float) -> bool:
    """Every entry balances and the chain lands on the account's current balance"""
    entries = list(entries)
    if not all(entry_is_consistent(entry) for entry in entries):
        return False
    return abs(ledger_balance(opening_balance, entries) - current_balance) < LEDGER_TOLERANCE
