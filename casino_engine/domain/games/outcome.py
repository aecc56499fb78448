"""Result of resolving one wager"""
from dataclasses import dataclass, field
from typing import Any, Dict

from casino_engine.domain.money import calculate_payout


@dataclass(frozen=True)
class GameOutcome:
    multiplier: float
    payout: float
    win: bool
    result: Dict[str, Any] = field(default_factory=dict)
    push: bool = False

    @classmethod
    def settle(cls, stake: float, multiplier: float, win: bool,
               result: Dict[str, Any], push: bool = False) -> 'GameOutcome':
        """Apply the general payout rule: winners and pushes are paid, losers get 0"""
        payout = calculate_payout(stake, multiplier) if (win or push) else 0.0
        return cls(multiplier=multiplier, payout=payout, win=win, result=result, push=push)
