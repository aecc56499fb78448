"""Admin read-side views: users, ledger and the dashboard"""
from collections import defaultdict
from datetime import datetime, timedelta
from typing import Dict, Iterable, List, Optional
import time

from casino_engine.application.dto.stats import GameStats
from casino_engine.application.ports.account_repository_port import AccountRepositoryPort
from casino_engine.application.ports.bet_repository_port import BetRepositoryPort
from casino_engine.application.ports.transaction_repository_port import TransactionRepositoryPort
from casino_engine.application.use_cases.player_stats_use_case import summarize_player
from casino_engine.domain.entities.account import Account
from casino_engine.domain.entities.bet import Bet
from casino_engine.domain.exceptions import AccountNotFound, PermissionDenied
from casino_engine.domain.money import round_currency

DASHBOARD_USER_LIMIT = 1000
RECENT_TRANSACTIONS = 20
TOP_PLAYERS = 5
DETAIL_LIMIT = 50


def summarize_game(bets: Iterable[Bet]) -> GameStats:
    bets = list(bets)
    total_volume = round_currency(sum(bet.amount for bet in bets))
    total_payout = round_currency(sum(bet.payout for bet in bets))
    return GameStats(
        total_bets=len(bets),
        total_volume=total_volume,
        total_payout=total_payout,
        house_profit=round_currency(total_volume - total_payout),
        average_bet=round_currency(total_volume / len(bets)) if bets else 0.0
    )


def period_starts(now: float) -> Dict[str, float]:
    """Local midnight today, midnight seven days ago and the first of the month"""
    midnight = datetime.fromtimestamp(now).replace(hour=0, minute=0, second=0, microsecond=0)
    return {
        "today": midnight.timestamp(),
        "week": (midnight - timedelta(days=7)).timestamp(),
        "month": midnight.replace(day=1).timestamp()
    }


class AdminDashboardUseCase:

    def __init__(
        self,
        account_repository: AccountRepositoryPort,
        bet_repository: BetRepositoryPort,
        transaction_repository: TransactionRepositoryPort
    ):
        self.account_repository = account_repository
        self.bet_repository = bet_repository
        self.transaction_repository = transaction_repository

    def authorize(self, admin_id: str) -> Account:
        """Admin views are only for accounts with the admin role"""
        admin = self.account_repository.get(admin_id)
        if admin is None or not admin.is_admin:
            raise PermissionDenied()
        return admin

    def list_users(self, limit: int = 100, offset: int = 0) -> List[dict]:
        return [account.to_public_dict() for account in self.account_repository.list(limit, offset)]

    def list_transactions(self, limit: int = 100, offset: int = 0) -> List[dict]:
        return [tx.to_public_dict() for tx in self.transaction_repository.list_recent(limit, offset)]

    def user_details(self, user_id: str) -> dict:
        user = self.account_repository.get(user_id)
        if user is None:
            raise AccountNotFound()
        return {
            "user": user.to_public_dict(),
            "bets": [bet.to_public_dict() for bet in self.bet_repository.list_by_user(user_id, DETAIL_LIMIT)],
            "transactions": [
                tx.to_public_dict() for tx in self.transaction_repository.list_by_user(user_id, DETAIL_LIMIT)
            ]
        }

    def dashboard(self, now: Optional[float] = None) -> dict:
        now = now or time.time()
        users = self.account_repository.list(DASHBOARD_USER_LIMIT, 0)
        starts = period_starts(now)
        # Week and month windows can start in either order
        bets = self.bet_repository.list_since(min(starts["week"], starts["month"]))

        last_24h = now - 24 * 3600
        active_users = {bet.user_id for bet in bets if bet.created_at >= last_24h}

        return {
            "totalUsers": len(users),
            "activeUsers": len(active_users),
            "totalBalance": round_currency(sum(user.balance for user in users)),
            "todayStats": summarize_game(b for b in bets if b.created_at >= starts["today"]).to_dict(),
            "weekStats": summarize_game(b for b in bets if b.created_at >= starts["week"]).to_dict(),
            "monthStats": summarize_game(b for b in bets if b.created_at >= starts["month"]).to_dict(),
            "recentTransactions": self.list_transactions(RECENT_TRANSACTIONS),
            "topPlayers": self._top_players(users, bets)
        }

    def _top_players(self, users, bets: List[Bet]) -> List[dict]:
        by_user = defaultdict(list)
        for bet in bets:
            by_user[bet.user_id].append(bet)

        ranked = []
        for user in users:
            stats = summarize_player(by_user.get(user.id, []))
            entry = user.to_public_dict()
            entry["stats"] = stats.to_dict()
            ranked.append(entry)

        ranked.sort(key=lambda entry: entry["stats"]["totalWagered"], reverse=True)
        return ranked[:TOP_PLAYERS]
