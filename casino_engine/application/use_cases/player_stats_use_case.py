"""Player bet history and statistics"""
from collections import Counter
from typing import Iterable, List, Optional

from casino_engine.application.dto.stats import PlayerStats
from casino_engine.application.ports.bet_repository_port import BetRepositoryPort
from casino_engine.domain.entities.bet import Bet
from casino_engine.domain.entities.game_type import GameType
from casino_engine.domain.money import round_currency

STATS_SAMPLE_SIZE = 1000


def summarize_player(bets: Iterable[Bet]) -> PlayerStats:
    bets = list(bets)
    if not bets:
        return PlayerStats()

    total_wagered = round_currency(sum(bet.amount for bet in bets))
    total_won = round_currency(sum(bet.payout for bet in bets))
    wins = sum(1 for bet in bets if bet.payout > bet.amount)
    favorite_game = Counter(bet.game_type for bet in bets).most_common(1)[0][0]

    return PlayerStats(
        total_bets=len(bets),
        total_wagered=total_wagered,
        total_won=total_won,
        net_profit=round_currency(total_won - total_wagered),
        win_rate=wins / len(bets),
        favorite_game=favorite_game
    )


class PlayerStatsUseCase:

    def __init__(self, bet_repository: BetRepositoryPort):
        self.bet_repository = bet_repository

    def history(self, user_id: str, limit: int = 50) -> List[Bet]:
        return self.bet_repository.list_by_user(user_id, limit=limit)

    def stats(self, user_id: str, game_type: Optional[str] = None) -> PlayerStats:
        if game_type:
            game_type = GameType.parse(game_type).value
        bets = self.bet_repository.list_by_user(user_id, limit=STATS_SAMPLE_SIZE, game_type=game_type)
        return summarize_player(bets)
