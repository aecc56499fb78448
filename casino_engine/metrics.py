"""Business metrics exported through prometheus_client"""
from prometheus_client import Counter


class BusinessMetrics:
    """Counters for wagering volume and collaborator failures"""

    BETS = Counter(
        "casino_bets_total", "Settled bets", ["game_type", "outcome"]
    )
    BET_VOLUME = Counter(
        "casino_bet_volume_total", "Total amount staked", ["game_type"]
    )
    PAYOUT_VOLUME = Counter(
        "casino_payout_volume_total", "Total amount paid out", ["game_type"]
    )
    ADMIN_ADJUSTMENTS = Counter(
        "casino_admin_adjustments_total", "Admin balance adjustments"
    )
    STORAGE_FAILURES = Counter(
        "casino_storage_failures_total", "Persistence failures by stage", ["stage"]
    )
    NOTIFICATION_FAILURES = Counter(
        "casino_notification_failures_total", "Undelivered notifications", ["event"]
    )

    @classmethod
    def track_bet(cls, game_type: str, stake: float, payout: float, win: bool) -> None:
        cls.BETS.labels(game_type=game_type, outcome="win" if win else "lose").inc()
        cls.BET_VOLUME.labels(game_type=game_type).inc(stake)
        cls.PAYOUT_VOLUME.labels(game_type=game_type).inc(payout)

    @classmethod
    def track_storage_failure(cls, stage: str) -> None:
        cls.STORAGE_FAILURES.labels(stage=stage).inc()

    @classmethod
    def track_notification_failure(cls, event: str) -> None:
        cls.NOTIFICATION_FAILURES.labels(event=event).inc()
