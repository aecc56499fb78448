from .handlers import (
    HealthHandler,
    MetricsHandler,
    PlaceBetHandler,
    BetHistoryHandler,
    PlayerStatsHandler,
    AdjustBalanceHandler,
    UsersHandler,
    UserDetailsHandler,
    ReconcileHandler,
    TransactionsHandler,
    DashboardHandler
)

__all__ = [
    'HealthHandler',
    'MetricsHandler',
    'PlaceBetHandler',
    'BetHistoryHandler',
    'PlayerStatsHandler',
    'AdjustBalanceHandler',
    'UsersHandler',
    'UserDetailsHandler',
    'ReconcileHandler',
    'TransactionsHandler',
    'DashboardHandler'
]
