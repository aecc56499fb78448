from .place_bet_use_case import PlaceBetUseCase
from .adjust_balance_use_case import AdjustBalanceUseCase
from .open_account_use_case import OpenAccountUseCase
from .player_stats_use_case import PlayerStatsUseCase
from .admin_dashboard_use_case import AdminDashboardUseCase
from .reconcile_account_use_case import ReconcileAccountUseCase

__all__ = [
    'PlaceBetUseCase',
    'AdjustBalanceUseCase',
    'OpenAccountUseCase',
    'PlayerStatsUseCase',
    'AdminDashboardUseCase',
    'ReconcileAccountUseCase'
]
