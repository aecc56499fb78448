from .account_repository_port import AccountRepositoryPort
from .bet_repository_port import BetRepositoryPort
from .transaction_repository_port import TransactionRepositoryPort
from .admin_log_repository_port import AdminLogRepositoryPort
from .notification_port import NotificationPort
from .rate_limiter_port import RateLimiterPort

__all__ = [
    'AccountRepositoryPort',
    'BetRepositoryPort',
    'TransactionRepositoryPort',
    'AdminLogRepositoryPort',
    'NotificationPort',
    'RateLimiterPort'
]
