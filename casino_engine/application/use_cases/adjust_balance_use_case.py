"""Admin balance adjustment use case"""
import logging
from typing import Optional

from sentry_sdk import start_span

from casino_engine.application.account_locks import AccountLocks
from casino_engine.application.dto.adjust_balance_request import AdjustBalanceRequest
from casino_engine.application.dto.adjust_balance_response import AdjustBalanceResponse
from casino_engine.application.ports.account_repository_port import AccountRepositoryPort
from casino_engine.application.ports.admin_log_repository_port import AdminLogRepositoryPort
from casino_engine.application.ports.notification_port import NotificationPort
from casino_engine.application.ports.transaction_repository_port import TransactionRepositoryPort
from casino_engine.application.use_cases.place_bet_use_case import BALANCE_UPDATE_EVENT
from casino_engine.domain.entities.admin_log import AdminLog
from casino_engine.domain.entities.transaction import Transaction, TransactionType
from casino_engine.domain.exceptions import AccountNotFound, InvalidAmount, PermissionDenied, StorageFailure
from casino_engine.domain.invariants import validate_admin_adjustment
from casino_engine.domain.money import is_currency_amount
from casino_engine.metrics import BusinessMetrics

logger = logging.getLogger(__name__)


class AdjustBalanceUseCase:
    """Credit or debit a player's balance on behalf of an admin"""

    def __init__(
        self,
        account_repository: AccountRepositoryPort,
        transaction_repository: TransactionRepositoryPort,
        admin_log_repository: AdminLogRepositoryPort,
        notifier: NotificationPort,
        max_balance: float,
        account_locks: Optional[AccountLocks] = None
    ):
        self.account_repository = account_repository
        self.transaction_repository = transaction_repository
        self.admin_log_repository = admin_log_repository
        self.notifier = notifier
        self.max_balance = max_balance
        self.account_locks = account_locks or AccountLocks()

    def execute(self, request: AdjustBalanceRequest) -> AdjustBalanceResponse:
        admin = self.account_repository.get(request.admin_id)
        if admin is None or not admin.is_admin:
            raise PermissionDenied()
        if not is_currency_amount(request.amount) or request.amount == 0:
            raise InvalidAmount("Adjustment must be a non-zero amount with at most 2 decimals")

        with self.account_locks.hold(request.user_id):
            user = self.account_repository.get(request.user_id)
            if user is None:
                raise AccountNotFound()

            check = validate_admin_adjustment(user.balance, request.amount, self.max_balance)
            if not check.ok:
                raise InvalidAmount(check.error)

            stage = "balance"
            try:
                with start_span(op="db.balance", description="Adjust user balance"):
                    before, after = self.account_repository.apply_balance_delta(
                        user.id,
                        request.amount,
                        required_balance=max(0.0, -request.amount),
                        max_balance=self.max_balance
                    )

                stage = "adjustment_ledger"
                transaction = self.transaction_repository.save(Transaction(
                    user_id=user.id,
                    type=TransactionType.ADMIN_ADJUSTMENT,
                    amount=request.amount,
                    balance_before=before,
                    balance_after=after,
                    description=request.description or f"Admin adjustment by {admin.username}"
                ))

                stage = "admin_log"
                self.admin_log_repository.save(AdminLog(
                    admin_id=admin.id,
                    action="adjust_balance",
                    target_id=user.id,
                    details={
                        "amount": request.amount,
                        "balance_before": before,
                        "balance_after": after,
                        "description": request.description
                    }
                ))
            except StorageFailure as e:
                e.stage = e.stage or stage
                BusinessMetrics.track_storage_failure(stage)
                logger.error(
                    f"Balance adjustment failed at stage={stage} admin_id={admin.id} "
                    f"user_id={user.id} amount={request.amount}: {e.message}"
                )
                raise

        BusinessMetrics.ADMIN_ADJUSTMENTS.inc()
        logger.info(f"Admin {admin.id} adjusted {user.id} by {request.amount}: {before} -> {after}")

        try:
            self.notifier.notify_account(user.id, BALANCE_UPDATE_EVENT, after)
        except Exception as e:
            BusinessMetrics.track_notification_failure(BALANCE_UPDATE_EVENT)
            logger.error(f"Failed to notify {user.id} of {BALANCE_UPDATE_EVENT}: {e}")

        return AdjustBalanceResponse(
            user_id=user.id,
            previous_balance=before,
            new_balance=after,
            adjustment=request.amount,
            transaction_id=transaction.id
        )
