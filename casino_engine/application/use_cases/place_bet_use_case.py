"""Place bet use case"""
import logging
from typing import Optional

import sentry_sdk
from sentry_sdk import start_span

from casino_engine.application.account_locks import AccountLocks
from casino_engine.application.dto.place_bet_request import PlaceBetRequest
from casino_engine.application.dto.place_bet_response import PlaceBetResponse
from casino_engine.application.ports.account_repository_port import AccountRepositoryPort
from casino_engine.application.ports.bet_repository_port import BetRepositoryPort
from casino_engine.application.ports.notification_port import NotificationPort
from casino_engine.application.ports.transaction_repository_port import TransactionRepositoryPort
from casino_engine.domain.entities.bet import Bet
from casino_engine.domain.entities.game_type import GameType, get_game_config
from casino_engine.domain.entities.transaction import Transaction, TransactionType
from casino_engine.domain.exceptions import AccountNotFound, StorageFailure
from casino_engine.domain.games.engine import PayoutEngine
from casino_engine.domain.invariants import check_wager
from casino_engine.domain.money import round_currency
from casino_engine.metrics import BusinessMetrics

logger = logging.getLogger(__name__)

BET_RESULT_EVENT = "bet-result"
BALANCE_UPDATE_EVENT = "balance-update"


class PlaceBetUseCase:
    """Settle one wager: validate, resolve, record the bet, move the balance, write the ledger

    Everything after the balance read runs under the account's lock, and the
    balance itself moves through a single guarded delta, so concurrent bets on
    one account cannot overwrite each other. A storage failure part-way through
    is logged with the stage reached and re-raised; earlier writes stay.
    """

    def __init__(
        self,
        account_repository: AccountRepositoryPort,
        bet_repository: BetRepositoryPort,
        transaction_repository: TransactionRepositoryPort,
        notifier: NotificationPort,
        payout_engine: Optional[PayoutEngine] = None,
        account_locks: Optional[AccountLocks] = None
    ):
        self.account_repository = account_repository
        self.bet_repository = bet_repository
        self.transaction_repository = transaction_repository
        self.notifier = notifier
        self.payout_engine = payout_engine or PayoutEngine()
        self.account_locks = account_locks or AccountLocks()

    def execute(self, request: PlaceBetRequest) -> PlaceBetResponse:
        game_type = GameType.parse(request.game_type)
        config = get_game_config(game_type, self.payout_engine.configs)

        with self.account_locks.hold(request.user_id):
            account = self.account_repository.get(request.user_id)
            if account is None:
                raise AccountNotFound()

            check_wager(account.balance, request.amount, config)

            with start_span(op="game.rng", description=f"Resolve {game_type.value} bet") as span:
                outcome = self.payout_engine.resolve(game_type, request.prediction, request.amount)
                span.set_data("win", outcome.win)
                span.set_data("multiplier", outcome.multiplier)

            bet = Bet(
                user_id=account.id,
                game_type=game_type.value,
                amount=request.amount,
                multiplier=outcome.multiplier,
                prediction=request.prediction,
                result=outcome.result,
                payout=outcome.payout
            )
            new_balance = self._settle(bet, outcome.win, request.caller_token)

        BusinessMetrics.track_bet(game_type.value, request.amount, outcome.payout, outcome.win)
        sentry_sdk.set_tag("game.win", str(outcome.win))

        self._notify(account.id, BET_RESULT_EVENT, bet.to_public_dict())
        self._notify(account.id, BALANCE_UPDATE_EVENT, new_balance)

        return PlaceBetResponse(bet=bet, new_balance=new_balance, win=outcome.win)

    def _settle(self, bet: Bet, win: bool, caller_token: Optional[str]) -> float:
        """Persist bet, balance and ledger entries; returns the new balance"""
        stage = "bet_record"
        try:
            with start_span(op="db.insert", description="Store bet") as span:
                span.set_data("db.collection", "bets")
                self.bet_repository.save(bet, acting_identity=caller_token)

            stage = "balance"
            with start_span(op="db.balance", description="Update user balance") as span:
                before, after = self.account_repository.apply_balance_delta(
                    bet.user_id, bet.balance_change, required_balance=bet.amount
                )
                span.set_data("new_balance", after)
                span.set_data("balance_change", bet.balance_change)

            stage = "bet_ledger"
            with start_span(op="db.insert", description="Record ledger entries"):
                paid_as_win = win and bet.payout > 0
                # A refund that is not a win (blackjack push) nets into the bet entry
                debit = -bet.amount if paid_as_win else round_currency(bet.payout - bet.amount)
                after_debit = round_currency(before + debit)
                self.transaction_repository.save(Transaction(
                    user_id=bet.user_id,
                    type=TransactionType.BET,
                    amount=debit,
                    balance_before=before,
                    balance_after=after_debit,
                    description=f"{bet.game_type} bet"
                ))

                if paid_as_win:
                    stage = "win_ledger"
                    self.transaction_repository.save(Transaction(
                        user_id=bet.user_id,
                        type=TransactionType.WIN,
                        amount=bet.payout,
                        balance_before=after_debit,
                        balance_after=after,
                        description=f"{bet.game_type} win"
                    ))
        except StorageFailure as e:
            e.stage = e.stage or stage
            BusinessMetrics.track_storage_failure(stage)
            logger.error(
                f"Bet settlement failed at stage={stage} user_id={bet.user_id} "
                f"bet_id={bet.id} amount={bet.amount} payout={bet.payout}: {e.message}"
            )
            raise

        return after

    def _notify(self, account_id: str, event: str, payload) -> None:
        with start_span(op="mq.publish", description=f"Notify {event}") as span:
            try:
                self.notifier.notify_account(account_id, event, payload)
                span.set_tag("mq.published", "true")
            except Exception as e:
                BusinessMetrics.track_notification_failure(event)
                logger.error(f"Failed to notify {account_id} of {event}: {e}")
                span.set_tag("mq.published", "false")
