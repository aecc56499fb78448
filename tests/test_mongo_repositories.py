from unittest.mock import MagicMock

import pytest
from pymongo import ReturnDocument
from pymongo.errors import AutoReconnect, DuplicateKeyError, OperationFailure

from casino_engine.domain.entities.account import Account
from casino_engine.domain.entities.bet import Bet
from casino_engine.domain.entities.transaction import Transaction, TransactionType
from casino_engine.domain.exceptions import AccountNotFound, InsufficientFunds, InvalidAmount, StorageFailure
from casino_engine.infrastructure.persistence.mongo_account_repository import MongoAccountRepository
from casino_engine.infrastructure.persistence.mongo_bet_repository import MongoBetRepository
from casino_engine.infrastructure.persistence.mongo_transaction_repository import MongoTransactionRepository


@pytest.fixture
def db():
    return MagicMock()


class TestMongoAccountRepository:
    def test_apply_balance_delta_is_one_guarded_update(self, db):
        db.users.find_one_and_update.return_value = {"_id": "u1", "balance": 109.8}
        repository = MongoAccountRepository(db)

        before, after = repository.apply_balance_delta("u1", 9.8, required_balance=10)

        assert (before, after) == (100.0, 109.8)
        query, pipeline = db.users.find_one_and_update.call_args.args
        assert query == {"_id": "u1", "balance": {"$gte": 10}}
        assert pipeline[0]["$set"]["balance"] == {"$round": [{"$add": ["$balance", 9.8]}, 2]}
        assert db.users.find_one_and_update.call_args.kwargs["return_document"] == ReturnDocument.AFTER
        db.users.find_one.assert_not_called()

    def test_credit_guard_includes_max_balance(self, db):
        db.users.find_one_and_update.return_value = {"_id": "u1", "balance": 150}
        MongoAccountRepository(db).apply_balance_delta("u1", 50, max_balance=1000)
        query = db.users.find_one_and_update.call_args.args[0]
        assert query["balance"] == {"$gte": 0.0, "$lte": 950}

    def test_missing_account(self, db):
        db.users.find_one_and_update.return_value = None
        db.users.find_one.return_value = None
        with pytest.raises(AccountNotFound):
            MongoAccountRepository(db).apply_balance_delta("ghost", -1, required_balance=1)

    def test_guard_failure_on_low_balance(self, db):
        db.users.find_one_and_update.return_value = None
        db.users.find_one.return_value = {"_id": "u1", "balance": 5}
        with pytest.raises(InsufficientFunds):
            MongoAccountRepository(db).apply_balance_delta("u1", -10, required_balance=10)

    def test_guard_failure_on_max_balance(self, db):
        db.users.find_one_and_update.return_value = None
        db.users.find_one.return_value = {"_id": "u1", "balance": 999}
        with pytest.raises(InvalidAmount):
            MongoAccountRepository(db).apply_balance_delta("u1", 50, max_balance=1000)

    def test_transient_errors_are_retryable_storage_failures(self, db):
        db.users.find_one_and_update.side_effect = AutoReconnect("primary stepped down")
        with pytest.raises(StorageFailure) as excinfo:
            MongoAccountRepository(db).apply_balance_delta("u1", 1)
        assert excinfo.value.retryable

    def test_permanent_errors_are_not_retryable(self, db):
        db.users.update_one.side_effect = OperationFailure("not authorized")
        with pytest.raises(StorageFailure) as excinfo:
            MongoAccountRepository(db).create(Account(id="u1", username="alice", balance=1000))
        assert not excinfo.value.retryable

    def test_get_maps_document(self, db):
        db.users.find_one.return_value = {"_id": "u1", "username": "alice", "balance": 12.5, "role": "admin"}
        account = MongoAccountRepository(db).get("u1")
        assert (account.id, account.balance, account.is_admin) == ("u1", 12.5, True)

    def test_create_upserts_without_overwriting(self, db):
        db.users.find_one.return_value = {"_id": "u1", "username": "alice", "balance": 640.0}

        stored = MongoAccountRepository(db).create(Account(id="u1", username="alice", balance=1000))

        query, update = db.users.update_one.call_args.args
        assert query == {"_id": "u1"}
        assert "_id" not in update["$setOnInsert"]
        assert update["$setOnInsert"]["balance"] == 1000
        assert db.users.update_one.call_args.kwargs["upsert"] is True
        assert stored.balance == 640.0

    def test_create_tolerates_concurrent_insert(self, db):
        db.users.update_one.side_effect = DuplicateKeyError("E11000 duplicate key error")
        db.users.find_one.return_value = {"_id": "u1", "username": "alice", "balance": 1000}

        stored = MongoAccountRepository(db).create(Account(id="u1", username="alice", balance=1000))

        assert stored.id == "u1"


class TestMongoBetRepository:
    def bet(self):
        return Bet(user_id="u1", game_type="dice", amount=1, multiplier=2, prediction={}, result={}, payout=0)

    def test_save_with_service_identity(self, db):
        MongoBetRepository(db).save(self.bet(), acting_identity="token")
        document = db.bets.insert_one.call_args.args[0]
        assert document["created_by"] == "service"

    def test_save_with_caller_identity(self, db):
        acting_db = MagicMock()
        factory = MagicMock(return_value=acting_db)

        MongoBetRepository(db, acting_db_factory=factory).save(self.bet(), acting_identity="token")

        factory.assert_called_once_with("token")
        assert acting_db.bets.insert_one.call_args.args[0]["created_by"] == "caller"
        db.bets.insert_one.assert_not_called()

    def test_list_by_user_filters_game(self, db):
        db.bets.find.return_value.sort.return_value.limit.return_value = [self.bet().to_dict()]
        bets = MongoBetRepository(db).list_by_user("u1", limit=5, game_type="dice")
        db.bets.find.assert_called_once_with({"user_id": "u1", "game_type": "dice"})
        assert bets[0].game_type == "dice"


class TestMongoTransactionRepository:
    def test_round_trip_through_document(self, db):
        entry = Transaction("u1", TransactionType.WIN, 19.8, 90, 109.8, "dice win")
        repository = MongoTransactionRepository(db)
        repository.save(entry)
        document = db.transactions.insert_one.call_args.args[0]
        assert document["type"] == "win"

        db.transactions.find.return_value.sort.return_value = [document]
        assert repository.list_by_user("u1") == [entry]
