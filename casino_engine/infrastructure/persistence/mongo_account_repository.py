"""MongoDB account repository implementation"""
import time
import logging
from typing import List, Optional, Tuple

from pymongo import DESCENDING, ReturnDocument
from pymongo.database import Database
from pymongo.errors import DuplicateKeyError

from casino_engine.application.ports.account_repository_port import AccountRepositoryPort
from casino_engine.domain.entities.account import Account
from casino_engine.domain.exceptions import AccountNotFound, InsufficientFunds, InvalidAmount
from casino_engine.domain.money import round_currency
from casino_engine.infrastructure.persistence.errors import storage_errors

logger = logging.getLogger(__name__)


class MongoAccountRepository(AccountRepositoryPort):
    """MongoDB implementation of account repository"""

    def __init__(self, db: Database):
        self.db = db
        self.collection = db.users

    def get(self, account_id: str) -> Optional[Account]:
        with storage_errors("get account"):
            data = self.collection.find_one({"_id": account_id})
        return Account.from_dict(data) if data else None

    def create(self, account: Account) -> Account:
        """Upsert on _id so concurrent first requests for one user all succeed"""
        document = account.to_dict()
        account_id = document.pop("_id")
        with storage_errors("create account"):
            try:
                self.collection.update_one(
                    {"_id": account_id},
                    {"$setOnInsert": document},
                    upsert=True
                )
            except DuplicateKeyError:
                logger.info(f"Account {account_id} was created concurrently")
            data = self.collection.find_one({"_id": account_id})
        return Account.from_dict(data) if data else account

    def apply_balance_delta(self, account_id: str, delta: float, required_balance: float = 0.0,
                            max_balance: Optional[float] = None) -> Tuple[float, float]:
        """Guarded increment; the filter and the update run as one document operation"""
        guard = {"$gte": required_balance}
        if max_balance is not None:
            guard["$lte"] = max_balance - delta

        with storage_errors("update balance"):
            result = self.collection.find_one_and_update(
                {"_id": account_id, "balance": guard},
                [{
                    "$set": {
                        "balance": {"$round": [{"$add": ["$balance", delta]}, 2]},
                        "updated_at": time.time()
                    }
                }],
                projection={"balance": 1},
                return_document=ReturnDocument.AFTER
            )

            if result is None:
                current = self.collection.find_one({"_id": account_id}, {"balance": 1})

        if result is None:
            if current is None:
                raise AccountNotFound()
            if current.get("balance", 0) < required_balance:
                raise InsufficientFunds()
            raise InvalidAmount(f"Cannot increase balance above {max_balance}")

        after = result["balance"]
        return round_currency(after - delta), after

    def list(self, limit: int = 100, offset: int = 0) -> List[Account]:
        with storage_errors("list accounts"):
            cursor = self.collection.find().sort("created_at", DESCENDING).skip(offset).limit(limit)
            return [Account.from_dict(data) for data in cursor]
