"""MongoDB ledger repository implementation"""
from typing import List, Optional

from pymongo import DESCENDING
from pymongo.database import Database

from casino_engine.application.ports.transaction_repository_port import TransactionRepositoryPort
from casino_engine.domain.entities.transaction import Transaction
from casino_engine.infrastructure.persistence.errors import storage_errors


class MongoTransactionRepository(TransactionRepositoryPort):

    def __init__(self, db: Database):
        self.db = db
        self.collection = db.transactions

    def save(self, transaction: Transaction) -> Transaction:
        with storage_errors("insert transaction"):
            self.collection.insert_one(transaction.to_dict())
        return transaction

    def list_by_user(self, user_id: str, limit: Optional[int] = None) -> List[Transaction]:
        with storage_errors("list transactions"):
            cursor = self.collection.find({"user_id": user_id}).sort("created_at", DESCENDING)
            if limit is not None:
                cursor = cursor.limit(limit)
            return [Transaction.from_dict(data) for data in cursor]

    def list_recent(self, limit: int = 100, offset: int = 0) -> List[Transaction]:
        with storage_errors("list transactions"):
            cursor = self.collection.find().sort("created_at", DESCENDING).skip(offset).limit(limit)
            return [Transaction.from_dict(data) for data in cursor]
