"""MongoDB bet repository implementation"""
import logging
from typing import Callable, List, Optional

from pymongo import DESCENDING
from pymongo.database import Database

from casino_engine.application.ports.bet_repository_port import BetRepositoryPort
from casino_engine.domain.entities.bet import Bet
from casino_engine.infrastructure.persistence.errors import storage_errors

logger = logging.getLogger(__name__)

SERVICE_IDENTITY = "service"
CALLER_IDENTITY = "caller"


class MongoBetRepository(BetRepositoryPort):
    """MongoDB implementation of bet repository

    `acting_db_factory` maps a caller credential to a database handle opened with
    that caller's own rights. Without it, or without a credential, bets are
    written through the service connection.
    """

    def __init__(self, db: Database, acting_db_factory: Optional[Callable[[str], Database]] = None):
        self.db = db
        self.collection = db.bets
        self.acting_db_factory = acting_db_factory

    def save(self, bet: Bet, acting_identity: Optional[str] = None) -> Bet:
        collection = self.collection
        data = bet.to_dict()
        data["created_by"] = SERVICE_IDENTITY
        if acting_identity and self.acting_db_factory:
            collection = self.acting_db_factory(acting_identity).bets
            data["created_by"] = CALLER_IDENTITY

        with storage_errors("insert bet"):
            collection.insert_one(data)
        return bet

    def list_by_user(self, user_id: str, limit: int = 50, game_type: Optional[str] = None) -> List[Bet]:
        query = {"user_id": user_id}
        if game_type:
            query["game_type"] = game_type
        with storage_errors("list bets"):
            cursor = self.collection.find(query).sort("created_at", DESCENDING).limit(limit)
            return [Bet.from_dict(data) for data in cursor]

    def list_since(self, since: float) -> List[Bet]:
        with storage_errors("list bets"):
            cursor = self.collection.find({"created_at": {"$gte": since}})
            return [Bet.from_dict(data) for data in cursor]
