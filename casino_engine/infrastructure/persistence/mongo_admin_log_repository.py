"""MongoDB admin log repository implementation"""
from pymongo.database import Database

from casino_engine.application.ports.admin_log_repository_port import AdminLogRepositoryPort
from casino_engine.domain.entities.admin_log import AdminLog
from casino_engine.infrastructure.persistence.errors import storage_errors


class MongoAdminLogRepository(AdminLogRepositoryPort):

    def __init__(self, db: Database):
        self.collection = db.admin_logs

    def save(self, entry: AdminLog) -> AdminLog:
        with storage_errors("insert admin log"):
            self.collection.insert_one(entry.to_dict())
        return entry
