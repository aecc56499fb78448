"""Admin audit log port (interface)"""
from abc import ABC, abstractmethod

from casino_engine.domain.entities.admin_log import AdminLog


class AdminLogRepositoryPort(ABC):

    @abstractmethod
    def save(self, entry: AdminLog) -> AdminLog:
        pass
