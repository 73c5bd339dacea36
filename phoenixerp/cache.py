"""In-memory cache of user data-service definitions."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass

logger = logging.getLogger(__name__)


@dataclass
class DataServiceEntry:
    """A cached data service: request method, script source and timeout in seconds."""

    method: str
    source: str
    timeout: int


class DataServiceCache:
    """Thread-safe mapping of table -> service name -> :class:`DataServiceEntry`."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._services: dict[str, dict[str, DataServiceEntry]] = {}

    def set(self, table: str, service: str, data: DataServiceEntry) -> None:
        """Store ``data`` for ``table.service``."""
        with self._lock:
            self._services.setdefault(table, {})[service] = data
        logger.info("Updated cached data service %s.%s", table, service)

    def get(self, table: str, service: str) -> DataServiceEntry | None:
        """The cached entry for ``table.service``, or ``None``."""
        with self._lock:
            services = self._services.get(table)
            if services is None:
                return None
            entry = services.get(service)
        logger.info("Read data service %s.%s from cache", table, service)
        return entry

    def delete(self, table: str, service: str) -> None:
        """Forget ``table.service`` if cached."""
        with self._lock:
            services = self._services.get(table)
            if services is None:
                return
            services.pop(service, None)
        logger.info("Deleted cached data service %s.%s", table, service)

    def delete_by_table(self, table: str) -> None:
        """Forget every service of ``table``."""
        with self._lock:
            self._services.pop(table, None)
        logger.info("Deleted cached data services of %s", table)