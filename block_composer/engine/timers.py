"""
Timers de retrait — callbacks différés, annulables, indexés par clé d'entité.

APSchedulerTimer s'appuie sur un scheduler APScheduler ; par défaut un
AsyncIOScheduler, qui exécute les jobs dans la boucle d'événements de l'hôte
(pas de mutation concurrente du store). Le scheduler doit être démarré depuis
une boucle asyncio active.
"""
import logging
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional, Protocol

from apscheduler.jobstores.base import JobLookupError
from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.schedulers.base import BaseScheduler
from apscheduler.triggers.date import DateTrigger

log = logging.getLogger(__name__)


class RemovalTimer(Protocol):
    def schedule(self, key: str, delay: float, callback: Callable[[], None]) -> None: ...

    def cancel(self, key: str) -> bool: ...

    def pending(self, key: str) -> bool: ...


class ImmediateTimer:
    """Exécute le callback immédiatement — hôtes sans transition de sortie."""

    def schedule(self, key: str, delay: float, callback: Callable[[], None]) -> None:
        callback()

    def cancel(self, key: str) -> bool:
        return False

    def pending(self, key: str) -> bool:
        return False


class APSchedulerTimer:
    """Un job DateTrigger par clé ; reprogrammer une clé remplace le job existant."""

    def __init__(self, scheduler: Optional[BaseScheduler] = None):
        self._scheduler = scheduler or AsyncIOScheduler(timezone="UTC")

    def start(self):
        """Démarre le scheduler. Idempotent."""
        if not self._scheduler.running:
            self._scheduler.start()
            log.info("Timer de retrait démarré")

    def shutdown(self):
        if self._scheduler.running:
            self._scheduler.shutdown(wait=False)
            log.info("Timer de retrait arrêté")

    def schedule(self, key: str, delay: float, callback: Callable[[], None]) -> None:
        run_date = datetime.now(timezone.utc) + timedelta(seconds=delay)
        self._scheduler.add_job(
            callback,
            trigger=DateTrigger(run_date=run_date),
            id=key,
            replace_existing=True,
            misfire_grace_time=None,
        )

    def cancel(self, key: str) -> bool:
        try:
            self._scheduler.remove_job(key)
            return True
        except JobLookupError:
            return False

    def pending(self, key: str) -> bool:
        return self._scheduler.get_job(key) is not None
