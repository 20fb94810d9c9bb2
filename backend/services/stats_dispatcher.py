"""
╔══════════════════════════════════════════════════════════════════════════════╗
║  Prospection - File de synchronisation des statistiques                      ║
║                                                                              ║
║  Canal best-effort entre la mise à jour d'une porte et statistic_sync:       ║
║  - notify() ne bloque jamais et ne lève jamais                               ║
║  - File bornée: si pleine, la sync est abandonnée (log warning)              ║
║  - Un immeuble déjà en attente n'est pas ré-empilé                           ║
║  - Une sync perdue est rattrapée par la sync suivante ou le recalcul global  ║
╚══════════════════════════════════════════════════════════════════════════════╝
"""

import asyncio
import logging
from typing import Optional, Set
from config import STATS_SYNC_QUEUE_SIZE, STATS_SYNC_DRAIN_TIMEOUT
from services.statistic_sync import sync_commercial_stats

logger = logging.getLogger("stats_dispatcher")


class StatSyncDispatcher:
    """Worker unique qui dépile les immeubles à synchroniser"""

    def __init__(self, maxsize: int = STATS_SYNC_QUEUE_SIZE):
        self.maxsize = maxsize
        self._queue: Optional[asyncio.Queue] = None
        self._pending: Set[str] = set()
        self._worker: Optional[asyncio.Task] = None
        self.processed = 0
        self.dropped = 0

    @property
    def running(self) -> bool:
        return self._worker is not None and not self._worker.done()

    def start(self):
        """Démarre le worker (à appeler depuis la boucle asyncio de l'app)"""
        if self.running:
            return
        self._queue = asyncio.Queue(maxsize=self.maxsize)
        self._pending = set()
        self._worker = asyncio.create_task(self._run(), name="stats-sync-worker")
        logger.info(f"[DISPATCHER] Démarré (file max {self.maxsize})")

    async def stop(self, drain: bool = True):
        """Arrête le worker, en laissant d'abord la file se vider si drain=True"""
        if not self._worker:
            return

        if drain and self.running:
            try:
                await asyncio.wait_for(self._queue.join(), timeout=STATS_SYNC_DRAIN_TIMEOUT)
            except asyncio.TimeoutError:
                logger.warning(
                    f"[DISPATCHER] Arrêt: {self._queue.qsize()} syncs non traitées "
                    f"(rattrapées au prochain recalcul)"
                )

        self._worker.cancel()
        try:
            await self._worker
        except asyncio.CancelledError:
            pass
        self._worker = None
        logger.info(f"[DISPATCHER] Arrêté | traitées={self.processed} abandonnées={self.dropped}")

    def notify_porte_statut_changed(self, immeuble_id: str) -> bool:
        """
        Signale qu'une porte de l'immeuble a changé de statut.

        Returns:
            True si une sync est (ou était déjà) en attente, False si abandonnée
        """
        if not self.running:
            logger.warning(f"[DISPATCHER] Non démarré, sync ignorée pour immeuble {immeuble_id}")
            self.dropped += 1
            return False

        if immeuble_id in self._pending:
            return True

        try:
            self._queue.put_nowait(immeuble_id)
        except asyncio.QueueFull:
            logger.warning(f"[DISPATCHER] File pleine, sync abandonnée pour immeuble {immeuble_id}")
            self.dropped += 1
            return False

        self._pending.add(immeuble_id)
        return True

    async def join(self):
        """Attend que toutes les syncs en file soient traitées"""
        if self._queue is not None:
            await self._queue.join()

    async def _run(self):
        while True:
            immeuble_id = await self._queue.get()
            # Retiré avant la sync: une modif pendant le calcul sera re-synchronisée
            self._pending.discard(immeuble_id)
            try:
                await sync_commercial_stats(immeuble_id)
                self.processed += 1
            except Exception as e:
                logger.error(f"[DISPATCHER] Sync immeuble {immeuble_id} en échec: {str(e)}")
            finally:
                self._queue.task_done()


stats_dispatcher = StatSyncDispatcher()
