"""
BlockEditor — façade de l'éditeur de blocs.

Regroupe le store et les services (insertion, duplication, suppression,
médias, réordonnancement) et branche les collaborateurs de l'hôte :
upload, persistance, minuteur de retrait.

Usage:
    >>> editor = BlockEditor(host=HostContext(context="post"), uploader=LocalUploader())
    >>> block = editor.add("gallery", mode="grid")
    >>> task = editor.start_upload(block.id, files)
    >>> editor.save()
"""
import asyncio
import logging
from typing import Any, Dict, Iterable, List, Optional, Sequence, Set

from . import config
from .blocks.normalizer import normalize_block, normalize_config
from .core.errors import UploadError
from .core.schemas import Block, BlockStatus, HostContext, MediaItem, RawFile
from .engine import (
    BlockStore, DeletionGuard, DeletionRequest, DuplicationService, GestureOrigin,
    InsertionPlanner, MediaAttachmentManager, RemovalScheduler, RemovalTimer,
    ReorderEngine, StorageInfo, storage_info,
)
from .engine.insertion import Position
from .persistence import Persistence
from .uploads import UploadContext, Uploader

log = logging.getLogger(__name__)


class BlockEditor:

    def __init__(
        self,
        blocks: Iterable[Block] = (),
        host: Optional[HostContext] = None,
        uploader: Optional[Uploader] = None,
        persistence: Optional[Persistence] = None,
        timer: Optional[RemovalTimer] = None,
        removal_delay_ms: Optional[int] = None,
        upload_context: Optional[UploadContext] = None,
        storage_limit: Optional[int] = None,
    ):
        self.host = host or HostContext()
        self.uploader = uploader
        self.persistence = persistence
        self.upload_context = upload_context or UploadContext()
        self.storage_limit = storage_limit

        self.store = BlockStore(blocks)
        self.planner = InsertionPlanner(self.store)
        self.duplicator = DuplicationService(self.store)
        self.remover = RemovalScheduler(
            self.store, timer,
            delay_ms=config.REMOVAL_DELAY_MS if removal_delay_ms is None else removal_delay_ms,
            on_removed=self._on_block_removed,
        )
        self.guard = DeletionGuard(self.store, self.remover)
        self.media = MediaAttachmentManager(self.store)
        self.reorder = ReorderEngine(self.store)

        self._uploads: Dict[str, Set[asyncio.Task]] = {}
        self._in_flight: Dict[str, int] = {}

    @property
    def blocks(self):
        return self.store.blocks

    # ── Structure ───────────────────────────────────────────────────────────

    def add(self, block_type: str, mode: Optional[str] = None,
            ref_id: Optional[str] = None, position: Position = "after") -> Block:
        return self.planner.add(block_type, mode, ref_id, position, host=self.host)

    def duplicate(self, block_id: str) -> Optional[Block]:
        return self.duplicator.duplicate(block_id)

    def update_block(self, block_id: str, patch: Dict[str, Any]):
        return self.store.replace(block_id, patch)

    def update_config(self, block_id: str, config_patch: Dict[str, Any]):
        """Fusionne un patch de config puis normalise (héros : forme canonique)."""
        block = self.store.get(block_id)
        if block is None:
            log.debug("update_config : bloc inconnu %s — ignoré", block_id)
            return self.store.blocks
        merged = {**block.config, **config_patch}
        return self.store.replace(block_id, {"config": normalize_config(block.type, merged, self.host)})

    # ── Suppression ─────────────────────────────────────────────────────────

    def request_delete(self, block_id: str) -> Optional[DeletionRequest]:
        return self.guard.request(block_id)

    def confirm_delete(self, req: DeletionRequest) -> bool:
        return self.guard.confirm(req)

    def cancel_delete(self, req: DeletionRequest) -> bool:
        return self.guard.cancel(req)

    def _on_block_removed(self, block_id: str):
        self._cancel_uploads(block_id)
        if self.reorder.active_id == block_id:
            self.reorder.cancel()

    # ── Réordonnancement ────────────────────────────────────────────────────

    def drag_start(self, block_id: str, origin: Optional[GestureOrigin]) -> bool:
        return self.reorder.drag_start(block_id, origin)

    def drop(self, over_id: Optional[str]):
        return self.reorder.drop(over_id)

    def cancel_drag(self):
        return self.reorder.cancel()

    def nudge(self, block_id: str, offset: int):
        return self.reorder.nudge(block_id, offset)

    # ── Médias / upload ─────────────────────────────────────────────────────

    def is_uploading(self, block_id: str) -> bool:
        return self._in_flight.get(block_id, 0) > 0

    def _track(self, block_id: str, delta: int):
        count = max(0, self._in_flight.get(block_id, 0) + delta)
        if count:
            self._in_flight[block_id] = count
        else:
            self._in_flight.pop(block_id, None)

        block = self.store.get(block_id)
        if block is None or block.status is BlockStatus.EXITING:
            return
        wanted = BlockStatus.UPLOADING if count else BlockStatus.IDLE
        if block.status is not wanted:
            self.store.replace(block_id, {"status": wanted})

    async def upload_media(self, block_id: str, files: Sequence[RawFile]) -> List[MediaItem]:
        """
        Envoie des fichiers et rattache les médias obtenus au bloc `block_id`.

        La fusion se fait par identifiant de bloc au moment de la réponse :
        un bloc déplacé entre-temps reçoit bien ses médias, un bloc retiré
        entre-temps ne reçoit rien.

        Raises:
            UploadError: l'upload a échoué (le statut du bloc est rétabli, rien n'est ajouté)
        """
        if not files or self.store.get(block_id) is None:
            return []
        if self.uploader is None:
            raise UploadError(block_id, "aucun collaborateur d'upload configuré")

        self._track(block_id, +1)
        try:
            stored = await self.uploader.upload(files, self.upload_context)
        except asyncio.CancelledError:
            log.debug("Upload annulé : %s", block_id)
            raise
        except Exception as e:
            log.error("Upload échoué pour %s : %s", block_id, e)
            raise UploadError(block_id, str(e)) from e
        finally:
            self._track(block_id, -1)

        block = self.store.get(block_id)
        if block is None:
            log.info("Upload terminé pour %s, bloc retiré entre-temps — ignoré", block_id)
            return []
        before = {m.id for m in block.media}
        self.media.add_media(block_id, stored)
        added = [m for m in self.store.get(block_id).media if m.id not in before]
        log.info("%d média(s) ajouté(s) à %s", len(added), block_id)
        return added

    def start_upload(self, block_id: str, files: Sequence[RawFile]) -> asyncio.Task:
        """Lance l'upload en tâche de fond (boucle asyncio en cours requise)."""
        task = asyncio.ensure_future(self.upload_media(block_id, files))
        tasks = self._uploads.setdefault(block_id, set())
        tasks.add(task)

        def _done(t: asyncio.Task):
            tasks.discard(t)
            if not tasks and self._uploads.get(block_id) is tasks:
                del self._uploads[block_id]
        task.add_done_callback(_done)
        return task

    def _cancel_uploads(self, block_id: str) -> int:
        tasks = self._uploads.pop(block_id, set())
        for task in tasks:
            task.cancel()
        if tasks:
            log.debug("%d upload(s) annulé(s) pour %s", len(tasks), block_id)
        return len(tasks)

    # ── Stockage / persistance ──────────────────────────────────────────────

    def storage_info(self) -> StorageInfo:
        return storage_info(self.store.blocks, self.storage_limit)

    def canonical_blocks(self) -> List[Block]:
        return [normalize_block(b, self.host) for b in self.store.blocks]

    def save(self) -> bool:
        """Transmet la séquence complète (configs canoniques) au collaborateur de persistance."""
        if self.persistence is None:
            log.warning("save : aucun collaborateur de persistance")
            return False
        ok = self.persistence.save(self.canonical_blocks())
        if not ok:
            log.warning("Échec de l'enregistrement de la séquence (%d blocs)", len(self.store))
        return ok

    # ── Cycle de vie ────────────────────────────────────────────────────────

    def dispose_block(self, block_id: str):
        """Annule le retrait programmé et les uploads en cours d'un bloc."""
        self.remover.cancel(block_id)
        self._cancel_uploads(block_id)
        if self.reorder.active_id == block_id:
            self.reorder.cancel()

    def dispose(self):
        self.remover.cancel_all()
        for block_id in list(self._uploads):
            self._cancel_uploads(block_id)
        self.reorder.cancel()
