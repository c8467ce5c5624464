"""
DeletionGuard + retrait en deux phases.

Politique : une demande de suppression exige une confirmation si et seulement
si le bloc porte au moins un média, ou s'il s'agit d'un bloc texte dont le
texte (espaces retirés) n'est pas vide. Sinon la demande est confirmée
d'office.

Cycle d'une demande : requested → {confirmed, cancelled}
Cycle du bloc       : présent → marqué (status=exiting) → retiré (après délai)

Seule une demande `confirmed` peut atteindre le retrait : RemovalScheduler
refuse toute autre demande.
"""
import logging
from enum import Enum
from typing import Callable, Dict, Optional

from ..blocks.text import has_text_content
from ..core.schemas import Block, BlockStatus
from .store import BlockStore
from .timers import ImmediateTimer, RemovalTimer

log = logging.getLogger(__name__)


class DeletionState(str, Enum):
    REQUESTED = "requested"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"


class DeletionRequest:
    """Demande de suppression d'un bloc — machine à états à sens unique."""

    def __init__(self, block_id: str, needs_confirmation: bool):
        self.block_id = block_id
        self.needs_confirmation = needs_confirmation
        self.state = DeletionState.REQUESTED

    def __repr__(self):
        return f"DeletionRequest({self.block_id!r}, {self.state.value})"


def requires_confirmation(block: Block) -> bool:
    if block.media:
        return True
    return block.type == "text" and has_text_content(block.config)


def removal_key(block_id: str) -> str:
    return f"block-removal:{block_id}"


class RemovalScheduler:
    """
    Retrait différé d'un bloc confirmé.

    Le bloc reste dans le store (status=exiting) pendant `delay_ms`, puis il est
    retiré et la séquence réindexée. Un re-rendu pendant la fenêtre voit le
    bloc une seule fois ; re-marquer un bloc déjà marqué ne programme rien.
    """

    def __init__(self, store: BlockStore, timer: Optional[RemovalTimer] = None,
                 delay_ms: int = 0, on_removed: Optional[Callable[[str], None]] = None):
        self.store = store
        self.timer = timer or ImmediateTimer()
        self.delay_ms = delay_ms
        self.on_removed = on_removed
        self._marked: set = set()

    def is_marked(self, block_id: str) -> bool:
        return block_id in self._marked

    def schedule(self, request: DeletionRequest) -> bool:
        if request.state is not DeletionState.CONFIRMED:
            raise ValueError(f"Retrait refusé : demande non confirmée ({request!r})")
        block_id = request.block_id
        if self.store.get(block_id) is None:
            log.debug("schedule : bloc %s déjà retiré", block_id)
            return False
        if block_id in self._marked:
            return True

        self._marked.add(block_id)
        self.store.replace(block_id, {"status": BlockStatus.EXITING})
        if self.delay_ms <= 0:
            self._finish(block_id)
        else:
            self.timer.schedule(removal_key(block_id), self.delay_ms / 1000, lambda: self._finish(block_id))
        return True

    def cancel(self, block_id: str) -> bool:
        """Annule un retrait programmé ; le bloc revient à l'état normal."""
        if block_id not in self._marked:
            return False
        self.timer.cancel(removal_key(block_id))
        self._marked.discard(block_id)
        self.store.replace(block_id, {"status": BlockStatus.IDLE})
        log.debug("Retrait annulé : %s", block_id)
        return True

    def cancel_all(self):
        for block_id in list(self._marked):
            self.cancel(block_id)

    def _finish(self, block_id: str):
        if block_id not in self._marked:
            return
        self._marked.discard(block_id)
        self.store.remove(block_id)
        log.info("Bloc supprimé : %s", block_id)
        if self.on_removed:
            self.on_removed(block_id)


class DeletionGuard:
    """Décide si une suppression doit être confirmée, et route vers le retrait."""

    def __init__(self, store: BlockStore, remover: RemovalScheduler):
        self.store = store
        self.remover = remover
        self.pending: Dict[str, DeletionRequest] = {}

    def request(self, block_id: str) -> Optional[DeletionRequest]:
        """
        Demande la suppression d'un bloc.

        Returns:
            la demande — `needs_confirmation` indique si l'hôte doit afficher
            une confirmation. None si le bloc est inconnu.
        """
        block = self.store.get(block_id)
        if block is None:
            log.debug("request : bloc inconnu %s — ignoré", block_id)
            return None

        req = DeletionRequest(block_id, requires_confirmation(block))
        if req.needs_confirmation:
            self.pending[block_id] = req
            log.info("Suppression de %s en attente de confirmation", block_id)
            return req

        req.state = DeletionState.CONFIRMED
        self.remover.schedule(req)
        return req

    def confirm(self, req: DeletionRequest) -> bool:
        if req.state is not DeletionState.REQUESTED:
            return False
        req.state = DeletionState.CONFIRMED
        self.pending.pop(req.block_id, None)
        return self.remover.schedule(req)

    def cancel(self, req: DeletionRequest) -> bool:
        if req.state is not DeletionState.REQUESTED:
            return False
        req.state = DeletionState.CANCELLED
        self.pending.pop(req.block_id, None)
        log.debug("Suppression annulée : %s", req.block_id)
        return True
