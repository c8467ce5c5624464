"""
ReorderEngine — glisser-déposer des blocs.

États : idle → dragging → {dropped, cancelled} → idle

Le classifieur d'origine filtre *avant* toute notification : un geste rejeté
laisse le moteur en idle et les listeners ne sont jamais prévenus.
"""
import logging
from enum import Enum
from typing import Callable, List, Optional

from .gestures import GestureOrigin, accepts
from .store import BlockStore, Sequence

log = logging.getLogger(__name__)

DragListener = Callable[[bool], None]


class DragState(str, Enum):
    IDLE     = "idle"
    DRAGGING = "dragging"


class ReorderEngine:

    def __init__(self, store: BlockStore):
        self.store = store
        self.state = DragState.IDLE
        self.active_id: Optional[str] = None
        self._listeners: List[DragListener] = []

    def on_drag_state_change(self, listener: DragListener):
        self._listeners.append(listener)

    def _notify(self, dragging: bool):
        for listener in list(self._listeners):
            listener(dragging)

    def _reset(self):
        was_dragging = self.state is DragState.DRAGGING
        self.state = DragState.IDLE
        self.active_id = None
        if was_dragging:
            self._notify(False)

    def drag_start(self, block_id: str, origin: Optional[GestureOrigin]) -> bool:
        """Retourne True si le geste démarre effectivement un glissement."""
        if self.state is DragState.DRAGGING:
            return False
        if self.store.get(block_id) is None:
            return False
        if not accepts(origin, block_id):
            return False
        self.state = DragState.DRAGGING
        self.active_id = block_id
        log.debug("Glissement démarré : %s", block_id)
        self._notify(True)
        return True

    def drop(self, over_id: Optional[str]) -> Sequence:
        """Dépose sur le bloc `over_id` ; cible absente ou invalide → séquence inchangée."""
        if self.state is not DragState.DRAGGING:
            return self.store.blocks
        active_id = self.active_id
        result = self.store.blocks
        target = self.store.index_of(over_id) if over_id is not None else None
        if target is None:
            log.debug("drop : cible invalide %r — ignoré", over_id)
        elif over_id != active_id:
            result = self.store.move_to(active_id, target)
        self._reset()
        return result

    def cancel(self) -> Sequence:
        self._reset()
        return self.store.blocks

    def nudge(self, block_id: str, offset: int) -> Sequence:
        """Déplacement au clavier (haut/bas) sans passer par un glissement."""
        index = self.store.index_of(block_id)
        if index is None or offset == 0:
            return self.store.blocks
        return self.store.move_to(block_id, index + offset)
