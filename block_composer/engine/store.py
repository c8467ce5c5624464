"""
BlockStore — la séquence ordonnée, source de vérité unique.

Chaque mutation construit un nouveau tuple puis réindexe toute la liste
(`order == index`). Un identifiant inconnu est un no-op : c'est le cas normal
d'un callback asynchrone arrivé après le retrait de sa cible.
"""
import logging
from typing import Any, Callable, Dict, Iterable, Iterator, List, Optional, Tuple

from ..core.schemas import Block, MediaItem

log = logging.getLogger(__name__)

Sequence = Tuple[Block, ...]
Listener = Callable[[Sequence], None]

# Champs qu'un patch ne peut pas modifier
_FROZEN_FIELDS = ("id", "order")


def renumber_media(items: Iterable[MediaItem]) -> Tuple[MediaItem, ...]:
    """Réassigne `display_order` à la position dans la liste."""
    return tuple(
        m if m.display_order == i else m.model_copy(update={"display_order": i})
        for i, m in enumerate(items)
    )


def reindex(blocks: Iterable[Block]) -> Sequence:
    """Réassigne `order` à la position ; les blocs déjà à jour sont réutilisés tels quels."""
    return tuple(
        b if b.order == i else b.model_copy(update={"order": i})
        for i, b in enumerate(blocks)
    )


class BlockStore:
    """
    Séquence ordonnée de blocs.

    Usage:
        >>> store = BlockStore()
        >>> store.append(Block(type="text"))
        >>> store.move_to(block_id, 0)
    """

    def __init__(self, blocks: Iterable[Block] = ()):
        self._blocks: Sequence = ()
        self._listeners: List[Listener] = []
        self.load(blocks)

    # ── Lecture ─────────────────────────────────────────────────────────────

    @property
    def blocks(self) -> Sequence:
        return self._blocks

    def __len__(self) -> int:
        return len(self._blocks)

    def __iter__(self) -> Iterator[Block]:
        return iter(self._blocks)

    def ids(self) -> List[str]:
        return [b.id for b in self._blocks]

    def index_of(self, block_id: str) -> Optional[int]:
        for i, b in enumerate(self._blocks):
            if b.id == block_id:
                return i
        return None

    def get(self, block_id: str) -> Optional[Block]:
        i = self.index_of(block_id)
        return None if i is None else self._blocks[i]

    # ── Abonnement (rendu) ──────────────────────────────────────────────────

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Enregistre un listener appelé après chaque mutation effective. Retourne le désabonnement."""
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)
        return unsubscribe

    def _commit(self, blocks: Iterable[Block]) -> Sequence:
        self._blocks = reindex(blocks)
        for listener in list(self._listeners):
            listener(self._blocks)
        return self._blocks

    # ── Mutations ───────────────────────────────────────────────────────────

    def load(self, blocks: Iterable[Block]) -> Sequence:
        """Remplace toute la séquence (chargement depuis la persistance)."""
        blocks = list(blocks)
        ids = [b.id for b in blocks]
        if len(set(ids)) != len(ids):
            raise ValueError(f"Identifiants dupliqués au chargement : {ids}")
        return self._commit(blocks)

    def insert_at(self, block: Block, index: int) -> Sequence:
        if self.index_of(block.id) is not None:
            raise ValueError(f"Bloc déjà présent : {block.id!r}")
        index = max(0, min(index, len(self._blocks)))
        blocks = list(self._blocks)
        blocks.insert(index, block)
        log.debug("insert_at %s (%s) → %d", block.id, block.type, index)
        return self._commit(blocks)

    def append(self, block: Block) -> Sequence:
        return self.insert_at(block, len(self._blocks))

    def move_to(self, block_id: str, target_index: int) -> Sequence:
        current = self.index_of(block_id)
        if current is None:
            log.debug("move_to : bloc inconnu %s — ignoré", block_id)
            return self._blocks
        target = max(0, min(target_index, len(self._blocks) - 1))
        if target == current:
            return self._blocks
        blocks = list(self._blocks)
        blocks.insert(target, blocks.pop(current))
        log.debug("move_to %s : %d → %d", block_id, current, target)
        return self._commit(blocks)

    def remove(self, block_id: str) -> Sequence:
        if self.index_of(block_id) is None:
            log.debug("remove : bloc inconnu %s — ignoré", block_id)
            return self._blocks
        log.debug("remove %s", block_id)
        return self._commit(b for b in self._blocks if b.id != block_id)

    def replace(self, block_id: str, patch: Dict[str, Any]) -> Sequence:
        """Applique un patch partiel (config, media, presentation, status…) à un bloc."""
        i = self.index_of(block_id)
        if i is None:
            log.debug("replace : bloc inconnu %s — ignoré", block_id)
            return self._blocks
        update = {k: v for k, v in patch.items() if k not in _FROZEN_FIELDS}
        ignored = sorted(k for k in patch if k in _FROZEN_FIELDS or k not in Block.model_fields)
        if ignored:
            log.debug("replace %s : clés ignorées %s", block_id, ignored)
        update = {k: v for k, v in update.items() if k in Block.model_fields}
        if not update:
            return self._blocks
        updated = Block.model_validate({**self._blocks[i].model_dump(), "status": self._blocks[i].status, **update})
        if "media" in update:
            media_ids = [m.id for m in updated.media]
            if len(set(media_ids)) != len(media_ids):
                raise ValueError(f"Médias dupliqués dans {block_id} : {media_ids}")
            updated = updated.model_copy(update={"media": renumber_media(updated.media)})
        blocks = list(self._blocks)
        blocks[i] = updated
        return self._commit(blocks)
