"""
DuplicationService — clone un bloc juste après sa source.

Nouvelle identité pour le bloc et chacun de ses médias ; les références
distantes (url, taille, nom de fichier, type) sont réutilisées, pas recopiées.
"""
import copy
import logging
from typing import Optional

from ..core.ids import new_block_id, new_media_id
from ..core.schemas import Block, BlockStatus
from .store import BlockStore

log = logging.getLogger(__name__)


class DuplicationService:

    def __init__(self, store: BlockStore):
        self.store = store

    @staticmethod
    def clone(source: Block) -> Block:
        media = tuple(
            item.model_copy(update={"id": new_media_id()})
            for item in source.media
        )
        return source.model_copy(update={
            "id":     new_block_id(),
            "order":  source.order + 1,
            "media":  media,
            "config": copy.deepcopy(source.config),
            "status": BlockStatus.IDLE,
        })

    def duplicate(self, block_id: str) -> Optional[Block]:
        """Insère le clone après la source et retourne le clone (None si source inconnue)."""
        index = self.store.index_of(block_id)
        if index is None:
            log.debug("duplicate : bloc inconnu %s — ignoré", block_id)
            return None
        clone = self.clone(self.store.blocks[index])
        self.store.insert_at(clone, index + 1)
        log.info("Bloc dupliqué : %s → %s", block_id, clone.id)
        return self.store.get(clone.id)
