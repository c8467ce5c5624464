"""
InsertionPlanner — où atterrit un nouveau bloc.

Deux modes : ajout en fin de séquence, ou insertion relative à un bloc de
référence désigné par son id (bouton « ajouter entre ces deux blocs »).
L'index est calculé depuis la position *courante* de la référence, jamais
depuis un index capturé au rendu.
"""
import logging
from typing import Literal, Optional

from ..blocks.catalog import default_config
from ..core.schemas import Block, HostContext
from .store import BlockStore, Sequence

log = logging.getLogger(__name__)

Position = Literal["before", "after"]


class InsertionPlanner:

    def __init__(self, store: BlockStore):
        self.store = store

    def target_index(self, ref_id: Optional[str] = None, position: Position = "after") -> int:
        """Index d'insertion ; une référence absente (périmée) retombe sur l'ajout en fin."""
        if ref_id is None:
            return len(self.store)
        ref_index = self.store.index_of(ref_id)
        if ref_index is None:
            log.debug("Référence %s introuvable — ajout en fin de séquence", ref_id)
            return len(self.store)
        return ref_index + 1 if position == "after" else ref_index

    def create_block(self, block_type: str, mode: Optional[str] = None,
                     host: Optional[HostContext] = None, order: int = 0) -> Block:
        return Block(type=block_type, order=order, config=default_config(block_type, mode, host))

    def insert(self, block: Block, ref_id: Optional[str] = None,
               position: Position = "after") -> Sequence:
        index = self.target_index(ref_id, position)
        return self.store.insert_at(block, index)

    def add(self, block_type: str, mode: Optional[str] = None, ref_id: Optional[str] = None,
            position: Position = "after", host: Optional[HostContext] = None) -> Block:
        """Crée un bloc du catalogue et l'insère. Retourne le bloc tel que stocké."""
        index = self.target_index(ref_id, position)
        block = self.create_block(block_type, mode, host, order=index)
        self.store.insert_at(block, index)
        log.info("Bloc ajouté : %s (%s) à l'index %d", block.id, block_type, index)
        return self.store.get(block.id)
