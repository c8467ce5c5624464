"""
MediaAttachmentManager — médias d'un bloc, adressés par id de bloc et id de média.

`display_order` reste contigu (0..n-1) après chaque opération.
"""
import logging
from typing import List, Optional, Sequence as Seq, Union

from ..core.ids import new_media_id
from ..core.schemas import MediaItem, StoredFile
from .store import BlockStore, Sequence, renumber_media

log = logging.getLogger(__name__)

Attachable = Union[MediaItem, StoredFile]


def to_media_item(item: Attachable) -> MediaItem:
    if isinstance(item, MediaItem):
        return item
    return MediaItem(
        id=item.id or new_media_id(),
        url=item.url,
        kind=item.kind,
        filename=item.filename,
        storage_size_bytes=item.size,
    )


class MediaAttachmentManager:

    def __init__(self, store: BlockStore):
        self.store = store

    def add_media(self, block_id: str, items: Seq[Attachable]) -> Sequence:
        """Ajoute en fin de liste ; un id déjà présent dans le bloc reçoit un id neuf."""
        block = self.store.get(block_id)
        if block is None:
            log.debug("add_media : bloc inconnu %s — ignoré", block_id)
            return self.store.blocks
        if not items:
            return self.store.blocks

        taken = {m.id for m in block.media}
        added: List[MediaItem] = []
        for item in items:
            media = to_media_item(item)
            if media.id in taken:
                media = media.model_copy(update={"id": new_media_id()})
            taken.add(media.id)
            added.append(media)

        log.debug("add_media %s : +%d", block_id, len(added))
        return self.store.replace(block_id, {"media": renumber_media([*block.media, *added])})

    def remove_media(self, block_id: str, media_id: str) -> Sequence:
        block = self.store.get(block_id)
        if block is None or all(m.id != media_id for m in block.media):
            log.debug("remove_media : %s/%s introuvable — ignoré", block_id, media_id)
            return self.store.blocks
        remaining = [m for m in block.media if m.id != media_id]
        return self.store.replace(block_id, {"media": renumber_media(remaining)})

    def replace_media(self, block_id: str, media_id: str, item: Attachable) -> Sequence:
        """Remplace un média en conservant sa position (image unique, fond de hero)."""
        block = self.store.get(block_id)
        if block is None or all(m.id != media_id for m in block.media):
            log.debug("replace_media : %s/%s introuvable — ignoré", block_id, media_id)
            return self.store.blocks
        new = to_media_item(item)
        others = {m.id for m in block.media if m.id != media_id}
        if new.id in others:
            new = new.model_copy(update={"id": new_media_id()})
        media = [new if m.id == media_id else m for m in block.media]
        return self.store.replace(block_id, {"media": renumber_media(media)})

    def reorder_media(self, block_id: str, new_order: Seq[str]) -> Sequence:
        """
        Réordonne selon une liste complète d'ids.

        Une liste partielle, dupliquée ou étrangère au bloc est rejetée (no-op).
        """
        block = self.store.get(block_id)
        if block is None:
            log.debug("reorder_media : bloc inconnu %s — ignoré", block_id)
            return self.store.blocks
        current = [m.id for m in block.media]
        if len(new_order) != len(current) or set(new_order) != set(current):
            log.warning("reorder_media %s : ordre %s incompatible avec %s — rejeté",
                        block_id, list(new_order), current)
            return self.store.blocks
        if list(new_order) == current:
            return self.store.blocks
        by_id = {m.id: m for m in block.media}
        return self.store.replace(block_id, {"media": renumber_media(by_id[i] for i in new_order)})

    def get_media(self, block_id: str, media_id: str) -> Optional[MediaItem]:
        block = self.store.get(block_id)
        if block is None:
            return None
        return next((m for m in block.media if m.id == media_id), None)
