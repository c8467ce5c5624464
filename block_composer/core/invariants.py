"""Vérification des invariants d'une séquence de blocs."""
from typing import Iterable

from .errors import InvariantViolation
from .schemas import Block


def check_block_media(block: Block) -> None:
    media_ids = [m.id for m in block.media]
    if len(set(media_ids)) != len(media_ids):
        raise InvariantViolation(f"Médias dupliqués dans {block.id} : {media_ids}")
    orders = [m.display_order for m in block.media]
    if orders != list(range(len(orders))):
        raise InvariantViolation(
            f"display_order non contigu dans {block.id} : {orders}"
        )


def check_sequence(blocks: Iterable[Block]) -> None:
    """Lève InvariantViolation si identité, ordre ou médias sont incohérents."""
    blocks = list(blocks)
    ids = [b.id for b in blocks]
    if len(set(ids)) != len(ids):
        raise InvariantViolation(f"Identifiants de blocs dupliqués : {ids}")

    orders = [b.order for b in blocks]
    if orders != list(range(len(orders))):
        raise InvariantViolation(f"Ordre non contigu : {orders}")

    for block in blocks:
        check_block_media(block)
