"""
Collaborateur de persistance — reçoit la séquence complète, répond succès/échec.
Le moteur ne réessaie pas et ne regroupe pas les écritures.
"""
from typing import Callable, List, Optional, Protocol, Sequence

from sqlalchemy.orm import Session

from .core.schemas import Block
from .database import SessionLocal, db_load_blocks, db_save_blocks


class Persistence(Protocol):
    def save(self, blocks: Sequence[Block]) -> bool: ...


class SqlBlockRepository:
    """Séquence d'un propriétaire (post, portfolio, offre…) en base SQL."""

    def __init__(self, owner_key: str, session_factory: Optional[Callable[[], Session]] = None):
        self.owner_key = owner_key
        self.session_factory = session_factory or SessionLocal

    def save(self, blocks: Sequence[Block]) -> bool:
        with self.session_factory() as db:
            return db_save_blocks(db, self.owner_key, blocks)

    def load(self) -> List[Block]:
        with self.session_factory() as db:
            return db_load_blocks(db, self.owner_key)
