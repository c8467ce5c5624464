"""SQLite — init + session + helpers séquences de blocs"""
import logging
from pathlib import Path
from typing import Iterable, List

from sqlalchemy import create_engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from . import config
from .core.schemas import Block
from .models import Base, ContentBlockDB, block_to_row

log = logging.getLogger(__name__)

ENGINE       = create_engine(f"sqlite:///{config.DB_PATH}", connect_args={"check_same_thread": False})
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=ENGINE)


def init_db(engine=None):
    engine = engine or ENGINE
    if engine is ENGINE:
        Path(config.DB_PATH).parent.mkdir(parents=True, exist_ok=True)
    Base.metadata.create_all(bind=engine)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


# ── Séquences ──────────────────────────────────────────────────────────

def db_load_blocks(db: Session, owner_key: str) -> List[Block]:
    rows = (
        db.query(ContentBlockDB)
        .filter_by(owner_key=owner_key)
        .order_by(ContentBlockDB.order)
        .all()
    )
    return [row.to_block() for row in rows]


def db_save_blocks(db: Session, owner_key: str, blocks: Iterable[Block]) -> bool:
    """Remplace toute la séquence d'un propriétaire. False (et rollback) en cas d'erreur."""
    blocks = list(blocks)
    try:
        for row in db.query(ContentBlockDB).filter_by(owner_key=owner_key).all():
            db.delete(row)
        db.flush()
        db.add_all(block_to_row(owner_key, b) for b in blocks)
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        log.error("db_save_blocks %s : %s", owner_key, e)
        return False
    log.info("Séquence %s enregistrée : %d bloc(s)", owner_key, len(blocks))
    return True
