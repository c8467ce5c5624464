"""
Router FastAPI — endpoints block_composer.

GET  /blocks/catalog                → composants disponibles + config par défaut
POST /blocks/normalize              → {type, config, host?} → config canonique
POST /blocks/validate               → séquence → {"valid": bool, "error"?}
POST /blocks/storage                → séquence → quota utilisé
GET  /blocks/sequences/{owner_key}  → séquence enregistrée
PUT  /blocks/sequences/{owner_key}  → remplace la séquence (configs canoniques)
"""
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel
from sqlalchemy.orm import Session

from .blocks.catalog import COMPONENTS, default_config
from .blocks.normalizer import normalize_block, normalize_config
from .core.errors import InvariantViolation
from .core.invariants import check_sequence
from .core.schemas import Block, HostContext
from .database import db_load_blocks, db_save_blocks, get_db
from .engine.storage import format_bytes, storage_info

router = APIRouter(prefix="/blocks", tags=["blocks"])


class NormalizeInput(BaseModel):
    type: str
    config: Dict[str, Any] = {}
    host: Optional[HostContext] = None


class SequenceInput(BaseModel):
    blocks: List[Block] = []
    host: Optional[HostContext] = None
    limit: Optional[int] = None


@router.get("/catalog", summary="Liste les composants disponibles")
def catalog() -> dict:
    """Catalogue des composants avec leur configuration initiale."""
    return {"components": [
        {**c.model_dump(), "default_config": default_config(c.type, c.mode)}
        for c in COMPONENTS
    ]}


@router.post("/normalize", summary="Normalise une configuration de bloc")
def normalize(body: NormalizeInput) -> dict:
    return {"type": body.type, "config": normalize_config(body.type, body.config, body.host)}


@router.post("/validate", summary="Valide une séquence sans l'enregistrer")
def validate(body: SequenceInput) -> dict:
    try:
        check_sequence(body.blocks)
        return {"valid": True}
    except InvariantViolation as e:
        return {"valid": False, "error": str(e)}


@router.post("/storage", summary="Calcule le stockage utilisé par une séquence")
def storage(body: SequenceInput) -> dict:
    info = storage_info(body.blocks, body.limit)
    return {**info.model_dump(), "used_label": format_bytes(info.used), "limit_label": format_bytes(info.limit)}


@router.get("/sequences/{owner_key}", summary="Charge la séquence d'un propriétaire")
def load_sequence(owner_key: str, db: Session = Depends(get_db)) -> dict:
    blocks = db_load_blocks(db, owner_key)
    return {"owner_key": owner_key, "blocks": [b.model_dump() for b in blocks]}


@router.put("/sequences/{owner_key}", summary="Enregistre la séquence d'un propriétaire")
def save_sequence(owner_key: str, body: SequenceInput, db: Session = Depends(get_db)) -> dict:
    try:
        check_sequence(body.blocks)
    except InvariantViolation as e:
        raise HTTPException(422, str(e))
    blocks = [normalize_block(b, body.host) for b in body.blocks]
    if not db_save_blocks(db, owner_key, blocks):
        raise HTTPException(500, "Échec de l'enregistrement")
    return {"saved": True, "owner_key": owner_key, "count": len(blocks)}
