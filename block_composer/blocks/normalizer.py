"""
Normalisation des configs — fonction pure, aucune mutation du store.

type + config brute → config canonique du type. Calculée à la demande
(édition, sauvegarde, rendu) ; idempotente.
"""
import logging
from typing import Any, Dict, Optional

from ..core.schemas import HERO_TYPES, Block, HostContext
from .hero import normalize_hero
from .media import GalleryConfig, ImageConfig, MediaGalleryConfig, VideoConfig
from .separator import SeparatorConfig
from .text import TextConfig

log = logging.getLogger(__name__)

CONFIG_MODELS: dict = {
    "text":          TextConfig,
    "image":         ImageConfig,
    "gallery":       GalleryConfig,
    "media-gallery": MediaGalleryConfig,
    "video":         VideoConfig,
    "separator":     SeparatorConfig,
}

_CONTEXT_SOURCES = (
    ("_context", "context"),
    ("context", "context"),
    ("_contextData", "context_data"),
    ("contextData", "context_data"),
    ("context_data", "context_data"),
)


def _context_only(raw: Dict[str, Any]) -> Dict[str, Any]:
    minimal: Dict[str, Any] = {}
    for src, dest in _CONTEXT_SOURCES:
        if raw.get(src) is not None:
            minimal[dest] = raw[src]
    return minimal


def normalize_config(block_type: str, raw: Optional[Dict[str, Any]],
                     host: Optional[HostContext] = None) -> Dict[str, Any]:
    """Retourne la config canonique d'un bloc. Ne lève jamais pour un type inconnu."""
    raw = dict(raw or {})
    if block_type in HERO_TYPES:
        return normalize_hero(block_type, raw, host)

    model = CONFIG_MODELS.get(block_type)
    if model is None:
        log.debug("normalize_config : type inconnu %r → config minimale", block_type)
        return _context_only(raw)
    return model.model_validate(raw).model_dump()


def normalize_block(block: Block, host: Optional[HostContext] = None) -> Block:
    """Copie du bloc avec sa config canonique (identité et ordre inchangés)."""
    config = normalize_config(block.type, block.config, host)
    if config == block.config:
        return block
    return block.model_copy(update={"config": config})
