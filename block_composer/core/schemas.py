"""
Schémas Pydantic du moteur de composition.
Séquence ordonnée : Block → MediaItem

Les blocs et médias sont immuables (frozen) : chaque mutation du store
produit une nouvelle séquence, jamais une modification en place.
"""
from enum import Enum
from typing import Any, Dict, Literal, Optional, Tuple

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from .ids import new_block_id, new_media_id


# ── Types de blocs ──────────────────────────────────────────────────────────

HERO_TYPES = ("hero", "hero-contact", "hero-image", "hero-video", "hero-text")
LEGACY_HERO_TYPES = ("hero-contact", "hero-image", "hero-video", "hero-text")

BLOCK_TYPES = (
    "text",
    "image",
    "gallery",
    "media-gallery",
    "video",
    "separator",
) + HERO_TYPES

MediaKind = Literal["image", "video"]
MediaMode = Literal["single", "grid", "masonry", "slide"]


class BlockStatus(str, Enum):
    IDLE      = "idle"
    UPLOADING = "uploading"
    EXITING   = "exiting"    # marqué pour retrait, encore présent dans le store


# ── Médias ──────────────────────────────────────────────────────────────────

class MediaItem(BaseModel):
    """Média rattaché à un bloc. Accepte aussi les clés du stockage historique."""
    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=new_media_id)
    url: str = Field(validation_alias=AliasChoices("url", "file_url"))
    kind: MediaKind = Field(default="image", validation_alias=AliasChoices("kind", "file_type"))
    filename: str = ""
    storage_size_bytes: int = Field(
        default=0, ge=0,
        validation_alias=AliasChoices("storage_size_bytes", "storage_bytes"),
    )
    display_order: int = 0
    thumbnail_url: Optional[str] = None


class StoredFile(BaseModel):
    """Référence renvoyée par le collaborateur d'upload pour un fichier."""
    id: Optional[str] = None
    url: str
    filename: str
    size: int = 0
    kind: MediaKind = "image"


class RawFile(BaseModel):
    """Fichier brut à confier au collaborateur d'upload."""
    filename: str
    content: bytes
    content_type: Optional[str] = None


# ── Blocs ───────────────────────────────────────────────────────────────────

class Block(BaseModel):
    """Unité typée et ordonnée de la composition."""
    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=new_block_id)
    type: str
    order: int = 0
    presentation: str = "block"
    media: Tuple[MediaItem, ...] = ()
    config: Dict[str, Any] = Field(default_factory=dict)
    # État d'exécution uniquement, jamais persisté
    status: BlockStatus = Field(default=BlockStatus.IDLE, exclude=True)

    @property
    def is_hero(self) -> bool:
        return self.type in HERO_TYPES


class HostContext(BaseModel):
    """Contexte d'intégration fourni par la page hôte (portfolio, offre…)."""
    context: Optional[str] = None
    context_data: Dict[str, str] = Field(default_factory=dict)
