"""
Catalogue des composants ajoutables + libellés d'affichage.
"""
from typing import Any, Dict, List, Optional

from pydantic import BaseModel

from ..core.schemas import HERO_TYPES, Block, HostContext, MediaKind, MediaMode
from .hero import normalize_hero
from .media import GalleryConfig, ImageConfig, MediaGalleryConfig, VideoConfig
from .separator import SeparatorConfig
from .text import TextConfig


class ComponentSpec(BaseModel):
    """Entrée du sélecteur de composants."""
    type: str
    mode: Optional[MediaMode] = None
    media_kind: Optional[MediaKind] = None
    label: str
    description: str = ""
    premium: bool = False


COMPONENTS: List[ComponentSpec] = [
    ComponentSpec(type="image", mode="single", media_kind="image",
                  label="Image", description="Une seule image"),
    ComponentSpec(type="gallery", mode="grid", media_kind="image",
                  label="Galerie grille", description="Grille d'images"),
    ComponentSpec(type="gallery", mode="masonry", media_kind="image",
                  label="Galerie masonry", description="Mise en page type Pinterest"),
    ComponentSpec(type="gallery", mode="slide", media_kind="image",
                  label="Galerie carrousel", description="Carrousel d'images"),
    ComponentSpec(type="video", mode="single", media_kind="video",
                  label="Vidéo", description="Une seule vidéo"),
    ComponentSpec(type="text", label="Texte", description="Bloc de texte"),
    ComponentSpec(type="separator", label="Séparateur", description="Ligne de séparation"),
    ComponentSpec(type="hero-contact", label="Hero contact",
                  description="Hero avec appel à l'action", premium=True),
    ComponentSpec(type="hero-image", mode="single", media_kind="image", label="Hero image",
                  description="Hero avec image de fond", premium=True),
    ComponentSpec(type="hero-video", mode="single", media_kind="video", label="Hero vidéo",
                  description="Hero avec vidéo de fond", premium=True),
    ComponentSpec(type="hero-text", label="Hero texte",
                  description="Hero avec fond décoratif", premium=True),
]


# ── Contenus de départ des heroes (format historique, normalisés à la création) ──

_DEFAULT_BUTTONS = [
    {"text": "Voir nos réalisations", "variant": "primary", "size": "lg"},
    {"text": "Nous contacter", "variant": "outline", "size": "lg"},
]
_HERO_COPY = {
    "title":       "Votre titre ici",
    "subtitle":    "Un sous-titre percutant",
    "description": "Une description qui donne envie à vos prospects",
}

HERO_SEEDS: Dict[str, Dict[str, Any]] = {
    "hero-contact": {
        "evento":              "Événements",
        "titulo":              "Contactez-nous dès aujourd'hui",
        "descripcion":         "Mariages, anniversaires et événements d'entreprise.",
        "gradientFrom":        "from-purple-600",
        "gradientTo":          "to-blue-600",
        "showScrollIndicator": True,
    },
    "hero-image": {
        **_HERO_COPY, "buttons": _DEFAULT_BUTTONS,
        "overlay": True, "overlayOpacity": 50,
        "textAlignment": "center", "imagePosition": "center",
    },
    "hero-video": {
        **_HERO_COPY, "buttons": _DEFAULT_BUTTONS,
        "overlay": True, "overlayOpacity": 50, "textAlignment": "center",
        "autoPlay": True, "muted": True, "loop": True,
    },
    "hero-text": {
        **_HERO_COPY, "buttons": _DEFAULT_BUTTONS,
        "backgroundVariant": "gradient",
        "backgroundGradient": "from-zinc-900 via-zinc-800 to-zinc-900",
        "textAlignment": "center", "pattern": "dots", "textColor": "text-white",
    },
    "hero": {
        **_HERO_COPY,
        "textAlignment": "center", "verticalAlignment": "center",
        "backgroundType": "image", "containerStyle": "fullscreen",
    },
}


def default_config(block_type: str, mode: Optional[str] = None,
                   host: Optional[HostContext] = None) -> Dict[str, Any]:
    """Config initiale d'un nouveau bloc (déjà canonique)."""
    if block_type in HERO_TYPES:
        return normalize_hero(block_type, HERO_SEEDS[block_type], host)
    if block_type == "gallery":
        return GalleryConfig.for_mode(mode).model_dump()
    if block_type == "media-gallery":
        return MediaGalleryConfig.for_mode(mode).model_dump()
    factories = {
        "image":     ImageConfig,
        "video":     VideoConfig,
        "text":      TextConfig,
        "separator": SeparatorConfig,
    }
    factory = factories.get(block_type)
    return factory().model_dump() if factory else {}


# ── Libellés ────────────────────────────────────────────────────────────────

_TYPE_LABELS = {
    "image":        "Image",
    "video":        "Vidéo",
    "separator":    "Séparateur",
    "hero-contact": "Hero contact",
    "hero-image":   "Hero image",
    "hero-video":   "Hero vidéo",
    "hero-text":    "Hero texte",
    "hero":         "Hero",
}
_GALLERY_LABELS = {
    "single":  "Image",
    "grid":    "Galerie grille",
    "masonry": "Galerie masonry",
    "slide":   "Galerie carrousel",
}
_TEXT_LABELS = {
    "heading-1":  "Titre (H1)",
    "heading-3":  "Sous-titre (H3)",
    "text":       "Paragraphe",
    "blockquote": "Citation",
}


def display_name(block: Block) -> str:
    config = block.config or {}
    if block.type == "gallery":
        return _GALLERY_LABELS.get(config.get("mode") or "grid", "Galerie")
    if block.type == "media-gallery":
        mode = config.get("mode") or "grid"
        return "Galerie média" if mode == "single" else f"Galerie média {mode}"
    if block.type == "text":
        text_type = config.get("text_type") or config.get("textType") or "text"
        return _TEXT_LABELS.get(text_type, "Bloc de texte")
    return _TYPE_LABELS.get(block.type, "Composant")
