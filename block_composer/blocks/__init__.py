"""
Blocs — configs par type, forme canonique hero, normalisation, catalogue.
"""
from .base import BlockConfig, accepted_keys
from .text import TextConfig, has_text_content
from .media import ImageConfig, GalleryConfig, MediaGalleryConfig, VideoConfig
from .separator import SeparatorConfig
from .hero import ButtonConfig, HeroConfig, LEGACY_FIELDS, LEGACY_DEFAULTS, normalize_hero
from .normalizer import CONFIG_MODELS, normalize_config, normalize_block
from .catalog import COMPONENTS, ComponentSpec, HERO_SEEDS, default_config, display_name

__all__ = [
    # Base
    "BlockConfig", "accepted_keys",
    # Texte / médias / séparateur
    "TextConfig", "has_text_content",
    "ImageConfig", "GalleryConfig", "MediaGalleryConfig", "VideoConfig",
    "SeparatorConfig",
    # Hero
    "ButtonConfig", "HeroConfig", "LEGACY_FIELDS", "LEGACY_DEFAULTS", "normalize_hero",
    # Normalisation
    "CONFIG_MODELS", "normalize_config", "normalize_block",
    # Catalogue
    "COMPONENTS", "ComponentSpec", "HERO_SEEDS", "default_config", "display_name",
]
