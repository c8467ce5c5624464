"""Blocs médias — image unique, galeries (grille, masonry, carrousel), vidéo."""
from typing import Optional

from pydantic import AliasChoices, Field

from .base import BlockConfig


class ImageConfig(BlockConfig):
    aspect_ratio: str = "square"
    show_captions: bool = False


class GalleryConfig(BlockConfig):
    mode: str = "grid"
    columns: Optional[int] = None
    gap: int = 4
    aspect_ratio: str = "square"
    show_captions: bool = False
    show_titles: bool = False
    lightbox: bool = True
    autoplay: Optional[int] = None     # ms entre deux slides
    per_view: Optional[int] = None
    show_arrows: bool = False
    show_dots: bool = False

    @classmethod
    def for_mode(cls, mode: Optional[str]):
        """Valeurs par défaut selon le mode d'affichage."""
        mode = mode or "grid"
        slide = mode == "slide"
        return cls(
            mode=mode,
            columns=3 if mode == "grid" else None,
            lightbox=not slide,
            autoplay=3000 if slide else None,
            per_view=1 if slide else None,
            show_arrows=slide,
            show_dots=slide,
        )


class MediaGalleryConfig(GalleryConfig):
    """Galerie mixte images + vidéos."""
    border_style: str = "rounded"
    aspect_ratio: str = "auto"


class VideoConfig(BlockConfig):
    autoplay: bool = Field(default=False, validation_alias=AliasChoices("autoplay", "autoPlay"))
    muted: bool = True
    loop: bool = False
    controls: bool = True
