"""Bloc Texte — paragraphe, titre ou citation."""
from .base import BlockConfig


class TextConfig(BlockConfig):
    text: str = ""
    text_type: str = "text"        # heading-1 | heading-3 | text | blockquote
    font_size: str = "base"
    font_weight: str = "normal"
    alignment: str = "left"
    italic: bool = False


def has_text_content(config: dict) -> bool:
    """Vrai si le texte, espaces retirés, n'est pas vide."""
    return bool(str(config.get("text") or "").strip())
