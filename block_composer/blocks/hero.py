"""
Bloc Hero — config canonique unique + table d'adaptation des variantes historiques.

Quatre variantes historiques (hero-contact, hero-image, hero-video, hero-text)
décrivent la même sémantique sous des noms de champs différents. Chacune a une
entrée dans LEGACY_FIELDS : clé historique → champ canonique. Ajouter une
variante = ajouter une entrée, jamais une sous-classe.

Règles :
  - toute clé historique a une destination (table, contexte, ou `extras`)
  - plusieurs clés texte vers la même destination sont jointes par un espace
  - une config portant `variant` est déjà canonique (normalisation idempotente)
  - le contexte stocké n'est jamais écrasé ; le contexte hôte ne fait que combler
"""
import logging
from typing import Any, Dict, List, Optional

from pydantic import AliasChoices, Field, model_validator

from ..core.schemas import HostContext
from .base import BlockConfig, accepted_keys

log = logging.getLogger(__name__)


class ButtonConfig(BlockConfig):
    text: str = ""
    href: str = ""
    variant: str = "primary"
    size: Optional[str] = None
    link_type: str = "internal"
    pulse: bool = False


class HeroConfig(BlockConfig):
    """Forme canonique de toute la famille hero."""
    variant: str = "hero"                       # type d'origine de la config
    title: Optional[str] = None
    subtitle: Optional[str] = None
    description: Optional[str] = None
    buttons: List[ButtonConfig] = Field(default_factory=list)

    overlay: bool = True
    overlay_opacity: int = 50
    text_alignment: str = "center"
    vertical_alignment: str = "center"

    background_type: str = "image"              # image | video | color | gradient | pattern
    background_gradient: Optional[str] = None
    background_pattern: Optional[str] = None
    text_color: Optional[str] = None

    container_style: str = "fullscreen"         # fullscreen | wrapped
    border_radius: str = "none"
    border_color: Optional[str] = None
    border_width: Optional[int] = None
    border_style: Optional[str] = None
    aspect_ratio: Optional[str] = None
    gradient_overlay: bool = False
    gradient_position: str = "top"
    parallax: bool = False

    autoplay: bool = Field(default=True, validation_alias=AliasChoices("autoplay", "autoPlay"))
    muted: bool = True
    loop: bool = True
    show_scroll_indicator: bool = False

    context: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("context", "_context"),
    )
    context_data: Dict[str, Any] = Field(
        default_factory=dict,
        validation_alias=AliasChoices("context_data", "contextData", "_contextData"),
    )
    extras: Dict[str, Any] = Field(default_factory=dict)

    @model_validator(mode="before")
    @classmethod
    def _collect_extras(cls, data: Any) -> Any:
        """Range les clés inconnues dans `extras` plutôt que de les perdre."""
        if not isinstance(data, dict):
            return data
        known = accepted_keys(cls)
        unknown = {k: v for k, v in data.items() if k not in known}
        if not unknown:
            return data
        cleaned = {k: v for k, v in data.items() if k in known}
        cleaned["extras"] = {**(data.get("extras") or {}), **unknown}
        return cleaned


# ── Table d'adaptation des variantes historiques ────────────────────────────

_CONTENT = {
    "title":         "title",
    "subtitle":      "subtitle",
    "description":   "description",
    "buttons":       "buttons",
    "textAlignment": "text_alignment",
}
_OVERLAY = {
    "overlay":        "overlay",
    "overlayOpacity": "overlay_opacity",
}

LEGACY_FIELDS: Dict[str, Dict[str, str]] = {
    "hero-contact": {
        "titulo":              "title",
        "evento":              "subtitle",
        "descripcion":         "description",
        "gradientFrom":        "background_gradient",
        "gradientTo":          "background_gradient",
        "showScrollIndicator": "show_scroll_indicator",
    },
    "hero-image": {
        **_CONTENT,
        **_OVERLAY,
        "imagePosition": "vertical_alignment",
    },
    "hero-video": {
        **_CONTENT,
        **_OVERLAY,
        "autoPlay": "autoplay",
        "muted":    "muted",
        "loop":     "loop",
    },
    "hero-text": {
        **_CONTENT,
        "backgroundVariant":  "background_type",
        "backgroundGradient": "background_gradient",
        "pattern":            "background_pattern",
        "textColor":          "text_color",
    },
}

# Valeurs imposées par la variante quand la config ne dit rien
LEGACY_DEFAULTS: Dict[str, Dict[str, Any]] = {
    "hero-contact": {"background_type": "gradient", "show_scroll_indicator": True},
    "hero-image":   {"background_type": "image"},
    "hero-video":   {"background_type": "video"},
    "hero-text":    {"background_type": "gradient"},
}

_VALUE_MAPS: Dict[str, Dict[Any, Any]] = {
    "imagePosition": {"top": "top", "bottom": "bottom"},
}
_VALUE_FALLBACKS: Dict[str, Any] = {
    "imagePosition": "center",
}

_CONTEXT_KEYS = {
    "_context":     "context",
    "context":      "context",
    "_contextData": "context_data",
    "contextData":  "context_data",
    "context_data": "context_data",
}


def _convert(key: str, value: Any) -> Any:
    if key in _VALUE_MAPS:
        return _VALUE_MAPS[key].get(value, _VALUE_FALLBACKS[key])
    return value


def _from_legacy(variant: str, raw: Dict[str, Any], with_defaults: bool = True) -> Dict[str, Any]:
    """Applique l'entrée de table d'une variante. Total : aucune clé perdue."""
    table = LEGACY_FIELDS[variant]
    mapped: Dict[str, Any] = dict(LEGACY_DEFAULTS.get(variant, {})) if with_defaults else {}
    order = list(table)
    joined: Dict[str, List[tuple]] = {}
    extras: Dict[str, Any] = {}

    for key, value in raw.items():
        if key in _CONTEXT_KEYS:
            if value is not None:
                mapped[_CONTEXT_KEYS[key]] = value
            continue
        dest = table.get(key)
        if dest is None:
            extras[key] = value
            continue
        if value is None:
            continue
        if isinstance(value, str) and list(table.values()).count(dest) > 1:
            joined.setdefault(dest, []).append((order.index(key), value))
            continue
        mapped[dest] = _convert(key, value)

    for dest, parts in joined.items():
        mapped[dest] = " ".join(value for _, value in sorted(parts))
    if extras:
        log.debug("hero %s : clés hors table rangées dans extras : %s", variant, sorted(extras))
        mapped["extras"] = extras
    mapped["variant"] = variant
    return mapped


def is_canonical(raw: Dict[str, Any]) -> bool:
    return "variant" in raw


def _legacy_only(variant: str, raw: Dict[str, Any]) -> Dict[str, Any]:
    """Clés de la table historique que HeroConfig ne reconnaît pas directement (titulo, pattern…)."""
    table = LEGACY_FIELDS[variant]
    known = accepted_keys(HeroConfig)
    return {k: v for k, v in raw.items() if k in table and k not in known}


def normalize_hero(block_type: str, raw: Optional[Dict[str, Any]],
                   host: Optional[HostContext] = None) -> Dict[str, Any]:
    """
    Config hero quelconque → dict canonique (HeroConfig).

    Une config déjà canonique d'une variante historique peut encore recevoir
    des clés historiques (édition par l'hôte) : elles passent par la table et
    écrasent les champs canoniques correspondants.

    Le contexte stocké prime sur celui de l'hôte ; l'éditeur historique
    donnait au contraire la priorité au contexte hôte à l'enregistrement.

    Args:
        block_type: type du bloc (hero ou variante historique)
        raw: config stockée
        host: contexte fourni par la page hôte, utilisé seulement s'il manque

    Returns:
        dict canonique, snake_case, champs fixes
    """
    raw = dict(raw or {})
    if block_type in LEGACY_FIELDS and not is_canonical(raw):
        data = _from_legacy(block_type, raw)
    else:
        data = raw
        if not is_canonical(raw):
            data["variant"] = block_type
        if block_type in LEGACY_FIELDS:
            legacy = _legacy_only(block_type, raw)
            if legacy:
                data = {k: v for k, v in raw.items() if k not in legacy}
                mapped = _from_legacy(block_type, legacy, with_defaults=False)
                mapped.pop("variant")
                data.update(mapped)
    config = HeroConfig.model_validate(data)

    if host is not None:
        updates: Dict[str, Any] = {}
        if config.context is None and host.context:
            updates["context"] = host.context
        if not config.context_data and host.context_data:
            updates["context_data"] = dict(host.context_data)
        if updates:
            config = config.model_copy(update=updates)

    return config.model_dump()
