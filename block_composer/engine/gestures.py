"""
GestureOriginClassifier — un pointer-down peut-il démarrer un réordonnancement ?

Un même bloc visuel porte la poignée de glissement et des contrôles ordinaires
(édition de texte, supprimer, dupliquer). L'origine d'un geste est décrite par
la chaîne de contrôles depuis la cible de l'événement vers ses ancêtres
(équivalent de `closest()` côté DOM), indépendamment de toute boîte à outils UI.
"""
import logging
from enum import Enum
from typing import Iterable, Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict

log = logging.getLogger(__name__)

ControlRole = Literal["handle", "delete", "duplicate", "internal"]

_EDITABLE_TAGS = ("input", "textarea")


class Control(BaseModel):
    """Un élément de la chaîne d'origine."""
    model_config = ConfigDict(frozen=True)

    tag: str = "div"
    editable: bool = False             # contenteditable
    role: Optional[ControlRole] = None
    handle_for: Optional[str] = None   # id du bloc si role == "handle"

    @property
    def is_editable(self) -> bool:
        return self.editable or self.tag.lower() in _EDITABLE_TAGS

    @property
    def is_button(self) -> bool:
        return self.tag.lower() == "button"


class GestureOrigin(BaseModel):
    """Chaîne de contrôles, de la cible de l'événement vers la racine."""
    model_config = ConfigDict(frozen=True)

    path: Tuple[Control, ...] = ()

    @classmethod
    def of(cls, *controls: Control) -> "GestureOrigin":
        return cls(path=tuple(controls))

    def closest(self, role: str) -> Optional[Control]:
        return next((c for c in self.path if c.role == role), None)

    def any(self, predicate) -> bool:
        return any(predicate(c) for c in self.path)


class Verdict(str, Enum):
    ACCEPTED          = "accepted"
    INTERNAL_CONTROL  = "internal_control"
    DELETE_CONTROL    = "delete_control"
    DUPLICATE_CONTROL = "duplicate_control"
    EDITABLE          = "editable"
    BUTTON_NOT_HANDLE = "button_not_handle"
    NOT_HANDLE        = "not_handle"
    FOREIGN_HANDLE    = "foreign_handle"


def classify(origin: Optional[GestureOrigin], block_id: str) -> Verdict:
    """
    Prédicat d'origine du geste. Ordre des rejets :
      1. contrôle interne (barre d'outils texte…)
      2. bouton supprimer / dupliquer
      3. zone éditable (input, textarea, contenteditable)
      4. bouton hors poignée
      5. hors poignée
      6. poignée d'un autre bloc
    """
    if origin is None or not origin.path:
        return Verdict.NOT_HANDLE
    if origin.closest("internal"):
        return Verdict.INTERNAL_CONTROL
    if origin.closest("delete"):
        return Verdict.DELETE_CONTROL
    if origin.closest("duplicate"):
        return Verdict.DUPLICATE_CONTROL
    if origin.any(lambda c: c.is_editable):
        return Verdict.EDITABLE

    handle = origin.closest("handle")
    if handle is None:
        if origin.any(lambda c: c.is_button):
            return Verdict.BUTTON_NOT_HANDLE
        return Verdict.NOT_HANDLE
    if handle.handle_for != block_id:
        return Verdict.FOREIGN_HANDLE
    return Verdict.ACCEPTED


def accepts(origin: Optional[GestureOrigin], block_id: str) -> bool:
    verdict = classify(origin, block_id)
    if verdict is not Verdict.ACCEPTED:
        log.debug("Geste rejeté pour %s : %s", block_id, verdict.value)
    return verdict is Verdict.ACCEPTED


def handle_origin(block_id: str, extra: Iterable[Control] = ()) -> GestureOrigin:
    """Origine typique d'un geste parti de la poignée d'un bloc."""
    return GestureOrigin.of(
        Control(tag="button", role="handle", handle_for=block_id), *extra,
    )
