"""
Config de base des blocs.
Accepte les clés camelCase historiques et les noms Python ; sérialise en snake_case.
"""
from typing import Set, Type

from pydantic import AliasChoices, BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class BlockConfig(BaseModel):
    """Config d'un bloc. Les clés inconnues sont conservées telles quelles."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")


def accepted_keys(model: Type[BaseModel]) -> Set[str]:
    """Toutes les clés d'entrée reconnues par un modèle (nom, alias, alias de validation)."""
    keys: Set[str] = set()
    for name, field in model.model_fields.items():
        keys.add(name)
        if field.alias:
            keys.add(field.alias)
        va = field.validation_alias
        if isinstance(va, AliasChoices):
            keys.update(c for c in va.choices if isinstance(c, str))
        elif isinstance(va, str):
            keys.add(va)
    return keys
