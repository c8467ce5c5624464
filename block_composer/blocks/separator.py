"""Bloc Séparateur — ligne horizontale."""
from .base import BlockConfig


class SeparatorConfig(BlockConfig):
    style: str = "solid"
    height: float = 0.5
