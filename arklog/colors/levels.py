"""
arklog - Colors: couleurs par niveau et par type de valeur
"""

import re
from typing import Dict

from .color import (
    ColorFn,
    bg_green_black,
    bg_red_white,
    blue,
    gray,
    red,
    white,
    yellow,
)

LEVEL_COLOR_MAP: Dict[str, ColorFn] = {
    "fatal": bg_red_white,
    "error": red,
    "warn": yellow,
    "log": bg_green_black,
    "info": bg_green_black,
    "debug": blue,
    "verbose": gray,
}


def get_level_color_fn(level: str) -> ColorFn:
    """Retourne le décorateur associé à un niveau (blanc si inconnu)."""
    return LEVEL_COLOR_MAP.get(level, white)


# Nombre décimal; "nan", "inf" ou "1_000" n'en sont pas
NUMBER_PATTERN = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?$")


def _looks_numeric(text: str) -> bool:
    return bool(NUMBER_PATTERN.match(text))


def get_value_color(value: str) -> ColorFn:
    """
    Choisit un décorateur selon l'allure d'une valeur JSON sérialisée.

    Booléens et nombres (entre guillemets ou non): jaune.
    null: gris. Tout le reste: blanc.

    Args:
        value: Texte JSON de la valeur

    Returns:
        Fonction de décoration
    """
    text = value.strip()
    if len(text) >= 2 and text[0] == text[-1] == '"':
        text = text[1:-1]
    if text in ("true", "false") or _looks_numeric(text):
        return yellow
    if text == "null":
        return gray
    return white
