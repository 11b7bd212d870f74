"""
arklog - Logging: formatage de sortie

- format_plain_json: JSON compact (production)
- format_colored_json: même texte JSON, segments `"clé": valeur`
  décorés en ANSI (développement)

La coloration est une décoration du texte sérialisé: retirer les
séquences ANSI redonne exactement le JSON compact.
"""

import json
import re
from typing import Dict

from ..colors import (
    ColorFn,
    bright_blue,
    bright_cyan,
    bright_green,
    bright_magenta,
    bright_yellow,
    cyan,
    get_level_color_fn,
    get_value_color,
    gray,
    green,
    magenta,
    red,
    strip,
    yellow,
)
from .interfaces import LogLevel, LogRecord
from .safe_serializer import safe_stringify

# Clé entre guillemets, puis valeur jusqu'à la prochaine virgule ou fin de ligne
KEY_VALUE_PATTERN = re.compile(r'(".*?":\s*)(.*?)(?=,|\n|$)')

KEY_COLOR: ColorFn = cyan

STATIC_COLOR_MAP: Dict[str, ColorFn] = {
    "message": green,
    "timestamp": magenta,
    "requestId": bright_green,
    "userId": bright_blue,
    "context": bright_cyan,
    "duration": yellow,
    "event": bright_magenta,
    "error": red,
    "exception": red,
    "flow": bright_green,
    "method": bright_blue,
    "stack": gray,
    "status": bright_yellow,
    "elapsed": bright_yellow,
}


def format_plain_json(entry: LogRecord) -> str:
    """JSON compact d'une entrée nettoyée."""
    return safe_stringify(entry)


def format_colored_json(entry: LogRecord, level: LogLevel) -> str:
    """
    JSON compact décoré pour lecture en terminal.

    Clés en cyan; valeurs selon la table statique (level selon la
    sévérité, message en vert...), sinon selon l'allure de la valeur.

    Args:
        entry: Entrée nettoyée
        level: Niveau de l'entrée (couleur du champ level)

    Returns:
        Ligne décorée
    """
    color_map = dict(STATIC_COLOR_MAP)
    color_map["level"] = get_level_color_fn(level.value)

    def colorize(match: "re.Match[str]") -> str:
        key, value = match.group(1), match.group(2)
        key_name = key.replace('"', "").rstrip()[:-1]
        colorizer = color_map.get(key_name) or get_value_color(value)
        return KEY_COLOR(key) + colorizer(value)

    return KEY_VALUE_PATTERN.sub(colorize, safe_stringify(entry))


def parse_log_output(line: str) -> LogRecord:
    """
    Relit une ligne émise (colorée ou non) comme un dict.

    Utile en test: retire les séquences ANSI puis décode le JSON.
    """
    return json.loads(strip(line).strip())
