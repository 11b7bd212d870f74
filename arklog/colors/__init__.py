"""
arklog - Colors

Décorateurs ANSI purs (`texte -> texte`) utilisés par le formatage
développeur des logs:
- Paires ouverture/fermeture spécifiques (imbrication correcte)
- Composition de styles
- Suppression des séquences (strip)
- Couleurs par niveau de log et par type de valeur
"""

from .ansi import (
    ANSI_PAIRS,
    AnsiPair,
    strip,
    visible_length,
)
from .color import (
    ColorFn,
    create_color,
    create_composed_color,
    compose,
    # Premier plan
    black,
    red,
    green,
    yellow,
    blue,
    magenta,
    cyan,
    white,
    gray,
    bright_red,
    bright_green,
    bright_yellow,
    bright_blue,
    bright_magenta,
    bright_cyan,
    bright_white,
    # Fond
    bg_black,
    bg_red,
    bg_green,
    bg_yellow,
    bg_blue,
    bg_magenta,
    bg_cyan,
    bg_white,
    bg_green_black,
    bg_red_white,
    # Styles
    bold,
    dim,
    italic,
    underline,
    strikethrough,
    inverse,
    hidden,
)
from .levels import (
    LEVEL_COLOR_MAP,
    get_level_color_fn,
    get_value_color,
)

__all__ = [
    "ANSI_PAIRS",
    "AnsiPair",
    "strip",
    "visible_length",
    "ColorFn",
    "create_color",
    "create_composed_color",
    "compose",
    "black",
    "red",
    "green",
    "yellow",
    "blue",
    "magenta",
    "cyan",
    "white",
    "gray",
    "bright_red",
    "bright_green",
    "bright_yellow",
    "bright_blue",
    "bright_magenta",
    "bright_cyan",
    "bright_white",
    "bg_black",
    "bg_red",
    "bg_green",
    "bg_yellow",
    "bg_blue",
    "bg_magenta",
    "bg_cyan",
    "bg_white",
    "bg_green_black",
    "bg_red_white",
    "bold",
    "dim",
    "italic",
    "underline",
    "strikethrough",
    "inverse",
    "hidden",
    "LEVEL_COLOR_MAP",
    "get_level_color_fn",
    "get_value_color",
]
