"""
arklog - Colors: séquences ANSI

Paires ouverture/fermeture pour la décoration terminal.

Chaque style ferme avec son propre code (39 pour le premier plan,
49 pour le fond, 22 pour gras/dim...) et non avec le reset universel,
ce qui permet d'imbriquer plusieurs décorateurs sur le même texte.
"""

import re
from dataclasses import dataclass
from typing import Dict


@dataclass(frozen=True)
class AnsiPair:
    """Séquence d'ouverture et de fermeture d'un style."""

    open: str
    close: str


ANSI_PAIRS: Dict[str, AnsiPair] = {
    # Styles
    "bold": AnsiPair("\x1b[1m", "\x1b[22m"),
    "dim": AnsiPair("\x1b[2m", "\x1b[22m"),
    "italic": AnsiPair("\x1b[3m", "\x1b[23m"),
    "underline": AnsiPair("\x1b[4m", "\x1b[24m"),
    "blink": AnsiPair("\x1b[5m", "\x1b[25m"),
    "reverse": AnsiPair("\x1b[7m", "\x1b[27m"),
    "hidden": AnsiPair("\x1b[8m", "\x1b[28m"),
    "strikethrough": AnsiPair("\x1b[9m", "\x1b[29m"),
    # Premier plan
    "black": AnsiPair("\x1b[30m", "\x1b[39m"),
    "red": AnsiPair("\x1b[31m", "\x1b[39m"),
    "green": AnsiPair("\x1b[32m", "\x1b[39m"),
    "yellow": AnsiPair("\x1b[33m", "\x1b[39m"),
    "blue": AnsiPair("\x1b[34m", "\x1b[39m"),
    "magenta": AnsiPair("\x1b[35m", "\x1b[39m"),
    "cyan": AnsiPair("\x1b[36m", "\x1b[39m"),
    "white": AnsiPair("\x1b[37m", "\x1b[39m"),
    # Premier plan clair
    "bright_red": AnsiPair("\x1b[91m", "\x1b[39m"),
    "bright_green": AnsiPair("\x1b[92m", "\x1b[39m"),
    "bright_yellow": AnsiPair("\x1b[93m", "\x1b[39m"),
    "bright_blue": AnsiPair("\x1b[94m", "\x1b[39m"),
    "bright_magenta": AnsiPair("\x1b[95m", "\x1b[39m"),
    "bright_cyan": AnsiPair("\x1b[96m", "\x1b[39m"),
    "bright_white": AnsiPair("\x1b[97m", "\x1b[39m"),
    # Fond
    "bg_black": AnsiPair("\x1b[40m", "\x1b[49m"),
    "bg_red": AnsiPair("\x1b[41m", "\x1b[49m"),
    "bg_green": AnsiPair("\x1b[42m", "\x1b[49m"),
    "bg_yellow": AnsiPair("\x1b[43m", "\x1b[49m"),
    "bg_blue": AnsiPair("\x1b[44m", "\x1b[49m"),
    "bg_magenta": AnsiPair("\x1b[45m", "\x1b[49m"),
    "bg_cyan": AnsiPair("\x1b[46m", "\x1b[49m"),
    "bg_white": AnsiPair("\x1b[47m", "\x1b[49m"),
}


# Séquences CSI et assimilées (couleurs, curseur...)
ANSI_PATTERN = re.compile(
    r"[\u001b\u009b][\[()#;?]*(?:[0-9]{1,4}(?:;[0-9]{0,4})*)?[0-9A-ORZcf-nqry=><]"
)


def strip(text: str) -> str:
    """
    Retire toutes les séquences ANSI d'un texte.

    Args:
        text: Texte éventuellement décoré

    Returns:
        Texte brut
    """
    return ANSI_PATTERN.sub("", text)


def visible_length(text: str) -> int:
    """Longueur affichée d'un texte (séquences ANSI exclues)."""
    return len(strip(text))
