"""
arklog - Colors: décorateurs de texte

Fonctions pures `texte -> texte` construites à partir des paires ANSI.
"""

from typing import Callable

from .ansi import ANSI_PAIRS, AnsiPair

ColorFn = Callable[[str], str]


def create_color(open_seq: str, close_seq: str) -> ColorFn:
    """
    Crée un décorateur à partir d'une séquence d'ouverture et de fermeture.

    Args:
        open_seq: Séquence placée avant le texte
        close_seq: Séquence placée après le texte

    Returns:
        Fonction de décoration
    """

    def apply(text: str) -> str:
        return open_seq + text + close_seq

    return apply


def create_composed_color(*pairs: AnsiPair) -> ColorFn:
    """
    Crée un décorateur combinant plusieurs paires.

    Les ouvertures sont concaténées dans l'ordre, les fermetures en
    ordre inverse (le style le plus interne est fermé en premier).
    """
    open_seq = "".join(pair.open for pair in pairs)
    close_seq = "".join(pair.close for pair in reversed(pairs))
    return create_color(open_seq, close_seq)


def compose(*fns: ColorFn) -> ColorFn:
    """
    Compose plusieurs décorateurs en un seul.

    Appliqués de gauche à droite, du plus externe au plus interne:
    `compose(bold, red)(t) == bold(red(t))`.
    """
    if not fns:
        return lambda text: text
    if len(fns) == 1:
        return fns[0]

    def apply(text: str) -> str:
        result = text
        for fn in reversed(fns):
            result = fn(result)
        return result

    return apply


def _from_pair(name: str) -> ColorFn:
    pair = ANSI_PAIRS[name]
    return create_color(pair.open, pair.close)


# Premier plan
black = _from_pair("black")
red = _from_pair("red")
green = _from_pair("green")
yellow = _from_pair("yellow")
blue = _from_pair("blue")
magenta = _from_pair("magenta")
cyan = _from_pair("cyan")
white = _from_pair("white")

# Premier plan clair
bright_red = _from_pair("bright_red")
bright_green = _from_pair("bright_green")
bright_yellow = _from_pair("bright_yellow")
bright_blue = _from_pair("bright_blue")
bright_magenta = _from_pair("bright_magenta")
bright_cyan = _from_pair("bright_cyan")
bright_white = _from_pair("bright_white")

# Fond
bg_black = _from_pair("bg_black")
bg_red = _from_pair("bg_red")
bg_green = _from_pair("bg_green")
bg_yellow = _from_pair("bg_yellow")
bg_blue = _from_pair("bg_blue")
bg_magenta = _from_pair("bg_magenta")
bg_cyan = _from_pair("bg_cyan")
bg_white = _from_pair("bg_white")

# Combinaisons
bg_green_black = create_composed_color(ANSI_PAIRS["bg_green"], ANSI_PAIRS["black"])
bg_red_white = create_composed_color(ANSI_PAIRS["bg_red"], ANSI_PAIRS["white"])

# Styles
bold = _from_pair("bold")
dim = _from_pair("dim")
italic = _from_pair("italic")
underline = _from_pair("underline")
strikethrough = _from_pair("strikethrough")
inverse = _from_pair("reverse")
hidden = _from_pair("hidden")

# Alias: gray utilise le style dim
gray = dim
