"""
arklog - Logging: analyse des appels de log

Interprétation des formes d'appel hétérogènes:
- normalize_message: argument principal (texte, mapping, erreur, autre)
- extract_error_and_extra: paramètres suivants (erreurs, textes, mappings)
"""

import traceback
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Optional

from .interfaces import Error, LogLevel, LogRecord
from .safe_serializer import is_big_int, is_error_like, is_function_like, safe_stringify
from .sanitizer import find_nested_error

OBJECT_LOGGED_MESSAGE = "Object logged"
INVALID_MESSAGE_WARNING = "Logger called with non-string message parameter"

# Cadres ignorés (ce module) puis conservés dans l'extrait de pile
CALLSTACK_SKIP = 2
CALLSTACK_KEEP = 5

# Clés promues en erreur, par ordre de priorité
ERROR_KEYS = ("err", "error")


@dataclass
class NormalizedMessage:
    """Résultat de l'analyse de l'argument principal."""

    message: str
    error: Optional[BaseException] = None
    extra: Optional[LogRecord] = None
    invalid_message_info: Optional[LogRecord] = None


@dataclass
class ExtractedArguments:
    """Résultat de l'analyse des paramètres suivants."""

    error: Optional[BaseException] = None
    extra: LogRecord = field(default_factory=dict)


def type_name_of(value: Any) -> str:
    """
    Nom de type d'une valeur, dans le vocabulaire `typeof` de JSON/JS.

    None est un "object", comme null.
    """
    if value is None:
        return "object"
    if isinstance(value, bool):
        return "boolean"
    if is_big_int(value):
        return "bigint"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if is_function_like(value):
        return "function"
    return "object"


def _callstack_snippet() -> str:
    frames = traceback.format_stack()[::-1]
    selected = frames[CALLSTACK_SKIP:CALLSTACK_SKIP + CALLSTACK_KEEP]
    return "\n".join(frame.strip() for frame in selected)


def normalize_message(message: Any) -> NormalizedMessage:
    """
    Interprète l'argument principal d'un appel de log.

    - texte: message tel quel
    - erreur: message de l'erreur, erreur portée
    - mapping: erreur imbriquée éventuelle promue, mapping entier en extra
    - autre: message descriptif et fragment d'avertissement (sans lever)

    Args:
        message: Argument principal, de forme inconnue

    Returns:
        NormalizedMessage
    """
    if isinstance(message, str):
        return NormalizedMessage(message=message)

    if is_error_like(message):
        return NormalizedMessage(message=str(message), error=message)

    if isinstance(message, Mapping):
        found = find_nested_error(message)
        if found is not None:
            return NormalizedMessage(message=str(found), error=found, extra=dict(message))
        return NormalizedMessage(message=OBJECT_LOGGED_MESSAGE, extra=dict(message))

    rendered = safe_stringify(message)
    if message is None:
        prepared = "[null]"
    else:
        prepared = f"[OBJECT]: {rendered}"

    return NormalizedMessage(
        message=prepared,
        invalid_message_info={
            "invalidMessageWarning": INVALID_MESSAGE_WARNING,
            "invalidMessageCallstack": _callstack_snippet(),
            "originalMessageType": type_name_of(message),
            "originalMessage": rendered,
        },
    )


def _promote_error(param: Mapping, is_error_level: bool) -> Optional[tuple]:
    # Erreurs réelles d'abord, puis textes (niveaux warn et plus uniquement)
    for key in ERROR_KEYS:
        if is_error_like(param.get(key)):
            return key, param[key]
    if is_error_level:
        for key in ERROR_KEYS:
            if isinstance(param.get(key), str):
                return key, Error(param[key])
    return None


def extract_error_and_extra(params: Iterable[Any], level: LogLevel) -> ExtractedArguments:
    """
    Interprète les paramètres qui suivent le message.

    Traités dans l'ordre: la dernière erreur trouvée l'emporte, les clés
    des mappings suivants écrasent celles des précédents.

    Args:
        params: Paramètres optionnels de l'appel
        level: Niveau de l'appel

    Returns:
        ExtractedArguments (erreur éventuelle, champs supplémentaires)
    """
    result = ExtractedArguments()
    is_error_level = level.is_error_level

    for param in params:
        if is_error_like(param):
            result.error = param
        elif isinstance(param, str):
            if is_error_level:
                result.error = Error(param)
            else:
                result.extra["context"] = param
        elif isinstance(param, Mapping):
            promoted = _promote_error(param, is_error_level)
            if promoted is not None:
                key, result.error = promoted
                rest: Dict[Any, Any] = {k: v for k, v in param.items() if k != key}
                result.extra.update(rest)
            else:
                found = find_nested_error(param)
                if found is not None:
                    result.error = found
                result.extra.update(param)

    return result
