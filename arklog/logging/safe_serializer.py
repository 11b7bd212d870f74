"""
arklog - Logging: Safe Serializer

Conversion de valeurs arbitraires en valeurs encodables en JSON,
sans jamais lever d'exception.

La conversion suit une chaîne ordonnée (prédicat -> conversion): le
premier cas qui correspond l'emporte, l'ordre est significatif.
"""

import dataclasses
import datetime as dt
import enum
import functools
import inspect
import json
import math
import re
import traceback
from collections import deque
from collections.abc import Mapping
from typing import Any, Callable, Dict, List, Optional, Set, Tuple

from pydantic import BaseModel

from .interfaces import CIRCULAR_KEY, CIRCULAR_VALUE

# Plus grand entier représentable exactement en double précision
MAX_SAFE_INTEGER = 2**53 - 1

SEQUENCE_TYPES = (list, tuple, set, frozenset, deque)

TRUNCATION_PATTERN = re.compile(r"^\[TRUNCATED: \d+ more items\]$")

C1_CONTROL_PATTERN = re.compile("[\u0080-\u009f]")

_REGEX_FLAGS = (
    (re.IGNORECASE, "i"),
    (re.MULTILINE, "m"),
    (re.DOTALL, "s"),
    (re.VERBOSE, "x"),
)


# ══════════════════════════════════════════════════════════════════════════════
# PRÉDICATS ET CONVERSIONS ÉLÉMENTAIRES
# ══════════════════════════════════════════════════════════════════════════════


def is_error_like(value: Any) -> bool:
    """True si la valeur représente une erreur d'exécution."""
    return isinstance(value, BaseException)


def is_big_int(value: Any) -> bool:
    """True pour un entier non représentable exactement en double."""
    return (
        isinstance(value, int)
        and not isinstance(value, bool)
        and abs(value) > MAX_SAFE_INTEGER
    )


def is_function_like(value: Any) -> bool:
    """Fonctions, méthodes, classes et partials."""
    return (
        inspect.isroutine(value)
        or inspect.isclass(value)
        or isinstance(value, functools.partial)
    )


def function_name(value: Any) -> str:
    """Nom d'une fonction, `anonymous` pour les lambdas."""
    if isinstance(value, functools.partial):
        value = value.func
    name = getattr(value, "__name__", None)
    if not name or name == "<lambda>":
        return "anonymous"
    return name


def collapse_stack(stack: str) -> str:
    """Remplace chaque saut de ligne (et l'indentation qui suit) par une virgule."""
    return re.sub(r"\n\s*", ",", stack.rstrip())


def format_error(error: BaseException) -> Dict[str, str]:
    """
    Représentation JSON d'une erreur.

    Args:
        error: Exception à représenter

    Returns:
        {"name", "message", "stack"} avec la pile sur une seule ligne
    """
    if error.__traceback__ is not None:
        lines = traceback.format_exception(type(error), error, error.__traceback__)
    else:
        lines = traceback.format_exception_only(type(error), error)
    return {
        "name": type(error).__name__,
        "message": str(error),
        "stack": collapse_stack("".join(lines)),
    }


def format_datetime(value: Any) -> str:
    """ISO 8601; datetimes UTC au format `...T00:00:00.000Z`."""
    if isinstance(value, dt.datetime):
        text = value.isoformat(timespec="milliseconds")
        if text.endswith("+00:00"):
            text = text[: -len("+00:00")] + "Z"
        return text
    return value.isoformat()


def format_regex(pattern: "re.Pattern[Any]") -> str:
    source = pattern.pattern
    if isinstance(source, bytes):
        source = source.decode("utf-8", "replace")
    flags = "".join(letter for flag, letter in _REGEX_FLAGS if pattern.flags & flag)
    return f"/{source}/{flags}"


def _first_attr(value: Any, *names: str) -> Any:
    for name in names:
        attr = getattr(value, name, None)
        if attr is not None:
            return attr
    return None


def describe_file(value: Any) -> Optional[Tuple[Any, Any, Any]]:
    """
    Retourne (nom, taille, type) si la valeur ressemble à un fichier.

    Accepte les conventions `name`/`type` et `filename`/`content_type`.
    """
    name = _first_attr(value, "name", "filename")
    size = getattr(value, "size", None)
    content_type = _first_attr(value, "type", "content_type")
    if name is None or size is None or content_type is None:
        return None
    return name, size, content_type


def file_label(name: Any, size: Any, content_type: Any) -> str:
    return f"[File: {name} ({size} bytes, {content_type})]"


def _has_reader(value: Any) -> bool:
    return callable(getattr(value, "read", None))


def is_form_data_like(value: Any) -> bool:
    return callable(getattr(value, "multi_items", None))


def is_file_like(value: Any) -> bool:
    return _has_reader(value) and describe_file(value) is not None


def is_blob_like(value: Any) -> bool:
    return (
        _has_reader(value)
        and getattr(value, "size", None) is not None
        and _first_attr(value, "type", "content_type") is not None
    )


def is_structured_object(value: Any) -> bool:
    """Instance de dataclass ou modèle pydantic."""
    if isinstance(value, BaseModel):
        return True
    return dataclasses.is_dataclass(value) and not isinstance(value, type)


def as_mapping(value: Any) -> Dict[str, Any]:
    """
    Vue mapping (superficielle) d'un objet structuré.

    Les valeurs ne sont pas converties: l'appelant poursuit la descente.
    """
    if isinstance(value, BaseModel):
        return {name: getattr(value, name) for name in type(value).model_fields}
    return {f.name: getattr(value, f.name) for f in dataclasses.fields(value)}


def _serialize_form_data(value: Any) -> Any:
    entries: Dict[str, Any] = {}
    try:
        for key, item in value.multi_items():
            described = None if isinstance(item, str) else describe_file(item)
            entries[str(key)] = file_label(*described) if described else item
    except Exception:
        return "[FormData: unable to read entries]"
    return {"[FormData]": entries}


def _describe_unserializable(value: Any) -> str:
    name = getattr(type(value), "__name__", None)
    if name:
        return f"[{name}: object not serializable]"
    return "[Object: not serializable]"


# ══════════════════════════════════════════════════════════════════════════════
# CHAÎNE DE CONVERSION
# ══════════════════════════════════════════════════════════════════════════════


class SafeSerializer:
    """
    Conversion d'une valeur en valeur encodable en JSON.

    Les mappings (et objets structurés à l'intérieur des séquences) sont
    laissés tels quels: l'appelant (EntrySanitizer) descend dedans et y
    applique le masquage et la détection de cycles.

    Example:
        serializer = SafeSerializer(max_array_length=2)
        serializer.serialize([1, 2, 3])
        # [1, 2, "[TRUNCATED: 1 more items]"]
    """

    def __init__(self, max_array_length: int = 100) -> None:
        """
        Args:
            max_array_length: Longueur maximale des séquences (>= 0)
        """
        if max_array_length < 0:
            raise ValueError("max_array_length must be >= 0")
        self._max_array_length = max_array_length
        self._chain: List[Tuple[Callable[[Any], bool], Callable[[Any], Any]]] = [
            (lambda v: v is None, lambda v: v),
            (is_function_like, lambda v: f"[Function: {function_name(v)}]"),
            (lambda v: isinstance(v, enum.Enum), lambda v: f"[Symbol: {type(v).__name__}.{v.name}]"),
            (is_big_int, lambda v: f"[BigInt: {v}]"),
            (
                lambda v: isinstance(v, float) and not math.isfinite(v),
                lambda v: "NaN" if math.isnan(v) else ("Infinity" if v > 0 else "-Infinity"),
            ),
            (lambda v: isinstance(v, (str, int, float, bool)), lambda v: v),
            (lambda v: isinstance(v, (dt.datetime, dt.date, dt.time)), format_datetime),
            (lambda v: isinstance(v, re.Pattern), lambda v: f"[RegExp: {format_regex(v)}]"),
            (is_error_like, format_error),
            (is_form_data_like, _serialize_form_data),
            (is_file_like, lambda v: file_label(*describe_file(v))),
            (
                is_blob_like,
                lambda v: f"[Blob: {v.size} bytes, {_first_attr(v, 'type', 'content_type')}]",
            ),
            (
                lambda v: isinstance(v, (bytes, bytearray, memoryview)),
                lambda v: f"[ArrayBuffer: {memoryview(v).nbytes} bytes]",
            ),
            (is_structured_object, as_mapping),
            (lambda v: isinstance(v, SEQUENCE_TYPES), self._serialize_sequence),
            (lambda v: isinstance(v, Mapping), lambda v: v),
        ]
        self._active: Set[int] = set()

    @property
    def max_array_length(self) -> int:
        return self._max_array_length

    def serialize(self, value: Any) -> Any:
        """
        Convertit une valeur, sans lever.

        Args:
            value: Valeur quelconque

        Returns:
            Valeur encodable en JSON (ou mapping à parcourir par l'appelant)
        """
        try:
            for predicate, convert in self._chain:
                if predicate(value):
                    return convert(value)
            json.dumps(value)
            return value
        except Exception:
            return _describe_unserializable(value)

    def _serialize_item(self, item: Any) -> Any:
        if isinstance(item, Mapping) or is_structured_object(item):
            return item
        if isinstance(item, SEQUENCE_TYPES) and id(item) in self._active:
            return {CIRCULAR_KEY: CIRCULAR_VALUE}
        return self.serialize(item)

    def _serialize_sequence(self, value: Any) -> List[Any]:
        items = list(value)
        limit = self._max_array_length
        self._active.add(id(value))
        try:
            if len(items) <= limit or _is_truncated(items, limit):
                return [self._serialize_item(item) for item in items]
            result = [self._serialize_item(item) for item in items[:limit]]
        finally:
            self._active.discard(id(value))
        result.append(f"[TRUNCATED: {len(items) - limit} more items]")
        return result


def _is_truncated(items: List[Any], limit: int) -> bool:
    """
    Séquence déjà tronquée: N éléments suivis du marqueur.

    Le marqueur ne porte pas la limite qui l'a produit: une séquence de
    l'appelant de N + 1 éléments finissant par un texte de la forme
    "[TRUNCATED: k more items]" est elle aussi conservée telle quelle,
    compte k compris.
    """
    if len(items) != limit + 1:
        return False
    last = items[-1]
    return isinstance(last, str) and bool(TRUNCATION_PATTERN.match(last))


def make_safe_for_json(value: Any, max_array_length: int = 100) -> Any:
    """Raccourci fonctionnel de SafeSerializer.serialize."""
    return SafeSerializer(max_array_length).serialize(value)


# ══════════════════════════════════════════════════════════════════════════════
# ENCODAGE JSON
# ══════════════════════════════════════════════════════════════════════════════


def _decycle(value: Any, seen: Set[int]) -> Any:
    if isinstance(value, (Mapping, list, tuple)):
        if id(value) in seen:
            return "[Circular]"
        seen.add(id(value))
        if isinstance(value, Mapping):
            return {str(key): _decycle(item, seen) for key, item in value.items()}
        return [_decycle(item, seen) for item in value]
    if is_big_int(value):
        return str(value)
    return value


def safe_stringify(value: Any) -> str:
    """
    JSON compact d'une valeur, sans lever.

    En cas d'échec de l'encodage natif (cycle, type inconnu), réessaie
    avec un encodeur de repli: références répétées -> "[Circular]",
    grands entiers -> texte décimal, autres objets -> str().

    Les caractères de contrôle C1 (U+0080 à U+009F) sont échappés en
    `\\u00XX`: U+009B ouvre une séquence ANSI et serait retiré par strip().

    Args:
        value: Valeur à encoder

    Returns:
        Texte JSON
    """
    return C1_CONTROL_PATTERN.sub(_escape_control, _dumps(value))


def _escape_control(match: "re.Match[str]") -> str:
    return f"\\u{ord(match.group(0)):04x}"


def _dumps(value: Any) -> str:
    try:
        return json.dumps(value, separators=(",", ":"), ensure_ascii=False)
    except (TypeError, ValueError, RecursionError):
        pass
    try:
        return json.dumps(
            _decycle(value, set()),
            separators=(",", ":"),
            ensure_ascii=False,
            default=str,
        )
    except Exception:
        try:
            return json.dumps(str(value), ensure_ascii=False)
        except Exception:
            return '"[Unserializable]"'
