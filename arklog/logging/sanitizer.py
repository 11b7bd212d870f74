"""
arklog - Logging: Entry Sanitizer

Nettoyage récursif des entrées de log avant formatage:
- Masquage des clés sensibles (sous-chaîne, insensible à la casse)
- Suppression des valeurs None
- Conversion des valeurs exotiques (SafeSerializer)
- Troncature des séquences
- Détection des références circulaires

Contient aussi la recherche d'erreur imbriquée (find_nested_error).
"""

from collections.abc import Mapping
from typing import Any, Dict, Iterable, List, Optional, Set

from .interfaces import (
    CIRCULAR_KEY,
    CIRCULAR_VALUE,
    DEFAULT_MASK_FIELDS,
    MASK_VALUE,
    IEntrySanitizer,
    LogRecord,
)
from .safe_serializer import (
    SEQUENCE_TYPES,
    SafeSerializer,
    as_mapping,
    is_error_like,
    is_structured_object,
)


def find_nested_error(
    obj: Any,
    visited: Optional[Set[int]] = None,
) -> Optional[BaseException]:
    """
    Recherche en profondeur la première erreur contenue dans un mapping.

    Parcours des valeurs dans l'ordre d'insertion: une erreur est
    retournée immédiatement, un mapping est parcouru récursivement, une
    séquence (list, tuple, set, deque...) est parcourue élément par
    élément (erreurs et mappings).

    Args:
        obj: Mapping à parcourir
        visited: Identités déjà parcourues (protection contre les cycles)

    Returns:
        Première erreur trouvée ou None
    """
    if not isinstance(obj, Mapping):
        return None

    if visited is None:
        visited = set()
    if id(obj) in visited:
        return None
    visited.add(id(obj))

    for value in obj.values():
        if is_error_like(value):
            return value
        if isinstance(value, Mapping):
            nested = find_nested_error(value, visited)
            if nested is not None:
                return nested
        elif isinstance(value, SEQUENCE_TYPES):
            for item in value:
                if is_error_like(item):
                    return item
                if isinstance(item, Mapping):
                    nested = find_nested_error(item, visited)
                    if nested is not None:
                        return nested
    return None


class EntrySanitizer(IEntrySanitizer):
    """
    Nettoyage des entrées de log.

    Les motifs fournis complètent DEFAULT_MASK_FIELDS. Une clé est
    sensible si l'un des motifs est contenu dans son nom (casse ignorée);
    sa valeur est alors remplacée par "[MASKED]" sans être parcourue.

    Example:
        sanitizer = EntrySanitizer(["pin"])
        sanitizer.sanitize({"password": "secret123", "user": "john"})
        # {"password": "[MASKED]", "user": "john"}
    """

    def __init__(
        self,
        additional_patterns: Optional[Iterable[str]] = None,
        max_array_length: int = 100,
    ) -> None:
        """
        Args:
            additional_patterns: Motifs supplémentaires à masquer
            max_array_length: Longueur maximale des séquences

        Raises:
            ValueError: Si max_array_length est négatif
        """
        if max_array_length < 0:
            raise ValueError("max_array_length must be >= 0")

        self._patterns: List[str] = []
        for pattern in list(DEFAULT_MASK_FIELDS) + list(additional_patterns or []):
            if pattern and pattern.strip():
                self._add(pattern)
        self._max_array_length = max_array_length

    @property
    def patterns(self) -> List[str]:
        """Retourne les motifs sensibles configurés (en minuscules)."""
        return list(self._patterns)

    @property
    def max_array_length(self) -> int:
        return self._max_array_length

    def _add(self, pattern: str) -> None:
        pattern_lower = pattern.strip().lower()
        if pattern_lower not in self._patterns:
            self._patterns.append(pattern_lower)

    def add_pattern(self, pattern: str) -> None:
        """
        Ajoute un motif sensible.

        Args:
            pattern: Motif (insensible à la casse)

        Raises:
            ValueError: Si motif vide
        """
        if not pattern or not pattern.strip():
            raise ValueError("Pattern cannot be empty")
        self._add(pattern)

    def is_sensitive_key(self, key: str) -> bool:
        if not key:
            return False
        key_lower = str(key).lower()
        return any(pattern in key_lower for pattern in self._patterns)

    def sanitize(self, entry: LogRecord) -> LogRecord:
        """
        Nettoie une entrée.

        Un nouvel ensemble d'identités visitées est créé à chaque appel:
        un même mapping rencontré deux fois est remplacé par le marqueur
        {"[Circular]": "circular reference detected"}.

        Args:
            entry: Entrée assemblée

        Returns:
            Nouvelle entrée sûre pour JSON
        """
        serializer = SafeSerializer(self._max_array_length)
        return self._sanitize_mapping(entry, entry, serializer, {})

    def _sanitize_mapping(
        self,
        obj: Mapping,
        source: Any,
        serializer: SafeSerializer,
        visited: Dict[int, Any],
    ) -> Dict[str, Any]:
        # visited garde une référence sur chaque objet: pas de réutilisation d'id()
        if id(source) in visited:
            return {CIRCULAR_KEY: CIRCULAR_VALUE}
        visited[id(source)] = source

        cleaned: Dict[str, Any] = {}
        for key, value in obj.items():
            if value is None:
                continue

            name = key if isinstance(key, str) else str(key)
            if self.is_sensitive_key(name):
                cleaned[name] = MASK_VALUE
                continue

            safe_value = serializer.serialize(value)
            if isinstance(safe_value, list):
                cleaned[name] = self._sanitize_sequence(safe_value, serializer, visited)
            elif isinstance(safe_value, Mapping):
                # Mapping ou objet structuré: identité d'origine; sinon dict neuf
                origin = value if safe_value is value or is_structured_object(value) else safe_value
                cleaned[name] = self._sanitize_mapping(safe_value, origin, serializer, visited)
            else:
                cleaned[name] = safe_value
        return cleaned

    def _sanitize_sequence(
        self,
        items: List[Any],
        serializer: SafeSerializer,
        visited: Dict[int, Any],
    ) -> List[Any]:
        result: List[Any] = []
        for item in items:
            if isinstance(item, Mapping):
                result.append(self._sanitize_mapping(item, item, serializer, visited))
            elif is_structured_object(item):
                result.append(self._sanitize_mapping(as_mapping(item), item, serializer, visited))
            elif isinstance(item, list):
                result.append(self._sanitize_sequence(item, serializer, visited))
            else:
                result.append(serializer.serialize(item))
        return result


def sanitize_log_entry(
    entry: LogRecord,
    mask_fields: Optional[Iterable[str]] = None,
    max_array_length: int = 100,
) -> LogRecord:
    """Raccourci fonctionnel: EntrySanitizer(mask_fields, max_array_length).sanitize(entry)."""
    return EntrySanitizer(mask_fields, max_array_length).sanitize(entry)
