"""
Logging - Sensitive Masker

Masquage automatique des données sensibles (codes d'autorisation,
tokens, state) avant écriture dans les logs.
"""

from typing import Any, Dict, List, Optional
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

from .interfaces import ISensitiveMasker


class SensitiveMasker(ISensitiveMasker):
    """
    Masquage automatique des données sensibles.

    Masque récursivement les dictionnaires et, pour toute valeur qui
    ressemble à une URL, les paramètres sensibles de la query et du
    fragment (réponses implicites).

    Example:
        masker = SensitiveMasker()
        masker.mask_url("https://app.example/cb?code=abc&lang=fr")
        # "https://app.example/cb?code=***MASKED***&lang=fr"
    """

    def __init__(self, additional_patterns: Optional[List[str]] = None) -> None:
        """
        Initialise le masker avec patterns sensibles.

        Args:
            additional_patterns: Patterns supplémentaires à masquer
        """
        self._patterns: List[str] = list(self.SENSITIVE_PATTERNS)
        if additional_patterns:
            for pattern in additional_patterns:
                if pattern and pattern.lower() not in self._patterns:
                    self._patterns.append(pattern.lower())

    @property
    def patterns(self) -> List[str]:
        """Retourne les patterns sensibles configurés."""
        return list(self._patterns)

    def mask(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Masque récursivement toutes les données sensibles.

        Comportement:
            - Clés contenant patterns sensibles → valeur masquée
            - Valeurs dict → récursion
            - Valeurs list → masque chaque élément
            - Valeurs URL → paramètres sensibles masqués

        Args:
            data: Dictionnaire à masquer

        Returns:
            Copie avec données sensibles masquées
        """
        if not isinstance(data, dict):
            return data

        result: Dict[str, Any] = {}

        for key, value in data.items():
            if self.is_sensitive_key(key):
                result[key] = self.MASK_VALUE
            elif isinstance(value, dict):
                result[key] = self.mask(value)
            elif isinstance(value, list):
                result[key] = self._mask_list(value)
            elif isinstance(value, str) and self._looks_like_url(value):
                result[key] = self.mask_url(value)
            else:
                result[key] = value

        return result

    def _mask_list(self, items: List[Any]) -> List[Any]:
        """Masque les éléments sensibles d'une liste."""
        result = []
        for item in items:
            if isinstance(item, dict):
                result.append(self.mask(item))
            elif isinstance(item, list):
                result.append(self._mask_list(item))
            elif isinstance(item, str) and self._looks_like_url(item):
                result.append(self.mask_url(item))
            else:
                result.append(item)
        return result

    @staticmethod
    def _looks_like_url(value: str) -> bool:
        return value.startswith("http://") or value.startswith("https://")

    def mask_url(self, url: str) -> str:
        """
        Masque les paramètres sensibles d'une URL.

        La query et le fragment sont traités comme des listes
        `clé=valeur`; les autres parties de l'URL sont conservées.

        Args:
            url: URL à masquer

        Returns:
            URL masquée (identique si rien de sensible)
        """
        parts = urlsplit(url)
        query = self._mask_params(parts.query)
        fragment = self._mask_params(parts.fragment)
        return urlunsplit((parts.scheme, parts.netloc, parts.path, query, fragment))

    def _mask_params(self, raw: str) -> str:
        if not raw or "=" not in raw:
            return raw

        pairs = parse_qsl(raw, keep_blank_values=True)
        if not any(self.is_sensitive_key(key) for key, _ in pairs):
            return raw

        masked = [
            (key, self.MASK_VALUE if self.is_sensitive_key(key) else value)
            for key, value in pairs
        ]
        return urlencode(masked, safe="*")

    def is_sensitive_key(self, key: str) -> bool:
        """
        Vérifie si clé contient un pattern sensible (case-insensitive).

        Args:
            key: Nom de la clé à vérifier

        Returns:
            True si clé contient pattern sensible
        """
        if not key:
            return False

        key_lower = key.lower()
        return any(pattern in key_lower for pattern in self._patterns)

    def add_pattern(self, pattern: str) -> None:
        """
        Ajoute pattern sensible personnalisé.

        Args:
            pattern: Pattern à ajouter (case-insensitive)

        Raises:
            ValueError: Si pattern vide
        """
        if not pattern or not pattern.strip():
            raise ValueError("Pattern cannot be empty")

        pattern_lower = pattern.lower().strip()
        if pattern_lower not in self._patterns:
            self._patterns.append(pattern_lower)

    def remove_pattern(self, pattern: str) -> bool:
        """
        Retire un pattern de la liste.

        Returns:
            True si pattern retiré, False si non trouvé
        """
        pattern_lower = pattern.lower().strip()
        if pattern_lower in self._patterns:
            self._patterns.remove(pattern_lower)
            return True
        return False
