"""
Logging - Structured Logger

Logger JSON structuré partagé par tous les composants du client
(navigateurs, événements, timers).

La configuration est globale au processus (`configure_logging`) sauf si
un logger reçoit sa propre `LogConfig`.
"""

from collections import deque
from datetime import datetime, timezone
from typing import Any, Deque, Dict, List, Optional

from .interfaces import (
    IStructuredLogger,
    ISensitiveMasker,
    LogConfig,
    LogEntry,
    LogLevel,
)
from .sensitive_masker import SensitiveMasker


class InvalidLogLevelError(Exception):
    """Niveau de log invalide."""

    def __init__(self, level: str) -> None:
        self.level = level
        super().__init__(f"Invalid log level: {level}")


_global_config = LogConfig()


def configure_logging(config: LogConfig) -> None:
    """
    Définit la configuration globale utilisée par les loggers sans
    configuration propre.

    Args:
        config: Nouvelle configuration
    """
    global _global_config
    _global_config = config


def get_logging_config() -> LogConfig:
    """Retourne la configuration globale courante."""
    return _global_config


def parse_log_level(value: str) -> LogLevel:
    """
    Convertit un nom de niveau ("debug", "WARN"...) en LogLevel.

    Raises:
        InvalidLogLevelError: Si niveau inconnu
    """
    try:
        return LogLevel(value.strip().upper())
    except (AttributeError, ValueError):
        raise InvalidLogLevelError(str(value))


class StructuredLogger(IStructuredLogger):
    """
    Logger JSON structuré.

    Example:
        logger = StructuredLogger("IFrameWindow")
        logger.debug("navigate", url="https://idp.example/authorize?state=xyz")
        # l'URL est enregistrée avec state=***MASKED***
    """

    def __init__(
        self,
        name: str,
        config: Optional[LogConfig] = None,
        masker: Optional[ISensitiveMasker] = None,
    ) -> None:
        """
        Args:
            name: Nom du logger (composant)
            config: Configuration propre (sinon configuration globale)
            masker: Masker pour données sensibles

        Raises:
            ValueError: Si name vide
        """
        if not name or not name.strip():
            raise ValueError("Logger name cannot be empty")

        self._name = name.strip()
        self._config = config
        self._masker = masker or SensitiveMasker()
        self._entries: Deque[LogEntry] = deque(maxlen=self.config.max_entries)

    @property
    def name(self) -> str:
        """Retourne le nom du logger."""
        return self._name

    @property
    def config(self) -> LogConfig:
        """Retourne la configuration effective."""
        return self._config or _global_config

    def log(self, level: LogLevel, message: str, **extra: Any) -> Optional[LogEntry]:
        """
        Crée un log structuré.

        Processus:
            1. Vérifie niveau >= min_level
            2. Masque données sensibles dans extra
            3. Crée LogEntry horodaté
            4. Output JSON via output_handler

        Args:
            level: Niveau de log
            message: Message à logger
            **extra: Données supplémentaires

        Returns:
            LogEntry créé ou None si filtré
        """
        if level == LogLevel.NONE:
            raise InvalidLogLevelError(level.value)

        config = self.config
        if not self._should_log(level, config):
            return None

        extra_data: Dict[str, Any] = {}
        if extra and config.include_extra:
            if config.mask_sensitive:
                extra_data = self._masker.mask(dict(extra))
            else:
                extra_data = dict(extra)

        entry = LogEntry(
            timestamp=self._generate_timestamp(),
            level=level,
            logger_name=self._name,
            message=message,
            extra=extra_data,
        )

        self._entries.append(entry)

        if config.output_handler:
            config.output_handler(entry.to_json())

        return entry

    def _generate_timestamp(self) -> str:
        """
        Génère timestamp ISO 8601 UTC avec millisecondes.

        Format: 2024-12-04T14:30:00.123Z
        """
        now = datetime.now(timezone.utc)
        return now.strftime("%Y-%m-%dT%H:%M:%S.") + f"{now.microsecond // 1000:03d}Z"

    @staticmethod
    def _should_log(level: LogLevel, config: LogConfig) -> bool:
        return LogLevel.get_priority(level) >= LogLevel.get_priority(config.min_level)

    def debug(self, message: str, **extra: Any) -> Optional[LogEntry]:
        """Log niveau DEBUG."""
        return self.log(LogLevel.DEBUG, message, **extra)

    def info(self, message: str, **extra: Any) -> Optional[LogEntry]:
        """Log niveau INFO."""
        return self.log(LogLevel.INFO, message, **extra)

    def warn(self, message: str, **extra: Any) -> Optional[LogEntry]:
        """Log niveau WARN."""
        return self.log(LogLevel.WARN, message, **extra)

    def error(self, message: str, **extra: Any) -> Optional[LogEntry]:
        """Log niveau ERROR."""
        return self.log(LogLevel.ERROR, message, **extra)

    def critical(self, message: str, **extra: Any) -> Optional[LogEntry]:
        """Log niveau CRITICAL."""
        return self.log(LogLevel.CRITICAL, message, **extra)

    def get_entries(self) -> List[LogEntry]:
        """
        Retourne les entrées de log capturées (bornées par max_entries).

        Returns:
            Liste des LogEntry
        """
        return list(self._entries)

    def clear_entries(self) -> None:
        """Efface les entrées capturées."""
        self._entries.clear()

    def get_entries_by_level(self, level: LogLevel) -> List[LogEntry]:
        """Filtre les entrées par niveau."""
        return [e for e in self._entries if e.level == level]

    def create(self, method: str) -> "ContextualLogger":
        """
        Crée un logger pour une méthode donnée.

        Les messages sont préfixés par `<method>:`.

        Args:
            method: Nom de la méthode appelante

        Returns:
            ContextualLogger lié à ce logger
        """
        return ContextualLogger(self, method)


class ContextualLogger:
    """
    Logger avec contexte pré-défini.

    Wrapper qui préfixe chaque message par la méthode appelante pour
    éviter de la répéter à chaque appel.
    """

    def __init__(self, logger: StructuredLogger, method: str) -> None:
        """
        Args:
            logger: Logger parent
            method: Méthode appelante
        """
        self._logger = logger
        self._method = method

    @property
    def method(self) -> str:
        """Retourne la méthode du contexte."""
        return self._method

    def log(self, level: LogLevel, message: str, **extra: Any) -> Optional[LogEntry]:
        """Log avec contexte."""
        return self._logger.log(level, f"{self._method}: {message}", **extra)

    def debug(self, message: str, **extra: Any) -> Optional[LogEntry]:
        """Log DEBUG."""
        return self.log(LogLevel.DEBUG, message, **extra)

    def info(self, message: str, **extra: Any) -> Optional[LogEntry]:
        """Log INFO."""
        return self.log(LogLevel.INFO, message, **extra)

    def warn(self, message: str, **extra: Any) -> Optional[LogEntry]:
        """Log WARN."""
        return self.log(LogLevel.WARN, message, **extra)

    def error(self, message: str, **extra: Any) -> Optional[LogEntry]:
        """Log ERROR."""
        return self.log(LogLevel.ERROR, message, **extra)


def get_logger(name: str) -> StructuredLogger:
    """
    Retourne un logger lié à la configuration globale.

    Args:
        name: Nom du composant

    Returns:
        StructuredLogger
    """
    return StructuredLogger(name)
