"""
NanoCamo - Configuration Management
=====================================
Gestione centralizzata configurazione con Pydantic Settings.
Supporta environment variables, file .env, override runtime.

Security Level: MEDIUM
Last Updated: 2026-10-19
Version: 1.0.0

Features:
- Validazione automatica tipi
- Environment variables con prefisso NANOCAMO_
- File .env support
- Nessun segreto in configurazione (il seed arriva sempre dal chiamante)
"""

from pathlib import Path
from typing import Optional, List
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from nano_camo.constants import (
    ALL_SUPPORTED_CAMO_VERSIONS,
    DEFAULT_NOTIFICATION_AMOUNT_RAW,
    HIGHEST_KNOWN_CAMO_PROTOCOL_VERSION,
    LOWEST_POSSIBLE_CAMO_VERSION,
    HIGHEST_POSSIBLE_CAMO_VERSION,
    MAX_ACCOUNT_INDEX,
)


# ============================================================================
# MAIN CONFIGURATION CLASS
# ============================================================================

class CamoSettings(BaseSettings):
    """
    Configurazione principale NanoCamo.

    Example:
        # Da environment
        export NANOCAMO_LOG_LEVEL=DEBUG
        export NANOCAMO_SUPPORTED_VERSIONS='[1]'

        # Da codice
        config = CamoSettings(log_level="DEBUG")
    """

    model_config = SettingsConfigDict(
        env_prefix='NANOCAMO_',
        env_file='.env',
        env_file_encoding='utf-8',
        case_sensitive=False,
        extra='ignore',
    )

    # ========================================================================
    # LOGGING
    # ========================================================================

    log_level: str = Field(
        default="WARNING",
        description="Livello log (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )

    log_format: str = Field(
        default="json",
        description="Formato log su file: json, text"
    )

    log_to_file: bool = Field(
        default=False,
        description="Scrivi log su file"
    )

    log_dir: Path = Field(
        default=Path("./logs"),
        description="Directory log files"
    )

    enable_console_log: bool = Field(
        default=True,
        description="Log anche su console"
    )

    # ========================================================================
    # CAMO PROTOCOL
    # ========================================================================

    supported_versions: List[int] = Field(
        default_factory=lambda: [int(v) for v in ALL_SUPPORTED_CAMO_VERSIONS],
        description="Versioni Camo supportate localmente (negoziazione)"
    )

    default_address_versions: List[int] = Field(
        default_factory=lambda: [HIGHEST_KNOWN_CAMO_PROTOCOL_VERSION],
        description="Versioni segnalate dai nuovi address derivati"
    )

    notification_amount_raw: int = Field(
        default=DEFAULT_NOTIFICATION_AMOUNT_RAW,
        ge=1,
        description="Importo (raw) suggerito per la notification transfer"
    )

    scan_max_index: int = Field(
        default=1000,
        ge=0,
        le=MAX_ACCOUNT_INDEX,
        description="Indice massimo per scansioni di indici"
    )

    # ========================================================================
    # VALIDATORS
    # ========================================================================

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Valida log level"""
        valid_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"Invalid log_level: {v}. Must be one of {valid_levels}")
        return v_upper

    @field_validator('log_format')
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        """Valida formato log"""
        valid_formats = ['json', 'text']
        v_lower = v.lower()
        if v_lower not in valid_formats:
            raise ValueError(f"Invalid log_format: {v}. Must be one of {valid_formats}")
        return v_lower

    @field_validator('supported_versions', 'default_address_versions')
    @classmethod
    def validate_versions(cls, v: List[int]) -> List[int]:
        """Valida numeri di versione (1-8)"""
        for version in v:
            if not (LOWEST_POSSIBLE_CAMO_VERSION <= version <= HIGHEST_POSSIBLE_CAMO_VERSION):
                raise ValueError(
                    f"Invalid camo version: {version}. Must be "
                    f"{LOWEST_POSSIBLE_CAMO_VERSION}-{HIGHEST_POSSIBLE_CAMO_VERSION}"
                )
        return sorted(set(v))

    # ========================================================================
    # HELPER METHODS
    # ========================================================================

    def local_versions(self):
        """VersionSet delle versioni supportate localmente"""
        from nano_camo.camo.version import CamoVersions
        return CamoVersions.from_versions(self.supported_versions)

    def address_versions(self):
        """VersionSet per i nuovi address"""
        from nano_camo.camo.version import CamoVersions
        return CamoVersions.from_versions(self.default_address_versions)

    def to_dict(self) -> dict:
        """Serializza config"""
        return self.model_dump()

    def to_json(self) -> str:
        """Serializza config in JSON"""
        return self.model_dump_json(indent=2)

    @classmethod
    def from_json(cls, json_str: str) -> "CamoSettings":
        """Carica config da JSON"""
        return cls.model_validate_json(json_str)

    def __repr__(self) -> str:
        return (
            f"CamoSettings("
            f"log_level={self.log_level}, "
            f"supported_versions={self.supported_versions}, "
            f"default_address_versions={self.default_address_versions})"
        )


# ============================================================================
# SINGLETON INSTANCE
# ============================================================================

_config_instance: Optional[CamoSettings] = None


@lru_cache(maxsize=1)
def get_settings() -> CamoSettings:
    """
    Ottieni singleton instance di CamoSettings.

    Returns:
        CamoSettings: Instance configurazione
    """
    global _config_instance

    if _config_instance is None:
        _config_instance = CamoSettings()

    return _config_instance


def reload_settings() -> CamoSettings:
    """
    Ricarica settings (invalida cache).

    Usare quando si cambiano environment variables runtime.
    """
    global _config_instance

    get_settings.cache_clear()
    _config_instance = None

    return get_settings()


def override_settings(**kwargs) -> CamoSettings:
    """
    Crea settings con valori custom (utile per testing).

    Example:
        >>> cfg = override_settings(supported_versions=[1, 2])
    """
    return CamoSettings(**kwargs)


# ============================================================================
# CONFIGURATION VALIDATION
# ============================================================================

def validate_config(config: CamoSettings) -> tuple[bool, list[str]]:
    """
    Valida coerenza della configurazione.

    Args:
        config: CamoSettings da validare

    Returns:
        tuple: (is_valid, errors_list)
    """
    errors = []

    if not config.supported_versions:
        errors.append("supported_versions is empty: no payment can be negotiated")

    implemented = {int(v) for v in ALL_SUPPORTED_CAMO_VERSIONS}
    if not implemented.intersection(config.default_address_versions):
        errors.append(
            "default_address_versions must include an implemented version "
            f"({sorted(implemented)})"
        )

    if config.log_to_file and config.log_dir.exists() and not config.log_dir.is_dir():
        errors.append(f"log_dir is not a directory: {config.log_dir}")

    return (len(errors) == 0, errors)


# ============================================================================
# EXPORT
# ============================================================================

__all__ = [
    "CamoSettings",
    "get_settings",
    "reload_settings",
    "override_settings",
    "validate_config",
]
