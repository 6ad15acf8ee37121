"""
app/config.py

Application-level configuration helpers.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

from db.config import env_bool, env_int, load_env_files

_DEFAULT_DIVISION_ROLES: tuple[str, ...] = ("MSD", "ESD", "LSD")


@lru_cache(maxsize=1)
def _load_env_once() -> None:
    """
    Ensure project `.env` files are loaded once before reading app settings.
    """

    load_env_files()


def _get_bool_env(name: str, default: bool) -> bool:
    """
    Read a boolean from environment variables with safe fallback.
    """

    _load_env_once()
    return env_bool(name, default)


def _get_int_env(name: str, default: int) -> int:
    """
    Read an integer from environment variables with safe fallback.
    """

    _load_env_once()
    return env_int(name, default)


def _get_str_env(name: str, default: str) -> str:
    """
    Read a string from environment variables with fallback.
    """

    _load_env_once()
    value = os.getenv(name)
    if value is None:
        return default
    stripped = value.strip()
    return stripped if stripped else default


def _get_optional_str_env(name: str) -> str | None:
    """
    Read an optional string value from environment variables.
    """

    _load_env_once()
    value = os.getenv(name)
    if value is None:
        return None
    stripped = value.strip()
    return stripped if stripped else None


def _get_blankable_str_env(name: str, default: str | None) -> str | None:
    """
    Like _get_str_env, but an explicitly empty value disables the setting.
    """

    _load_env_once()
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip() or None


def _get_csv_env(name: str, default: tuple[str, ...]) -> tuple[str, ...]:
    """
    Read a comma-separated list, upper-cased; empty items are dropped.
    """

    raw = _get_optional_str_env(name)
    if raw is None:
        return default
    items = tuple(part.strip().upper() for part in raw.split(",") if part.strip())
    return items or default


@dataclass(frozen=True)
class ReportSettings:
    """
    Title text, layout defaults and role policy for exported reports.
    """

    organization_name: str = "Civil Service Commission Regional Office VI"
    report_subtitle: str = "DIGITIZATION OF RECORDS"
    target_statement: str | None = "Target: 100% of Identified Records"
    timezone: str = "UTC"
    admin_role: str = "ADMIN"
    division_roles: tuple[str, ...] = _DEFAULT_DIVISION_ROLES
    include_index_column: bool = True
    include_role_column: bool = False
    output_dir: str | None = None


@dataclass(frozen=True)
class SignatorySettings:
    """
    Names and positions printed in the closing signature block.
    """

    preparer_name: str = "MARIA THERESA J. AGUIRRE"
    preparer_position: str = "Chief HRS, PALD"
    preparer_role: str = "Digitization Project Head"
    approver_name: str = "ATTY. ERNA T. ELIZAN"
    approver_position: str = "Director III"


@dataclass(frozen=True)
class RetentionSettings:
    """
    Age-based purge of old submitted records.
    """

    enabled: bool = False
    retention_days: int = 365
    run_hour_utc: int = 1


@lru_cache(maxsize=1)
def get_report_settings() -> ReportSettings:
    """
    Return cached report settings from environment variables.
    """

    return ReportSettings(
        organization_name=_get_str_env(
            "REPORT_ORGANIZATION_NAME", "Civil Service Commission Regional Office VI"
        ),
        report_subtitle=_get_str_env("REPORT_SUBTITLE", "DIGITIZATION OF RECORDS"),
        target_statement=_get_blankable_str_env(
            "REPORT_TARGET_STATEMENT", "Target: 100% of Identified Records"
        ),
        timezone=_get_str_env("REPORT_TIMEZONE", "UTC"),
        admin_role=_get_str_env("REPORT_ADMIN_ROLE", "ADMIN").upper(),
        division_roles=_get_csv_env("REPORT_DIVISION_ROLES", _DEFAULT_DIVISION_ROLES),
        include_index_column=_get_bool_env("REPORT_INCLUDE_INDEX_COLUMN", True),
        include_role_column=_get_bool_env("REPORT_INCLUDE_ROLE_COLUMN", False),
        output_dir=_get_optional_str_env("REPORT_OUTPUT_DIR"),
    )


@lru_cache(maxsize=1)
def get_signatory_settings() -> SignatorySettings:
    """
    Return cached signature block settings from environment variables.
    """

    defaults = SignatorySettings()
    return SignatorySettings(
        preparer_name=_get_str_env("REPORT_PREPARER_NAME", defaults.preparer_name),
        preparer_position=_get_str_env("REPORT_PREPARER_POSITION", defaults.preparer_position),
        preparer_role=_get_str_env("REPORT_PREPARER_ROLE", defaults.preparer_role),
        approver_name=_get_str_env("REPORT_APPROVER_NAME", defaults.approver_name),
        approver_position=_get_str_env("REPORT_APPROVER_POSITION", defaults.approver_position),
    )


@lru_cache(maxsize=1)
def get_retention_settings() -> RetentionSettings:
    """
    Return cached retention purge settings from environment variables.
    """

    return RetentionSettings(
        enabled=_get_bool_env("RETENTION_PURGE_ENABLED", False),
        retention_days=max(1, _get_int_env("RETENTION_DAYS", 365)),
        run_hour_utc=min(23, max(0, _get_int_env("RETENTION_PURGE_HOUR_UTC", 1))),
    )
