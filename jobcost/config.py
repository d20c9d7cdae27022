"""
Configuration loader for the Job Cost Ledger.

Loads settings from jobcost_config.yaml and provides typed access
to all configuration sections.
"""
import os
from pathlib import Path
from typing import Any, Optional
from functools import lru_cache

import yaml


# Default config ships inside the package
DEFAULT_CONFIG_PATH = Path(__file__).parent / "jobcost_config.yaml"

DEFAULT_DATABASE_URL = "sqlite:///./jobcost.db"


class ConfigurationError(Exception):
    """Raised when configuration loading or validation fails."""
    pass


class JobCostConfig:
    """
    Configuration manager for the Job Cost Ledger.

    Loads YAML configuration and provides typed access to all sections.
    Use get_config() to obtain the singleton instance.
    """

    def __init__(self, config_path: Optional[Path] = None):
        self._config_path = config_path or DEFAULT_CONFIG_PATH
        self._config: dict = {}
        self._load()

    def _load(self) -> None:
        """Load configuration from YAML file."""
        if not self._config_path.exists():
            raise ConfigurationError(f"Config file not found: {self._config_path}")

        try:
            with open(self._config_path, 'r') as f:
                self._config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in config file: {e}")

        if not isinstance(self._config, dict):
            raise ConfigurationError("Config file must contain a YAML mapping")

        rate_source = self.labor_rate_source
        if rate_source not in ("current", "snapshot"):
            raise ConfigurationError(
                f"labor_costing.rate_source must be 'current' or 'snapshot', got '{rate_source}'"
            )

    @property
    def version(self) -> str:
        """Configuration file version."""
        return self._config.get("version", "unknown")

    # =========================================================================
    # Categories
    # =========================================================================

    @property
    def categories(self) -> dict:
        """Category normalization section."""
        return self._config.get("categories", {})

    @property
    def fallback_category(self) -> str:
        """Bucket for unrecognized or missing categories."""
        return self.categories.get("fallback", "other")

    @property
    def category_aliases(self) -> dict[str, str]:
        """
        Flattened alias lookup.

        Returns:
            Dict mapping lowercase alias -> canonical category
        """
        lookup = {}
        for canonical, aliases in self.categories.get("aliases", {}).items():
            lookup[canonical.lower()] = canonical
            for alias in aliases or []:
                lookup[str(alias).strip().lower()] = canonical
        return lookup

    @property
    def source_defaults(self) -> dict[str, str]:
        """Default category per cost source when a row carries none."""
        return self.categories.get("source_defaults", {
            "labor": "labor",
            "sub": "subs",
            "material": "materials",
            "misc": "other",
        })

    def get_unassigned_label(self, category: str) -> tuple[str, str]:
        """
        Get (code, description) shown for the unassigned bucket of a category.

        Args:
            category: Canonical category name
        """
        labels = self.categories.get("unassigned", {}).get(category)
        if not labels:
            return category.upper(), f"Unassigned {category.capitalize()}"
        return labels.get("code", category.upper()), labels.get("description", "")

    # =========================================================================
    # Labor costing / payments
    # =========================================================================

    @property
    def labor_rate_source(self) -> str:
        """'current' (rate at aggregation time) or 'snapshot'."""
        return self._config.get("labor_costing", {}).get("rate_source", "current")

    @property
    def paid_statuses(self) -> list[str]:
        """Payment status strings that count as paid."""
        statuses = self._config.get("payments", {}).get("paid_statuses", ["paid"])
        return [s.lower() for s in statuses]

    @property
    def excluded_invoice_statuses(self) -> list[str]:
        """Sub invoice payment statuses left out of actuals."""
        statuses = self._config.get("payments", {}).get("excluded_invoice_statuses", ["rejected"])
        return [s.lower() for s in statuses]

    # =========================================================================
    # Weekly Report
    # =========================================================================

    @property
    def weekly_report(self) -> dict:
        """Weekly company report configuration."""
        return self._config.get("weekly_report", {})

    @property
    def week_start(self) -> str:
        """First day of the reporting week ('sunday' or 'monday')."""
        return self.weekly_report.get("week_start", "sunday")

    @property
    def report_line_width(self) -> int:
        return self.weekly_report.get("line_width", 80)

    # =========================================================================
    # Cost Codes
    # =========================================================================

    @property
    def cost_codes(self) -> dict:
        """Cost code generation configuration."""
        return self._config.get("cost_codes", {})

    @property
    def cost_code_suffixes(self) -> dict[str, str]:
        return self.cost_codes.get("suffixes", {
            "labor": "-L",
            "subs": "-S",
            "materials": "-M",
            "equipment": "-M",
            "other": "",
        })

    @property
    def cost_code_prefix_length(self) -> int:
        return self.cost_codes.get("prefix_length", 3)

    @property
    def custom_cost_code_prefix(self) -> str:
        return self.cost_codes.get("custom_prefix", "CUSTOM")

    @property
    def misc_cost_codes(self) -> list[dict]:
        """Trade-less codes every company should have."""
        return self.cost_codes.get("misc_codes", [])

    @property
    def standard_trades(self) -> list[dict]:
        """Standard remodeling trades as {key, name} dicts."""
        return self.cost_codes.get("standard_trades", [])

    # =========================================================================
    # UI Configuration
    # =========================================================================

    @property
    def currency_config(self) -> dict:
        """Currency formatting configuration."""
        return self._config.get("ui", {}).get("currency", {
            "symbol": "$",
            "decimal_places": 2,
            "thousands_separator": ","
        })

    # =========================================================================
    # Database
    # =========================================================================

    @property
    def database_url(self) -> str:
        """Database URL, overridable with JOBCOST_DATABASE_URL."""
        return os.environ.get(
            "JOBCOST_DATABASE_URL",
            self._config.get("database_url", DEFAULT_DATABASE_URL),
        )

    # =========================================================================
    # Raw Access
    # =========================================================================

    def get(self, key: str, default: Any = None) -> Any:
        """Get a top-level config value by key."""
        return self._config.get(key, default)

    def __getitem__(self, key: str) -> Any:
        """Dictionary-style access to config."""
        return self._config[key]

    def __contains__(self, key: str) -> bool:
        """Check if key exists in config."""
        return key in self._config


@lru_cache(maxsize=1)
def get_config(config_path: Optional[str] = None) -> JobCostConfig:
    """
    Get the singleton configuration instance.

    Args:
        config_path: Optional path to config file. Only used on first call.

    Returns:
        JobCostConfig singleton instance
    """
    path = Path(config_path) if config_path else None
    return JobCostConfig(path)


def reload_config() -> JobCostConfig:
    """Reload configuration from disk and return new instance."""
    get_config.cache_clear()
    return get_config()
