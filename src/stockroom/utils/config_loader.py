# src/stockroom/utils/config_loader.py

"""
Centralized configuration loader for the Stock Room planner.

Responsibilities:
- Load YAML configuration
- Validate mandatory sections
- Validate planning thresholds and action-item triggers
- Validate the advice (LLM) section
- Provide a single config dictionary

Design Principles:
------------------
- Fail-fast validation
- No unknown top-level sections
- No silent defaults
"""

from pathlib import Path
from typing import Dict, Any
import logging

import yaml


logger = logging.getLogger(__name__)


class ConfigError(Exception):
    """Raised when configuration validation fails."""
    pass


REQUIRED_SECTIONS = {
    "project",
    "paths",
    "logging",
    "ingestion",
    "planning",
    "actions",
    "llm",
    "visualization",
    "execution",
}

PLANNING_KEYS = {
    "vat_divisor",
    "weeks_per_month",
    "forecast_weeks",
    "cover_display_cap_weeks",
    "overstock_factor",
    "understock_factor",
}

ACTION_KEYS = {
    "clearance_min_stock",
    "clearance_max_sales",
    "restock_max_stock",
    "restock_min_sales",
    "margin_review_max_margin_pct",
    "margin_review_min_sales",
}


def load_config(config_path: str) -> Dict[str, Any]:
    path = Path(config_path)

    if not path.exists():
        raise ConfigError(
            f"Configuration file not found at path: {path.resolve()}"
        )

    if not path.is_file():
        raise ConfigError(
            f"Configuration path is not a file: {path.resolve()}"
        )

    if path.suffix not in {".yaml", ".yml"}:
        raise ConfigError(
            f"Invalid config file format: {path.name}. Expected a YAML file."
        )

    try:
        with path.open("r", encoding="utf-8") as f:
            config = yaml.safe_load(f)
    except OSError as exc:
        raise ConfigError(
            f"Failed to read configuration file: {path.resolve()} ({exc})"
        ) from exc
    except yaml.YAMLError as exc:
        raise ConfigError(
            f"Failed to parse YAML configuration: {exc}"
        ) from exc

    if config is None:
        raise ConfigError(
            "Configuration file is empty or contains no valid YAML content."
        )

    if not isinstance(config, dict):
        raise ConfigError(
            "Top-level configuration must be a dictionary."
        )

    validate_config(config)

    logger.info("Configuration loaded and validated successfully.")

    return dict(config)


def validate_config(config: Dict[str, Any]) -> None:
    missing = REQUIRED_SECTIONS - config.keys()
    if missing:
        raise ConfigError(
            f"Missing required config sections: {sorted(missing)}"
        )

    extra_sections = set(config.keys()) - REQUIRED_SECTIONS
    if extra_sections:
        raise ConfigError(
            f"Unknown top-level config sections detected: {sorted(extra_sections)}"
        )

    for section in REQUIRED_SECTIONS:
        if not isinstance(config.get(section), dict):
            raise ConfigError(
                f"Config section '{section}' must be a dictionary."
            )

    _validate_paths(config)
    _validate_logging(config)
    _validate_ingestion(config)
    _validate_planning(config)
    _validate_actions(config)
    _validate_llm_section(config)
    _validate_execution(config)

    if not isinstance(config["visualization"].get("enabled"), bool):
        raise ConfigError("visualization.enabled must be boolean.")


def _validate_paths(config: Dict[str, Any]) -> None:
    paths_cfg = config["paths"]

    if not isinstance(paths_cfg.get("logs"), str):
        raise ConfigError("paths.logs must be a string.")

    data_cfg = paths_cfg.get("data")
    if not isinstance(data_cfg, dict) or not isinstance(data_cfg.get("raw"), str):
        raise ConfigError("paths.data.raw must be a string.")

    output_cfg = paths_cfg.get("output")
    if not isinstance(output_cfg, dict):
        raise ConfigError("paths.output must be a dictionary.")

    for key in ("reports", "plots", "advice"):
        if not isinstance(output_cfg.get(key), str):
            raise ConfigError(f"paths.output.{key} must be a string.")


def _validate_logging(config: Dict[str, Any]) -> None:
    logging_cfg = config["logging"]

    required = {"level", "log_to_file", "filename"}
    missing = required - logging_cfg.keys()
    if missing:
        raise ConfigError(
            f"Missing required logging config keys: {sorted(missing)}"
        )

    if not isinstance(logging_cfg["log_to_file"], bool):
        raise ConfigError("logging.log_to_file must be boolean.")


def _validate_ingestion(config: Dict[str, Any]) -> None:
    ingestion_cfg = config["ingestion"]

    inventory_file = ingestion_cfg.get("inventory_file")
    if not isinstance(inventory_file, str) or not inventory_file:
        raise ConfigError("ingestion.inventory_file must be a non-empty string.")

    if not isinstance(ingestion_cfg.get("encoding"), str):
        raise ConfigError("ingestion.encoding must be a string.")

    if not isinstance(ingestion_cfg.get("use_sample_when_missing"), bool):
        raise ConfigError("ingestion.use_sample_when_missing must be boolean.")


def _validate_planning(config: Dict[str, Any]) -> None:
    planning_cfg = config["planning"]

    missing = PLANNING_KEYS - planning_cfg.keys()
    if missing:
        raise ConfigError(
            f"Missing required planning config keys: {sorted(missing)}"
        )

    for key in sorted(PLANNING_KEYS):
        value = planning_cfg[key]
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ConfigError(f"planning.{key} must be numeric.")
        if value <= 0:
            raise ConfigError(f"planning.{key} must be positive.")

    if planning_cfg["understock_factor"] >= planning_cfg["overstock_factor"]:
        raise ConfigError(
            "planning.understock_factor must be less than planning.overstock_factor."
        )


def _validate_actions(config: Dict[str, Any]) -> None:
    actions_cfg = config["actions"]

    missing = ACTION_KEYS - actions_cfg.keys()
    if missing:
        raise ConfigError(
            f"Missing required actions config keys: {sorted(missing)}"
        )

    for key in sorted(ACTION_KEYS):
        value = actions_cfg[key]
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ConfigError(f"actions.{key} must be numeric.")
        if value < 0:
            raise ConfigError(f"actions.{key} cannot be negative.")


def _validate_execution(config: Dict[str, Any]) -> None:
    execution_cfg = config["execution"]

    mode = execution_cfg.get("mode")
    allowed_modes = {"dev", "prod"}

    if not isinstance(mode, str):
        raise ConfigError("Execution mode must be a string.")

    if mode not in allowed_modes:
        raise ConfigError(
            f"Invalid execution mode '{mode}'. "
            f"Allowed values are: {sorted(allowed_modes)}"
        )

    if not isinstance(execution_cfg.get("save_outputs"), bool):
        raise ConfigError("execution.save_outputs must be boolean.")


def _validate_llm_section(config: Dict[str, Any]) -> None:
    llm_cfg = config["llm"]

    if not isinstance(llm_cfg.get("enabled"), bool):
        raise ConfigError("llm.enabled must be boolean.")

    for key in ("endpoint", "model", "api_key_env"):
        if not isinstance(llm_cfg.get(key), str) or not llm_cfg[key]:
            raise ConfigError(f"llm.{key} must be a non-empty string.")

    timeout = llm_cfg.get("timeout_seconds")
    if isinstance(timeout, bool) or not isinstance(timeout, (int, float)) or timeout <= 0:
        raise ConfigError("llm.timeout_seconds must be a positive number.")

    max_items = llm_cfg.get("max_context_items")
    if isinstance(max_items, bool) or not isinstance(max_items, int) or max_items <= 0:
        raise ConfigError("llm.max_context_items must be positive integer.")

    if "temperature" in llm_cfg and not isinstance(
        llm_cfg["temperature"], (int, float)
    ):
        raise ConfigError("llm.temperature must be numeric.")

    if llm_cfg.get("system_prompt") is not None and not isinstance(
        llm_cfg["system_prompt"], str
    ):
        raise ConfigError("llm.system_prompt must be a string when set.")
