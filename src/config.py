import os
import logging
from pathlib import Path

import yaml
from dotenv import load_dotenv

log = logging.getLogger("applife.config")

# Project root is one level up from src/
PROJECT_ROOT = Path(__file__).resolve().parent.parent
CONFIG_DIR = PROJECT_ROOT / "config"

DEFAULT_BUDGET_S = 30.0
DEFAULT_UPLOAD_S = 2.0


def load_config(config_path: str = None) -> dict:
    """Load configuration from YAML file with .env overrides."""
    load_dotenv(PROJECT_ROOT / ".env")

    yaml_path = Path(config_path) if config_path else CONFIG_DIR / "default_lifecycle.yaml"
    if not yaml_path.exists():
        log.warning("Config file not found: %s, using defaults", yaml_path)
        config = {}
    else:
        with open(yaml_path) as f:
            config = yaml.safe_load(f) or {}

    # Environment variable overrides
    bg = config.setdefault("background", {})
    bg["budget_seconds"] = float(os.environ.get(
        "APPLIFE_BACKGROUND_BUDGET", bg.get("budget_seconds", DEFAULT_BUDGET_S)))

    demo = config.setdefault("demo", {})
    demo["upload_seconds"] = float(os.environ.get(
        "APPLIFE_UPLOAD_SECONDS", demo.get("upload_seconds", DEFAULT_UPLOAD_S)))
    demo["expiry_budget_seconds"] = float(demo.get("expiry_budget_seconds", 1.0))

    logging_cfg = config.setdefault("logging", {})
    logging_cfg["level"] = os.environ.get("LOG_LEVEL", logging_cfg.get("level", "INFO"))

    if bg["budget_seconds"] <= 0:
        raise ValueError(f"background.budget_seconds must be positive: {bg['budget_seconds']}")

    log.info(
        "Config loaded: background budget %.1fs, demo upload %.1fs",
        bg["budget_seconds"],
        demo["upload_seconds"],
    )
    return config
