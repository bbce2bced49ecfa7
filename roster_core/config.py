# roster_core/config.py
from __future__ import annotations
import logging
import os
import sys
import textwrap
from typing import Optional

import yaml

from .models import AppConfig

# ===== App defaults =====
DEFAULT_CONFIG = {
    "data_dir": "data",
    "bulk_endpoint": "",             # empty: remote registration not configured
    "request_timeout": 5.0,
    "max_upload_bytes": 2 * 1024 * 1024,
    "preview_rows": 500,
    "warning_preview": 10,
    "log_level": "INFO",
    "default_badge_preset": "id1",
}

CONFIG_PATH = "config.yaml"

DEFAULT_CONFIG_YAML = textwrap.dedent("""\
# Event roster console settings.
data_dir: data
# Bulk registration endpoint, e.g. http://localhost:3000/api/participants/bulk
bulk_endpoint: ""
request_timeout: 5.0
max_upload_bytes: 2097152
preview_rows: 500
warning_preview: 10
log_level: INFO
default_badge_preset: id1
""")

LOG_FORMAT = "%(asctime)s | %(levelname)-7s | %(name)s | %(message)s"


def ensure_assets_exist(path: str = CONFIG_PATH):
    folder = os.path.dirname(path)
    if folder:
        os.makedirs(folder, exist_ok=True)
    if not os.path.exists(path):
        with open(path, "w", encoding="utf-8") as f:
            f.write(DEFAULT_CONFIG_YAML)


def load_config(path: Optional[str] = CONFIG_PATH) -> AppConfig:
    """Defaults overlaid with the YAML file at `path` (if it exists)."""
    values = dict(DEFAULT_CONFIG)
    if path and os.path.exists(path):
        with open(path, "r", encoding="utf-8") as f:
            obj = yaml.safe_load(f) or {}
        if not isinstance(obj, dict):
            raise ValueError(f"{path} must contain a mapping of settings.")
        values.update(obj)
    return AppConfig(**values)


def setup_logging(level: str = "INFO") -> logging.Logger:
    logger = logging.getLogger("roster_core")
    logger.setLevel(level)
    if logger.handlers:
        return logger
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    logger.addHandler(handler)
    return logger


# ===== Console theme (wrapped in <style>) =====
def ui_css() -> str:
    return """
<style>
:root{
  --line:#e5e7eb;
  --sub:#6b7280;
  --radius:14px;
}
.block-container { padding-top: 1rem; max-width: 1200px; }
.card{
  border:1px solid var(--line);
  border-radius:var(--radius);
  background:#fff;
}
.section{padding:16px}
.small{color:var(--sub);font-size:12px}
.stat{font-size:26px;font-weight:600}
.caption { color: var(--sub); font-size: 12px; margin-top: 6px }
</style>
"""
