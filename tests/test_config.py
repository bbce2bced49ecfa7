import logging

import pydantic
import pytest

from roster_core.config import DEFAULT_CONFIG, ensure_assets_exist, load_config, setup_logging


def test_defaults_without_file(tmp_path):
    config = load_config(str(tmp_path / "missing.yaml"))
    assert config.model_dump() == DEFAULT_CONFIG


def test_ensure_assets_writes_default_yaml(tmp_path):
    path = tmp_path / "conf" / "config.yaml"
    ensure_assets_exist(str(path))
    assert load_config(str(path)).model_dump() == DEFAULT_CONFIG
    path.write_text("bulk_endpoint: http://api.test/bulk\n", encoding="utf-8")
    ensure_assets_exist(str(path))
    assert load_config(str(path)).bulk_endpoint == "http://api.test/bulk"


def test_yaml_overrides(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("preview_rows: 50\nlog_level: debug\n", encoding="utf-8")
    config = load_config(str(path))
    assert config.preview_rows == 50
    assert config.log_level == "DEBUG"
    assert config.max_upload_bytes == DEFAULT_CONFIG["max_upload_bytes"]


@pytest.mark.parametrize("text", ["preview_rows: 0\n", "log_level: LOUD\n", "request_timeout: -1\n"])
def test_invalid_values_rejected(tmp_path, text):
    path = tmp_path / "config.yaml"
    path.write_text(text, encoding="utf-8")
    with pytest.raises(pydantic.ValidationError):
        load_config(str(path))


def test_non_mapping_rejected(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("- a\n- b\n", encoding="utf-8")
    with pytest.raises(ValueError):
        load_config(str(path))


def test_setup_logging_is_idempotent():
    logger = setup_logging("DEBUG")
    count = len(logger.handlers)
    assert setup_logging("WARNING") is logger
    assert len(logger.handlers) == count
    assert logger.level == logging.WARNING
