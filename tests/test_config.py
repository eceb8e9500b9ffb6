"""
Tests for configuration loading and logging setup.
"""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from sarvas_meg import AnalyticSolutionMEG
from sarvas_meg.config import (
    DEFAULT_CONFIG_PATH,
    get_config_path,
    get_default_config,
    load_config,
    load_config_safe,
    save_config,
)
from sarvas_meg.logging_config import PACKAGE_LOGGER, setup_logging


class TestConfigLoading:
    """Tests for YAML config loading with fallback to defaults."""

    def test_default_config_structure(self) -> None:
        cfg = get_default_config()

        assert cfg["solver"]["sphere_center_m"] == [0.0, 0.0, 0.0]
        assert cfg["solver"]["scaling_factor"] == 1.0
        assert cfg["logging"]["level"] == "INFO"

    def test_get_config_path_adds_extension(self) -> None:
        assert get_config_path("custom") == get_config_path("custom.yaml")
        assert get_config_path().name == "default_solver.yaml"
        assert get_config_path() == DEFAULT_CONFIG_PATH

    def test_load_default(self) -> None:
        """The shipped default file and the hardcoded defaults agree."""
        cfg = load_config()

        assert cfg["solver"]["scaling_factor"] == 1.0
        assert cfg["solver"]["sphere_center_m"] == [0.0, 0.0, 0.0]

    def test_missing_file_falls_back(self, tmp_path: Path) -> None:
        cfg, errors = load_config_safe(tmp_path / "missing.yaml")

        assert cfg == get_default_config()
        assert "not found" in errors[0]

    def test_missing_file_logs_warning(self, tmp_path: Path, caplog) -> None:
        with caplog.at_level(logging.WARNING, logger="sarvas_meg.config"):
            cfg = load_config(tmp_path / "missing.yaml")

        assert cfg == get_default_config()
        assert any("not found" in r.message for r in caplog.records)

    def test_malformed_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.yaml"
        path.write_text("invalid: yaml: content: [unclosed", encoding="utf-8")

        cfg, errors = load_config_safe(path)

        assert cfg == get_default_config()
        assert "YAML parse error" in errors[0]

    def test_empty_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "empty.yaml"
        path.write_text("", encoding="utf-8")

        cfg, errors = load_config_safe(path)

        assert cfg == get_default_config()
        assert "empty" in errors[0]

    def test_non_mapping_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "list.yaml"
        path.write_text("- 1\n- 2\n", encoding="utf-8")

        cfg, errors = load_config_safe(path)

        assert cfg == get_default_config()
        assert "mapping" in errors[0]

    def test_save_and_reload(self, tmp_path: Path) -> None:
        cfg = get_default_config()
        cfg["solver"]["sphere_center_m"] = [0.0, 0.0, 0.04]
        cfg["solver"]["scaling_factor"] = 1e-7
        path = tmp_path / "nested" / "solver.yaml"

        save_config(cfg, path)
        reloaded, errors = load_config_safe(path)

        assert errors == []
        assert reloaded == cfg

    def test_solver_from_loaded_config(self, tmp_path: Path) -> None:
        path = tmp_path / "solver.yaml"
        path.write_text(
            "solver:\n"
            "  sphere_center_m: [0.0, 0.0, 0.04]\n"
            "  scaling_factor: 1.0e-7\n",
            encoding="utf-8",
        )

        solver = AnalyticSolutionMEG.from_config(load_config(path))

        assert solver.sphere_center.tolist() == [0.0, 0.0, 0.04]
        assert solver.scaling_factor == 1e-7


class TestLoggingSetup:
    """Tests for the package logger configuration."""

    def test_setup_logging_installs_single_handler(self) -> None:
        setup_logging(logging.DEBUG)
        logger = setup_logging(logging.INFO)

        assert logger.name == PACKAGE_LOGGER
        assert logger.level == logging.INFO
        assert len(logger.handlers) == 1

    def test_setup_logging_accepts_level_names(self) -> None:
        logger = setup_logging("warning")
        assert logger.level == logging.WARNING

    def test_setup_logging_unknown_level(self) -> None:
        with pytest.raises(ValueError, match="verbose"):
            setup_logging("verbose")

    def test_setup_logging_file_handler(self, tmp_path: Path) -> None:
        log_file = tmp_path / "solver.log"
        logger = setup_logging(logging.DEBUG, log_file=str(log_file))

        logging.getLogger("sarvas_meg.physics.analytic_meg").debug("hello solver")
        for handler in logger.handlers:
            handler.flush()

        assert len(logger.handlers) == 2
        assert "hello solver" in log_file.read_text(encoding="utf-8")

        for handler in logger.handlers:
            handler.close()
        logger.handlers.clear()


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
