import logging

import pytest

from infra.logger import LEVEL_ENV_VAR, configure_logging, get_logger


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


def test_level_falls_back_to_environment(monkeypatch, restore_root_logger):
    monkeypatch.setenv(LEVEL_ENV_VAR, "warning")
    configure_logging()
    assert restore_root_logger.level == logging.WARNING


def test_logfile_receives_records(tmp_path, restore_root_logger):
    path = tmp_path / "logs" / "battle.log"
    configure_logging("DEBUG", logfile=path)
    get_logger("battle.test").debug("turret traversing")
    for handler in restore_root_logger.handlers:
        handler.flush()
    assert "turret traversing" in path.read_text(encoding="utf-8")
