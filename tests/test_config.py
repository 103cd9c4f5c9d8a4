import logging

from rich.logging import RichHandler

from pickaxe.config import Settings
from pickaxe.logs import setup_logging


def test_defaults():
    settings = Settings.from_env({})
    assert settings.log_level == logging.INFO
    assert settings.log_file is None


def test_from_env(tmp_path):
    settings = Settings.from_env({"PICKAXE_LOG_LEVEL": "debug", "PICKAXE_LOG_FILE": str(tmp_path / "p.log")})
    assert settings.log_level == logging.DEBUG
    assert settings.log_file == tmp_path / "p.log"


def test_unknown_level_falls_back_to_info():
    assert Settings.from_env({"PICKAXE_LOG_LEVEL": "chatty"}).log_level == logging.INFO


def test_setup_logging_installs_handlers(tmp_path):
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    try:
        setup_logging(Settings(log_level=logging.WARNING, log_file=tmp_path / "p.log"))
        kinds = [type(h) for h in root.handlers]
        assert RichHandler in kinds
        assert logging.FileHandler in kinds
        assert root.level == logging.WARNING

        logging.getLogger("pickaxe.test").warning("written")
        for h in root.handlers:
            h.flush()
        assert "written" in (tmp_path / "p.log").read_text(encoding="utf-8")
    finally:
        for h in root.handlers:
            if h not in saved_handlers:
                h.close()
        root.handlers[:] = saved_handlers
        root.setLevel(saved_level)
