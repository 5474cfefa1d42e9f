import logging

import pytest
from pydantic import ValidationError

from line_sequence.config import ReaderConfig, configure_logging


def test_reader_config_defaults(monkeypatch):
    monkeypatch.delenv("LS_BUFFER_SIZE", raising=False)
    monkeypatch.delenv("LS_LOGGING_CONFIG", raising=False)

    config = ReaderConfig()

    assert config.buffer_size == 8192
    assert config.logging_config is None


def test_reader_config_from_environment(monkeypatch):
    monkeypatch.setenv("LS_BUFFER_SIZE", "16")

    assert ReaderConfig().buffer_size == 16


@pytest.mark.parametrize("buffer_size", [0, -8])
def test_reader_config_rejects_invalid_buffer_size(buffer_size):
    with pytest.raises(ValidationError) as exc_info:
        ReaderConfig(buffer_size=buffer_size)

    assert "Buffer size must be strictly positive" in str(exc_info.value)


def test_configure_logging_from_file(tmp_path):
    logging_config = tmp_path / "logging.json"
    logging_config.write_text('''
    {
        "version": 1,
        "disable_existing_loggers": false,
        "loggers": {
            "line_sequence": {"level": "WARNING"}
        }
    }
    ''')

    configure_logging(ReaderConfig(logging_config=logging_config))

    assert logging.getLogger("line_sequence").level == logging.WARNING


def test_configure_logging_default(monkeypatch):
    monkeypatch.delenv("LS_LOGGING_CONFIG", raising=False)

    configure_logging()

    assert logging.getLogger("line_sequence").level == logging.INFO
