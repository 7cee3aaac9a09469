import json
import logging
import sys

from pixcard.config import LoggingConfig
from pixcard.logging_conf import JsonFormatter, configure_logging


def _root_stream_formatters() -> list[logging.Formatter]:
    return [h.formatter for h in logging.getLogger().handlers if type(h) is logging.StreamHandler]


def test_json_formatter_merges_extra_fields():
    record = logging.makeLogRecord({"name": "pixcard.charges", "levelname": "INFO", "msg": "pix payload generated", "crc": "1D3D"})
    payload = json.loads(JsonFormatter().format(record))
    assert payload == {"level": "INFO", "logger": "pixcard.charges", "message": "pix payload generated", "crc": "1D3D"}


def test_json_formatter_includes_exception():
    try:
        raise RuntimeError("boom")
    except RuntimeError:
        record = logging.getLogger("pixcard.test").makeRecord(
            "pixcard.test", logging.ERROR, __file__, 1, "failed", (), exc_info=sys.exc_info()
        )
    payload = json.loads(JsonFormatter().format(record))
    assert "RuntimeError: boom" in payload["exc_info"]


def test_configure_logging_installs_plain_formatter(settings):
    config = settings.model_copy(update={"logging": LoggingConfig(level="DEBUG", json_logs=False)})
    configure_logging(config)
    assert logging.getLogger().level == logging.DEBUG
    formatters = _root_stream_formatters()
    assert formatters and not any(isinstance(f, JsonFormatter) for f in formatters)


def test_configure_logging_installs_json_formatter(settings):
    configure_logging(settings)
    assert any(isinstance(f, JsonFormatter) for f in _root_stream_formatters())
