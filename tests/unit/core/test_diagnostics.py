import logging

from cidlog.core.config.settings import Settings
from cidlog.core.logging.logger import (
    DIAGNOSTICS_LOGGER_NAME,
    get_logger,
    setup_logging,
)
from cidlog.routing.channel import Level, SeverityChannel


class ExplodingSink:
    def write(self, data):
        raise OSError("pipe closed")


class TestDiagnostics:
    """Test the package diagnostics logger"""

    def test_loggers_live_under_package_logger(self):
        logger = get_logger("some.module")
        assert logger.name == f"{DIAGNOSTICS_LOGGER_NAME}.some.module"
        assert get_logger("cidlog.routing").name == "cidlog.routing"

    def test_setup_replaces_single_handler(self):
        setup_logging(Settings(DIAGNOSTICS_LEVEL="ERROR"))
        setup_logging(Settings(DIAGNOSTICS_LEVEL="ERROR"))
        stdlib_logger = logging.getLogger(DIAGNOSTICS_LOGGER_NAME)
        assert len(stdlib_logger.handlers) == 1
        assert stdlib_logger.level == logging.ERROR
        assert stdlib_logger.propagate is False
        setup_logging()

    def test_swallowed_write_is_reported_on_stderr(self, capsys):
        setup_logging(
            Settings(DIAGNOSTICS_LEVEL="DEBUG", DIAGNOSTICS_FORMAT="json", DEBUG=False)
        )
        try:
            SeverityChannel(Level.ERROR, ExplodingSink()).println(None, "lost")
            err = capsys.readouterr().err
            assert "Sink write failed" in err
            assert "pipe closed" in err
        finally:
            setup_logging()
