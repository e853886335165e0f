import importlib
import logging

from flightnet import config


def test_settings_read_from_environment(monkeypatch):
    monkeypatch.setenv("FLIGHTNET_LOG_LEVEL", "debug")
    monkeypatch.setenv("FLIGHTNET_SAMPLE_SEED", "7")
    monkeypatch.setenv("FLIGHTNET_SIMULATE_BOOKINGS", "False")
    monkeypatch.setenv("FLIGHTNET_RESERVATION_START", "5000")
    try:
        reloaded = importlib.reload(config)

        assert reloaded.LOG_LEVEL == "DEBUG"
        assert reloaded.SAMPLE_SEED == 7
        assert reloaded.SIMULATE_BOOKINGS is False
        assert reloaded.RESERVATION_START == 5000
    finally:
        monkeypatch.undo()
        importlib.reload(config)


def test_configure_logging_sets_root_level(monkeypatch):
    root = logging.getLogger()
    monkeypatch.setattr(root, "handlers", [])
    monkeypatch.setattr(root, "level", logging.WARNING)

    config.configure_logging("info")

    assert root.level == logging.INFO
    assert root.handlers
