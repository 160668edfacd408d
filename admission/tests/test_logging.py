import pytest
import structlog

from admission.logging import add_component, configure_logging


@pytest.fixture(autouse=True)
def reset_structlog():
    yield
    structlog.reset_defaults()


def test_configure_logging():
    configure_logging("debug", json=False)
    assert structlog.is_configured()


def test_unknown_level():
    with pytest.raises(ValueError):
        configure_logging("loud")


def test_add_component():
    assert add_component(None, "info", {"logger": "admission.core.rules"})["component"] == "core"
    assert "component" not in add_component(None, "info", {"logger": "uvicorn"})
