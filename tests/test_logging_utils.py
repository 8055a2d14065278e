import pytest

from utils.logging_utils import LOG_FORMATS, setup_logging


def test_known_formats():
    assert LOG_FORMATS == ("console", "json")


def test_unknown_format_raises():
    with pytest.raises(ValueError):
        setup_logging(fmt="xml")
