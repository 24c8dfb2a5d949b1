from __future__ import annotations

import logging

from mediaorganizer.utils import logging as organizer_logging


def test_get_logger_configures_once() -> None:
    first = organizer_logging.get_logger()
    second = organizer_logging.get_logger()

    assert first is second
    assert first.name == "mediaorganizer"
    assert len(first.handlers) == 1
    assert isinstance(first.handlers[0], logging.StreamHandler)


def test_module_exposes_only_the_factory() -> None:
    assert not hasattr(organizer_logging, "logger")
