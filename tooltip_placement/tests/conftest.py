import logging
import os

import pytest


def pytest_runtest_setup(item):
    if item.get_closest_marker("pyqt_required"):
        if not os.getenv("PYQT_TESTS"):
            pytest.skip("PYQT_TESTS not set; skipping PyQt-dependent test")


@pytest.fixture(autouse=True)
def _reset_package_logger():
    yield
    logger = logging.getLogger("TooltipPlacement")
    for handler in list(logger.handlers):
        if getattr(handler, "_tooltip_placement", False):
            logger.removeHandler(handler)
            handler.close()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
