"""Global configuration for pytest"""

import numpy as np
import pytest


@pytest.fixture(autouse=True, scope="session")
def numerical_exceptions():
    """
    Ensure any numerical errors raise a warning in our test suite
    The point is that we enforce such cases to be handled explicitly in our code
    Preferably using local `with np.errstate(...)` constructs
    """
    np.seterr(all="raise")


@pytest.fixture(autouse=True)
def isolated_fonts(tmp_path_factory, monkeypatch):
    """Keep the font cache out of the user's data dir, and don't let the
    fonts that happen to be installed affect the tests.
    """
    data_dir = tmp_path_factory.mktemp("fontwrap-data")
    monkeypatch.setenv("FONTWRAP_DATA_DIR", str(data_dir))
    monkeypatch.setenv("FONTWRAP_DISABLE_SYSTEM_FONTS", "1")
    monkeypatch.delenv("FONTWRAP_FONT_DIRS", raising=False)


@pytest.fixture(autouse=True)
def reset_logger():
    """Undo the changes that debug=True makes to the fontwrap logger."""
    from fontwrap import utils

    handlers = list(utils.logger.handlers)
    yield
    for handler in utils.logger.handlers:
        if handler not in handlers:
            utils.logger.removeHandler(handler)
    utils._set_log_level()
