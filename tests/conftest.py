import os
import tempfile

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
os.environ.setdefault("POPUP_LOG_DIR", tempfile.mkdtemp(prefix="popup-logs-"))

import pytest

from shared.window_definition import ConfigFragment


@pytest.fixture
def empty_fragment() -> ConfigFragment:
    return ConfigFragment()
