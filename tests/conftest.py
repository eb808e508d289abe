"""Root test configuration - isolate tests from the caller's environment"""

import pytest

from mdplain.config import ENV_PREFIX, Settings


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Drop any MDPLAIN_<FIELD> variables so settings come from defaults or the test itself."""
    for name in Settings.model_fields:
        monkeypatch.delenv(f"{ENV_PREFIX}{name.upper()}", raising=False)
