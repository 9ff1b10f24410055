import sys
import time
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

# RFC 6238 Appendix B seed "12345678901234567890" in Base32
RFC_SECRET = "GEZDGNBVGY3TQOJQGEZDGNBVGY3TQOJQ"


@pytest.fixture
def rfc_secret():
    return RFC_SECRET


@pytest.fixture
def freeze_time(monkeypatch):
    """Pin time.time() to a given epoch second for the rest of the test."""

    def _freeze(epoch):
        monkeypatch.setattr(time, "time", lambda: float(epoch))
        return epoch

    return _freeze
