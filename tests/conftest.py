import sys

import pytest

# test_very_deep_tree nests ~1100 directories under tmp_path; pytest's
# recursive rmtree cleanup of its temp dirs needs headroom past the default.
sys.setrecursionlimit(max(sys.getrecursionlimit(), 10000))


@pytest.fixture(autouse=True)
def plain_environment(monkeypatch):
    """Keep rich from treating captured output as a colour terminal"""
    for name in ("FORCE_COLOR", "TTY_COMPATIBLE", "TTY_INTERACTIVE", "COLUMNS"):
        monkeypatch.delenv(name, raising=False)
