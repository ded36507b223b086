"""Root conftest.py for test configuration.

Ensures local src/ directory takes priority over any installed packages.
"""

import os
import sys
from pathlib import Path

import pytest

# Insert local src directory at the beginning of sys.path
# This ensures that the local protocompat package is used, not any installed one
_src_dir = Path(__file__).parent.parent / "src"
if str(_src_dir) not in sys.path:
    sys.path.insert(0, str(_src_dir))

# Force reimport of protocompat modules if already imported
for module_name in list(sys.modules.keys()):
    if module_name.startswith("protocompat"):
        del sys.modules[module_name]


@pytest.fixture(autouse=True)
def _isolate_config_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep developer PROTOCOMPAT__* env vars out of tests."""
    for key in list(os.environ):
        if key.upper().startswith("PROTOCOMPAT__"):
            monkeypatch.delenv(key, raising=False)
