from __future__ import annotations

import os
import stat
import sys
from pathlib import Path

import pytest

FAKE_MVN = """#!{python}
import sys
print("[INFO] Scanning for projects...")
print("[ERROR] Failed to execute goal on project demo")
print("Tests run: 2, Failures: 1, Errors: 0, Skipped: 0")
print("args=" + " ".join(sys.argv[1:]))
sys.exit({code})
"""


@pytest.fixture
def fake_mvn(tmp_path):
    """Factory writing an executable stand-in for mvn that exits with the given code."""
    if os.name != "posix":
        pytest.skip("needs shebang executables")

    def make(code: int = 0, name: str = "mvn") -> Path:
        path = tmp_path / name
        path.write_text(FAKE_MVN.format(python=sys.executable, code=code), encoding="utf-8")
        path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        return path

    return make
