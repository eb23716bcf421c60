import os
from pathlib import Path

VERSION_CHECK_PATH = Path(
    os.environ.get("VERSION_CHECK_HOME", Path.home() / ".version_check")
)
