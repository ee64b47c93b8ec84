"""
Project root detection.

The project root is the nearest directory holding .widgetscope/; relative
library roots in .widgetscope/config.yaml are anchored there.
"""

from pathlib import Path
from typing import Optional

MARKER_DIR = ".widgetscope"


def find_project_root(start: Optional[Path] = None) -> Path:
    """
    Nearest directory at or above start that contains .widgetscope/.

    Without one, start itself (or the cwd) is returned and commands run on
    built-in defaults.
    """
    origin = (start or Path.cwd()).resolve()
    for candidate in (origin, *origin.parents):
        if (candidate / MARKER_DIR).is_dir():
            return candidate
    return origin
