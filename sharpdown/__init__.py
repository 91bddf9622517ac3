# pylint: disable=wrong-import-position

from __future__ import annotations

import platform
import sys


def verify_python_version() -> None:
    if sys.version_info < (3, 11):
        print(
            """Sharpdown requires Python 3.11 or higher; you are on {}.""".format(
                platform.python_version(),
            ),
        )
        sys.exit(1)


verify_python_version()

from . import config
from .cli import main
from .config import Options
from .document import Renderer, composeDocument
from .markdown import Markdown, transform
