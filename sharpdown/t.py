# pylint: skip-file
# Typing names, imported everywhere as `from . import t`.
from __future__ import annotations

# Only these exist at runtime; everything else is for the type checker.
from typing import TYPE_CHECKING, cast

if TYPE_CHECKING:
    from typing import (
        Any,
        Callable,
        Generator,
        Iterable,
        Mapping,
        TextIO,
        TypeAlias,
    )

    from lxml import etree
    from typing_extensions import Self

    ElementT: TypeAlias = etree._Element

    # Called with the freshly rendered document.
    ContentListenerT: TypeAlias = Callable[[str], None]
