from __future__ import annotations

import io
import random

import pytest

from sharpdown import config
from sharpdown import messages as m
from sharpdown.markdown import Markdown, TransformSession


@pytest.fixture(autouse=True)
def messageLog():
    # Every test gets its own message state, printed into a buffer.
    fh = io.StringIO()
    with m.withMessageState(fh, printMode="plain"):
        yield fh


@pytest.fixture
def converter():
    return Markdown(random=random.Random(0))


@pytest.fixture
def session():
    return TransformSession(options=config.Options(), random=random.Random(0))
