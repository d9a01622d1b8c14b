from typing import Iterator

import pytest

from unitharness.registry import clear_registry


@pytest.fixture(autouse=True)
def fresh_registry() -> Iterator[None]:
    """Give every test an empty, unsealed process registry."""

    clear_registry()
    yield
    clear_registry()
