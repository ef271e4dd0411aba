import sys
from pathlib import Path
import importlib
import pytest

PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))


@pytest.fixture()
def m():
    """Lazily import the main module for tests to avoid module-level import."""
    return importlib.import_module("main")


@pytest.fixture()
def abracadabra():
    """The classic fixture: a:5, b:2, r:2, c:1, d:1."""
    return "abracadabra"


@pytest.fixture(params=[
    "abracadabra",
    "ab",
    "hello world",
    "The quick brown fox jumps over the lazy dog. " * 3,
    "мама мыла раму",
    "aaaaaaaaab",
])
def sample_text(request):
    """Assorted non-empty inputs for property checks."""
    return request.param


def is_prefix_free(codes):
    """Return ``True`` if no code in ``codes`` is a prefix of another."""
    values = sorted(codes.values())
    return all(
        not b.startswith(a) for a, b in zip(values, values[1:])
    )


@pytest.fixture()
def prefix_free_fn():
    """Fixture that provides the is_prefix_free helper."""
    return is_prefix_free
