from pathlib import Path
import sys

import pytest

# Add repository root to sys.path so tests can import local modules without installation.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from battle.utils.ids import reset_unit_ids


@pytest.fixture(autouse=True)
def fresh_unit_ids():
    """Readable, repeatable unit ids in every test."""
    reset_unit_ids(1)
    yield
