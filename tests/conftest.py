import os
import sys

import pytest

# ensure workspace root is on sys.path so our application packages can be imported
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from api.routes import common


@pytest.fixture(autouse=True)
def clear_providers():
    """Drop cached per-tenant providers so tests never share connectors."""
    common._providers.clear()
    yield
    common._providers.clear()
