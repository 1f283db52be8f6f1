"""Global test configuration and fixtures."""
import os
import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).parent.parent
TESTS_ROOT = Path(__file__).parent

# Add source and test helpers to Python path for imports
sys.path.insert(0, str(PROJECT_ROOT / "src"))
sys.path.insert(0, str(TESTS_ROOT))

# Test environment configuration
os.environ.setdefault('NODE_ID', 'test-node-1')
os.environ.setdefault('METRICS_ENABLED', 'true')

from common.fakes import FakeDriveListerWatcher, make_device, make_drive  # noqa: E402


@pytest.fixture
def node_id():
    return "test-node-1"


@pytest.fixture
def drive():
    """A drive record describing the device returned by the device fixture."""
    return make_drive()


@pytest.fixture
def device():
    """A device whose fields all match the drive fixture."""
    return make_device()


@pytest.fixture
def lister_watcher():
    fake = FakeDriveListerWatcher()
    yield fake
    fake.stop()
