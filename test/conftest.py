"""
Test configuration for eslog tests
"""

import pytest
import sys
from pathlib import Path

import pykka

# Add the project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))


@pytest.fixture(autouse=True)
def stop_actors():
  """Make sure no worker outlives a test"""
  yield
  pykka.ActorRegistry.stop_all()


@pytest.fixture
def examples_dir():
  """Get the examples directory path"""
  return project_root / "examples"
