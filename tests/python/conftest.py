import os
import sys
from pathlib import Path

import pytest

os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")

ROOT = Path(__file__).resolve().parents[2]
src_root = ROOT / "src"
if str(src_root) not in sys.path:
    sys.path.insert(0, str(src_root))


@pytest.fixture
def factory():
    from menagerie.factory import AgentFactory

    return AgentFactory()


@pytest.fixture
def reference_agents(factory):
    return [
        factory.create("Flyer", "Air", (12.0, 12.0)),
        factory.create("Swimmer", "Water", (12.0, 8.0)),
        factory.create("Runner", "Ground", (8.0, 12.0)),
    ]
