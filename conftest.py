import pytest

from scalar_aad.aad.core.tape import reset_node_ids, use_tape
from scalar_aad.config import EngineConfig, set_config


@pytest.fixture(autouse=True)
def fresh_tape():
    """Each test records on its own tape, with node ids from 0 and default config."""
    reset_node_ids()
    set_config(EngineConfig())
    with use_tape() as tape:
        yield tape
    set_config(EngineConfig())
