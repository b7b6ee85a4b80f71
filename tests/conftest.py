"""Shared test fixtures for daybook."""

import os
import tempfile

import pytest
from loguru import logger

from daybook.core.storage import MemoryStorage
from daybook.journal.store import EntryStore


@pytest.fixture
def tmp_dir():
    """Provide a temporary directory that is cleaned up after the test."""
    with tempfile.TemporaryDirectory() as d:
        yield d


@pytest.fixture
def tmp_config_file(tmp_dir):
    """Create a temporary YAML config file."""
    import yaml

    config_data = {
        "paths": {
            "data_dir": os.path.join(tmp_dir, "data"),
            "export_dir": os.path.join(tmp_dir, "exports"),
        },
        "storage": {
            "backend": "memory",
            "key": "test-journal",
        },
    }
    config_path = os.path.join(tmp_dir, "config.yaml")
    with open(config_path, "w") as f:
        yaml.dump(config_data, f)
    return config_path


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
def store(storage):
    return EntryStore(storage)


@pytest.fixture
def log_messages():
    """Collect loguru messages emitted during the test."""
    messages: list[str] = []
    handler_id = logger.add(lambda m: messages.append(m.record["message"]), level="DEBUG")
    yield messages
    logger.remove(handler_id)
