"""Shared pytest fixtures for all tests."""

import pytest
from fastapi.testclient import TestClient

from client.config import Config
from client.dfs_client import DFSClient
from client.metadata_client import MetadataClient
from tests.fakes import InMemoryBlockOpener, InMemoryFilesystem, build_metadata_app, make_content


@pytest.fixture
def temp_config(tmp_path):
    """
    Create temporary config instance.

    Args:
        tmp_path: pytest tmp_path fixture

    Returns:
        Config instance with temp config file
    """
    return Config(tmp_path / '.redcloud' / 'reader.json')


@pytest.fixture
def fs():
    """
    Filesystem with a two-block file, a one-block file and a directory of seven entries.

    Returns:
        InMemoryFilesystem with 100-byte blocks
    """
    filesystem = InMemoryFilesystem(block_size=100)
    filesystem.add_file('/data/two_blocks.bin', make_content(150))
    filesystem.add_file('/data/small.txt', b'hello, block world\n')
    for i in range(5):
        filesystem.add_file(f'/logs/part-{i:05d}', make_content(10 + i))
    filesystem.add_dir('/logs/archive')
    filesystem.add_dir('/logs/tmp')
    filesystem.add_dir('/empty')
    return filesystem


@pytest.fixture
def metadata_client(fs, temp_config):
    """MetadataClient talking to the fake service through FastAPI's TestClient."""
    return MetadataClient(temp_config, session=TestClient(build_metadata_app(fs)))


@pytest.fixture
def opener(fs):
    return InMemoryBlockOpener(fs)


@pytest.fixture
def dfs(metadata_client, opener):
    return DFSClient(metadata_client, opener)
