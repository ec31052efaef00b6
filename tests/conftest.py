"""Shared pytest fixtures for all tests."""

import pytest
from pathlib import Path

from cli.config import Config
from fileservice.dispatcher import PolyBackend
from fileservice.engine import FileService
from fileservice.local_backend import LocalBackend
from fileservice.memory_backend import MemoryBackend


@pytest.fixture
def temp_config_dir(tmp_path):
    """
    Create temporary config directory.

    Args:
        tmp_path: pytest tmp_path fixture

    Returns:
        Path to temporary .fss3 directory
    """
    config_dir = tmp_path / '.fss3'
    config_dir.mkdir()
    return config_dir


@pytest.fixture
def temp_config(temp_config_dir):
    """
    Create temporary config instance.

    Args:
        temp_config_dir: Temporary config directory fixture

    Returns:
        Config instance with temp config file
    """
    return Config(temp_config_dir / 'config.json')


@pytest.fixture
def memory_backends():
    """
    Separate in-memory stand-ins for the local and S3 backends.

    Returns:
        Tuple of (local, s3) MemoryBackend instances
    """
    return MemoryBackend(poll_interval=0.01), MemoryBackend(poll_interval=0.01)


@pytest.fixture
def memory_service(memory_backends):
    """
    FileService over a PolyBackend whose two sides are in memory.

    Returns:
        FileService instance
    """
    local, s3 = memory_backends
    return FileService(PolyBackend(local=local, s3=s3))


@pytest.fixture
def local_service():
    """
    FileService over the real local filesystem backend.

    Returns:
        FileService instance
    """
    return FileService(LocalBackend(poll_interval=0.01))


@pytest.fixture
def sample_tree(tmp_path):
    """
    Create a small directory tree on disk.

    Returns:
        Path to the tree root containing a/b/1.txt and a/b/2.txt
    """
    root = tmp_path / 'a'
    (root / 'b').mkdir(parents=True)
    (root / 'b' / '1.txt').write_text('x')
    (root / 'b' / '2.txt').write_text('y')
    return root


@pytest.fixture
def hybrid_service():
    """
    FileService over the real local filesystem and an in-memory S3 side.

    Returns:
        FileService instance
    """
    return FileService(PolyBackend(
        local=LocalBackend(poll_interval=0.01),
        s3=MemoryBackend(poll_interval=0.01),
    ))
