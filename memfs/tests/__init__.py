"""
memfs Test Suite

Run with: python -m pytest memfs/tests -v
Or: python -m unittest discover memfs/tests
"""

from memfs.core.config_loader import Config
from memfs.filesystem.vfs import VirtualFileSystem


def make_vfs(**filesystem) -> VirtualFileSystem:
    """A freshly initialized filesystem with default settings, overridden by ``filesystem``."""
    config = Config()
    for key, value in filesystem.items():
        setattr(config.filesystem, key, value)

    vfs = VirtualFileSystem(config)
    vfs.initialize()
    return vfs
