"""In-memory filesystem emulator: nodes, tree, resolver, permissions, engine.

Re-exports public symbols so callers can write::

    from py_fs.fake import FakeFileSystem, Metadata
"""

from py_fs.fake.filesystem import FakeFileSystem
from py_fs.fake.node import Directory, File, FileType, Metadata, Node, Symlink
from py_fs.fake.open_file import FakeOpenFile
from py_fs.fake.permissions import Access
from py_fs.fake.resolver import Resolution, Resolver
from py_fs.fake.tree import Tree

__all__ = [
    "Access",
    "Directory",
    "FakeFileSystem",
    "FakeOpenFile",
    "File",
    "FileType",
    "Metadata",
    "Node",
    "Resolution",
    "Resolver",
    "Symlink",
    "Tree",
]
