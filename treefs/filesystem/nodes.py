"""
Tree Node Module

Directory and File nodes of the in-memory namespace.

Each Directory owns two name-indexed dicts, one for child directories and
one for child files. A name may appear in at most one of them; the add and
update primitives enforce that. Children keep a plain back-reference to
their parent, and a node's path is derived from that chain on demand.

The primitives here know nothing about path strings or the namespace's
byte counter. The VirtualFileSystem resolves paths and keeps the counter.
"""

from enum import Enum
from typing import Optional, Union, Iterator

from treefs.exceptions import (
    AmbiguousPathError,
    CannotUpdateRootError,
    DirectoryExistsError,
    InvalidMoveError,
)
from .path_resolver import PathResolver


ROOT_PATH = '/'
MOVE_UP_PATHS = ('..', '../')
CURRENT_DIR_PATHS = ('.', './')

# Names that always refer to an existing directory and can't be created.
RESERVED_NAMES = (ROOT_PATH, '.', '..')

Content = Union[str, bytes]


class NodeType(Enum):
    """Kinds of namespace nodes."""
    DIRECTORY = 'directory'
    FILE = 'file'


def byte_length(content: Content) -> int:
    """Size of content in bytes; str is measured as UTF-8."""
    if isinstance(content, str):
        return len(content.encode('utf-8'))
    return len(content)


def node_path(node: Union['Directory', 'File']) -> str:
    """Absolute path of a node, built by walking parent links to the root."""
    if node.parent is None:
        return ROOT_PATH
    return PathResolver.normalize(node_path(node.parent) + '/' + node.name)


class Directory:
    """
    A directory node.

    Attributes:
        name: Name under which the parent stores this directory ('/' for root)
        parent: Owning directory, None only for the root
        directories: Child directories by name
        files: Child files by name
    """

    node_type = NodeType.DIRECTORY

    def __init__(self, name: str, parent: Optional['Directory'] = None):
        self.name = name
        self.parent = parent
        self.directories: dict[str, Directory] = {}
        self.files: dict[str, File] = {}

    def __repr__(self) -> str:
        return f"Directory(path={self.get_path()!r})"

    @property
    def is_root(self) -> bool:
        return self.parent is None

    def get_path(self) -> str:
        return node_path(self)

    def is_ancestor_of(self, other: 'Directory') -> bool:
        """True if ``other`` is this directory or lies somewhere below it."""
        node: Optional[Directory] = other
        while node is not None:
            if node is self:
                return True
            node = node.parent
        return False

    def update(self, name: Optional[str] = None, parent: Optional['Directory'] = None) -> None:
        """
        Rename and/or reparent this directory in one step.

        Unspecified fields keep their current values. The directory is
        attached under its new name first, then the entry under its old
        name is dropped from the original parent.

        Raises:
            CannotUpdateRootError: If this is the root
            AmbiguousPathError: If the target parent has a file of that name
            InvalidMoveError: If the target parent is this directory or
                lies below it
        """
        if self.parent is None:
            raise CannotUpdateRootError(ROOT_PATH)

        original_parent = self.parent
        original_name = self.name
        name = name if name is not None else self.name
        parent = parent if parent is not None else self.parent

        if parent.has_file(name):
            raise AmbiguousPathError(name)
        if self.is_ancestor_of(parent):
            raise InvalidMoveError(self.get_path(), target=parent.get_path())

        self.name = name
        parent.add_directory(self)
        if parent is not original_parent or name != original_name:
            original_parent.remove_directory(original_name, expected=self)

    def create_and_add_directory(self, name: str) -> 'Directory':
        """
        Create a child directory.

        An existing directory of the same name is replaced.

        Raises:
            DirectoryExistsError: If name is '/', '.' or '..'
            AmbiguousPathError: If a file of that name exists here
        """
        if name in RESERVED_NAMES:
            raise DirectoryExistsError(name)

        directory = Directory(name, parent=self)
        self.add_directory(directory)
        return directory

    def add_directory(self, directory: 'Directory') -> None:
        """
        Store a directory under its name, replacing any directory there.

        Raises:
            AmbiguousPathError: If a file of that name exists here
        """
        if self.has_file(directory.name):
            raise AmbiguousPathError(directory.name)
        directory.parent = self
        self.directories[directory.name] = directory

    def has_directory(self, name: str) -> bool:
        """One level deep only."""
        return name in self.directories

    def has_file(self, name: str) -> bool:
        """One level deep only."""
        return name in self.files

    def create_and_add_file(self, name: str, content: Optional[Content] = None) -> 'File':
        """
        Create a child file; an existing file of the same name is replaced.

        Raises:
            AmbiguousPathError: If a directory of that name exists here, or
                the name is one of '/', '.', '..'
        """
        if name in RESERVED_NAMES:
            raise AmbiguousPathError(name)

        file = File(name, parent=self, content=content)
        self.add_file(file)
        return file

    def add_file(self, file: 'File') -> None:
        """
        Store a file under its name, replacing any file there.

        Raises:
            AmbiguousPathError: If a directory of that name exists here
        """
        if self.has_directory(file.name):
            raise AmbiguousPathError(file.name)
        file.parent = self
        self.files[file.name] = file

    def remove_directory(self, name: str, expected: Optional['Directory'] = None) -> None:
        """
        Drop a child directory by name; absent names are ignored.

        When ``expected`` is given, the entry is only dropped if it is that
        exact node.

        Raises:
            CannotUpdateRootError: If name is the root sentinel
        """
        if name == ROOT_PATH:
            raise CannotUpdateRootError(ROOT_PATH)
        if expected is not None and self.directories.get(name) is not expected:
            return
        self.directories.pop(name, None)

    def remove_file(self, name: str, expected: Optional['File'] = None) -> None:
        """Drop a child file by name; absent names are ignored."""
        if expected is not None and self.files.get(name) is not expected:
            return
        self.files.pop(name, None)

    def get_total_byte_count(self) -> int:
        """Sum of content sizes of every file in this subtree."""
        total = 0
        for file in self.files.values():
            total += file.content_byte_length or 0
        for directory in self.directories.values():
            total += directory.get_total_byte_count()
        return total

    def iter_directories(self) -> Iterator['Directory']:
        """Yield every directory below this one, depth first."""
        for directory in self.directories.values():
            yield directory
            yield from directory.iter_directories()

    def iter_files(self) -> Iterator['File']:
        """Yield every file in this subtree, depth first."""
        yield from self.files.values()
        for directory in self.directories.values():
            yield from directory.iter_files()


class File:
    """
    A file node.

    Attributes:
        name: Name under which the parent stores this file
        parent: Owning directory
        content: Current content, None until first written
        content_byte_length: Size of content in bytes, None while content is None
    """

    node_type = NodeType.FILE

    def __init__(self, name: str, parent: Directory, content: Optional[Content] = None):
        self.name = name
        self.parent = parent
        self.content: Optional[Content] = None
        self.content_byte_length: Optional[int] = None
        if content is not None:
            self.set_content(content)

    def __repr__(self) -> str:
        return f"File(path={self.get_path()!r}, size={self.content_byte_length})"

    def get_path(self) -> str:
        return node_path(self)

    def update(
        self,
        name: Optional[str] = None,
        parent: Optional[Directory] = None,
        content: Optional[Content] = None
    ) -> None:
        """
        Rename, reparent and/or replace the content of this file.

        Unspecified fields keep their current values. The file is attached
        to the target parent first (replacing a same-named file there), then
        the entry under its old name is dropped from the original parent.

        Raises:
            AmbiguousPathError: If the target parent has a directory of that name
        """
        original_name = self.name
        original_parent = self.parent
        name = name if name is not None else self.name
        parent = parent if parent is not None else self.parent

        if parent.has_directory(name):
            raise AmbiguousPathError(name)

        self.name = name
        if content is not None:
            self.set_content(content)
        parent.add_file(self)
        if parent is not original_parent or name != original_name:
            original_parent.remove_file(original_name, expected=self)

    def set_content(self, content: Content) -> None:
        """
        Replace the content and recompute its byte length.

        The namespace-wide byte counter is the caller's responsibility.
        """
        self.content = content
        self.content_byte_length = byte_length(content)
