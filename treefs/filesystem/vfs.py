"""
Virtual File System (VFS) Module

The in-memory namespace: a tree of Directory and File nodes with
- A current working directory
- Path resolution of absolute and relative POSIX paths
- Create, remove, rename, move, read and write operations
- Capacity accounting over all file content
- Recursive name search

Every public operation resolves its path arguments to nodes first, then
mutates or reads through the node primitives, then updates the byte
counter. Failures are raised as FileSystemException subclasses carrying
the operation name and the offending path.
"""

from dataclasses import dataclass
from typing import Optional, Any, List, Union

from .nodes import (
    Directory,
    File,
    NodeType,
    Content,
    ROOT_PATH,
    MOVE_UP_PATHS,
    CURRENT_DIR_PATHS,
    RESERVED_NAMES,
    byte_length,
)
from .path_resolver import PathResolver
from treefs.core.config_loader import get_config
from treefs.exceptions import (
    FileSystemException,
    NotFoundError,
    FileNotFoundError,
    DirectoryNotFoundError,
    DirectoryExistsError,
    AmbiguousPathError,
    CannotUpdateRootError,
    MissingPathError,
    OutOfMemoryError,
)
from treefs.logger import get_logger


@dataclass
class NodeInfo:
    """Summary of a node returned by ``VirtualFileSystem.stat``."""
    name: str
    path: str
    node_type: NodeType
    size: int

    @property
    def is_directory(self) -> bool:
        return self.node_type is NodeType.DIRECTORY

    def to_dict(self) -> dict[str, Any]:
        return {
            'name': self.name,
            'path': self.path,
            'type': self.node_type.value,
            'size': self.size,
        }


class VirtualFileSystem:
    """
    In-memory hierarchical namespace.

    Not thread-safe: callers sharing an instance across threads must
    serialize access to it.

    Example:
        >>> vfs = VirtualFileSystem()
        >>> vfs.make_directory('/docs')
        >>> vfs.make_file('/docs/readme')
        >>> vfs.write_file('/docs/readme', 'hello')
        >>> vfs.find('readme')
        ['/docs/readme']
    """

    def __init__(self, capacity_limit: Optional[int] = None):
        """
        Args:
            capacity_limit: Maximum total content size in bytes. Defaults to
                ``filesystem.capacity_limit`` from the active configuration.
        """
        self._logger = get_logger('vfs')
        self._root = Directory(ROOT_PATH)
        self.current_directory: Directory = self._root
        self.total_content_bytes = 0
        if capacity_limit is None:
            capacity_limit = get_config().filesystem.capacity_limit
        self.capacity_limit = capacity_limit

    @property
    def root(self) -> Directory:
        return self._root

    # Path resolution

    def _get_root(self) -> Directory:
        directory = self.current_directory
        while directory.parent is not None:
            directory = directory.parent
        return directory

    def _get_target(self, path: str, node_type: NodeType) -> Optional[Union[Directory, File]]:
        """
        Resolve a path to a node of the given type.

        Relative paths start from the current directory. '..' never climbs
        above the root. Returns None as soon as any directory along the way
        is missing; nothing is created or modified.
        """
        path = PathResolver.normalize(path)

        if node_type is NodeType.DIRECTORY:
            if path in CURRENT_DIR_PATHS:
                return self.current_directory
            if path == ROOT_PATH:
                return self._get_root()
            if path in MOVE_UP_PATHS:
                return self._parent_or_self(self.current_directory)

        directory = self._get_root() if PathResolver.is_absolute(path) else self.current_directory

        for segment in PathResolver.components(PathResolver.dirname(path)):
            if segment in MOVE_UP_PATHS:
                directory = self._parent_or_self(directory)
            elif segment in CURRENT_DIR_PATHS:
                continue
            else:
                directory = directory.directories.get(segment)
                if directory is None:
                    return None

        name = PathResolver.basename(path)
        if node_type is NodeType.DIRECTORY:
            if name in MOVE_UP_PATHS:
                return self._parent_or_self(directory)
            return directory.directories.get(name)
        return directory.files.get(name)

    def _get_target_directory(self, path: str) -> Optional[Directory]:
        return self._get_target(path, NodeType.DIRECTORY)

    def _get_target_file(self, path: str) -> Optional[File]:
        return self._get_target(path, NodeType.FILE)

    @staticmethod
    def _parent_or_self(directory: Directory) -> Directory:
        return directory.parent if directory.parent is not None else directory

    def _is_attached(self, directory: Directory) -> bool:
        """True if the directory is still reachable from the root."""
        node = directory
        while node.parent is not None:
            if node.parent.directories.get(node.name) is not node:
                return False
            node = node.parent
        return node is self._root

    def _reattach_current_directory(self) -> None:
        """Fall back to the nearest reachable ancestor if cwd was cut off."""
        directory = self.current_directory
        while not self._is_attached(directory):
            directory = directory.parent
        if directory is not self.current_directory:
            self._logger.debug(
                "Current directory detached, moved up",
                context={'path': directory.get_path()}
            )
            self.current_directory = directory

    def _release_bytes(self, count: int) -> None:
        self.total_content_bytes -= count

    # Queries

    def get_current_directory(self) -> str:
        """Absolute path of the current directory."""
        return self.current_directory.get_path()

    def get_directory_contents(self, path: Optional[str] = None) -> List[str]:
        """
        List names in a directory: child directories first, then files.

        Args:
            path: Directory to list, defaults to the current directory

        Raises:
            DirectoryNotFoundError: If the directory does not exist
        """
        directory = self._get_target_directory(path) if path else self.current_directory
        if directory is None:
            raise DirectoryNotFoundError(path, operation='get_directory_contents')
        return [*directory.directories.keys(), *directory.files.keys()]

    def get_available_space(self) -> int:
        return self.capacity_limit - self.total_content_bytes

    def stat(self, path: str) -> NodeInfo:
        """
        Describe the directory or file at a path.

        Directories are looked up first. A directory's size is the total
        content size of its subtree.

        Raises:
            NotFoundError: If neither a directory nor a file exists there
        """
        directory = self._get_target_directory(path)
        if directory is not None:
            return NodeInfo(
                name=directory.name,
                path=directory.get_path(),
                node_type=NodeType.DIRECTORY,
                size=directory.get_total_byte_count(),
            )

        file = self._get_target_file(path)
        if file is not None:
            return NodeInfo(
                name=file.name,
                path=file.get_path(),
                node_type=NodeType.FILE,
                size=file.content_byte_length or 0,
            )

        raise NotFoundError(path, operation='stat')

    def get_stats(self) -> dict[str, Any]:
        """Get namespace statistics."""
        root = self._get_root()
        return {
            'total_directories': 1 + sum(1 for _ in root.iter_directories()),
            'total_files': sum(1 for _ in root.iter_files()),
            'total_content_bytes': self.total_content_bytes,
            'capacity_limit': self.capacity_limit,
            'available_space': self.get_available_space(),
            'utilization': (
                self.total_content_bytes / self.capacity_limit * 100
                if self.capacity_limit else 0
            ),
            'current_directory': self.get_current_directory(),
        }

    # Navigation

    def change_directory(self, path: Optional[str] = None) -> None:
        """
        Change the current directory; with no path, go to the root.

        Raises:
            DirectoryNotFoundError: If the directory does not exist
        """
        path = path if path is not None else ROOT_PATH
        directory = self._get_target_directory(path)
        if directory is None:
            raise DirectoryNotFoundError(path, operation='change_directory')
        self.current_directory = directory

    # Creation and removal

    def make_directory(self, path: str) -> None:
        """
        Create a directory.

        An existing directory at that path is replaced by an empty one.

        Raises:
            MissingPathError: If path is empty
            DirectoryNotFoundError: If the parent directory does not exist
            DirectoryExistsError: If the final name is '/', '.' or '..'
            AmbiguousPathError: If a file already has that name
        """
        if not path:
            raise MissingPathError(path, operation='make_directory')

        parent_path, name = PathResolver.split(path)
        parent = self._get_target_directory(parent_path)
        if parent is None:
            raise DirectoryNotFoundError(path, operation='make_directory')

        replaced = parent.directories.get(name)
        try:
            parent.create_and_add_directory(name)
        except FileSystemException as exc:
            raise exc.annotate('make_directory', path)

        if replaced is not None:
            self._release_bytes(replaced.get_total_byte_count())
            self._reattach_current_directory()

        self._logger.debug("Created directory", context={'path': path})

    def make_file(self, path: str) -> None:
        """
        Create an empty file.

        An existing file at that path is replaced by an empty one.

        Raises:
            MissingPathError: If path is empty
            DirectoryNotFoundError: If the parent directory does not exist
            AmbiguousPathError: If a directory already has that name
        """
        if not path:
            raise MissingPathError(path, operation='make_file')

        parent_path, name = PathResolver.split(path)
        parent = self._get_target_directory(parent_path)
        if parent is None:
            raise DirectoryNotFoundError(path, operation='make_file')

        replaced = parent.files.get(name)
        try:
            parent.create_and_add_file(name)
        except FileSystemException as exc:
            raise exc.annotate('make_file', path)

        if replaced is not None:
            self._release_bytes(replaced.content_byte_length or 0)

        self._logger.debug("Created file", context={'path': path})

    def remove_directory(self, path: str) -> None:
        """
        Remove a directory and everything below it.

        Raises:
            DirectoryNotFoundError: If the directory does not exist
            CannotUpdateRootError: If the directory is the root
        """
        directory = self._get_target_directory(path)
        if directory is None:
            raise DirectoryNotFoundError(path, operation='remove_directory')
        if directory.parent is None:
            raise CannotUpdateRootError(path, operation='remove_directory')

        self._release_bytes(directory.get_total_byte_count())
        directory.parent.remove_directory(directory.name, expected=directory)
        self._reattach_current_directory()

        self._logger.debug("Removed directory", context={'path': path})

    def remove_file(self, path: str) -> None:
        """
        Remove a file.

        Raises:
            FileNotFoundError: If the file does not exist
        """
        file = self._get_target_file(path)
        if file is None:
            raise FileNotFoundError(path, operation='remove_file')

        if file.content_byte_length:
            self._release_bytes(file.content_byte_length)
        file.parent.remove_file(file.name, expected=file)

        self._logger.debug("Removed file", context={'path': path})

    # Content

    def read_file(self, path: str) -> Optional[Content]:
        """
        Return a file's content, None if it was never written.

        Raises:
            FileNotFoundError: If the file does not exist
        """
        file = self._get_target_file(path)
        if file is None:
            raise FileNotFoundError(path, operation='read_file')
        return file.content

    def write_file(self, path: str, content: Content) -> None:
        """
        Replace a file's content.

        The file's previous size is released before the new size is
        counted, so rewriting a file never inflates the total.

        Raises:
            FileNotFoundError: If the file does not exist
            OutOfMemoryError: If the new total would exceed the capacity limit
        """
        file = self._get_target_file(path)
        if file is None:
            raise FileNotFoundError(path, operation='write_file')

        new_bytes = byte_length(content)
        old_bytes = file.content_byte_length or 0
        projected = self.total_content_bytes - old_bytes + new_bytes

        if projected > self.capacity_limit:
            available = self.get_available_space() + old_bytes
            self._logger.warning(
                "Write refused, capacity exceeded",
                context={'path': path, 'requested': new_bytes, 'available': available}
            )
            raise OutOfMemoryError(
                path,
                requested=new_bytes,
                available=available,
                operation='write_file'
            )

        file.set_content(content)
        self.total_content_bytes = projected

        self._logger.debug("Wrote file", context={'path': path, 'bytes': new_bytes})

    # Moving and renaming

    def move_file(self, path: str, target_dir_path: str) -> None:
        """
        Move a file into another directory, keeping its name.

        A file of the same name in the target directory is replaced.
        Use ``rename_file`` to change the name instead.

        Raises:
            FileNotFoundError: If the file does not exist
            DirectoryNotFoundError: If the target directory does not exist
            AmbiguousPathError: If the target has a directory of that name
        """
        file = self._get_target_file(path)
        if file is None:
            raise FileNotFoundError(path, operation='move_file')
        target = self._get_target_directory(target_dir_path)
        if target is None:
            raise DirectoryNotFoundError(target_dir_path, operation='move_file')

        replaced = target.files.get(file.name)
        try:
            file.update(parent=target)
        except FileSystemException as exc:
            raise exc.annotate('move_file', path)

        if replaced is not None and replaced is not file:
            self._release_bytes(replaced.content_byte_length or 0)

        self._logger.debug(
            "Moved file",
            context={'path': path, 'target': target.get_path()}
        )

    def move_directory(self, path: str, target_dir_path: str) -> None:
        """
        Move a directory into another directory, keeping its name.

        A directory of the same name in the target is replaced. The current
        directory follows the moved subtree if it lies inside it.

        Raises:
            CannotUpdateRootError: If the source is the root
            DirectoryNotFoundError: If either directory does not exist
            InvalidMoveError: If the target is the source or lies inside it
            AmbiguousPathError: If the target has a file of that name
        """
        if PathResolver.normalize(path) == ROOT_PATH:
            raise CannotUpdateRootError(path, operation='move_directory')

        directory = self._get_target_directory(path)
        if directory is None:
            raise DirectoryNotFoundError(path, operation='move_directory')
        target = self._get_target_directory(target_dir_path)
        if target is None:
            raise DirectoryNotFoundError(target_dir_path, operation='move_directory')
        if directory.parent is None:
            raise CannotUpdateRootError(path, operation='move_directory')

        replaced = target.directories.get(directory.name)
        try:
            directory.update(parent=target)
        except FileSystemException as exc:
            raise exc.annotate('move_directory', path)

        if replaced is not None and replaced is not directory:
            # Counted after the move: the source may have lived inside it.
            self._release_bytes(replaced.get_total_byte_count())
            self._reattach_current_directory()

        self._logger.debug(
            "Moved directory",
            context={'path': path, 'target': target.get_path()}
        )

    def rename_file(self, path: str, name: str) -> None:
        """
        Rename a file in place; a file already called ``name`` is replaced.

        Raises:
            MissingPathError: If name is empty
            FileNotFoundError: If the file does not exist
            AmbiguousPathError: If a directory is called ``name``, or the
                name is reserved or contains '/'
        """
        if not name:
            raise MissingPathError(path, operation='rename_file')
        if '/' in name or name in RESERVED_NAMES:
            raise AmbiguousPathError(name, operation='rename_file')

        file = self._get_target_file(path)
        if file is None:
            raise FileNotFoundError(path, operation='rename_file')

        replaced = file.parent.files.get(name)
        try:
            file.update(name=name)
        except FileSystemException as exc:
            raise exc.annotate('rename_file', path)

        if replaced is not None and replaced is not file:
            self._release_bytes(replaced.content_byte_length or 0)

        self._logger.debug("Renamed file", context={'path': path, 'name': name})

    def rename_directory(self, path: str, name: str) -> None:
        """
        Rename a directory in place; a directory already called ``name``
        is replaced.

        Raises:
            CannotUpdateRootError: If the directory is the root
            MissingPathError: If name is empty
            DirectoryExistsError: If name is '.' or '..'
            DirectoryNotFoundError: If the directory does not exist
            AmbiguousPathError: If a file is called ``name`` or the name
                contains '/'
        """
        if PathResolver.normalize(path) == ROOT_PATH:
            raise CannotUpdateRootError(path, operation='rename_directory')
        if not name:
            raise MissingPathError(path, operation='rename_directory')
        if name in RESERVED_NAMES:
            raise DirectoryExistsError(name, operation='rename_directory')
        if '/' in name:
            raise AmbiguousPathError(name, operation='rename_directory')

        directory = self._get_target_directory(path)
        if directory is None:
            raise DirectoryNotFoundError(path, operation='rename_directory')
        if directory.parent is None:
            raise CannotUpdateRootError(path, operation='rename_directory')

        replaced = directory.parent.directories.get(name)
        try:
            directory.update(name=name)
        except FileSystemException as exc:
            raise exc.annotate('rename_directory', path)

        if replaced is not None and replaced is not directory:
            self._release_bytes(replaced.get_total_byte_count())
            self._reattach_current_directory()

        self._logger.debug("Renamed directory", context={'path': path, 'name': name})

    # Search

    def find(self, name: str, path: Optional[str] = None) -> List[str]:
        """
        Find every file and directory called ``name`` below a directory.

        The search is depth first. At each level a matching file comes
        first, then each child directory: its own path if it matches, then
        the matches inside it.

        Args:
            name: Exact name to look for
            path: Directory to search from, defaults to the current directory

        Returns:
            Absolute paths of all matches (empty if none)

        Raises:
            DirectoryNotFoundError: If the start directory does not exist
        """
        start = self._get_target_directory(path if path else CURRENT_DIR_PATHS[0])
        if start is None:
            raise DirectoryNotFoundError(path, operation='find')

        matches: List[str] = []
        self._find_in(start, name, matches)
        return matches

    def _find_in(self, directory: Directory, name: str, matches: List[str]) -> None:
        found = directory.files.get(name)
        if found is not None:
            matches.append(found.get_path())

        for child in directory.directories.values():
            if child.name == name:
                matches.append(child.get_path())
            self._find_in(child, name, matches)
