"""
Path Resolver Module

String-level POSIX path helpers used by the namespace. Nothing here touches
the tree; mapping a path onto nodes is VirtualFileSystem's job.
"""

from dataclasses import dataclass
from typing import List, Tuple


@dataclass
class ParsedPath:
    """A parsed path with its components."""
    is_absolute: bool
    components: List[str]

    def __str__(self) -> str:
        if self.is_absolute:
            return '/' + '/'.join(self.components)
        return '/'.join(self.components) if self.components else '.'


class PathResolver:
    """
    Parses and normalizes POSIX-style paths.

    Handles:
    - Absolute and relative paths
    - . and .. components
    - Repeated and trailing separators
    """

    @staticmethod
    def parse(path: str) -> ParsedPath:
        """
        Parse a path into components, dropping empty and '.' components.

        Args:
            path: Path string to parse

        Returns:
            ParsedPath with components
        """
        is_absolute = path.startswith('/')
        components = [c for c in path.split('/') if c and c != '.']
        return ParsedPath(is_absolute=is_absolute, components=components)

    @staticmethod
    def normalize(path: str) -> str:
        """
        Normalize a path by resolving . and ..

        '..' above the root of an absolute path is dropped; leading '..'
        components of a relative path are kept, since they are resolved
        against the current directory later. The empty path becomes '.'.

        >>> PathResolver.normalize('/home/../tmp/./')
        '/tmp'
        >>> PathResolver.normalize('../a//b/..')
        '../a'
        """
        parsed = PathResolver.parse(path)

        result: List[str] = []

        for component in parsed.components:
            if component == '..':
                if result and result[-1] != '..':
                    result.pop()
                elif not parsed.is_absolute:
                    result.append(component)
            else:
                result.append(component)

        return str(ParsedPath(is_absolute=parsed.is_absolute, components=result))

    @staticmethod
    def join(*paths: str) -> str:
        """
        Join path components; an absolute component restarts the path.

        Args:
            *paths: Path components to join

        Returns:
            Joined, normalized path string
        """
        if not paths:
            return '.'

        result = paths[0]

        for path in paths[1:]:
            if path.startswith('/'):
                result = path
            else:
                result = result.rstrip('/') + '/' + path

        return PathResolver.normalize(result)

    @staticmethod
    def dirname(path: str) -> str:
        """
        Get the directory portion of a normalized path.

        Args:
            path: Path string

        Returns:
            Everything before the final component ('.' or '/' when there is
            none)
        """
        normalized = PathResolver.normalize(path)

        if normalized == '/':
            return '/'

        if '/' not in normalized:
            return '.'

        return normalized.rsplit('/', 1)[0] or '/'

    @staticmethod
    def basename(path: str) -> str:
        """
        Get the final component of a normalized path.

        Args:
            path: Path string

        Returns:
            Base name portion ('/' for the root itself)
        """
        normalized = PathResolver.normalize(path)

        if normalized == '/':
            return '/'

        if '/' not in normalized:
            return normalized

        return normalized.rsplit('/', 1)[1]

    @staticmethod
    def split(path: str) -> Tuple[str, str]:
        """Split a path into (dirname, basename)."""
        return (PathResolver.dirname(path), PathResolver.basename(path))

    @staticmethod
    def components(path: str) -> List[str]:
        """List the non-empty segments of a path, '..' included."""
        return [c for c in path.split('/') if c]

    @staticmethod
    def is_absolute(path: str) -> bool:
        """Check if a path is absolute."""
        return path.startswith('/')
