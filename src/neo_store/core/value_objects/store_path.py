"""Store path value object.

ONLY path parsing - immutable colon-delimited path with validation and
the slicing helpers used while walking a store tree.

Following maximum separation architecture - one file = one purpose.
"""

from dataclasses import dataclass
from typing import Iterable, Tuple, Union

from ..exceptions.invalid_path import InvalidPath

PATH_DELIMITER = ":"


@dataclass(frozen=True)
class StorePath:
    """Colon-delimited path into a store tree.

    Features:
    - Hierarchical segments (``user:profile:name``)
    - Rejects empty paths and empty segments
    - Prefix/suffix slicing for multi-hop traversal
    """

    segments: Tuple[str, ...]

    def __post_init__(self):
        """Validate segments on creation."""
        if not self.segments:
            raise InvalidPath.empty()

        for position, segment in enumerate(self.segments):
            if not isinstance(segment, str):
                raise InvalidPath.not_a_string(segment)
            if not segment:
                raise InvalidPath.empty_segment(PATH_DELIMITER.join(self.segments), position)

    @classmethod
    def parse(cls, path: Union["StorePath", str]) -> "StorePath":
        """Parse a colon-delimited string into a StorePath.

        Args:
            path: Raw path string, or an already parsed StorePath

        Returns:
            Parsed path

        Raises:
            InvalidPath: If the path is not a string, is empty, or contains
                empty segments
        """
        if isinstance(path, StorePath):
            return path
        if not isinstance(path, str):
            raise InvalidPath.not_a_string(path)
        if not path:
            raise InvalidPath.empty()
        return cls(tuple(path.split(PATH_DELIMITER)))

    @classmethod
    def from_parts(cls, *parts: Union["StorePath", str]) -> "StorePath":
        """Join several paths, skipping empty parts."""
        segments = []
        for part in parts:
            if isinstance(part, StorePath):
                segments.extend(part.segments)
            elif part:
                segments.extend(cls.parse(part).segments)
        return cls(tuple(segments))

    @property
    def head(self) -> str:
        """First segment."""
        return self.segments[0]

    @property
    def leaf(self) -> str:
        """Last segment."""
        return self.segments[-1]

    @property
    def intermediates(self) -> Tuple[str, ...]:
        """All segments except the last."""
        return self.segments[:-1]

    @property
    def depth(self) -> int:
        return len(self.segments)

    def prefix(self, length: int) -> "StorePath":
        """Path made of the first ``length`` segments."""
        return StorePath(self.segments[:length])

    def suffix(self, start: int) -> "StorePath":
        """Path made of the segments from ``start`` onwards."""
        return StorePath(self.segments[start:])

    def child(self, segments: Iterable[str]) -> "StorePath":
        """Path extended with the given segments."""
        return StorePath(self.segments + tuple(segments))

    def __str__(self) -> str:
        return PATH_DELIMITER.join(self.segments)
