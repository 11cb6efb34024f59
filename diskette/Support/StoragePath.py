from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

SCHEME_SEPARATOR = '://'
SEPARATOR = '/'


@dataclass(frozen=True)
class StoragePath:
    """
    Backend path split into an optional URI scheme and its segments.

    ``StoragePath.parse("s3://media/a/b.txt")`` gives scheme ``s3`` and
    segments ``("media", "a", "b.txt")``. Converting back with ``str()``
    re-applies the scheme prefix.
    """

    scheme: Optional[str] = None
    segments: Tuple[str, ...] = ()
    absolute: bool = False

    @classmethod
    def parse(cls, path: str) -> StoragePath:
        """Parse a raw path or URI string."""
        scheme: Optional[str] = None
        rest = path

        position = path.find(SCHEME_SEPARATOR)
        if position != -1:
            scheme = path[:position]
            rest = path[position + len(SCHEME_SEPARATOR):]

        absolute = scheme is None and rest.startswith(SEPARATOR)
        segments = tuple(part for part in rest.split(SEPARATOR) if part and part != '.')
        return cls(scheme, segments, absolute)

    @property
    def key(self) -> str:
        """Segments joined without the scheme prefix."""
        joined = SEPARATOR.join(self.segments)
        return SEPARATOR + joined if self.absolute else joined

    @property
    def name(self) -> str:
        return self.segments[-1] if self.segments else ''

    @property
    def parent(self) -> StoragePath:
        return StoragePath(self.scheme, self.segments[:-1], self.absolute)

    @property
    def is_root(self) -> bool:
        return not self.segments

    def join(self, *parts: str) -> StoragePath:
        """Append further segments, splitting each on the separator."""
        extra = tuple(
            segment
            for part in parts
            for segment in part.split(SEPARATOR)
            if segment and segment != '.'
        )
        return StoragePath(self.scheme, self.segments + extra, self.absolute)

    def ancestors(self) -> Tuple[StoragePath, ...]:
        """This path and each parent up to, not including, the root."""
        return tuple(
            StoragePath(self.scheme, self.segments[:length], self.absolute)
            for length in range(len(self.segments), 0, -1)
        )

    def __str__(self) -> str:
        prefix = f"{self.scheme}{SCHEME_SEPARATOR}" if self.scheme is not None else ''
        return prefix + self.key
