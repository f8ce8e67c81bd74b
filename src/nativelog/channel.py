"""
Native channel identifiers derived from logger labels.
"""

from __future__ import annotations

from typing import NamedTuple


class Channel(NamedTuple):
    """The ``(domain, category)`` pair identifying a native log destination."""

    domain: str
    category: str

    @classmethod
    def from_label(cls, label: str) -> "Channel":
        """
        Derive a channel from a ``"domain/category"`` label.

        Empty segments are ignored, so ``"App/"`` and ``"/App"`` both yield
        ``("App", "")``. Labels with no usable segment or with more than two
        segments fall back to the whole label as the domain.

        >>> Channel.from_label("App/Network")
        Channel(domain='App', category='Network')
        >>> Channel.from_label("a/b/c")
        Channel(domain='a/b/c', category='')
        """
        segments = [segment for segment in label.split("/") if segment]
        if len(segments) == 1:
            return cls(segments[0], "")
        if len(segments) == 2:
            return cls(segments[0], segments[1])
        return cls(label, "")

    def __str__(self) -> str:
        return f"{self.domain}/{self.category}" if self.category else self.domain
