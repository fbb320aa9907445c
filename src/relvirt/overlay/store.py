"""Namespaced annotation slots on top of a host overlay primitive."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict

from relvirt.host.protocol import OverlayPrimitive, VirtChunk

from .width import annotation_width

DEFAULT_NAMESPACE = "rel_lines"


@dataclass(frozen=True, slots=True)
class Annotation:
    line: int
    text: str
    style: str


class OverlayStore:
    """One annotation slot per buffer line, owned by a single namespace.

    The slot for line ``L`` always uses mark id ``L + 1``, so writing the
    same line twice replaces the annotation instead of stacking a second one.
    """

    def __init__(
        self, primitive: OverlayPrimitive, *, namespace: str = DEFAULT_NAMESPACE
    ) -> None:
        self.primitive = primitive
        self.namespace = namespace

    @staticmethod
    def mark_id(line: int) -> int:
        return line + 1

    def clear_range(self, buffer: int, first: int, last: int) -> None:
        """Remove own annotations on lines ``first..last`` (inclusive)."""

        if last < first:
            return
        self.primitive.clear_namespace(buffer, self.namespace, first, last + 1)

    def clear_outside(self, buffer: int, first: int, last: int) -> None:
        """Remove own annotations above ``first`` and below ``last``."""

        if first > 0:
            self.primitive.clear_namespace(buffer, self.namespace, 0, first)
        self.primitive.clear_namespace(buffer, self.namespace, last + 1, -1)

    def clear_all(self, buffer: int) -> None:
        self.primitive.clear_namespace(buffer, self.namespace, 0, -1)

    def set_annotation(self, buffer: int, line: int, text: str, style: str) -> None:
        self.primitive.set_extmark(
            buffer,
            self.namespace,
            line,
            self.mark_id(line),
            (VirtChunk(text, style),),
        )

    def total_width_at(self, buffer: int, line: int) -> int:
        """Width of every overlay on ``line``, whichever namespace placed it."""

        marks = self.primitive.get_extmarks(buffer, line, line + 1)
        return sum(annotation_width(mark.chunks) for mark in marks)

    def annotations(self, buffer: int) -> Dict[int, Annotation]:
        marks = self.primitive.get_extmarks(buffer, 0, -1, self.namespace)
        result: Dict[int, Annotation] = {}
        for mark in marks:
            text = "".join(chunk.text for chunk in mark.chunks)
            style = mark.chunks[0].style if mark.chunks else ""
            result[mark.line] = Annotation(line=mark.line, text=text, style=style)
        return result


__all__ = ["Annotation", "DEFAULT_NAMESPACE", "OverlayStore"]
