"""Plugin options and the merge used by ``setup``."""

from __future__ import annotations

import re
from dataclasses import dataclass, fields, replace
from functools import lru_cache
from typing import Any, Mapping, Optional, Tuple

from relvirt.engine.formatter import FormatNumber, default_format


class OptionsError(ValueError):
    """Raised when ``setup`` receives an option it cannot accept."""

    def __init__(self, option: str, message: str) -> None:
        super().__init__(f"{option}: {message}")
        self.option = option


@dataclass(frozen=True, slots=True)
class RelVirtOptions:
    """Immutable option set; build new ones with ``merge_options``.

    ``ignored_filetypes`` are regular expressions matched against the whole
    filetype string.  Lines whose text, other overlays and
    ``space_reserve`` columns reach the window width get no number.
    """

    ignored_filetypes: Tuple[str, ...] = ()
    space_reserve: int = 0
    show_on_blank_lines: bool = False
    show_on_cursor_line: bool = True
    min_line_distance: int = 1
    format_number: FormatNumber = default_format

    def __post_init__(self) -> None:
        for name in ("space_reserve", "min_line_distance"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise OptionsError(name, f"expected an integer, got {value!r}")
            if value < 0:
                raise OptionsError(name, "must not be negative")
        for name in ("show_on_blank_lines", "show_on_cursor_line"):
            if not isinstance(getattr(self, name), bool):
                raise OptionsError(name, "expected a boolean")
        if not callable(self.format_number):
            raise OptionsError("format_number", "expected a callable")
        if isinstance(self.ignored_filetypes, str):
            raise OptionsError("ignored_filetypes", "expected a sequence of patterns")
        patterns = tuple(self.ignored_filetypes)
        for pattern in patterns:
            try:
                _compile(pattern)
            except (re.error, TypeError) as exc:
                raise OptionsError(
                    "ignored_filetypes", f"invalid pattern {pattern!r}: {exc}"
                ) from exc
        object.__setattr__(self, "ignored_filetypes", patterns)

    def is_ignored_filetype(self, filetype: str) -> bool:
        return any(
            _compile(pattern).fullmatch(filetype) for pattern in self.ignored_filetypes
        )


_OPTION_NAMES = frozenset(f.name for f in fields(RelVirtOptions))


@lru_cache(maxsize=128)
def _compile(pattern: str) -> re.Pattern[str]:
    return re.compile(pattern)


def merge_options(
    base: Optional[RelVirtOptions] = None,
    overrides: Optional[Mapping[str, Any]] = None,
) -> RelVirtOptions:
    """Return ``base`` with every key of ``overrides`` replaced.

    Keys missing from ``overrides`` keep their ``base`` value, so calling
    ``setup`` twice layers the second call on top of the first.  Sequences
    are replaced wholesale, never merged item by item.
    """

    base = base or RelVirtOptions()
    if not overrides:
        return base
    unknown = sorted(set(overrides) - _OPTION_NAMES)
    if unknown:
        raise OptionsError(unknown[0], "unknown option")
    return replace(base, **dict(overrides))


__all__ = ["OptionsError", "RelVirtOptions", "merge_options"]
