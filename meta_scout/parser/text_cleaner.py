# meta_scout/parser/text_cleaner.py
"""Text cleaning pipeline applied to every extracted string.

The pipeline is an ordered list of plain ``str -> str`` callables:

* :class:`StripArtifacts` removes known markup leftovers (icon ligature
  labels such as ``keyboard_arrow_down`` that icon fonts render as glyphs).
* :func:`collapse_whitespace` folds every whitespace/newline run to one space.
* :func:`str.strip` trims the ends.

:meth:`TextCleaner.clean` runs the pipeline until the text stops changing,
so ``clean(clean(x)) == clean(x)`` holds for any input.
"""
from __future__ import annotations

import re
from collections.abc import Callable, Iterable, Sequence

__all__: Sequence[str] = (
    "DEFAULT_ARTIFACTS",
    "StripArtifacts",
    "TextCleaner",
    "collapse_whitespace",
    "default_cleaner",
)

Transform = Callable[[str], str]

DEFAULT_ARTIFACTS: tuple[str, ...] = (
    "keyboard_arrow_down",
    "keyboard_arrow_up",
    "keyboard_arrow_right",
    "keyboard_arrow_left",
    "chevron_right",
    "chevron_left",
    "expand_more",
    "expand_less",
    "arrow_forward",
    "arrow_back",
)

_WS_RE = re.compile(r"\s+")


def collapse_whitespace(text: str) -> str:
    return _WS_RE.sub(" ", text)


class StripArtifacts:
    """Remove every occurrence of the configured substrings."""

    def __init__(self, artifacts: Iterable[str]) -> None:
        # longest first so overlapping labels are removed whole
        self.artifacts = sorted({a for a in artifacts if a}, key=len, reverse=True)
        self._pattern = (
            re.compile("|".join(re.escape(a) for a in self.artifacts)) if self.artifacts else None
        )

    def __call__(self, text: str) -> str:
        if self._pattern is None:
            return text
        return self._pattern.sub(" ", text)


class TextCleaner:
    """Ordered, configurable list of text transforms."""

    def __init__(self, transforms: Sequence[Transform]) -> None:
        self.transforms = list(transforms)

    @classmethod
    def from_artifacts(cls, artifacts: Iterable[str] = DEFAULT_ARTIFACTS) -> TextCleaner:
        return cls([StripArtifacts(artifacts), collapse_whitespace, str.strip])

    def _apply(self, text: str) -> str:
        for transform in self.transforms:
            text = transform(text)
        return text

    def clean(self, text: str | None) -> str:
        if not text:
            return ""
        current = text
        while True:
            cleaned = self._apply(current)
            if cleaned == current:
                return cleaned
            current = cleaned

    __call__ = clean


default_cleaner = TextCleaner.from_artifacts()
