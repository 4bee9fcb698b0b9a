"""Rendered text fragments and their display metadata."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Metadata:
    """Styling and identity attached to a fragment."""

    instance: str | None = None
    underline: bool = False
    italic: bool = False

    def is_default(self) -> bool:
        """Whether every field holds its default value."""
        return self == Metadata()


@dataclass
class Fragment:
    """A piece of rendered text with its metadata."""

    text: str = ""
    metadata: Metadata = field(default_factory=Metadata)

    def formatted_text(self) -> str:
        """The text wrapped in the pango tags its metadata asks for."""
        text = self.text
        if self.metadata.underline:
            text = f"<u>{text}</u>"
        if self.metadata.italic:
            text = f"<i>{text}</i>"
        return text