"""Sanitizing of generated messages before delivery."""

from __future__ import annotations

from typing import Optional

from config.models import RewriterConfig


class MessageRewriter:
    def __init__(self, marker: str = "System:", separator: str = "---"):
        self.marker = marker
        self.separator = separator

    @classmethod
    def from_config(cls, config: RewriterConfig) -> "MessageRewriter":
        return cls(marker=config.marker, separator=config.separator)

    def trim_index(self, content: str) -> int:
        marker_index = content.find(self.marker)
        separator_index = content.find(self.separator)
        if marker_index != -1 and (separator_index == -1 or marker_index < separator_index):
            return marker_index
        return separator_index

    def rewrite(self, content: Optional[str]) -> Optional[str]:
        if not content:
            return content
        index = self.trim_index(content)
        if index == -1:
            return content
        return content[:index].strip()
