"""
Translation documents and language sets.

A TranslationFile pairs a document (nested mapping) with the locator it was
loaded from. A LanguageSet maps a language identifier to its TranslationFile.
Documents are treated as immutable: writers build a new root with
set_value_by_path and swap it in with with_content().
"""

from dataclasses import dataclass, field, replace
from typing import Any, Dict


@dataclass(frozen=True)
class TranslationFile:
    """
    One language's translation document.

    Attributes:
        file_path: Origin locator (relative path inside the loaded folder)
        content: Root mapping of the document
        dirty: True once the content diverges from what was loaded
    """
    file_path: str
    content: Dict[str, Any] = field(default_factory=dict)
    dirty: bool = False

    def with_content(self, content: Dict[str, Any]) -> 'TranslationFile':
        """New TranslationFile holding content, marked dirty."""
        return replace(self, content=content, dirty=True)

    def __repr__(self) -> str:
        return f"TranslationFile(path={self.file_path}, keys={len(self.content)}, dirty={self.dirty})"


LanguageSet = Dict[str, TranslationFile]
