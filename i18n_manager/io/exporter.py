"""
Writing translation documents back to disk.
"""

import json
import os
from pathlib import Path
from typing import Any, Iterable, List, Optional, Union

import aiofiles

from i18n_manager.config import JSON_INDENT
from i18n_manager.core.document import LanguageSet
from i18n_manager.utils.unified_logger import get_logger, LogType

PathType = Union[str, Path]


def serialize_document(document: Any) -> str:
    """JSON text as written to disk: 2-space indent, non-ASCII kept as is."""
    return json.dumps(document, indent=JSON_INDENT, ensure_ascii=False) + "\n"


async def save_document(document: Any, filepath: PathType) -> str:
    """Write one document as UTF-8 JSON, creating parent directories."""
    path = Path(filepath)
    os.makedirs(path.parent, exist_ok=True)
    async with aiofiles.open(path, 'w', encoding='utf-8') as f:
        await f.write(serialize_document(document))
    get_logger().debug(f"Saved {path}", LogType.FILE_OPERATION)
    return str(path)


async def save_language_set(language_set: LanguageSet, folder: PathType,
                            languages: Optional[Iterable[str]] = None,
                            only_dirty: bool = False) -> List[str]:
    """
    Write documents at their origin locator relative to folder.

    Args:
        language_set: Documents to write
        folder: Output folder
        languages: Restrict the export to these languages
        only_dirty: Skip documents that were not modified since loading

    Returns:
        Paths of the written files
    """
    selected = set(languages) if languages is not None else None
    written = []
    for lang, translation_file in language_set.items():
        if selected is not None and lang not in selected:
            continue
        if only_dirty and not translation_file.dirty:
            continue
        target = Path(folder) / (translation_file.file_path or f"{lang}.json")
        written.append(await save_document(translation_file.content, target))

    get_logger().info(f"Saved {len(written)} file(s) to {folder}", LogType.FILE_OPERATION)
    return written
