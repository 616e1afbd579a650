"""
Translation folder ingestion.

Every *.json file under the selected folder becomes one language. The
language id is the name of the file's directory when the file sits in a
sub-directory (locales/pl/translation.json -> "pl"), otherwise the file stem
(locales/en.json -> "en"). A later file with the same language id replaces an
earlier one.
"""

import json
from pathlib import Path
from typing import Iterable, Union

from i18n_manager.config import MAX_TREE_DEPTH
from i18n_manager.core.document import LanguageSet, TranslationFile
from i18n_manager.core.exceptions import MalformedInputError
from i18n_manager.core.tree.paths import extract_paths, is_mapping
from i18n_manager.utils.unified_logger import get_logger, LogType

PathType = Union[str, Path]


def language_id_for(relative_path: PathType) -> str:
    parts = Path(relative_path).parts
    if len(parts) >= 2:
        return parts[-2]
    return Path(relative_path).stem


def load_document(filepath: PathType, max_depth: int = MAX_TREE_DEPTH) -> dict:
    """
    Parse one JSON translation document.

    Raises:
        MalformedInputError: If the file is not valid JSON, its root is not an
            object, or it nests deeper than max_depth
    """
    try:
        with open(filepath, 'r', encoding='utf-8-sig') as f:
            content = json.load(f)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise MalformedInputError(f"Invalid JSON: {e}", context={'file': str(filepath)}) from e
    except RecursionError as e:
        # The decoder gives up on nesting far past any sane depth bound
        raise MalformedInputError(f"Document nests deeper than {max_depth} levels",
                                  context={'file': str(filepath)}) from e

    if not is_mapping(content):
        raise MalformedInputError("Root of a translation document must be an object",
                                  context={'file': str(filepath)})

    # Exhaust the walk so the depth guard runs now rather than at comparison time
    for _ in extract_paths(content, max_depth=max_depth):
        pass

    return content


def load_folder(folder: PathType, max_depth: int = MAX_TREE_DEPTH) -> LanguageSet:
    """
    Load every *.json file under folder, recursively.

    Malformed files are logged and skipped; the rest are still loaded.

    Raises:
        FileNotFoundError: If folder does not exist or is not a directory
    """
    root = Path(folder)
    if not root.is_dir():
        raise FileNotFoundError(f"Translation folder not found: {folder}")

    logger = get_logger()
    language_set: LanguageSet = {}

    for filepath in sorted(root.rglob('*.json')):
        if not filepath.is_file():
            continue
        relative = filepath.relative_to(root)
        lang = language_id_for(relative)
        try:
            content = load_document(filepath, max_depth=max_depth)
        except MalformedInputError as e:
            logger.error(f"Skipping {relative.as_posix()}", LogType.ERROR_DETAIL, {
                'details': e.message,
                'path': relative.as_posix()
            })
            continue
        except OSError as e:
            logger.error(f"Skipping unreadable {relative.as_posix()}", LogType.ERROR_DETAIL, {
                'details': str(e),
                'path': relative.as_posix()
            })
            continue

        language_set[lang] = TranslationFile(file_path=relative.as_posix(), content=content)
        logger.debug(f"Loaded {relative.as_posix()} as language: {lang}", LogType.FILE_OPERATION)

    logger.info(f"Loaded {len(language_set)} language(s) from {root}", LogType.FILE_OPERATION)
    return language_set


def load_files(paths: Iterable[PathType], max_depth: int = MAX_TREE_DEPTH) -> LanguageSet:
    """Load an explicit list of files; the file stem is the language id."""
    logger = get_logger()
    language_set: LanguageSet = {}

    for path in paths:
        filepath = Path(path)
        try:
            content = load_document(filepath, max_depth=max_depth)
        except MalformedInputError as e:
            logger.error(f"Skipping {filepath.name}", LogType.ERROR_DETAIL, {
                'details': e.message,
                'path': str(filepath)
            })
            continue
        except OSError as e:
            logger.error(f"Skipping unreadable {filepath.name}", LogType.ERROR_DETAIL, {
                'details': str(e),
                'path': str(filepath)
            })
            continue
        language_set[filepath.stem] = TranslationFile(file_path=filepath.name, content=content)

    return language_set
