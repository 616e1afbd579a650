"""
Hierarchical view of dotted keys, used for browsing and searching a language set.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Set

from i18n_manager.config import MAX_TREE_DEPTH, KEY_SEPARATOR
from i18n_manager.core.document import LanguageSet
from i18n_manager.core.tree.paths import extract_paths


@dataclass
class KeyTreeNode:
    """One segment of the key hierarchy.

    Attributes:
        key: Segment name ('' for the root)
        full_path: Dotted path from the root ('' for the root)
        children: Child nodes keyed by segment
        is_expanded: Display state, the root starts expanded
    """
    key: str
    full_path: str
    children: Dict[str, 'KeyTreeNode'] = field(default_factory=dict)
    is_expanded: bool = False


def get_all_keys(language_set: LanguageSet) -> List[str]:
    """Dotted keys of every document, intermediate nodes included, first-seen order."""
    seen: Set[str] = set()
    keys: List[str] = []
    for translation_file in language_set.values():
        for path in extract_paths(translation_file.content):
            dotted = str(path)
            if dotted not in seen:
                seen.add(dotted)
                keys.append(dotted)
    return keys


def build_key_tree(keys: Iterable[str]) -> KeyTreeNode:
    """Fold dotted keys into a tree of KeyTreeNode."""
    root = KeyTreeNode(key='', full_path='', is_expanded=True)

    for dotted in keys:
        parts = dotted.split(KEY_SEPARATOR)
        node = root
        for index, part in enumerate(parts):
            if part not in node.children:
                node.children[part] = KeyTreeNode(
                    key=part,
                    full_path=KEY_SEPARATOR.join(parts[:index + 1])
                )
            node = node.children[part]

    return root


def node_matches_search(node: KeyTreeNode, search_term: str,
                        depth: int = 0, max_depth: Optional[int] = None) -> bool:
    """
    True when the node's full path, or any descendant's, contains the term
    (case-insensitive). Nodes deeper than max_depth never match.
    """
    if max_depth is None:
        max_depth = MAX_TREE_DEPTH
    if depth > max_depth:
        return False

    if search_term.lower() in node.full_path.lower():
        return True

    return any(
        node_matches_search(child, search_term, depth + 1, max_depth)
        for child in node.children.values()
    )


def should_render_children(node: KeyTreeNode, expanded_nodes: Set[str], search_term: str) -> bool:
    """Children are shown when the node is expanded or a search is active."""
    return node.full_path in expanded_nodes or bool(search_term)
