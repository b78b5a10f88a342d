"""
Recursive scanner for URL-valued fields in parsed JSON-LD documents.
"""

from typing import Any, List

URL_KEYS = ("url", "mainEntityOfPage")

# JSON-LD documents found on news pages are a handful of levels deep; anything
# beyond this is either malformed or self-referential and is not descended into.
MAX_DEPTH = 20


def find_url_fields(node: Any, depth: int = 0) -> List[str]:
    """
    Collect every string stored under ``url`` or ``mainEntityOfPage``.

    Mappings are walked in key order: a matching key contributes its value
    first, then the value itself is descended into when it is a mapping or a
    list. Lists are walked element by element. Scalars yield nothing.

    >>> find_url_fields({"a": {"url": "https://x"}, "b": [{"mainEntityOfPage": "https://y"}]})
    ['https://x', 'https://y']
    """
    if depth > MAX_DEPTH:
        return []

    results: List[str] = []

    if isinstance(node, dict):
        for key, value in node.items():
            if key in URL_KEYS and isinstance(value, str):
                results.append(value)
            if isinstance(value, (dict, list)):
                results.extend(find_url_fields(value, depth + 1))
    elif isinstance(node, list):
        for item in node:
            results.extend(find_url_fields(item, depth + 1))

    return results
