from typing import Any, List


def _item_to_text(item: Any) -> str:
    """Flatten one list item into a single line of text."""
    if item is None:
        return ""
    if isinstance(item, str):
        return item.strip()
    if isinstance(item, dict):
        # e.g. {"title": "...", "description": "..."} -> "... - ..."
        parts = [_item_to_text(v) for v in item.values()]
        return " - ".join(p for p in parts if p)
    if isinstance(item, list):
        parts = [_item_to_text(v) for v in item]
        return ", ".join(p for p in parts if p)
    return str(item)


def ensure_list_of_strings(x: Any) -> List[str]:
    """Coerce a model-produced value into a list of non-empty strings."""
    if x is None:
        return []
    if isinstance(x, str):
        return [x.strip()] if x.strip() else []
    if isinstance(x, dict):
        # dict-of-categories: flatten values
        out: List[str] = []
        for vals in x.values():
            out.extend(ensure_list_of_strings(vals))
        return out
    if isinstance(x, list):
        out = []
        for item in x:
            text = _item_to_text(item)
            if text:
                out.append(text)
        return out
    return [str(x)]


def ensure_text(x: Any) -> str:
    if x is None:
        return ""
    if isinstance(x, list):
        return " ".join(ensure_list_of_strings(x))
    return str(x).strip()
