from pathlib import Path
from typing import Dict, Iterable

SEPARATOR = " = "


def parse_lookup_lines(lines: Iterable[str]) -> Dict[str, str]:
    """Lines that don't split into exactly 'id = title' are skipped; later ids win."""
    data = {}
    for line in lines:
        parts = line.split(SEPARATOR)
        if len(parts) == 2:
            data[parts[0]] = parts[1]
    return data


def split_lines(text: str):
    # only "\n" ends a line; one trailing "\r" is dropped
    for line in text.split("\n"):
        yield line[:-1] if line.endswith("\r") else line


def load_lookup(path) -> Dict[str, str]:
    # undecodable bytes (e.g. a cp1251 re-save) become U+FFFD instead of failing
    text = Path(path).read_bytes().decode("utf-8", errors="replace")
    return parse_lookup_lines(split_lines(text))


def resolve_title(product_id: str, path, logger) -> str:
    # Unknown ids (or an unreadable file) fall back to the id itself.
    try:
        data = load_lookup(path)
    except OSError as e:
        logger.warning(f"Could not open lookup file {path}: {e}")
        return product_id
    return data.get(product_id, product_id)
