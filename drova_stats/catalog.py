import os, time
from pathlib import Path
from typing import List
import requests

from .models import CatalogEntry, CATALOG_URL

# Pause after a successful rewrite, once per run.
CATALOG_SETTLE_DELAY = 1.0


def _text(v) -> str:
    return "" if v is None else str(v)


def fetch_catalog(session, url: str = CATALOG_URL, timeout: float = 30) -> List[CatalogEntry]:
    """Download the full product list. Raises on transport, HTTP or decode errors."""
    r = session.get(url, timeout=timeout)
    r.raise_for_status()
    data = r.json()
    if not isinstance(data, list):
        raise ValueError(f"catalog is not a JSON array (got {type(data).__name__})")
    entries = []
    for i, item in enumerate(data):
        if not isinstance(item, dict):
            raise ValueError(f"catalog item {i} is not an object: {item!r}")
        entries.append(CatalogEntry(
            product_id=_text(item.get("productId")),
            title=_text(item.get("title")),
        ))
    return entries


def refresh_catalog(session, output_path: Path, logger,
                    url: str = CATALOG_URL, timeout: float = 30) -> bool:
    """
    Rewrite output_path with one 'id = title' line per catalog entry.
    Best effort: on any failure the existing file is left untouched and False is returned.
    """
    output_path = Path(output_path)
    try:
        entries = fetch_catalog(session, url, timeout=timeout)
    except requests.RequestException as e:
        logger.error(f"Catalog request failed: {e}")
        return False
    except ValueError as e:
        logger.error(f"Catalog response could not be parsed: {e}")
        return False

    tmp_path = output_path.with_name(output_path.name + ".tmp")
    try:
        with tmp_path.open("w", encoding="utf-8", newline="") as f:
            for entry in entries:
                f.write(entry.to_line())
        os.replace(tmp_path, output_path)
    except OSError as e:
        logger.error(f"Failed to write {output_path}: {e}")
        tmp_path.unlink(missing_ok=True)
        return False

    logger.info(f"Catalog refreshed: {len(entries)} products → {output_path}")
    time.sleep(CATALOG_SETTLE_DELAY)
    return True
