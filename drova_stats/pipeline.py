import time
from datetime import datetime
from pathlib import Path
from typing import Optional
import requests

from .models import Config, Timings, Results
from .utils import http_session
from .config_store import ConfigStore, default_store, get_credentials
from .catalog import refresh_catalog
from .stats import fetch_stats
from .reporting import write_report


def output_csv_name(now: datetime) -> str:
    # creation timestamp only; the period itself is chosen by the server
    return f"game30day - {now.strftime('%d%m%Y-%H%M%S')}.csv"


def run_pipeline(cfg: Config, logger, store: Optional[ConfigStore] = None,
                 session: Optional[requests.Session] = None,
                 now: Optional[datetime] = None) -> Results:
    timings = Timings()
    if session is None:
        session = http_session(cfg.retries)
    if store is None:
        store = default_store(logger)

    total_t0 = time.perf_counter()

    # --- Stage 1: refresh id -> title cache (best effort) ---
    t0 = time.perf_counter()
    logger.info(f"Refreshing product catalog into {cfg.catalog_path}")
    if not refresh_catalog(session, cfg.catalog_path, logger, url=cfg.catalog_url, timeout=cfg.timeout):
        logger.warning(f"Catalog refresh failed; keeping existing {cfg.catalog_path}")
    timings.catalog = time.perf_counter() - t0

    # --- Stage 2: credentials + statistics ---
    creds = get_credentials(store, logger)

    t0 = time.perf_counter()
    try:
        body = fetch_stats(session, creds.auth_token, logger, url=cfg.stats_url,
                           probe_url=cfg.base_url, timeout=cfg.timeout)
    except requests.RequestException as e:
        logger.critical(f"Could not fetch statistics: {e}")
        raise SystemExit(f"Could not fetch statistics: {e}")
    timings.stats = time.perf_counter() - t0

    # --- Stage 3: CSV ---
    t0 = time.perf_counter()
    out_path = Path(cfg.output_dir) / output_csv_name(now or datetime.now())
    try:
        month, rows, unresolved = write_report(body, cfg.catalog_path, out_path, logger)
    except OSError as e:
        logger.critical(f"Failed to create file {out_path}: {e}")
        raise SystemExit(f"Failed to create file {out_path}: {e}")
    timings.report = time.perf_counter() - t0

    logger.info(f"Wrote {len(rows)} row(s) to {out_path}")
    timings.total = time.perf_counter() - total_t0

    return Results(
        rows=rows,
        out_path=out_path,
        month=month,
        unresolved=unresolved,
        timings=timings,
    )
