#!/usr/bin/env python3
import logging
from .models import Config
from .utils import setup_logger, resolve_app_dir
from .pipeline import run_pipeline
from .reporting import print_report

def main():
    cfg = Config()
    try:
        log_dir = cfg.log_dir or resolve_app_dir()
    except OSError as e:
        raise SystemExit(f"Failed to resolve program directory: {e}")
    try:
        logger = setup_logger(log_dir / "errors.log", verbose=cfg.verbose, debug=cfg.debug)
    except OSError as e:
        raise SystemExit(f"Failed to open log file in {log_dir}: {e}")
    try:
        res = run_pipeline(cfg, logger)
    finally:
        logging.shutdown()
    print_report(res)

if __name__ == "__main__":
    main()
