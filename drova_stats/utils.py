import logging, sys
from pathlib import Path
from typing import Optional
import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry


UA = "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/124.0.0.0 Safari/537.36"
LOG_FORMAT = "%(asctime)s | %(levelname)-7s | %(message)s"

def setup_logger(log_path: Optional[Path] = None, verbose: bool=False, debug: bool=False) -> logging.Logger:
    """
    Console handler at WARNING/INFO/DEBUG, plus an append-mode file handler at
    WARNING when log_path is given. The file stays open until logging.shutdown().
    Raises OSError if the log file cannot be opened.
    """
    level = logging.WARNING
    if verbose: level = logging.INFO
    if debug:   level = logging.DEBUG

    handlers = [logging.StreamHandler()]
    handlers[0].setLevel(level)
    if log_path is not None:
        fh = logging.FileHandler(log_path, mode="a", encoding="utf-8")
        fh.setLevel(logging.WARNING)
        handlers.append(fh)

    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        datefmt="%H:%M:%S",
        handlers=handlers,
        force=True,
    )
    return logging.getLogger("drova_stats")

def http_session(retries: int = 0) -> requests.Session:
    s = requests.Session()
    s.headers.update({
        "User-Agent": UA,
        "Accept": "application/json, text/plain;q=0.9, */*;q=0.8",
        "Connection": "keep-alive",
    })
    retry = Retry(total=retries, backoff_factor=0.5,
                  status_forcelist=(500, 502, 503, 504),
                  allowed_methods=["GET","HEAD"],
                  raise_on_status=False)
    adapter = HTTPAdapter(max_retries=retry)
    s.mount("https://", adapter)
    s.mount("http://", adapter)
    return s

def resolve_app_dir(argv0: Optional[str] = None) -> Path:
    """Directory holding the running program (errors.log lives there)."""
    if argv0 is None:
        argv0 = sys.argv[0]
    return Path(argv0).resolve().parent
