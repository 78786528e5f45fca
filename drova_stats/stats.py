import json
from typing import Dict
import requests

from .models import BASE_URL, STATS_URL, MonthStat, ServerStat, Stat


def probe(session, base_url: str, logger, timeout: float = 30) -> None:
    """Unauthenticated GET against the service origin; only transport errors count."""
    try:
        session.get(base_url, timeout=timeout)
    except requests.RequestException as e:
        logger.error(f"Site {base_url} is unreachable: {e}")
        raise


def fetch_stats(session, auth_token: str, logger, url: str = STATS_URL,
                probe_url: str = BASE_URL, timeout: float = 30) -> str:
    """
    Return the raw statistics document as text.
    The origin is probed first; if it is unreachable the authenticated
    request is never sent. Every failure is logged and re-raised.
    """
    probe(session, probe_url, logger, timeout=timeout)
    try:
        r = session.get(url, headers={"X-Auth-Token": auth_token}, params={}, timeout=timeout)
        r.raise_for_status()
    except requests.HTTPError as e:
        logger.error(f"Statistics request rejected: {e}")
        raise
    except requests.RequestException as e:
        logger.error(f"Statistics request failed: {e}")
        raise
    return r.text


def _int(v) -> int:
    # bool is an int subclass; JSON true/false is not a count
    if isinstance(v, int) and not isinstance(v, bool):
        return v
    return 0

def _stat(d) -> Stat:
    if not isinstance(d, dict):
        return Stat()
    return Stat(session_count=_int(d.get("sessionCount")), total_msecs=_int(d.get("totalMsecs")))

def _per_game(d) -> Dict[str, Stat]:
    if not isinstance(d, dict):
        return {}
    return {str(k): _stat(v) for k, v in d.items()}

def decode_month_stat(body: str, logger) -> MonthStat:
    """
    Decode {"monthStat": {...}}. Anything that doesn't match degrades to zero
    values, so a bad document yields an empty report instead of an error.
    """
    try:
        doc = json.loads(body)
    except ValueError as e:
        logger.warning(f"Statistics response is not valid JSON: {e}")
        return MonthStat()
    if not isinstance(doc, dict):
        logger.warning(f"Statistics response is not a JSON object (got {type(doc).__name__})")
        return MonthStat()

    ms = doc.get("monthStat")
    if not isinstance(ms, dict):
        logger.warning("Statistics response has no monthStat object")
        return MonthStat()

    servers = {}
    raw_servers = ms.get("perServerStats")
    if isinstance(raw_servers, dict):
        for sid, s in raw_servers.items():
            s = s if isinstance(s, dict) else {}
            servers[str(sid)] = ServerStat(
                total_stat=_stat(s.get("totalStat")),
                per_game_stats=_per_game(s.get("perGameStats")),
            )

    return MonthStat(
        total_stat=_stat(ms.get("totalStat")),
        per_server_stats=servers,
        per_game_stats=_per_game(ms.get("perGameStats")),
    )
