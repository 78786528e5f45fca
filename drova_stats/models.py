from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional

BASE_URL = "https://services.drova.io"
CATALOG_URL = BASE_URL + "/product-manager/product/listfull2"
STATS_URL = BASE_URL + "/accounting/statistics/myserverusageprepared"

@dataclass
class Config:
    catalog_path: Path = Path("gamesID.txt")
    output_dir: Path = Path(".")
    log_dir: Optional[Path] = None    # None -> directory of the running program
    verbose: bool = True
    debug: bool = False

    base_url: str = BASE_URL
    catalog_url: str = CATALOG_URL
    stats_url: str = STATS_URL
    timeout: float = 30.0             # seconds, per request
    retries: int = 0                  # nothing is retried unless raised here

@dataclass
class Credentials:
    server_id: str
    auth_token: str

@dataclass
class CatalogEntry:
    product_id: str
    title: str

    def to_line(self) -> str:
        return f"{self.product_id} = {self.title}\n"

@dataclass
class Stat:
    session_count: int = 0
    total_msecs: int = 0

@dataclass
class ServerStat:
    total_stat: Stat = field(default_factory=Stat)
    per_game_stats: Dict[str, Stat] = field(default_factory=dict)

@dataclass
class MonthStat:
    total_stat: Stat = field(default_factory=Stat)
    per_server_stats: Dict[str, ServerStat] = field(default_factory=dict)
    per_game_stats: Dict[str, Stat] = field(default_factory=dict)

@dataclass
class ReportRow:
    product_id: str
    title: str
    session_count: int
    duration: str

    def cells(self) -> List[str]:
        return [self.title, str(self.session_count), self.duration]

@dataclass
class Timings:
    catalog: float = 0.0
    stats: float = 0.0
    report: float = 0.0
    total: float = 0.0

@dataclass
class Results:
    rows: List[ReportRow]
    out_path: Path
    month: MonthStat
    unresolved: List[str]
    timings: Timings
