from app.domains.bottles.entities import Bottle, MUTABLE_FIELDS
from app.domains.bottles.schemas import (
    BottleCreate, BottleUpdate, BottleResponse, CellarStatsResponse
)
from app.domains.bottles.stats import CellarStats, compute_cellar_stats

__all__ = [
    "Bottle", "MUTABLE_FIELDS",
    "BottleCreate", "BottleUpdate", "BottleResponse", "CellarStatsResponse",
    "CellarStats", "compute_cellar_stats",
]
