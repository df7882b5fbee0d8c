"""Сводные показатели погреба для дашборда.

Чистая функция над коллекцией бутылок пользователя: сервис только
загружает бутылки, а подсчёт живёт здесь.
"""
from dataclasses import dataclass
from datetime import date
from typing import Iterable, Optional

from app.domains.bottles.entities import Bottle

IN_CELLAR = "in-cellar"
PENDING = "pending"
CONSUMED = "consumed"

STATUS_ALIASES = {
    "in-cellar": IN_CELLAR,
    "cellar": IN_CELLAR,
    "stored": IN_CELLAR,
    "pending": PENDING,
    "ordered": PENDING,
    "consumed": CONSUMED,
    "drunk": CONSUMED,
}


@dataclass
class CellarStats:
    wine_in_cellar: int = 0
    wine_pending: int = 0
    wine_consumed: int = 0
    wine_purchased: int = 0
    ready_to_drink: int = 0
    total_value: float = 0.0


def normalize_status(status: Optional[str]) -> Optional[str]:
    """Приведение произвольной метки статуса к одной из известных"""
    if not status:
        return None
    key = "-".join(status.strip().lower().replace("_", " ").split())
    return STATUS_ALIASES.get(key)


def bottle_quantity(bottle: Bottle) -> int:
    # Запись без количества считается одной бутылкой
    return 1 if bottle.count is None else bottle.count


def compute_cellar_stats(
    bottles: Iterable[Bottle],
    ready_to_drink_years: int,
    today: Optional[date] = None
) -> CellarStats:
    """Подсчёт показателей дашборда по бутылкам пользователя"""
    current_year = (today or date.today()).year
    stats = CellarStats()
    
    for bottle in bottles:
        quantity = bottle_quantity(bottle)
        status = normalize_status(bottle.status)
        stats.wine_purchased += quantity
        
        if status == PENDING:
            stats.wine_pending += quantity
        elif status == CONSUMED:
            stats.wine_consumed += quantity
        elif status == IN_CELLAR:
            stats.wine_in_cellar += quantity
            if bottle.vintage and current_year - bottle.vintage >= ready_to_drink_years:
                stats.ready_to_drink += quantity
            unit_price = bottle.price if bottle.price is not None else bottle.cost_per_bottle
            if unit_price:
                stats.total_value += quantity * unit_price
    
    stats.total_value = round(stats.total_value, 2)
    return stats
