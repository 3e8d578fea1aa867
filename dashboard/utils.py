# dashboard/utils.py

from decimal import Decimal
from typing import List, Optional, Union


def format_currency(amount: Optional[Union[int, str, Decimal]]) -> str:
    """
    Format an amount stored in cents as US dollars, e.g. 123456 -> "$1,234.56".

    Aggregates can come back as None or as numeric strings; None counts as 0.
    """
    value = Decimal(amount if amount is not None else 0) / 100
    sign = "-" if value < 0 else ""
    return f"{sign}${abs(value):,.2f}"


def generate_pagination(current_page: int, total_pages: int) -> List[Union[int, str]]:
    """
    Page links to render under a paginated table.

    Up to 7 pages are all shown; beyond that the first and last pages are kept
    and the gaps are collapsed into "...".
    """
    if total_pages <= 7:
        return list(range(1, total_pages + 1))

    if current_page <= 3:
        return [1, 2, 3, "...", total_pages - 1, total_pages]

    if current_page >= total_pages - 2:
        return [1, 2, "...", total_pages - 2, total_pages - 1, total_pages]

    return [
        1,
        "...",
        current_page - 1,
        current_page,
        current_page + 1,
        "...",
        total_pages,
    ]
