from __future__ import annotations

DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100


def normalize_paging(
    page: int | None,
    page_size: int | None,
    max_page_size: int = MAX_PAGE_SIZE,
) -> tuple[int, int]:
    p = page if page and page > 0 else 1
    ps = page_size if page_size and page_size > 0 else DEFAULT_PAGE_SIZE
    ps = min(ps, max_page_size)
    return p, ps


def paginate(rows: list, page: int, page_size: int) -> list:
    start = (page - 1) * page_size
    return rows[start:start + page_size]
