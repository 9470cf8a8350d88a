"""Application service: List Payouts use case (admin query).

Filtering runs over the fully computed rows, not at the storage layer,
because the amounts need item-level attribution first.  Pagination is
applied after filtering.
"""

from __future__ import annotations

from dataclasses import dataclass

from settlement.application.access import Caller, Role, require_role
from settlement.application.dto import AdminPayoutDTO, PayoutPageDTO
from settlement.application.ledger_reader import LedgerReader
from settlement.application.pagination import normalize_paging, paginate
from settlement.domain.exceptions import ValidationError
from settlement.domain.repository.settings_repository import SettingsRepository

STATUS_FILTERS = ("all", "pending", "paid", "failed")


@dataclass(frozen=True)
class PayoutQuery:
    """Input: admin listing filters."""

    search: str | None = None
    store_name: str | None = None
    vendor_name: str | None = None
    status: str = "all"
    page: int | None = 1
    per_page: int | None = None


class ListPayoutsHandler:

    def __init__(self, reader: LedgerReader, settings_repo: SettingsRepository) -> None:
        self._reader = reader
        self._settings_repo = settings_repo

    def handle(self, caller: Caller, query: PayoutQuery | None = None) -> PayoutPageDTO:
        require_role(caller, Role.ADMIN)
        query = query or PayoutQuery()

        status = (query.status or "all").strip().lower()
        if status not in STATUS_FILTERS:
            raise ValidationError(
                f"Unknown status filter '{query.status}' "
                f"(expected one of {', '.join(STATUS_FILTERS)})"
            )

        rate = self._settings_repo.get().commission
        rows = [
            row
            for row in self._reader.all_payouts(rate)
            if _matches(row, query, status)
        ]

        page, per_page = normalize_paging(query.page, query.per_page)
        return PayoutPageDTO(
            payouts=paginate(rows, page, per_page),
            total=len(rows),
            page=page,
            per_page=per_page,
        )


def _contains(haystack: str, needle: str | None) -> bool:
    if not needle or not needle.strip():
        return True
    return needle.strip().lower() in haystack.lower()


def _matches(row: AdminPayoutDTO, query: PayoutQuery, status: str) -> bool:
    if status != "all" and row.payout_status != status:
        return False
    if query.search and query.search.strip():
        if not (_contains(row.store_name, query.search) or _contains(row.vendor_name, query.search)):
            return False
    return _contains(row.store_name, query.store_name) and _contains(
        row.vendor_name, query.vendor_name
    )
