"""Application service: Show Vendor Payouts use case (query).

Returns the vendor's pending payouts and received payout history.
"""

from __future__ import annotations

from settlement.application.access import Caller, Role, require_role
from settlement.application.dto import VendorPayoutsDTO
from settlement.application.ledger_reader import LedgerReader
from settlement.domain.exceptions import AuthorizationError, EntityNotFoundError, ValidationError
from settlement.domain.repository.settings_repository import SettingsRepository
from settlement.domain.repository.store_repository import VendorRepository


class ShowVendorPayoutsHandler:

    def __init__(
        self,
        reader: LedgerReader,
        vendor_repo: VendorRepository,
        settings_repo: SettingsRepository,
    ) -> None:
        self._reader = reader
        self._vendor_repo = vendor_repo
        self._settings_repo = settings_repo

    def handle(self, caller: Caller, vendor_id: str | None = None) -> VendorPayoutsDTO:
        """Vendors see their own payouts; admins name the vendor to inspect."""
        require_role(caller, Role.VENDOR, Role.ADMIN)
        vendor_id = self._resolve_vendor_id(caller, vendor_id)

        rate = self._settings_repo.get().commission
        return VendorPayoutsDTO(
            pending=self._reader.pending(vendor_id, rate),
            received=self._reader.received(vendor_id),
        )

    def _resolve_vendor_id(self, caller: Caller, vendor_id: str | None) -> str:
        if caller.is_admin:
            if not vendor_id:
                raise ValidationError("A vendor ID is required")
            if self._vendor_repo.get_by_id(vendor_id) is None:
                raise EntityNotFoundError(f"Vendor '{vendor_id}' not found")
            return vendor_id

        vendor = self._vendor_repo.get_by_user_id(caller.user_id)
        if vendor is None:
            raise EntityNotFoundError("Vendor profile not found")
        if vendor_id and vendor_id != vendor.id:
            raise AuthorizationError("Vendors can only view their own payouts")
        return vendor.id
