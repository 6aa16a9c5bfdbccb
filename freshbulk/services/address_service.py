# freshbulk/services/address_service.py
from typing import List

from freshbulk.domain.schemas import AddressCreate, AddressUpdate, AddressOut, UserOut
from freshbulk.repos.storage import Storage
from freshbulk.utils.logging import get_logger

logger = get_logger(__name__)


class AddressService:
    """
    Adresy dostawy klientow.
    Tu jest tylko autoryzacja (admin albo wlasciciel emaila),
    pilnowanie jednego domyslnego adresu robi store.
    """

    def __init__(self, storage: Storage):
        self.storage = storage

    @staticmethod
    def _check_owner(user: UserOut, email: str) -> None:
        if not user.is_admin and user.email != email:
            raise PermissionError("Brak dostępu do adresów tego klienta")

    def _get_owned(self, address_id: int, user: UserOut) -> AddressOut | None:
        address = self.storage.get_address(address_id)
        if address:
            self._check_owner(user, address.customer_email)
        return address

    #query
    def list_addresses(self, user: UserOut, email: str | None = None) -> List[AddressOut]:
        if email:
            self._check_owner(user, email)
            return self.storage.get_addresses_by_email(email)

        if not user.is_admin:
            raise PermissionError("Wymagane uprawnienia administratora")

        return self.storage.get_all_addresses()

    def get_address(self, address_id: int, user: UserOut) -> AddressOut | None:
        return self._get_owned(address_id, user)

    #commands
    def create_address(self, payload: AddressCreate, user: UserOut) -> AddressOut:
        self._check_owner(user, payload.customer_email)

        address = self.storage.create_address(payload)
        logger.info(
            f"Utworzono adres {address.id} dla {address.customer_email} (domyslny: {address.is_default})"
        )
        return address

    def update_address(self, address_id: int, payload: AddressUpdate, user: UserOut) -> AddressOut | None:
        if not self._get_owned(address_id, user):
            return None

        address = self.storage.update_address(address_id, payload)
        logger.info(f"Zaktualizowano adres {address_id}")
        return address

    def delete_address(self, address_id: int, user: UserOut) -> bool:
        if not self._get_owned(address_id, user):
            return False

        deleted = self.storage.delete_address(address_id)
        logger.info(f"Usunieto adres {address_id}")
        return deleted

    def set_default_address(self, address_id: int, user: UserOut) -> AddressOut | None:
        if not self._get_owned(address_id, user):
            return None

        address = self.storage.set_default_address(address_id)
        logger.info(f"Adres {address_id} ustawiony jako domyslny")
        return address
