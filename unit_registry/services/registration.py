# unit_registry/services/registration.py
"""
Registration-number allocation for vehicles.

Auto mode reads the current maximum (descending order, limit 1) and hands
out max + 1, or REGISTRATION_SEED on an empty collection. Manual mode takes
a number registered elsewhere. Nothing is reserved: two auto submissions
running at the same time can be given the same number.
"""

from typing import Optional

from unit_registry.config import settings
from unit_registry.errors import RecordValidationError
from unit_registry.services.query import Constraint, Op
from unit_registry.services.store import RecordStore


def last_registration_number(store: RecordStore) -> Optional[int]:
    latest = store.find([Constraint("registration_number", Op.ORDER_DESC)], limit=1)
    return latest[0].registration_number if latest else None


def next_registration_number(store: RecordStore) -> int:
    last = last_registration_number(store)
    return settings.REGISTRATION_SEED if last is None else last + 1


def parse_external_registration(raw: Optional[str]) -> int:
    """Validate a manually supplied number; each failure has its own message."""
    if raw is None or not str(raw).strip():
        raise RecordValidationError("Por favor, insira um número de registro")
    try:
        number = int(str(raw).strip())
    except ValueError:
        raise RecordValidationError("O número de registro deve ser um número válido")
    if number <= 0:
        raise RecordValidationError("O número de registro deve ser maior que zero")
    return number


def is_external_registration(number: int, store: RecordStore) -> bool:
    """Numbers well below the running sequence were entered manually."""
    last = last_registration_number(store)
    reference = settings.REGISTRATION_SEED - 1 if last is None else last
    return number < reference - settings.EXTERNAL_REGISTRATION_GAP


class RegistrationAllocation:
    """
    Registration mode for one form submission. The mode is fixed at
    construction, so switching modes means a new allocation with no value
    carried over from the previous one.
    """

    def __init__(self, manual: bool = False, external_number: Optional[str] = None):
        self.manual = manual
        self.external_number = external_number
        self.value: Optional[int] = None

    def resolve(self, store: RecordStore, current: Optional[int] = None) -> int:
        """
        Manual: parse the supplied number. Auto: keep `current` when editing an
        existing vehicle, otherwise allocate the next number in the sequence.
        """
        if self.manual:
            self.value = parse_external_registration(self.external_number)
        elif current is not None:
            self.value = current
        else:
            self.value = next_registration_number(store)
        return self.value
