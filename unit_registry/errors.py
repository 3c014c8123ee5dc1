# unit_registry/errors.py
"""
Domain exceptions. Services raise these; main.py turns any RegistryError
into a {"detail": message} response at the endpoint that started the operation.
"""


class RegistryError(Exception):
    status_code = 500

    def __init__(self, message: str, status_code: int = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class RecordValidationError(RegistryError):
    """Malformed or missing input, caught before any write."""
    status_code = 400


class RecordNotFound(RegistryError):
    status_code = 404


class StoreAccessError(RegistryError):
    """Read or write against the store failed."""
    status_code = 503


class ReportExportError(RegistryError):
    """PDF or chart rendering failed."""
    status_code = 500


class AssistantError(RegistryError):
    status_code = 502
