# tests/test_store_errors.py
from sqlalchemy.exc import DBAPIError, OperationalError

from tourlead.core.exceptions import PermissionDeniedError, PersistenceError
from tourlead.db.errors import translate_store_error


class _DriverError(Exception):
    def __init__(self, message, sqlstate=None):
        super().__init__(message)
        self.sqlstate = sqlstate


def test_insufficient_privilege_maps_to_permission_denied():
    exc = DBAPIError("INSERT INTO commitments ...", {}, _DriverError("permission denied", sqlstate="42501"))

    error = translate_store_error(exc, "create_commitment")

    assert isinstance(error, PermissionDeniedError)
    assert isinstance(error, PersistenceError)
    assert error.code == "permission_denied"
    assert error.details["operation"] == "create_commitment"


def test_other_driver_errors_map_to_persistence_error():
    exc = OperationalError("UPDATE offers ...", {}, _DriverError("connection reset", sqlstate="08006"))

    error = translate_store_error(exc, "transition_offer")

    assert type(error) is PersistenceError
    assert error.code == "store_error"
    assert error.message == "Store operation failed: transition_offer"
