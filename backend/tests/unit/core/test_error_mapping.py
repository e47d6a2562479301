"""Service errors are classified by class, never by message text."""

from __future__ import annotations

import pytest
from cook_service.api.v1.rpc import rpc_code
from cook_service.core.errors import service_error_status
from cook_service.services._shared.base import BaseService
from cook_service.services._shared.errors import (
    ConflictError,
    InternalError,
    InvalidInputError,
    NotFoundError,
    ServiceError,
    UnauthorizedError,
)
from cook_service.services._shared.ports import DuplicateKeyError, HashingError, StoreError


@pytest.mark.parametrize(
    "exc, status, http_code, rpc",
    [
        (InvalidInputError("bad"), 400, "invalid_input", "INVALID_ARGUMENT"),
        (UnauthorizedError(), 401, "unauthorized", "UNAUTHENTICATED"),
        (NotFoundError("Cook", "x"), 404, "not_found", "NOT_FOUND"),
        (ConflictError("Cook", "email already in use"), 409, "conflict", "ALREADY_EXISTS"),
        (InternalError("boom"), 500, "internal_server_error", "INTERNAL"),
        (ServiceError("unknown"), 500, "internal_server_error", "INTERNAL"),
    ],
)
def test_transport_codes(exc, status, http_code, rpc):
    assert service_error_status(exc) == (status, http_code)
    assert rpc_code(exc) == (rpc, status)


def test_conflict_message_does_not_drive_classification():
    exc = ConflictError("Cook", "not found")
    assert service_error_status(exc)[0] == 409


class TestClassify:
    @pytest.fixture()
    def service(self, redis_store) -> BaseService:
        return BaseService(redis_store)

    def test_duplicate_becomes_conflict(self, service):
        err = service.classify(DuplicateKeyError("email"))
        assert isinstance(err, ConflictError)
        assert err.detail == "email already in use"

    @pytest.mark.parametrize("exc", [StoreError("timeout"), HashingError("bad method")])
    def test_other_failures_become_internal(self, service, exc):
        assert isinstance(service.classify(exc), InternalError)

    def test_guarded_propagates_classified_error(self, service):
        def fail():
            raise StoreError("connection reset")

        with pytest.raises(InternalError) as exc:
            service.guarded(fail)
        assert isinstance(exc.value.__cause__, StoreError)
