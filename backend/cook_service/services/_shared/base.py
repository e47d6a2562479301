# cook_service/services/_shared/base.py
from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import TypeVar

from cook_service.services._shared.errors import (
    ConflictError,
    InternalError,
    ServiceError,
)
from cook_service.services._shared.ports import (
    CookStore,
    CredentialHasher,
    DuplicateKeyError,
    HashingError,
    StoreError,
)

T = TypeVar("T")

log = logging.getLogger(__name__)


@dataclass(slots=True)
class ServiceContext:
    """
    Carry cross-cutting request-scoped data.

    :param request_id: Correlation id for logging/tracing.
    :param transport: Binding that received the call (``"http"`` or ``"rpc"``).
    """

    request_id: str | None = None
    transport: str | None = None


class BaseService:
    """
    Base class for application services.

    Responsibilities
    ----------------
    * Hold the storage port and credential hasher selected at startup.
    * Classify store and hashing failures into the service error taxonomy.
    * Keep services thin, orchestration-only, no web/ORM leakage.

    Notes
    -----
    - Services never branch on the storage backend; they only talk to the
      :class:`CookStore` port.
    - Store errors are never swallowed: duplicates become ``ConflictError``,
      anything else ``InternalError``.
    """

    entity = "Cook"

    def __init__(
        self,
        store: CookStore,
        hasher: CredentialHasher | None = None,
        *,
        ctx: ServiceContext | None = None,
    ) -> None:
        """
        Initialize the base service.

        :param store: Storage port implementation.
        :type store: CookStore
        :param hasher: Credential hasher, required by identity operations.
        :type hasher: CredentialHasher | None
        :param ctx: Optional request-scoped context.
        :type ctx: ServiceContext | None
        """
        self.store = store
        self.hasher = hasher
        self.ctx = ctx or ServiceContext()

    # -------------------------- Error handling ------------------------------

    def guarded(self, fn: Callable[[], T]) -> T:
        """
        Run a store/hasher call and classify its failures.

        :param fn: Zero-argument callable touching infrastructure.
        :returns: Result of ``fn``.
        :raises ConflictError: On :class:`DuplicateKeyError`.
        :raises InternalError: On any other store or hashing failure.
        """
        try:
            return fn()
        except (StoreError, HashingError) as exc:
            raise self.classify(exc) from exc

    def classify(self, exc: StoreError | HashingError) -> ServiceError:
        """
        Translate an infrastructure failure into the service taxonomy.

        :param exc: Store or hashing exception.
        :returns: ``ConflictError`` for duplicates, ``InternalError`` otherwise.
        """
        if isinstance(exc, DuplicateKeyError):
            return ConflictError(self.entity, f"{exc.field} already in use")
        if isinstance(exc, HashingError):
            log.error("hashing failure: %s", exc)
            return InternalError(f"hashing failure: {exc}")
        log.error("store failure: %s", exc, extra={"backend": self.backend})
        return InternalError(f"store failure: {exc}")

    @property
    def backend(self) -> str:
        return getattr(self.store, "backend", "unknown")

    def log_event(self, event: str, **fields: object) -> None:
        """Log a state transition at INFO with structured fields."""
        logging.getLogger(type(self).__module__).info(
            event,
            extra={
                "event": event,
                "backend": self.backend,
                "transport": self.ctx.transport,
                **fields,
            },
        )
