"""
IdentityService
===============

Aggregate service responsible for the cook profile:
- Local registration with a hashed secret
- External identity resolution and linking
- Profile view and partial update
- Credential verification (no token issuance)
"""

from __future__ import annotations

from cook_service.services._shared.base import BaseService, ServiceContext
from cook_service.services._shared.errors import (
    ConflictError,
    InvalidInputError,
    NotFoundError,
    UnauthorizedError,
)
from cook_service.services._shared.policies.common import (
    MAX_NAME_LENGTH,
    clean_optional,
    normalize_email,
    normalize_name,
    validate_cook_id,
)
from cook_service.services._shared.ports import (
    EXTERNAL_MARKER_PREFIX,
    CookRecord,
    CookStore,
    CredentialHasher,
    DuplicateKeyError,
    StoreError,
)
from cook_service.services.identity.dto import (
    CookAuthIn,
    CookPublicOut,
    CookRegisterIn,
    CookUpdateIn,
    ExternalIdentityIn,
)

NAME_TAG_LENGTH = 6


class IdentityService(BaseService):
    """
    Application service for the cook profile.

    Responsibilities
    ----------------
    - Register cooks ensuring email and name uniqueness.
    - Resolve or link external identities without ever creating duplicates.
    - Retrieve and partially update profiles.
    - Verify locally registered credentials.
    """

    def __init__(
        self,
        store: CookStore,
        hasher: CredentialHasher,
        *,
        ctx: ServiceContext | None = None,
    ) -> None:
        super().__init__(store, hasher, ctx=ctx)
        self.hasher: CredentialHasher = hasher

    # --------------------------------------------------------------------- #
    # Registration
    # --------------------------------------------------------------------- #

    def register(self, dto: CookRegisterIn) -> CookPublicOut:
        """
        Register a new cook.

        :param dto: Registration input DTO.
        :type dto: CookRegisterIn
        :returns: Public-safe profile DTO.
        :rtype: CookPublicOut
        :raises InvalidInputError: When name, email or secret is missing.
        :raises ConflictError: When the email OR the name is already taken.
        """
        name = normalize_name(dto.name)
        email = normalize_email(dto.email)
        if not dto.secret:
            raise InvalidInputError("is required", field="secret")
        avatar = clean_optional(dto.avatar)

        # Cheap checks before hashing; the store re-checks atomically.
        if self.guarded(lambda: self.store.find_cook_by_email(email)) is not None:
            raise ConflictError(self.entity, "email already in use")
        if self.guarded(lambda: self.store.find_cook_by_name(name)) is not None:
            raise ConflictError(self.entity, "name already in use")

        hashed = self.guarded(lambda: self.hasher.hash_secret(dto.secret))
        cook = self.guarded(
            lambda: self.store.insert_cook(name=name, email=email, secret=hashed, avatar=avatar)
        )
        self.log_event("cook.registered", cook_id=cook.id)
        return CookPublicOut.from_record(cook)

    # --------------------------------------------------------------------- #
    # External identity
    # --------------------------------------------------------------------- #

    def resolve_or_link_external(self, dto: ExternalIdentityIn) -> CookPublicOut:
        """
        Return the profile bound to an external subject id, creating it if needed.

        Resolution order:

        1. a profile already carrying the subject's marker is returned as is;
        2. a profile with the same email is returned; when it already carries
           a marker that marker is replaced (provider id rotation), while a
           locally registered hash is left untouched;
        3. otherwise a profile is created; a taken name is suffixed with a
           short tag derived from the marker.

        A lost insert race is resolved by re-reading the winner.

        :param dto: External identity input DTO.
        :type dto: ExternalIdentityIn
        :returns: Public-safe profile DTO.
        :rtype: CookPublicOut
        """
        subject_id = clean_optional(dto.external_subject_id)
        if subject_id is None:
            raise InvalidInputError("is required", field="external_subject_id")
        name = normalize_name(dto.name)
        email = normalize_email(dto.email)
        avatar = clean_optional(dto.avatar)

        marker = self.guarded(lambda: self.hasher.external_marker(subject_id))
        existing = self._lookup_external(marker, email)
        if existing is not None:
            return CookPublicOut.from_record(existing)

        tagged = self.tagged_name(name, marker)
        name_taken = self.guarded(lambda: self.store.find_cook_by_name(name)) is not None
        candidates = [tagged] if name_taken else [name, tagged]

        for candidate in candidates:
            try:
                cook = self.store.insert_cook(
                    name=candidate, email=email, secret=marker, avatar=avatar
                )
            except DuplicateKeyError as exc:
                winner = self._lookup_external(marker, email)
                if winner is not None:
                    return CookPublicOut.from_record(winner)
                if exc.field != "name":
                    raise self.classify(exc) from exc
                continue
            except StoreError as exc:
                raise self.classify(exc) from exc

            self.log_event("cook.external_created", cook_id=cook.id)
            return CookPublicOut.from_record(cook)

        raise ConflictError(self.entity, "name already in use")

    @staticmethod
    def tagged_name(name: str, marker: str) -> str:
        """Return ``name`` suffixed with a short deterministic tag of ``marker``.

        The base name is shortened so the result never exceeds
        ``MAX_NAME_LENGTH``.
        """
        digest = marker.rsplit("$", 1)[-1]
        base = name[: MAX_NAME_LENGTH - NAME_TAG_LENGTH - 1].rstrip()
        return f"{base}-{digest[:NAME_TAG_LENGTH]}"

    def _lookup_external(self, marker: str, email: str) -> CookRecord | None:
        cook = self.guarded(lambda: self.store.find_cook_by_secret(marker))
        if cook is not None:
            self.log_event("cook.external_resolved", cook_id=cook.id)
            return cook

        by_email = self.guarded(lambda: self.store.find_cook_by_email(email))
        if by_email is None:
            return None
        if not by_email.secret.startswith(EXTERNAL_MARKER_PREFIX):
            # Local password profiles keep their hash
            self.log_event("cook.external_resolved", cook_id=by_email.id)
            return by_email

        linked = self.guarded(lambda: self.store.update_cook(by_email.id, {"secret": marker}))
        if linked is not None:
            self.log_event("cook.external_linked", cook_id=linked.id)
        return linked

    # --------------------------------------------------------------------- #
    # Retrieval
    # --------------------------------------------------------------------- #

    def view_profile(self, cook_id: str) -> CookPublicOut:
        """
        Retrieve the caller's own profile.

        :param cook_id: Resolved caller identity.
        :type cook_id: str
        :returns: Public-safe profile DTO.
        :rtype: CookPublicOut
        :raises NotFoundError: If the cook does not exist.
        """
        cook_id = validate_cook_id(cook_id)
        cook = self.guarded(lambda: self.store.get_cook(cook_id))
        if cook is None:
            raise NotFoundError(self.entity, cook_id)
        return CookPublicOut.from_record(cook)

    # --------------------------------------------------------------------- #
    # Update
    # --------------------------------------------------------------------- #

    def update_profile(self, cook_id: str, dto: CookUpdateIn) -> CookPublicOut:
        """
        Partially update the caller's profile.

        Only present, non-blank fields change. Name and email uniqueness is
        re-checked against every other profile inside the store's atomic write.

        :param cook_id: Resolved caller identity.
        :type cook_id: str
        :param dto: Patch with optional ``name``, ``email`` and ``avatar``.
        :type dto: CookUpdateIn
        :returns: Updated profile DTO.
        :rtype: CookPublicOut
        :raises NotFoundError: When the cook does not exist.
        :raises ConflictError: When a changed name or email is taken.
        """
        cook_id = validate_cook_id(cook_id)

        changes: dict[str, str | None] = {}
        name = clean_optional(dto.name)
        if name is not None:
            changes["name"] = name
        if clean_optional(dto.email) is not None:
            changes["email"] = normalize_email(dto.email)
        avatar = clean_optional(dto.avatar)
        if avatar is not None:
            changes["avatar"] = avatar

        if not changes:
            return self.view_profile(cook_id)

        cook = self.guarded(lambda: self.store.update_cook(cook_id, changes))
        if cook is None:
            raise NotFoundError(self.entity, cook_id)
        self.log_event("cook.updated", cook_id=cook.id)
        return CookPublicOut.from_record(cook)

    # --------------------------------------------------------------------- #
    # Authentication
    # --------------------------------------------------------------------- #

    def authenticate(self, dto: CookAuthIn) -> CookPublicOut:
        """
        Verify a locally registered secret.

        :param dto: Authentication input DTO.
        :type dto: CookAuthIn
        :returns: Authenticated profile.
        :rtype: CookPublicOut
        :raises UnauthorizedError: On unknown email or secret mismatch.
        """
        email = normalize_email(dto.email)
        cook = self.guarded(lambda: self.store.find_cook_by_email(email))
        if cook is None or not self.hasher.verify_secret(dto.secret, cook.secret):
            raise UnauthorizedError()
        return CookPublicOut.from_record(cook)
