"""
DTOs for IdentityService.

Data Transfer Objects (DTOs) isolate the service layer from storage records
and transports, ensuring clear input/output contracts and type safety.
"""

from __future__ import annotations

from dataclasses import dataclass

from cook_service.services._shared.ports import CookRecord

# --------------------------------------------------------------------------- #
# Input DTOs
# --------------------------------------------------------------------------- #


@dataclass(frozen=True, slots=True)
class CookRegisterIn:
    """
    Input DTO for local registration.

    :param name: Display name (trimmed, must be unique).
    :type name: str
    :param email: Contact email (normalized to lowercase, must be unique).
    :type email: str
    :param secret: Raw secret to be hashed before storage.
    :type secret: str
    :param avatar: Optional avatar reference.
    :type avatar: str | None
    """

    name: str
    email: str
    secret: str
    avatar: str | None = None


@dataclass(frozen=True, slots=True)
class ExternalIdentityIn:
    """
    Input DTO for external sign-in.

    :param external_subject_id: Subject id asserted by the identity provider.
    :type external_subject_id: str
    :param name: Requested display name.
    :type name: str
    :param email: Email asserted by the provider.
    :type email: str
    :param avatar: Optional avatar reference.
    :type avatar: str | None
    """

    external_subject_id: str
    name: str
    email: str
    avatar: str | None = None


@dataclass(frozen=True, slots=True)
class CookUpdateIn:
    """
    Input DTO for a partial profile update.

    Missing or blank fields are left untouched.
    """

    name: str | None = None
    email: str | None = None
    avatar: str | None = None


@dataclass(frozen=True, slots=True)
class CookAuthIn:
    """Input DTO for local credential verification."""

    email: str
    secret: str


# --------------------------------------------------------------------------- #
# Output DTOs
# --------------------------------------------------------------------------- #


@dataclass(frozen=True, slots=True)
class CookPublicOut:
    """
    Output DTO representing public-safe profile data (never the secret).

    :param id: Cook identifier.
    :type id: str
    :param name: Display name.
    :type name: str
    :param email: Email address.
    :type email: str
    :param avatar: Optional avatar reference.
    :type avatar: str | None
    """

    id: str
    name: str
    email: str
    avatar: str | None

    @classmethod
    def from_record(cls, record: CookRecord) -> CookPublicOut:
        return cls(id=record.id, name=record.name, email=record.email, avatar=record.avatar)
