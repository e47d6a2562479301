"""Unit tests for shared input normalization rules."""

from __future__ import annotations

import uuid

import pytest
from cook_service.services._shared.errors import InvalidInputError
from cook_service.services._shared.policies.common import (
    clean_optional,
    normalize_email,
    normalize_name,
    validate_cook_id,
    validate_menu_id,
)


@pytest.mark.parametrize("raw, expected", [(None, None), ("", None), ("  ", None), (" a ", "a")])
def test_clean_optional(raw, expected):
    assert clean_optional(raw) == expected


def test_normalize_email_lowercases_and_trims():
    assert normalize_email("  Chef@Example.COM ") == "chef@example.com"


@pytest.mark.parametrize("raw", [None, "", "chef", "chef@", "a b@example.com"])
def test_normalize_email_rejects_malformed(raw):
    with pytest.raises(InvalidInputError) as exc:
        normalize_email(raw)
    assert exc.value.field == "email"


def test_normalize_name_keeps_case():
    assert normalize_name("  Chef Ann ") == "Chef Ann"


def test_validate_cook_id_canonicalizes_uuid():
    value = uuid.uuid4()
    assert validate_cook_id(str(value).upper()) == str(value)


@pytest.mark.parametrize("raw", [None, "", "123", "not-a-uuid"])
def test_validate_cook_id_rejects_malformed(raw):
    with pytest.raises(InvalidInputError) as exc:
        validate_cook_id(raw)
    assert exc.value.field == "cook_id"


def test_validate_menu_id_bounds():
    assert validate_menu_id(" pad-thai ") == "pad-thai"
    assert validate_menu_id("x" * 64) == "x" * 64
    with pytest.raises(InvalidInputError):
        validate_menu_id("x" * 65)
