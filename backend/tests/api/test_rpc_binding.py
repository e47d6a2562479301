"""RPC binding: method dispatch, ``cookID`` metadata and canonical codes."""

from __future__ import annotations

import uuid

import pytest
from tests.helpers.assertions import assert_rpc_error

RPC = "/api/v1/rpc/CookService"


def _call(client, method: str, body: dict | None = None, cook_id: str | None = None):
    headers = {"cookID": cook_id} if cook_id else {}
    return client.post(f"{RPC}/{method}", json=body or {}, headers=headers)


@pytest.fixture()
def cook(client) -> dict:
    resp = _call(
        client,
        "VerifyCookDetails",
        {"name": "rpc-chef", "email": "rpc@example.com", "secret": "s3cret"},
    )
    assert resp.status_code == 200, resp.get_data(as_text=True)
    return resp.get_json()["profile"]


def test_verify_cook_details_creates_profile(cook):
    assert uuid.UUID(cook["id"])
    assert cook["email"] == "rpc@example.com"
    assert "secret" not in cook


def test_verify_cook_details_duplicate_is_already_exists(client, cook):
    resp = _call(
        client,
        "VerifyCookDetails",
        {"name": "rpc-chef", "email": "fresh@example.com", "secret": "x"},
    )
    assert_rpc_error(resp, 409, "ALREADY_EXISTS")


def test_verify_cook_details_invalid_body(client):
    error = assert_rpc_error(_call(client, "VerifyCookDetails", {"name": "x"}), 400, "INVALID_ARGUMENT")
    assert "email" in error["details"]


def test_view_and_update_profile(client, cook):
    viewed = _call(client, "ViewProfile", cook_id=cook["id"])
    assert viewed.get_json()["profile"] == cook

    updated = _call(client, "UpdateProfile", {"avatar": "a.png"}, cook_id=cook["id"])
    assert updated.status_code == 200
    assert updated.get_json()["profile"]["avatar"] == "a.png"


def test_missing_metadata_is_unauthenticated(client):
    assert_rpc_error(_call(client, "ViewProfile"), 401, "UNAUTHENTICATED")


def test_malformed_cook_id_is_invalid_argument(client):
    assert_rpc_error(_call(client, "ViewProfile", cook_id="abc"), 400, "INVALID_ARGUMENT")


def test_unknown_cook_is_not_found(client):
    assert_rpc_error(_call(client, "ViewProfile", cook_id=str(uuid.uuid4())), 404, "NOT_FOUND")


def test_favorite_methods(client, cook):
    cid = cook["id"]

    added = _call(client, "AddFavoriteMenu", {"menuId": "green-curry"}, cook_id=cid)
    assert [m["menuId"] for m in added.get_json()["favoriteMenus"]] == ["green-curry"]

    listed = _call(client, "GetFavoriteMenus", cook_id=cid)
    assert len(listed.get_json()["favoriteMenus"]) == 1

    removed = _call(client, "RemoveFavoriteMenu", {"menuId": "green-curry"}, cook_id=cid)
    assert removed.get_json()["favoriteMenus"] == []

    again = _call(client, "RemoveFavoriteMenu", {"menuId": "green-curry"}, cook_id=cid)
    assert again.status_code == 200


def test_add_unknown_menu_is_not_found(client, cook):
    resp = _call(client, "AddFavoriteMenu", {"menuId": "nope"}, cook_id=cook["id"])
    assert_rpc_error(resp, 404, "NOT_FOUND")


def test_unknown_method_is_unimplemented(client):
    assert_rpc_error(_call(client, "DeleteEverything"), 501, "UNIMPLEMENTED")


def test_internal_error_is_opaque(client, store, monkeypatch):
    from cook_service.services._shared.ports import StoreError

    def boom(*args, **kwargs):
        raise StoreError("secret connection string")

    monkeypatch.setattr(type(store), "find_cook_by_email", boom)

    resp = _call(
        client,
        "VerifyCookDetails",
        {"name": "n", "email": "n@example.com", "secret": "x"},
    )

    error = assert_rpc_error(resp, 500, "INTERNAL")
    assert "secret connection string" not in error["message"]
