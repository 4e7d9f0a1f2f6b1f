"""AccountService: registration, login and lookup.

Invariants:
    - Blank or duplicate usernames and short passwords raise ValidationError
    - Wrong password and unknown username are indistinguishable (None)
    - get_account_by_id never raises; storage failures read as absent
"""

import pytest

from social_media_api.app.core.config import settings
from social_media_api.app.core.errors import StorageError, ValidationError
from social_media_api.app.schemas.account import AccountCreate
from social_media_api.app.services.account_service import AccountService


async def test_create_account_returns_generated_id():
    created = await AccountService.create_account(AccountCreate(username="bob", password="pw1"))
    assert created.account_id > 0
    assert created.username == "bob"
    assert created.password == "pw1"


async def test_create_account_ids_are_unique():
    first = await AccountService.create_account(AccountCreate(username="bob", password="pw1"))
    second = await AccountService.create_account(AccountCreate(username="carol", password="pw2"))
    assert first.account_id != second.account_id


@pytest.mark.parametrize("username", [None, "", "   "])
async def test_blank_username_rejected(username):
    with pytest.raises(ValidationError):
        await AccountService.create_account(AccountCreate(username=username, password="pw1"))


async def test_duplicate_username_rejected():
    await AccountService.create_account(AccountCreate(username="bob", password="pw1"))
    with pytest.raises(ValidationError):
        await AccountService.create_account(AccountCreate(username="bob", password="other"))


@pytest.mark.parametrize("password", [None, "", "pw"])
async def test_short_password_rejected(password):
    with pytest.raises(ValidationError):
        await AccountService.create_account(AccountCreate(username="bob", password=password))


async def test_minimum_password_length_is_configurable(monkeypatch):
    monkeypatch.setattr(settings, "min_password_length", 8)
    with pytest.raises(ValidationError):
        await AccountService.create_account(AccountCreate(username="bob", password="pw1"))
    created = await AccountService.create_account(AccountCreate(username="bob", password="longenough"))
    assert created.username == "bob"


async def test_create_account_storage_failure(drop_table):
    drop_table("account")
    with pytest.raises(StorageError):
        await AccountService.create_account(AccountCreate(username="bob", password="pw1"))


async def test_validate_login_matches():
    created = await AccountService.create_account(AccountCreate(username="bob", password="pw1"))
    found = await AccountService.validate_login(AccountCreate(username="bob", password="pw1"))
    assert found == created


async def test_wrong_password_same_as_unknown_user():
    await AccountService.create_account(AccountCreate(username="bob", password="pw1"))
    wrong_password = await AccountService.validate_login(AccountCreate(username="bob", password="nope"))
    unknown_user = await AccountService.validate_login(AccountCreate(username="nobody", password="pw1"))
    assert wrong_password is None
    assert unknown_user is None


async def test_validate_login_missing_fields():
    assert await AccountService.validate_login(AccountCreate(username="bob")) is None
    assert await AccountService.validate_login(AccountCreate(password="pw1")) is None


async def test_validate_login_storage_failure(drop_table):
    drop_table("account")
    with pytest.raises(StorageError):
        await AccountService.validate_login(AccountCreate(username="bob", password="pw1"))


async def test_get_account_by_id(account):
    assert await AccountService.get_account_by_id(account.account_id) == account
    assert await AccountService.get_account_by_id(account.account_id + 100) is None


async def test_get_account_by_id_swallows_storage_failure(account, drop_table):
    drop_table("message")
    drop_table("account")
    assert await AccountService.get_account_by_id(account.account_id) is None
