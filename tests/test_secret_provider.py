import pytest

from ledgerkit.secret_provider import EnvSecretProvider, SecretNotFound, SecretProvider


def test_provider_is_abstract():
    with pytest.raises(TypeError):
        SecretProvider()


def test_key_name_with_prefix():
    assert EnvSecretProvider("LKTEST").key_name("api_key") == "LKTEST_API_KEY"


def test_key_name_without_prefix():
    assert EnvSecretProvider().key_name("stripe_key") == "STRIPE_KEY"


@pytest.mark.asyncio
async def test_get_secret_reads_environment(monkeypatch):
    provider = EnvSecretProvider("LKTEST")
    monkeypatch.setenv(provider.key_name("api_key"), "secret")
    assert await provider.get_secret("api_key") == "secret"
    assert await provider.has_secret("api_key") is True


@pytest.mark.asyncio
async def test_missing_secret_raises(monkeypatch):
    provider = EnvSecretProvider("LKTEST")
    key = provider.key_name("absent_value")
    monkeypatch.delenv(key, raising=False)
    with pytest.raises(SecretNotFound) as info:
        await provider.get_secret("absent_value")
    assert info.value.key == key
    assert await provider.has_secret("absent_value") is False