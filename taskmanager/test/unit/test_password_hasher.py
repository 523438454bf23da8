# taskmanager/test/unit/test_password_hasher.py

# Para rodar o arquivo
# pytest taskmanager/test/unit/test_password_hasher.py -v

import pytest

from taskmanager.adapters.outbound.security.password_hasher import BcryptPasswordHasher


@pytest.fixture
def hasher() -> BcryptPasswordHasher:
    return BcryptPasswordHasher(rounds=4)


async def test_hash_and_verify(hasher):
    """A senha correta confere com o hash gerado e a errada não."""
    hashed = await hasher.hash_password("TestPassword123!")
    assert hashed.startswith("$2")
    assert hashed != "TestPassword123!"
    assert await hasher.verify_password("TestPassword123!", hashed) is True
    assert await hasher.verify_password("WrongPassword", hashed) is False


async def test_same_password_gets_different_salts(hasher):
    first = await hasher.hash_password("TestPassword123!")
    second = await hasher.hash_password("TestPassword123!")
    assert first != second


async def test_invalid_stored_hash_does_not_verify(hasher):
    """Um hash corrompido no banco não deve autenticar nem levantar erro."""
    assert await hasher.verify_password("TestPassword123!", "not-a-bcrypt-hash") is False


async def test_password_over_72_bytes_does_not_verify(hasher):
    hashed = await hasher.hash_password("a" * 72)
    assert await hasher.verify_password("a" * 73, hashed) is False


async def test_hash_rejects_password_over_72_bytes(hasher):
    with pytest.raises(ValueError):
        await hasher.hash_password("é" * 40)


async def test_burn_verification_costs_a_single_check(hasher, monkeypatch):
    """O hash fictício já existe ao construir: a falha por e-mail inexistente só verifica, não gera hash."""
    dummy = hasher._dummy_hash
    assert dummy.startswith("$2")

    def fail_if_hashing(*args, **kwargs):
        raise AssertionError("burn_verification must not hash")

    monkeypatch.setattr(hasher, "hash_password_sync", fail_if_hashing)
    await hasher.burn_verification("whatever")
    await hasher.burn_verification("another")
    assert hasher._dummy_hash == dummy
