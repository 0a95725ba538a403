import pytest
from ouch import randint

from fieldsmt import (
    FIELD_MODULUS,
    Entry,
    HashCounter,
    MemoryTree,
    SparseMerkleTree,
    poseidon,
    sha256,
)


@pytest.fixture(scope="session")
def hash_fn():
    return poseidon()


@pytest.fixture
def smt(hash_fn):
    return SparseMerkleTree(hash_fn=hash_fn)


@pytest.fixture
def store(hash_fn):
    return MemoryTree(hash_fn=hash_fn)


@pytest.fixture
def counter(hash_fn):
    return HashCounter(hash_fn)


@pytest.fixture
def fast_smt():
    return SparseMerkleTree(hash_fn=sha256())


@pytest.fixture
def fast_store():
    return MemoryTree(hash_fn=sha256())


@pytest.fixture
def random_entries():
    def gen(size):
        keys = set()
        while len(keys) < size:
            keys.add(randint(1, FIELD_MODULUS))
        return [Entry(k, randint(FIELD_MODULUS)) for k in keys]

    return gen
