"""Hash primitives for the tree.

A primitive is any callable ``f(a, b, is_leaf)`` returning a field element.
Leaves are hashed as ``H(key, value, 1)`` and internal nodes as
``H(left, right, 0)``, so the domain tag is the third input of an arity-3
compression and a leaf digest never collides with a node digest.
"""
import hashlib

from circomlibpy.poseidon import PoseidonHash

from fieldsmt.utils import FIELD_MODULUS, int_to_bytes

LEAF = 1
NODE = 0


def poseidon():
    """circomlib-compatible Poseidon over BN254 (t = 4)"""
    h = PoseidonHash()

    def f(a, b, is_leaf):
        return h.hash(3, [a, b, is_leaf and LEAF or NODE])

    return f


def sha256():
    """SHA-256 of three 32-byte big-endian words, reduced into the field.

    Much faster than Poseidon in pure Python, but not compatible with
    trees built by circuits or contracts.
    """

    def f(a, b, is_leaf):
        h = hashlib.sha256()
        for v in (a, b, is_leaf and LEAF or NODE):
            h.update(int_to_bytes(v))
        return int.from_bytes(h.digest(), "big") % FIELD_MODULUS

    return f


HASHES = {
    "poseidon": poseidon,
    "sha256": sha256,
}


def get_hash(name):
    try:
        return HASHES[name]()
    except KeyError:
        raise ValueError(
            f"unknown hash '{name}', expected one of {sorted(HASHES)}"
        ) from None


class HashCounter:
    """Wraps a primitive and counts how often it is called."""

    def __init__(self, hash_fn=None):
        self.hash_fn = hash_fn or poseidon()
        self.leaves = 0
        self.nodes = 0

    @property
    def calls(self):
        return self.leaves + self.nodes

    def reset(self):
        self.leaves = 0
        self.nodes = 0

    def __call__(self, a, b, is_leaf):
        if is_leaf:
            self.leaves += 1
        else:
            self.nodes += 1
        return self.hash_fn(a, b, is_leaf)
