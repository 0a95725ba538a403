from fieldsmt.hashing import get_hash, poseidon
from fieldsmt.smt import Proof
from fieldsmt.utils import (
    NIL,
    TREE_DEPTH,
    Entry,
    check_field_element,
    check_key,
    shared_prefix,
)


class MemoryTree:
    """An in-memory sibling-path provider for the compressed SMT.

    Only the entries are kept; node hashes are derived on demand, which is
    plenty for tests and benchmarks but nothing is persisted.

    Layout, from the root down:
    a subtree splits on the highest bit its keys disagree on; levels where
    all keys agree are not materialized, so a subtree with a single entry is
    just that entry's leaf, and an empty one is ``0``.
    """

    def __init__(self, depth=TREE_DEPTH, hash_fn=None):
        self.depth = depth
        self.hash = hash_fn or poseidon()
        self.db = {}

    @classmethod
    def from_config(cls, config, hash_fn=None):
        return cls(depth=config.depth, hash_fn=hash_fn or get_hash(config.hash_name))

    def __len__(self):
        return len(self.db)

    def __contains__(self, key):
        return key in self.db

    def get(self, key, default=None):
        return self.db.get(key, default)

    def items(self):
        return [Entry(k, v) for k, v in self.db.items()]

    def insert(self, key, value):
        check_key(key, self.depth)
        check_field_element(value)
        if key in self.db:
            raise ValueError(f"key already present: {key}")
        self.db[key] = value

    def set(self, key, value):
        check_field_element(value)
        if key not in self.db:
            raise KeyError(key)
        self.db[key] = value

    def remove(self, key):
        del self.db[key]

    def node(self, entries):
        """hash of the subtree that holds exactly ``entries``"""
        if not entries:
            return NIL
        if len(entries) == 1:
            (key, value), = entries
            return self.hash(key, value, True)
        k0 = entries[0][0]
        n = min(shared_prefix(k0, k, self.depth) for k, _ in entries[1:])
        level = self.depth - 1 - n
        left = [e for e in entries if not (e[0] >> level) & 1]
        right = [e for e in entries if (e[0] >> level) & 1]
        return self.hash(self.node(left), self.node(right), False)

    def root(self):
        return self.node(list(self.db.items()))

    def walk(self, key, present):
        """Collect siblings along ``key``'s path from the root down.

        Stops once the key (when ``present``) and the remaining entries no
        longer share a subtree. Returns the siblings and the entries left at
        the stopping point.
        """
        siblings = [NIL] * self.depth
        others = [(k, v) for k, v in self.db.items() if k != key]
        for level in reversed(range(self.depth)):
            if len(others) + present <= 1:
                break
            bit = (key >> level) & 1
            siblings[level] = self.node(
                [e for e in others if (e[0] >> level) & 1 != bit]
            )
            others = [e for e in others if (e[0] >> level) & 1 == bit]
        return siblings, others

    def siblings(self, key):
        check_key(key, self.depth)
        siblings, _ = self.walk(key, key in self.db)
        return siblings

    def insertion_siblings(self, key):
        """siblings ``key`` will have once inserted, i.e. the input of ``add``"""
        check_key(key, self.depth)
        if key in self.db:
            raise ValueError(f"key already present: {key}")
        siblings, _ = self.walk(key, True)
        return siblings

    def matching_entry(self, key):
        """The leaf sitting in the slot of an absent ``key``, if any."""
        check_key(key, self.depth)
        if key in self.db:
            return None
        _, others = self.walk(key, False)
        if len(others) == 1:
            return Entry(*others[0])
        return None

    def create_proof(self, key):
        check_key(key, self.depth)
        root = self.root()
        if key in self.db:
            siblings, _ = self.walk(key, True)
            return Proof(Entry(key, self.db[key]), None, siblings, root, True)
        siblings, others = self.walk(key, False)
        matching = len(others) == 1 and Entry(*others[0]) or None
        return Proof(Entry(key, NIL), matching, siblings, root, False)
