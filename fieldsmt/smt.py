import logging
import threading
from collections import namedtuple
from itertools import zip_longest

from fieldsmt.errors import InvalidInput, RootMismatch
from fieldsmt.hashing import get_hash, poseidon
from fieldsmt.utils import (
    EMPTY_ENTRY,
    Entry,
    NIL,
    TREE_DEPTH,
    check_field_element,
    check_key,
    check_siblings,
    key_to_path,
    to_entry,
    to_field,
)

logger = logging.getLogger(__name__)

Proof = namedtuple(
    "Proof", ["entry", "matching_entry", "siblings", "root", "membership"]
)


class SparseMerkleTree:
    """A stateless verifier for a compressed Sparse Merkle Tree (SMT).

    Nothing about the tree is stored here: each operation takes the claimed
    root, the entry and its sibling path, recomputes the root by climbing
    from the leaf, and either checks it or returns the root after the change.

    sibling path:
    ``siblings[i]`` is the co-path hash at level ``i`` (0 = next to the leaf),
    or ``0`` when the subtree on the other side is empty. Empty levels are
    skipped entirely, so a lone leaf sits as high as its key prefix allows.
    """

    def __init__(self, depth=TREE_DEPTH, hash_fn=None, validate=True):
        self.depth = depth
        self.hash = hash_fn or poseidon()
        self.validate = validate

    @classmethod
    def from_config(cls, config, hash_fn=None):
        return cls(
            depth=config.depth,
            hash_fn=hash_fn or get_hash(config.hash_name),
            validate=config.validate,
        )

    def key_to_path(self, key):
        return key_to_path(key, self.depth)

    def leaf_hash(self, entry):
        key, value = entry
        return self.hash(key, value, True)

    def ascend(self, nodes, siblings, path):
        """Climb several running nodes in lockstep along one path.

        Every node meets the same sibling and the same bit at each level.
        A running node of ``0`` stands for an empty subtree and takes the
        sibling's place instead of being hashed with it.

        Unchecked sibling paths of the wrong length are climbed as given:
        missing levels are empty, extra levels hash on top as left children.
        """
        nodes = list(nodes)
        for sibling, bit in zip_longest(siblings, path, fillvalue=NIL):
            if sibling == NIL:
                continue
            for j, h in enumerate(nodes):
                if h == NIL:
                    nodes[j] = sibling
                elif bit:
                    nodes[j] = self.hash(sibling, h, False)
                else:
                    nodes[j] = self.hash(h, sibling, False)
        return nodes

    def climb(self, start, siblings, path):
        return self.ascend((start,), siblings, path)[0]

    def two_root_climb(self, entry, siblings):
        """-> (root without ``entry``, root with ``entry``)"""
        path = self.key_to_path(entry.key)
        absent, present = self.ascend((NIL, self.leaf_hash(entry)), siblings, path)
        return absent, present

    def verify(self, entry, matching_entry, siblings, root):
        """Check membership of ``entry``, or its non-membership when a
        ``matching_entry`` is given.

        The matching entry is the real leaf found where ``entry.key`` would
        sit: the climb starts from that leaf but follows ``entry.key``'s path.
        """
        entry = self._entry(entry)
        matching_entry = to_entry(matching_entry)
        membership = matching_entry is None or matching_entry == EMPTY_ENTRY
        if not membership:
            matching_entry = self._entry(matching_entry)
            if matching_entry.key == entry.key:
                raise InvalidInput(
                    f"matching entry must belong to another key than {entry.key}"
                )
        siblings = self._siblings(siblings)
        root = self._root(root)
        leaf = membership and entry or matching_entry
        computed = self.climb(self.leaf_hash(leaf), siblings, self.key_to_path(entry.key))
        self._expect(membership and "verify" or "verify non-membership", root, computed)

    def verify_absent(self, key, siblings, root):
        """Check that ``key``'s slot in the tree is empty."""
        key = self._key(key)
        siblings = self._siblings(siblings)
        root = self._root(root)
        computed = self.climb(NIL, siblings, self.key_to_path(key))
        self._expect("verify absent", root, computed)

    def verify_proof(self, proof):
        """Like ``verify``, but answers with a bool instead of raising
        ``RootMismatch``. Malformed proofs still raise ``InvalidInput``."""
        try:
            if proof.membership:
                self.verify(proof.entry, None, proof.siblings, proof.root)
            elif proof.matching_entry is None:
                self.verify_absent(proof.entry[0], proof.siblings, proof.root)
            else:
                self.verify(
                    proof.entry, proof.matching_entry, proof.siblings, proof.root
                )
        except RootMismatch:
            return False
        return True

    def add(self, new_entry, old_root, siblings=None):
        new_entry = self._entry(new_entry)
        old_root = self._root(old_root)
        if old_root == NIL:
            new_root = self.leaf_hash(new_entry)
            logger.debug("add %d to empty tree: root %d", new_entry.key, new_root)
            return new_root
        siblings = self._siblings(siblings)
        absent, present = self.two_root_climb(new_entry, siblings)
        self._expect("add", old_root, absent)
        logger.debug("add %d: root %d -> %d", new_entry.key, old_root, present)
        return present

    def delete(self, entry, old_root, siblings):
        entry = self._entry(entry)
        old_root = self._root(old_root)
        siblings = self._siblings(siblings)
        absent, present = self.two_root_climb(entry, siblings)
        self._expect("delete", old_root, present)
        logger.debug("delete %d: root %d -> %d", entry.key, old_root, absent)
        return absent

    def update(self, new_value, old_entry, old_root, siblings):
        old_entry = self._entry(old_entry)
        new_value = self._value(new_value)
        old_root = self._root(old_root)
        siblings = self._siblings(siblings)
        old_node, new_node = self.ascend(
            (self.leaf_hash(old_entry), self.hash(old_entry.key, new_value, True)),
            siblings,
            self.key_to_path(old_entry.key),
        )
        self._expect("update", old_root, old_node)
        logger.debug("update %d: root %d -> %d", old_entry.key, old_root, new_node)
        return new_node

    def _expect(self, op, expected, computed):
        if computed != expected:
            logger.debug("%s: expected root %d, computed %d", op, expected, computed)
            raise RootMismatch(op, expected, computed)

    def _key(self, key):
        key = to_field(key)
        if self.validate:
            check_key(key, self.depth)
        return key

    def _value(self, value):
        value = to_field(value)
        if self.validate:
            check_field_element(value)
        return value

    def _root(self, root):
        root = to_field(root)
        if self.validate:
            check_field_element(root, "root")
        return root

    def _entry(self, entry):
        if entry is None:
            raise InvalidInput("missing entry")
        key, value = to_entry(entry)
        return Entry(self._key(key), self._value(value))

    def _siblings(self, siblings):
        if siblings is not None:
            siblings = [to_field(s) for s in siblings]
        if self.validate:
            check_siblings(siblings, self.depth)
        return siblings or []


_default = None
_lock = threading.Lock()


def default_tree():
    """the tree behind the module-level shortcuts: Poseidon, depth 256"""
    global _default
    if _default is None:
        with _lock:
            if _default is None:
                _default = SparseMerkleTree()
    return _default


def verify(entry, matching_entry, siblings, root):
    return default_tree().verify(entry, matching_entry, siblings, root)


def verify_absent(key, siblings, root):
    return default_tree().verify_absent(key, siblings, root)


def verify_proof(proof):
    return default_tree().verify_proof(proof)


def add(new_entry, old_root, siblings=None):
    return default_tree().add(new_entry, old_root, siblings)


def delete(entry, old_root, siblings):
    return default_tree().delete(entry, old_root, siblings)


def update(new_value, old_entry, old_root, siblings):
    return default_tree().update(new_value, old_entry, old_root, siblings)
