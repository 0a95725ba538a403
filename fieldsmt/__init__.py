from fieldsmt.config import SMTConfig
from fieldsmt.errors import InvalidInput, RootMismatch, SMTError
from fieldsmt.hashing import HashCounter, get_hash, poseidon, sha256
from fieldsmt.memory import MemoryTree
from fieldsmt.smt import (
    Proof,
    SparseMerkleTree,
    add,
    default_tree,
    delete,
    update,
    verify,
    verify_absent,
    verify_proof,
)
from fieldsmt.utils import (
    EMPTY_ENTRY,
    FIELD_MODULUS,
    NIL,
    TREE_DEPTH,
    Entry,
    key_to_path,
)

__version__ = "0.1.0"

__all__ = [
    "EMPTY_ENTRY",
    "Entry",
    "FIELD_MODULUS",
    "HashCounter",
    "InvalidInput",
    "MemoryTree",
    "NIL",
    "Proof",
    "RootMismatch",
    "SMTConfig",
    "SMTError",
    "SparseMerkleTree",
    "TREE_DEPTH",
    "add",
    "default_tree",
    "delete",
    "get_hash",
    "key_to_path",
    "poseidon",
    "sha256",
    "update",
    "verify",
    "verify_absent",
    "verify_proof",
]
