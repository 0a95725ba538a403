"""
Tree configuration.

Defaults reproduce the deployed layout (Poseidon, depth 256). The environment
can override them through ``FIELDSMT_DEPTH``, ``FIELDSMT_HASH`` and
``FIELDSMT_VALIDATE``, read from the process or from a ``.env`` file.
"""
import os
from dataclasses import dataclass

from dotenv import load_dotenv

from fieldsmt.hashing import HASHES
from fieldsmt.utils import TREE_DEPTH

_TRUE = ("1", "true", "yes", "on")
_FALSE = ("0", "false", "no", "off")


def _parse_bool(name, raw):
    v = raw.strip().lower()
    if v in _TRUE:
        return True
    if v in _FALSE:
        return False
    raise ValueError(f"{name}: expected a boolean, got {raw!r}")


@dataclass(frozen=True)
class SMTConfig:
    """Shape of the tree and how strictly inputs are checked."""

    depth: int = TREE_DEPTH
    hash_name: str = "poseidon"
    validate: bool = True

    def __post_init__(self):
        if not isinstance(self.depth, int) or not 1 <= self.depth <= TREE_DEPTH:
            raise ValueError(f"depth must be in [1, {TREE_DEPTH}], got {self.depth!r}")
        if self.hash_name not in HASHES:
            raise ValueError(
                f"unknown hash '{self.hash_name}', expected one of {sorted(HASHES)}"
            )

    @classmethod
    def from_env(cls, dotenv_path=None):
        load_dotenv(dotenv_path)
        kwargs = {}
        depth = os.getenv("FIELDSMT_DEPTH")
        if depth:
            try:
                kwargs["depth"] = int(depth)
            except ValueError:
                raise ValueError(f"FIELDSMT_DEPTH: not an integer: {depth!r}") from None
        name = os.getenv("FIELDSMT_HASH")
        if name:
            kwargs["hash_name"] = name.strip().lower()
        validate = os.getenv("FIELDSMT_VALIDATE")
        if validate:
            kwargs["validate"] = _parse_bool("FIELDSMT_VALIDATE", validate)
        return cls(**kwargs)
