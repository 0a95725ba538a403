from collections import namedtuple

from fieldsmt.errors import InvalidInput

# scalar field of BN254, the domain of the Poseidon permutation
FIELD_MODULUS = (
    21888242871839275222246405745257275088548364400416034343698204186575808495617
)
TREE_DEPTH = 256
NIL = 0

Entry = namedtuple("Entry", ["key", "value"])
EMPTY_ENTRY = Entry(NIL, NIL)


def bytes_to_int(x):
    return int.from_bytes(x, "big")


def int_to_bytes(x, byte=32):
    return x.to_bytes(byte, "big")


def to_field(x):
    """Read an int, a hex string (``0x`` optional) or big-endian bytes
    as an integer. Range is checked by the caller."""
    if isinstance(x, bool):
        raise InvalidInput(f"not a field element: {x!r}")
    if isinstance(x, int):
        return x
    if isinstance(x, (bytes, bytearray)):
        return bytes_to_int(x)
    if isinstance(x, str):
        try:
            return int(x, 16)
        except ValueError:
            raise InvalidInput(f"not a hex string: {x!r}") from None
    raise InvalidInput(f"not a field element: {x!r}")


def to_entry(x):
    """Normalize ``x`` into an ``Entry``; ``None`` is left alone."""
    if x is None:
        return None
    try:
        key, value = x
    except (TypeError, ValueError):
        raise InvalidInput(f"not a (key, value) pair: {x!r}") from None
    return Entry(to_field(key), to_field(value))


def is_field_element(x):
    return isinstance(x, int) and not isinstance(x, bool) and 0 <= x < FIELD_MODULUS


def check_field_element(x, what="value"):
    if not is_field_element(x):
        raise InvalidInput(f"{what} is not a field element: {x!r}")
    return x


def check_key(key, depth=TREE_DEPTH):
    check_field_element(key, "key")
    if key == NIL:
        raise InvalidInput("key must be non-zero")
    if key.bit_length() > depth:
        raise InvalidInput(f"key wider than {depth} bits: {key}")
    return key


def check_siblings(siblings, depth=TREE_DEPTH):
    if siblings is None or len(siblings) != depth:
        size = siblings is None and "no" or len(siblings)
        raise InvalidInput(f"expected {depth} siblings, got {size}")
    for i, s in enumerate(siblings):
        check_field_element(s, f"sibling at level {i}")
    return siblings


def key_to_path(key, depth=TREE_DEPTH):
    """Little-endian bits of ``key``: ``path[i]`` is the branch taken at level i.

    Level 0 sits right above the leaves, level ``depth - 1`` right below the
    root. A bit of 1 means the node at that level is a right child.

    >>> key_to_path(6, 4)
    [0, 1, 1, 0]
    """
    if key.bit_length() > depth:
        raise InvalidInput(f"key wider than {depth} bits: {key}")
    return [(key >> i) & 1 for i in range(depth)]


def shared_prefix(a, b, depth=TREE_DEPTH):
    """number of levels, counted from the root, two keys descend together"""
    x = a ^ b
    return depth - x.bit_length()
