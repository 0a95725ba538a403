import time

from ouch import randint

from fieldsmt import (
    FIELD_MODULUS,
    Entry,
    HashCounter,
    MemoryTree,
    SparseMerkleTree,
    get_hash,
)


def gen_entries(size):
    return [Entry(randint(1, FIELD_MODULUS), randint(FIELD_MODULUS)) for _ in range(size)]


def start_perf(title):
    print(f'\n{"-" * 80}\n{title}\n{"-" * 80}\n')


def fmt_time(t):
    for scale, unit in ((1, "s"), (1e3, "ms"), (1e6, "us")):
        if scale * t > 1:
            return f"{scale * t:.4f} {unit}"
    return f"{1e9 * t:.4f} ns"


def timeit(comment="", counter=None):
    """Print the wall time of each call and, given a ``HashCounter``,
    the hash calls it made."""

    def _(f):
        def __(*args, **kwargs):
            if counter is not None:
                counter.reset()
            tick = time.perf_counter()
            res = f(*args, **kwargs)
            tock = time.perf_counter()
            desc = comment or f.__name__
            report = f"{desc}  {fmt_time(tock - tick)}"
            if counter is not None:
                report += (
                    f"  ({counter.calls} hash calls:"
                    f" {counter.leaves} leaf, {counter.nodes} node)"
                )
            print(report)
            return res

        return __

    return _


def unit_test(name, hash_name, entries):
    size = len(entries)
    counter = HashCounter(get_hash(hash_name))
    smt = SparseMerkleTree(hash_fn=counter)
    store = MemoryTree(hash_fn=get_hash(hash_name))
    proofs = []
    for e in entries:
        proofs.append(store.insertion_siblings(e.key))
        store.insert(*e)

    @timeit(f"time for adding {size} keys:", counter)
    def adds():
        r = 0
        for e, siblings in zip(entries, proofs):
            r = smt.add(e, r, siblings)
        return r

    print(f"{name}")
    root = adds()
    print(f"root: {root}")
    assert root == store.root()

    siblings = [store.siblings(e.key) for e in entries]

    @timeit(f"time for verifying {size} keys:", counter)
    def verifies():
        for e, s in zip(entries, siblings):
            smt.verify(e, None, s, root)

    verifies()
    print()


def perf_climbs(size):
    start_perf("Poseidon vs. SHA-256 climbs")
    entries = gen_entries(size)
    unit_test(name="Poseidon", hash_name="poseidon", entries=entries)
    unit_test(name="SHA-256", hash_name="sha256", entries=entries)


def test_zero_sibling_skip(levels=(0, 100, 255)):
    start_perf("zero-sibling skip")
    counter = HashCounter()
    smt = SparseMerkleTree(hash_fn=counter)
    for level in levels:
        siblings = [0] * smt.depth
        siblings[level] = 7
        counter.reset()
        smt.climb(11, siblings, smt.key_to_path(3))
        print(f"sibling at level {level}: {counter.calls} hash call(s)")
        assert counter.calls == 1


if __name__ == "__main__":
    perf_climbs(size=64)
    test_zero_sibling_skip()
