from fieldsmt import HashCounter, sha256
from perf import fmt_time, timeit


def test_fmt_time():
    assert fmt_time(2.5) == "2.5000 s"
    assert fmt_time(0.0025) == "2.5000 ms"
    assert fmt_time(2.5e-6) == "2.5000 us"
    assert fmt_time(2.5e-9) == "2.5000 ns"


def test_timeit_reports_hash_calls(capsys):
    counter = HashCounter(sha256())
    counter(9, 9, True)

    @timeit("two hashes:", counter)
    def work():
        counter(1, 2, True)
        counter(3, 4, False)
        return 7

    assert work() == 7
    out = capsys.readouterr().out
    assert out.startswith("two hashes:")
    assert out.rstrip().endswith("(2 hash calls: 1 leaf, 1 node)")


def test_timeit_without_counter(capsys):
    @timeit()
    def idle():
        pass

    idle()
    assert capsys.readouterr().out.startswith("idle  ")
