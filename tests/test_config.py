import pytest

from fieldsmt import SMTConfig, SparseMerkleTree


@pytest.fixture
def env(monkeypatch):
    for name in ("FIELDSMT_DEPTH", "FIELDSMT_HASH", "FIELDSMT_VALIDATE"):
        # set first so that values loaded from a .env file are undone too
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    return monkeypatch


def test_defaults(env, tmp_path):
    cfg = SMTConfig.from_env(tmp_path / "missing.env")
    assert cfg == SMTConfig()
    assert (cfg.depth, cfg.hash_name, cfg.validate) == (256, "poseidon", True)


def test_from_environment(env, tmp_path):
    env.setenv("FIELDSMT_DEPTH", "32")
    env.setenv("FIELDSMT_HASH", "SHA256")
    env.setenv("FIELDSMT_VALIDATE", "off")
    cfg = SMTConfig.from_env(tmp_path / "missing.env")
    assert cfg == SMTConfig(depth=32, hash_name="sha256", validate=False)


def test_from_dotenv_file(env, tmp_path):
    f = tmp_path / ".env"
    f.write_text("FIELDSMT_DEPTH=64\nFIELDSMT_HASH=sha256\n")
    cfg = SMTConfig.from_env(f)
    assert (cfg.depth, cfg.hash_name) == (64, "sha256")


@pytest.mark.parametrize(
    "name, value",
    [
        ("FIELDSMT_DEPTH", "deep"),
        ("FIELDSMT_DEPTH", "0"),
        ("FIELDSMT_DEPTH", "257"),
        ("FIELDSMT_HASH", "md5"),
        ("FIELDSMT_VALIDATE", "maybe"),
    ],
)
def test_invalid_environment(env, tmp_path, name, value):
    env.setenv(name, value)
    with pytest.raises(ValueError):
        SMTConfig.from_env(tmp_path / "missing.env")


def test_tree_from_config():
    smt = SparseMerkleTree.from_config(SMTConfig(depth=16, hash_name="sha256", validate=False))
    assert smt.depth == 16
    assert smt.validate is False
    assert smt.add((1, 2), 0) == smt.hash(1, 2, True)
