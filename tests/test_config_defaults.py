from scrambler.config import load_config


def test_default_values() -> None:
    cfg = load_config(env={})
    assert cfg.schema_version == 1
    assert cfg.language == "en"
    assert cfg.content.aggressive is False
    assert cfg.content.text is True
    assert cfg.content.comments is True
    assert cfg.content.links is True
    assert cfg.content.strings is False
    assert cfg.content.raw is False
    assert cfg.substitution.min_bucket_size == 16
    assert cfg.substitution.preserve_case is True
    assert cfg.substitution.consistent is False
    assert cfg.wordlist.path is None
    assert cfg.seed.secret_env == "SCRAMBLER_SEED"
    assert cfg.seed.secret is None
    assert cfg.verification.fail_on_mismatch is True
