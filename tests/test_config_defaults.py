from consentkeys.config import load_config


def test_default_values() -> None:
    cfg = load_config(env={})
    assert cfg.schema_version == 1
    assert cfg.engine.default_data_type == "default"
    assert cfg.engine.secret.secret_env == "CONSENTKEYS_SECRET_KEY"
    assert cfg.engine.secret.secret is None
    assert cfg.synthesizer.email_domain == "consentkeys.local"
    assert cfg.synthesizer.pools is None
    assert cfg.logging.level == "WARNING"
