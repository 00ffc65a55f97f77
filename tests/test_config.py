from vcalnode.config import CodecConfig, load_config


def test_defaults_without_config_file(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("VCALNODE_CONFIG", raising=False)

    assert load_config() == CodecConfig()


def test_missing_file_yields_defaults(tmp_path):
    assert load_config(str(tmp_path / "absent.yaml")) == CodecConfig()


def test_reads_yaml_settings(tmp_path):
    cfg_path = tmp_path / "vcalnode.yaml"
    cfg_path.write_text(
        """
        line_ending: crlf
        fold_width: 75
        strict_blocks: true
        """,
        encoding="utf-8",
    )

    cfg = load_config(str(cfg_path))

    assert cfg.line_ending == "\r\n"
    assert cfg.fold_width == 75
    assert cfg.strict_blocks is True


def test_env_file_names_config(tmp_path, monkeypatch):
    cfg_path = tmp_path / "codec.yaml"
    cfg_path.write_text("fold_width: 60\n", encoding="utf-8")
    (tmp_path / ".env").write_text(f"VCALNODE_CONFIG={cfg_path}\n", encoding="utf-8")
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("VCALNODE_CONFIG", raising=False)

    cfg = load_config()

    assert cfg.fold_width == 60
    assert cfg.line_ending == "\n"
