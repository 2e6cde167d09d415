from txfilter.config import Config


def test_config_loading(write_config):
    """Test configuration loading"""
    config = write_config({
        "builder": {"nesting": "single"},
        "logging": {"level": "DEBUG"},
        "filters": {
            "router": {"steps": [{"op": "to", "arg": "0x7a250d5630B4cF539739dF2C5dAcb4c659F2488D"}]}
        },
    })

    assert config.builder == {"nesting": "single"}
    assert config.logging["level"] == "DEBUG"
    assert "router" in config.filters
    assert config.get_filter_config("router")["steps"][0]["op"] == "to"
    assert config.get_filter_config("missing") == {}


def test_dotted_get(write_config):
    config = write_config({"builder": {"nesting": "stack"}, "output": {"pretty": False}})

    assert config.get("builder.nesting") == "stack"
    assert config.get("builder.leaf_root", "wrap") == "wrap"
    assert config.get("output.pretty", True) is False
    assert config.get("builder.nesting.deeper", "x") == "x"
    assert config.get("nothing.here") is None


def test_missing_file(tmp_path):
    config = Config(str(tmp_path / "absent.toml"))
    assert config.config == {}
    assert config.builder == {}
    assert config.filters == {}


def test_invalid_toml(tmp_path):
    path = tmp_path / "broken.toml"
    path.write_text("[builder\nnesting = ")
    assert Config(str(path)).config == {}


def test_default_path():
    assert Config().config_path == "txfilter.toml"
