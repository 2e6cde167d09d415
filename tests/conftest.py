import pytest
import tomli_w

from txfilter.config import Config
from txfilter.core.builder import FilterBuilder


@pytest.fixture
def builder():
    """Builder with default options (stack nesting, wrapped leaf roots)"""
    return FilterBuilder()


@pytest.fixture
def write_config(tmp_path):
    """Write a dict as TOML and load it through Config"""

    def _write(data: dict) -> Config:
        path = tmp_path / "txfilter.toml"
        with open(path, "wb") as f:
            tomli_w.dump(data, f)
        return Config(str(path))

    return _write
