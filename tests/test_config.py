"""Tests for YAML configuration loading and the retry decorator"""

from unittest.mock import patch

import pytest

from definitions import CONFIG_DIR
from utils.config import ConfigError, load_config
from utils.retry import retry


class TestLoadConfig:
    def test_loads_mapping(self, temp_dir):
        path = temp_dir / "config.yaml"
        path.write_text("script:\n  max_dimen: 480\nremote_config:\n  testing_experiment: variant_B\n")

        config = load_config(str(path))

        assert config["script"]["max_dimen"] == 480
        assert config["remote_config"]["testing_experiment"] == "variant_B"

    def test_empty_file_is_empty_mapping(self, temp_dir):
        path = temp_dir / "config.yaml"
        path.write_text("")
        assert load_config(str(path)) == {}

    def test_missing_file(self, temp_dir):
        with pytest.raises(ConfigError, match="not found"):
            load_config(str(temp_dir / "missing.yaml"))

    def test_invalid_yaml(self, temp_dir):
        path = temp_dir / "config.yaml"
        path.write_text("script: [unclosed\n")
        with pytest.raises(ConfigError, match="Error parsing YAML"):
            load_config(str(path))

    def test_non_mapping(self, temp_dir):
        path = temp_dir / "config.yaml"
        path.write_text("- a\n- b\n")
        with pytest.raises(ConfigError, match="mapping"):
            load_config(str(path))

    def test_sample_config_is_valid(self):
        config = load_config(str(CONFIG_DIR / "config-sample.yaml"))
        assert config["remote_config"]["testing_experiment"] == "variant_A"


class TestRetry:
    def _flaky(self, failures, exc=ValueError):
        calls = []

        def flaky():
            calls.append(1)
            if len(calls) <= failures:
                raise exc("boom")
            return "ok"

        return flaky, calls

    @patch("utils.retry.time.sleep")
    def test_retries_then_succeeds(self, mock_sleep):
        func, calls = self._flaky(2)
        wrapped = retry(max_attempts=3, delay=0.5, exceptions=(ValueError,))(func)

        assert wrapped() == "ok"
        assert len(calls) == 3
        assert [c.args[0] for c in mock_sleep.call_args_list] == [0.5, 1.0]

    @patch("utils.retry.time.sleep")
    def test_reraises_after_max_attempts(self, mock_sleep):
        func, calls = self._flaky(5)
        wrapped = retry(max_attempts=2, exceptions=(ValueError,))(func)

        with pytest.raises(ValueError):
            wrapped()
        assert len(calls) == 2

    def test_other_exceptions_are_not_retried(self):
        func, calls = self._flaky(1, exc=KeyError)
        wrapped = retry(max_attempts=3, exceptions=(ValueError,))(func)

        with pytest.raises(KeyError):
            wrapped()
        assert len(calls) == 1
