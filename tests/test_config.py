"""Tests for wizard configuration loading."""

import pytest


class TestLoadConfig:
    """Test load_config."""

    def test_defaults(self):
        """Test defaults with no file and an empty environment."""
        from igor.wizard.config import load_config
        from igor.wizard.schema import DEFAULT_COMPONENTS, DEFAULT_DRIVERS

        config = load_config(environ={})
        assert config.color is True
        assert config.alt_screen is True
        assert config.frame_interval == 0.1
        assert config.max_log_lines == 10
        assert config.driver_options() == list(DEFAULT_DRIVERS)
        assert config.component_options() == list(DEFAULT_COMPONENTS)

    def test_file_values(self, tmp_path):
        """Test values read from a YAML file."""
        from igor.wizard.config import load_config

        path = tmp_path / "igor.yaml"
        path.write_text(
            "color: false\n"
            "frame_interval: 0.05\n"
            "max_log_lines: 4\n"
            "drivers:\n"
            "  - {version: '560', branch: Beta, recommended: true}\n"
        )
        config = load_config(path, environ={})
        assert config.color is False
        assert config.frame_interval == 0.05
        assert config.max_log_lines == 4
        assert [d.title for d in config.driver_options()] == ["NVIDIA 560 - Beta (Recommended)"]

    def test_path_from_environment(self, tmp_path):
        """Test IGOR_CONFIG names the file when no path is given."""
        from igor.wizard.config import load_config

        path = tmp_path / "igor.yaml"
        path.write_text("alt_screen: false\n")
        config = load_config(environ={"IGOR_CONFIG": str(path)})
        assert config.alt_screen is False

    @pytest.mark.parametrize("env", [{"IGOR_NO_COLOR": "1"}, {"IGOR_NO_COLOR": "true"}, {"NO_COLOR": ""}])
    def test_no_color_overrides(self, env):
        """Test color is turned off from the environment."""
        from igor.wizard.config import load_config

        assert load_config(environ=env).color is False

    def test_frame_interval_override(self):
        """Test IGOR_FRAME_INTERVAL overrides the file value."""
        from igor.wizard.config import load_config

        assert load_config(environ={"IGOR_FRAME_INTERVAL": "0.5"}).frame_interval == 0.5

    def test_empty_file(self, tmp_path):
        """Test an empty file yields defaults."""
        from igor.wizard.config import load_config

        path = tmp_path / "igor.yaml"
        path.write_text("")
        assert load_config(path, environ={}).max_log_lines == 10

    @pytest.mark.parametrize("content,key", [
        ("frame_interval: 0\n", "frame_interval"),
        ("frame_interval: fast\n", "frame_interval"),
        ("max_log_lines: 0\n", "max_log_lines"),
        ("drivers:\n  - {version: '560'}\n", "drivers"),
        ("components:\n  - {id: x, name: X, colour: red}\n", "components"),
    ])
    def test_invalid_values(self, tmp_path, content, key):
        """Test invalid values raise ConfigError naming the key."""
        from igor.wizard.config import load_config
        from igor.wizard.exceptions import ConfigError

        path = tmp_path / "igor.yaml"
        path.write_text(content)
        with pytest.raises(ConfigError) as exc_info:
            load_config(path, environ={})
        assert exc_info.value.config_key == key

    def test_unknown_keys(self, tmp_path):
        """Test unknown keys are rejected with the allowed list."""
        from igor.wizard.config import load_config
        from igor.wizard.exceptions import ConfigError

        path = tmp_path / "igor.yaml"
        path.write_text("colour: true\n")
        with pytest.raises(ConfigError) as exc_info:
            load_config(path, environ={})
        assert "colour" in exc_info.value.message
        assert "frame_interval" in exc_info.value.remediation

    def test_bad_environment_value(self):
        """Test a malformed environment override raises ConfigError."""
        from igor.wizard.config import load_config
        from igor.wizard.exceptions import ConfigError

        with pytest.raises(ConfigError):
            load_config(environ={"IGOR_FRAME_INTERVAL": "soon"})

    @pytest.mark.parametrize("content", ["- a\n- b\n", "colour: [\n"])
    def test_malformed_file(self, tmp_path, content):
        """Test non-mapping or unparsable files raise ConfigError."""
        from igor.wizard.config import load_config
        from igor.wizard.exceptions import ConfigError

        path = tmp_path / "igor.yaml"
        path.write_text(content)
        with pytest.raises(ConfigError):
            load_config(path, environ={})

    def test_missing_file(self, tmp_path):
        """Test a missing file raises ConfigError."""
        from igor.wizard.config import load_config
        from igor.wizard.exceptions import ConfigError

        with pytest.raises(ConfigError):
            load_config(tmp_path / "absent.yaml", environ={})


class TestConfigFlowsIntoWizard:
    """Test configured catalogs reach the selection view."""

    def test_custom_drivers(self):
        """Test configured drivers replace the defaults."""
        from igor.wizard import WizardOrchestrator
        from igor.wizard.config import WizardConfig
        from igor.wizard.messages import NavigateToDriverSelection, WindowSize

        config = WizardConfig(drivers=[{"version": "560", "branch": "Beta"}])
        wizard = WizardOrchestrator(config=config)
        wizard.update(WindowSize(100, 40))
        wizard.update(NavigateToDriverSelection(None))
        assert wizard.active_step.selected_driver().version == "560"
        assert "NVIDIA 560 - Beta" in wizard.view()
