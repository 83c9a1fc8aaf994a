"""Tests for YAML session scripts."""

import textwrap

import pytest

HAPPY_PATH = textwrap.dedent("""\
    width: 100
    height: 30
    gpu_info:
      gpus:
        - name: NVIDIA GeForce RTX 4070
          architecture: Ada Lovelace
      nouveau_loaded: true
      distribution: Ubuntu 24.04
    events:
      - start_detection
      - detection_step: 2
      - detection_complete: {success: true}
      - navigate_to_driver_selection
      - wait: 0.25
      - navigate_to_confirmation: {driver: "550", components: [driver, cuda]}
      - start_installation: {driver: "550", components: [driver, cuda]}
      - installation_log: Building kernel module
      - installation_complete
      - navigate_to_complete: {driver: "550", components: [driver, cuda]}
""")


class TestParseScript:
    """Test building messages from script data."""

    def test_happy_path(self):
        """Test a full session parses into the expected messages."""
        import yaml

        from igor.wizard import messages as m
        from igor.wizard.script import parse_script

        script = parse_script(yaml.safe_load(HAPPY_PATH))
        assert (script.width, script.height) == (100, 30)

        msgs = script.messages()
        assert msgs[0] == m.StartDetection()
        assert msgs[1] == m.DetectionStep(2)
        assert msgs[2].success
        assert msgs[2].gpu_info.primary_gpu.name == "NVIDIA GeForce RTX 4070"

        confirm = msgs[4]
        assert isinstance(confirm, m.NavigateToConfirmation)
        assert confirm.driver.version == "550"
        assert [c.id for c in confirm.components] == ["driver", "cuda"]
        assert msgs[6] == m.InstallationLog("Building kernel module")
        assert msgs[7] == m.InstallationComplete()

    def test_wait_applies_to_next_event(self):
        """Test wait accumulates onto the following event only."""
        from igor.wizard.script import parse_script

        script = parse_script({"events": ["start_detection", {"wait": 0.5}, {"wait": 0.25},
                                           {"key": "enter"}, "quit"]})
        assert [e.delay for e in script.events] == [0.0, 0.75, 0.0]

    def test_scalar_and_mapping_forms(self):
        """Test scalar shorthand and explicit mappings build the same message."""
        from igor.wizard import messages as m
        from igor.wizard.script import parse_script
        from igor.wizard.states import ViewState

        script = parse_script({"events": [
            {"key": "tab"}, {"key": {"key": "tab"}},
            {"navigate": "system_info"}, {"navigate": {"view": "SystemInfo"}},
            {"resize": {"width": 50, "height": 10}},
            {"navigate_to_error": {"err": "apt failed", "failed_step": "Updating packages"}},
        ]})
        msgs = script.messages()
        assert msgs[0] == msgs[1] == m.KeyPress("tab")
        assert msgs[2] == msgs[3] == m.Navigate(ViewState.SYSTEM_INFO)
        assert msgs[4] == m.WindowSize(50, 10)
        assert msgs[5] == m.NavigateToError("apt failed", "Updating packages")

    def test_inline_driver(self):
        """Test a driver given as a mapping instead of a version."""
        from igor.wizard.script import parse_script

        script = parse_script({"events": [
            {"navigate_to_complete": {"driver": {"version": "560", "branch": "Beta"}}},
        ]})
        assert script.messages()[0].driver.title == "NVIDIA 560 - Beta"

    @pytest.mark.parametrize("data,fragment", [
        ([], "mapping"),
        ({"width": 80}, "'events' list"),
        ({"events": ["teleport"]}, "Unknown event 'teleport'"),
        ({"events": [{"a": 1, "b": 2}]}, "single-key mapping"),
        ({"events": [{"detection_step": "two"}]}, "Invalid fields"),
        ({"events": [{"navigate": "nowhere"}]}, "Invalid fields"),
        ({"events": [{"start_installation": {"driver": "999"}}]}, "Invalid fields"),
        ({"events": [{"start_installation": {"components": ["drm"]}}]}, "Invalid fields"),
    ])
    def test_invalid_scripts(self, data, fragment):
        """Test malformed scripts raise ScriptError."""
        from igor.wizard.exceptions import ScriptError
        from igor.wizard.script import parse_script

        with pytest.raises(ScriptError) as exc_info:
            parse_script(data, path="session.yaml")
        assert fragment in exc_info.value.message

    @pytest.mark.parametrize("data,index", [
        ({"width": "wide", "events": ["quit"]}, None),
        ({"height": [24], "events": ["quit"]}, None),
        ({"events": [{"wait": "soon"}, "quit"]}, 0),
        ({"events": ["quit", {"wait": [1]}]}, 1),
    ])
    def test_bad_size_and_wait(self, data, index):
        """Test non-numeric sizes and waits raise ScriptError."""
        from igor.wizard.exceptions import ScriptError
        from igor.wizard.script import parse_script

        with pytest.raises(ScriptError) as exc_info:
            parse_script(data, path="session.yaml")
        assert exc_info.value.index == index

    def test_unknown_driver_lists_choices(self):
        """Test an unknown driver version names the known ones."""
        from igor.wizard.exceptions import ScriptError, ValidationError
        from igor.wizard.script import parse_script

        with pytest.raises(ScriptError) as exc_info:
            parse_script({"events": [{"navigate_to_complete": {"driver": "999"}}]})
        cause = exc_info.value.__cause__
        assert isinstance(cause, ValidationError)
        assert cause.field == "driver"
        assert "550 or 545" in exc_info.value.details

    def test_error_points_at_event(self):
        """Test the error names the script and event index."""
        from igor.wizard.exceptions import ScriptError
        from igor.wizard.script import parse_script

        with pytest.raises(ScriptError) as exc_info:
            parse_script({"events": ["quit", "bogus"]}, path="s.yaml")
        assert exc_info.value.index == 1
        assert "s.yaml" in str(exc_info.value)


class TestLoadScript:
    """Test reading scripts from disk."""

    def test_load(self, tmp_path):
        """Test loading a YAML file."""
        from igor.wizard.script import load_script

        path = tmp_path / "session.yaml"
        path.write_text(HAPPY_PATH)
        assert len(load_script(path).events) == 9

    def test_missing_file(self, tmp_path):
        """Test a missing file raises ScriptError."""
        from igor.wizard.exceptions import ScriptError
        from igor.wizard.script import load_script

        with pytest.raises(ScriptError):
            load_script(tmp_path / "absent.yaml")

    def test_invalid_yaml(self, tmp_path):
        """Test unparsable YAML raises ScriptError."""
        from igor.wizard.exceptions import ScriptError
        from igor.wizard.script import load_script

        path = tmp_path / "broken.yaml"
        path.write_text("events: [unclosed\n")
        with pytest.raises(ScriptError):
            load_script(path)

    def test_replay_through_driver(self, tmp_path):
        """Test a loaded script drives the wizard to Complete."""
        from igor.wizard import WizardOrchestrator
        from igor.wizard.runtime import HeadlessDriver
        from igor.wizard.script import load_script
        from igor.wizard.states import ViewState

        path = tmp_path / "session.yaml"
        path.write_text(HAPPY_PATH)
        script = load_script(path)

        wizard = WizardOrchestrator()
        driver = HeadlessDriver(wizard, width=script.width, height=script.height)
        driver.start()
        driver.send(*script.messages())
        assert wizard.current_view is ViewState.COMPLETE
        assert "nvcc --version" in driver.view()
