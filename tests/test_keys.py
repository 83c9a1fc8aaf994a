"""Tests for Igor key bindings."""


class TestBinding:
    """Test individual bindings."""

    def test_matches_any_bound_key(self):
        """Test a binding matches each of its keys."""
        from igor.wizard.keys import default_key_map

        km = default_key_map()
        assert km.up.matches("up")
        assert km.up.matches("k")
        assert not km.up.matches("down")

    def test_disabled_binding_never_matches(self):
        """Test disabling a binding stops it matching."""
        from igor.wizard.keys import default_key_map

        km = default_key_map()
        km.enter.set_enabled(False)
        assert not km.enter.matches("enter")
        km.enter.set_enabled(True)
        assert km.enter.matches("enter")

    def test_help_text(self):
        """Test rendered help entry."""
        from igor.wizard.keys import default_key_map

        assert default_key_map().quit.help == "q quit"


class TestKeyMap:
    """Test the key map as a whole."""

    def test_default_bindings(self):
        """Test the default physical keys."""
        from igor.wizard.keys import default_key_map

        km = default_key_map()
        assert km.quit.keys == ("q", "ctrl+c")
        assert km.back.keys == ("esc", "backspace")
        assert km.help.keys == ("?",)
        assert km.space.matches(" ")
        assert len(km.bindings()) == 14

    def test_disable_all_keeps_quit(self):
        """Test disable_all leaves only quit enabled."""
        from igor.wizard.keys import default_key_map

        km = default_key_map()
        km.disable_all()
        enabled = [name for name, b in km.bindings().items() if b.enabled]
        assert enabled == ["quit"]
        km.enable_all()
        assert all(b.enabled for b in km.bindings().values())

    def test_navigation_and_actions(self):
        """Test group toggles touch only their group."""
        from igor.wizard.keys import default_key_map

        km = default_key_map()
        km.disable_navigation()
        assert not km.up.enabled
        assert not km.home.enabled
        assert km.enter.enabled

        km.enable_navigation()
        km.disable_actions()
        assert km.up.enabled
        assert not km.enter.enabled
        assert not km.back.enabled
        km.enable_actions()
        assert km.back.enabled

    def test_set_enabled_by_name(self):
        """Test toggling by name, ignoring unknown names."""
        from igor.wizard.keys import default_key_map

        km = default_key_map()
        km.set_enabled("tab", False)
        km.set_enabled("nonexistent", False)
        assert not km.tab.enabled

    def test_copy_is_independent(self):
        """Test copies do not share binding state."""
        from igor.wizard.keys import default_key_map

        km = default_key_map()
        other = km.copy()
        other.disable_all()
        assert km.up.enabled
        assert not other.up.enabled

    def test_help_groups(self):
        """Test short and full help contents."""
        from igor.wizard.keys import default_key_map

        km = default_key_map()
        assert km.quit in km.short_help()
        full = km.full_help()
        assert len(full) == 4
        assert sum(len(col) for col in full) == 14
