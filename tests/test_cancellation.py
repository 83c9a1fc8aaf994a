"""Tests for the hierarchical cancellation signal."""

import threading


class TestCancellation:
    """Test cancellation sources and tokens."""

    def test_cancel_is_idempotent(self):
        """Test only the first cancel reports firing."""
        from igor.wizard.cancellation import CancellationSource

        source = CancellationSource()
        assert not source.cancelled
        assert source.cancel() is True
        assert source.cancel() is False
        assert source.token.cancelled

    def test_parent_cancels_child(self):
        """Test cancellation flows from parent to child."""
        from igor.wizard.cancellation import CancellationSource

        parent = CancellationSource()
        child = CancellationSource(parent.token)
        grandchild = child.token.child()
        parent.cancel()
        assert child.cancelled
        assert grandchild.cancelled

    def test_child_does_not_cancel_parent(self):
        """Test cancelling a child leaves the parent alone."""
        from igor.wizard.cancellation import CancellationSource

        parent = CancellationSource()
        child = CancellationSource(parent.token)
        child.cancel()
        assert child.cancelled
        assert not parent.cancelled

    def test_child_of_cancelled_parent_starts_cancelled(self):
        """Test deriving from an already cancelled token."""
        from igor.wizard.cancellation import CancellationSource

        parent = CancellationSource()
        parent.cancel()
        assert CancellationSource(parent.token).cancelled

    def test_token_is_read_only(self):
        """Test the token exposes no way to trigger cancellation."""
        from igor.wizard.cancellation import CancellationSource

        token = CancellationSource().token
        assert not hasattr(token, "cancel")

    def test_callbacks_run_once(self):
        """Test callbacks fire once, on the first cancel."""
        from igor.wizard.cancellation import CancellationSource

        source = CancellationSource()
        calls = []
        source.token.add_callback(lambda: calls.append(1))
        source.cancel()
        source.cancel()
        assert calls == [1]

    def test_wait_observes_cancel_from_other_thread(self):
        """Test wait() wakes when another thread cancels."""
        from igor.wizard.cancellation import CancellationSource

        source = CancellationSource()
        assert source.token.wait(0.01) is False

        timer = threading.Timer(0.05, source.cancel)
        timer.start()
        try:
            assert source.token.wait(5) is True
        finally:
            timer.cancel()

    def test_concurrent_cancel(self):
        """Test many threads cancelling fire callbacks exactly once."""
        from igor.wizard.cancellation import CancellationSource

        source = CancellationSource()
        calls = []
        source.token.add_callback(lambda: calls.append(1))
        threads = [threading.Thread(target=source.cancel) for _ in range(16)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        assert calls == [1]

    def test_failing_callback_does_not_stop_propagation(self):
        """Test a raising callback neither escapes cancel() nor skips later ones."""
        from igor.wizard.cancellation import CancellationSource

        def bad():
            raise RuntimeError("observer blew up")

        parent = CancellationSource()
        parent.token.add_callback(bad)
        child = CancellationSource(parent.token)
        calls = []
        parent.token.add_callback(lambda: calls.append(1))

        assert parent.cancel() is True
        assert child.cancelled
        assert calls == [1]

    def test_failing_callback_on_cancelled_token(self):
        """Test a raising callback added after cancellation is contained."""
        from igor.wizard.cancellation import CancellationSource

        source = CancellationSource()
        source.cancel()

        def bad():
            raise ValueError("late")

        source.token.add_callback(bad)
        assert source.cancelled

    def test_wizard_quit_survives_failing_observer(self):
        """Test Quit returns normally when a context observer raises."""
        from igor.wizard import WizardOrchestrator
        from igor.wizard.messages import ExitRequested, Quit

        def bad():
            raise RuntimeError("observer blew up")

        for msg in (Quit(), ExitRequested()):
            wizard = WizardOrchestrator()
            wizard.context.add_callback(bad)
            seen = []
            wizard.context.add_callback(lambda: seen.append(True))
            result, _ = wizard.update(msg)
            assert result is wizard
            assert wizard.quitting
            assert seen == [True]
