"""Tests for the Program loop and the headless driver."""

import io

import pytest


class RecordingModel:
    """Minimal model that records what it receives."""

    def __init__(self, init_commands=(), on_message=None):
        self.init_commands = list(init_commands)
        self.on_message = on_message or (lambda msg: None)
        self.received = []

    def init(self):
        return self.init_commands

    def update(self, msg):
        self.received.append(msg)
        return self, self.on_message(msg)

    def view(self):
        return f"{len(self.received)} messages"


class TestRunCommand:
    """Test command invocation."""

    def test_returns_message(self):
        """Test a command's message is returned."""
        from igor.wizard.messages import Quit, send
        from igor.wizard.runtime import run_command

        assert run_command(send(Quit())) == Quit()

    def test_exception_becomes_error_message(self):
        """Test a failing command is turned into an ErrorMsg."""
        from igor.wizard.messages import ErrorMsg
        from igor.wizard.runtime import run_command

        def boom():
            raise OSError("no such device")

        msg = run_command(boom)
        assert isinstance(msg, ErrorMsg)
        assert isinstance(msg.err, OSError)


class TestHeadlessDriver:
    """Test the synchronous driver."""

    def test_start_answers_size_probe(self):
        """Test start() resolves init into a sized, ready wizard."""
        from igor.wizard import WizardOrchestrator
        from igor.wizard.messages import WindowSize
        from igor.wizard.runtime import HeadlessDriver

        wizard = WizardOrchestrator()
        driver = HeadlessDriver(wizard, width=90, height=30)
        driver.start()
        assert wizard.ready
        assert (wizard.width, wizard.height) == (90, 30)
        assert WindowSize(90, 30) in driver.processed
        assert "Start Installation" in driver.view()

    def test_batch_expanded_and_ticks_dropped(self):
        """Test batches are expanded while tick commands are skipped."""
        from igor.wizard.messages import Status, Tick, batch, send, tick
        from igor.wizard.runtime import HeadlessDriver

        model = RecordingModel(on_message=lambda msg: batch(
            send(Status("a")), tick(1.0, lambda: Tick()), send(Status("b")),
        ) if isinstance(msg, Tick) else None)
        driver = HeadlessDriver(model)
        driver.send(Tick(1.0))
        assert model.received == [Tick(1.0), Status("a"), Status("b")]

    def test_processing_stops_at_quit(self):
        """Test messages after Quit are not processed."""
        from igor.wizard.messages import Quit, Status, Tick, batch, send
        from igor.wizard.runtime import HeadlessDriver

        model = RecordingModel(on_message=lambda msg: batch(
            send(Quit()), send(Status("late")),
        ) if isinstance(msg, Tick) else None)
        HeadlessDriver(model).send(Tick())
        assert model.received == [Tick(), Quit()]

    def test_runaway_chain_is_bounded(self):
        """Test a model that always answers with another message stops."""
        from igor.wizard.messages import Tick, send
        from igor.wizard.runtime import HeadlessDriver

        model = RecordingModel(on_message=lambda msg: send(Tick()))
        HeadlessDriver(model, max_steps=25).send(Tick())
        assert len(model.received) == 25

    def test_record_frames(self):
        """Test a frame is captured for every processed message."""
        from igor.wizard import WizardOrchestrator
        from igor.wizard.messages import KeyPress
        from igor.wizard.runtime import HeadlessDriver

        driver = HeadlessDriver(WizardOrchestrator(), record_frames=True)
        driver.start()
        driver.send(KeyPress("right"))
        assert len(driver.frames) == len(driver.processed)
        assert driver.frames[-1] == driver.view()


class TestProgram:
    """Test the threaded loop with a captured console."""

    def _console(self):
        from rich.console import Console

        return Console(file=io.StringIO(), width=80, height=24, force_terminal=False)

    def test_quit_ends_run(self):
        """Test a queued Quit stops the loop and renders goodbye."""
        from igor.wizard import WizardOrchestrator
        from igor.wizard.messages import Quit
        from igor.wizard.runtime import Program

        console = self._console()
        program = Program(WizardOrchestrator(), console=console, alt_screen=False)
        program.send(Quit())
        model = program.run()
        assert model.quitting
        assert program.token.cancelled
        assert "Goodbye!" in console.file.getvalue()

    def test_stop_without_quit(self):
        """Test stop() ends the loop and cancels outstanding work."""
        from igor.wizard.runtime import Program

        model = RecordingModel()
        program = Program(model, console=self._console(), alt_screen=False)
        program.stop()
        assert program.run() is model
        assert program.token.cancelled
        assert model.received == []

    def test_init_runs_and_size_is_probed(self):
        """Test init commands are processed and the size probe answered."""
        from igor.wizard.messages import Quit, RequestWindowSize, WindowSize, quit_command, send
        from igor.wizard.runtime import Program

        model = RecordingModel(
            init_commands=[send(RequestWindowSize())],
            on_message=lambda msg: quit_command() if isinstance(msg, WindowSize) else None,
        )
        program = Program(model, console=self._console(), alt_screen=False)
        program.run()
        assert model.received == [WindowSize(80, 24), Quit()]

    def test_failing_command_reported(self):
        """Test a command exception arrives as ErrorMsg."""
        from igor.wizard.messages import ErrorMsg, quit_command
        from igor.wizard.runtime import Program

        def boom():
            raise RuntimeError("lost")

        model = RecordingModel(
            init_commands=[boom],
            on_message=lambda msg: quit_command() if isinstance(msg, ErrorMsg) else None,
        )
        Program(model, console=self._console(), alt_screen=False).run()
        assert isinstance(model.received[0], ErrorMsg)
        assert str(model.received[0].err) == "lost"

    def test_parent_token(self):
        """Test the program's signal derives from a parent."""
        from igor.wizard.cancellation import CancellationSource
        from igor.wizard.runtime import Program

        parent = CancellationSource()
        program = Program(RecordingModel(), console=self._console(), parent=parent.token)
        parent.cancel()
        assert program.token.cancelled

    @pytest.mark.parametrize("lines,expected", [
        (["down\n", "\n"], ["down", "enter"]),
        (["q\n"], ["q"]),
    ])
    def test_read_keys(self, lines, expected):
        """Test key names are read line by line, then Quit at EOF."""
        from igor.wizard.messages import KeyPress, Quit
        from igor.wizard.runtime import Program

        model = RecordingModel()
        program = Program(model, console=self._console(), alt_screen=False)
        program.read_keys(io.StringIO("".join(lines))).join(5)
        program.run()
        assert model.received == [KeyPress(k) for k in expected] + [Quit()]
