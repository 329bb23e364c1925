"""Tests for process management, in memory and against the host."""

import logging
import os
import shutil
import signal
import threading
import unittest

from fakes import FakeKernelServices

from minish.exceptions import ExecError, ForkError
from minish.logger import LogBufferHandler
from minish.process.process_manager import ProcessManager
from minish.process.states import ExecSearchMode, WaitOutcome
from minish.syscalls.services import HostKernelServices


class TestProcessManager(unittest.TestCase):
    """Test the process manager on the in-memory system."""
    
    def setUp(self):
        self.services = FakeKernelServices(files={'/usr/bin/env': b''})
        self.pm = ProcessManager(self.services)
    
    def test_spawn_tracks_foreground_child(self):
        pid = self.pm.spawn()
        self.assertEqual(pid, 101)
        self.assertEqual(self.pm.foreground_pid, 101)
        
        self.assertIs(self.pm.wait(pid), WaitOutcome.SUCCESS)
        self.assertIsNone(self.pm.foreground_pid)
    
    def test_timeout_keeps_foreground_child(self):
        pid = self.pm.spawn()
        self.services.wait_outcome = WaitOutcome.TIMEOUT
        self.assertIs(self.pm.wait(pid, timeout_seconds=1), WaitOutcome.TIMEOUT)
        self.assertEqual(self.pm.foreground_pid, pid)
        self.assertEqual(self.services.waits, [(pid, 1)])
    
    def test_interrupted_wait_keeps_foreground_child(self):
        pid = self.pm.spawn()
        self.services.wait_outcome = WaitOutcome.INTERRUPTED
        self.assertIs(self.pm.wait(pid), WaitOutcome.INTERRUPTED)
        self.assertEqual(self.pm.foreground_pid, pid)
    
    def test_killed_child_is_released(self):
        pid = self.pm.spawn()
        self.services.wait_outcome = WaitOutcome.KILLED
        self.pm.wait(pid)
        self.assertIsNone(self.pm.foreground_pid)
    
    def test_spawn_in_child_returns_zero(self):
        self.services.fork_results = [0]
        self.assertEqual(self.pm.spawn(), 0)
        self.assertIsNone(self.pm.foreground_pid)
    
    def test_spawn_failure_raises(self):
        self.services.fork_results = [ForkError("No resources", parent_pid=1)]
        with self.assertRaises(ForkError):
            self.pm.spawn()
    
    def test_search_mode_resolves_program(self):
        with self.assertRaises(ExecError):
            self.pm.replace_program(["env", "-0"], ExecSearchMode.SEARCH)
        self.assertEqual(self.services.execs, [("/usr/bin/env", ["env", "-0"])])
    
    def test_literal_mode_uses_name_verbatim(self):
        with self.assertRaises(ExecError):
            self.pm.replace_program(["env"], ExecSearchMode.LITERAL)
        self.assertEqual(self.services.execs, [("env", ["env"])])
    
    def test_empty_argv_rejected(self):
        with self.assertRaises(ExecError):
            self.pm.replace_program([])
        self.assertEqual(self.services.execs, [])
    
    def test_outcome_completed(self):
        self.assertTrue(WaitOutcome.SUCCESS.completed)
        for outcome in (WaitOutcome.INTERRUPTED, WaitOutcome.NO_SUCH_PROCESS,
                        WaitOutcome.KILLED, WaitOutcome.TIMEOUT):
            self.assertFalse(outcome.completed)

    def test_failures_are_not_logged_as_warnings(self):
        handler = LogBufferHandler()
        std_logger = logging.getLogger('minish.process')
        previous_level = std_logger.level
        std_logger.addHandler(handler)
        std_logger.setLevel(logging.DEBUG)
        try:
            self.services.fork_results = [ForkError("No resources", parent_pid=1)]
            with self.assertRaises(ForkError):
                self.pm.spawn()
            with self.assertRaises(ExecError):
                self.pm.replace_program(["env"])
        finally:
            std_logger.removeHandler(handler)
            std_logger.setLevel(previous_level)

        messages = [l['message'] for l in handler.get_logs(level='DEBUG')]
        self.assertTrue(any(m.startswith("fork failed") for m in messages))
        self.assertTrue(any(m.startswith("exec failed") for m in messages))
        self.assertEqual(handler.get_logs(level='WARNING'), [])


@unittest.skipUnless(hasattr(os, 'fork'), "requires fork")
class TestHostProcesses(unittest.TestCase):
    """Run real children through the host services."""
    
    def setUp(self):
        self.services = HostKernelServices()
        self.pm = ProcessManager(self.services)
    
    def start(self, argv, ignore_interrupts=False):
        pid = self.pm.spawn()
        if pid == 0:
            try:
                if ignore_interrupts:
                    signal.signal(signal.SIGINT, signal.SIG_IGN)
                self.pm.replace_program(argv, ExecSearchMode.SEARCH)
            finally:
                os._exit(127)
        return pid

    def interrupt_after(self, seconds):
        """Deliver SIGINT to the main thread, as Ctrl-C would."""
        timer = threading.Timer(
            seconds,
            signal.pthread_kill,
            (threading.main_thread().ident, signal.SIGINT)
        )
        timer.start()
        self.addCleanup(timer.cancel)
        return timer
    
    @unittest.skipUnless(shutil.which('true'), "requires true")
    def test_child_runs_to_completion(self):
        pid = self.start(["true"])
        self.assertIs(self.pm.wait(pid), WaitOutcome.SUCCESS)
    
    @unittest.skipUnless(shutil.which('sleep'), "requires sleep")
    def test_killed_child(self):
        pid = self.start(["sleep", "10"])
        os.kill(pid, signal.SIGKILL)
        self.assertIs(self.pm.wait(pid), WaitOutcome.KILLED)
    
    @unittest.skipUnless(shutil.which('sleep'), "requires sleep")
    def test_timeout(self):
        pid = self.start(["sleep", "10"])
        try:
            self.assertIs(self.pm.wait(pid, timeout_seconds=1), WaitOutcome.TIMEOUT)
        finally:
            os.kill(pid, signal.SIGKILL)
            os.waitpid(pid, 0)
    
    @unittest.skipUnless(shutil.which('sleep'), "requires sleep")
    def test_interrupt_during_wait_is_passed_to_child(self):
        handler = signal.getsignal(signal.SIGINT)
        pid = self.start(["sleep", "5"])
        self.interrupt_after(0.3)

        self.assertIs(self.pm.wait(pid), WaitOutcome.KILLED)
        self.assertIsNone(self.pm.foreground_pid)
        self.assertIs(signal.getsignal(signal.SIGINT), handler)

    @unittest.skipUnless(shutil.which('sleep'), "requires sleep")
    def test_interrupt_ignored_by_child_keeps_waiting(self):
        pid = self.start(["sleep", "1"], ignore_interrupts=True)
        self.interrupt_after(0.3)

        self.assertIs(self.pm.wait(pid), WaitOutcome.SUCCESS)
        self.assertIsNone(self.pm.foreground_pid)
        # nothing left behind to reap
        with self.assertRaises(ChildProcessError):
            os.waitpid(pid, os.WNOHANG)

    def test_no_such_process(self):
        pid = self.start(["/nonexistent/program"])
        # the child exits with 127 after exec fails
        self.assertIs(self.pm.wait(pid), WaitOutcome.SUCCESS)
        self.assertIs(self.pm.wait(pid), WaitOutcome.NO_SUCH_PROCESS)
    
    def test_exec_failure_raises(self):
        with self.assertRaises(ExecError) as ctx:
            self.services.exec("/nonexistent/program", ["program"])
        self.assertEqual(ctx.exception.path, "/nonexistent/program")


if __name__ == '__main__':
    unittest.main()
