"""Unit tests for the error handler."""

import unittest
from unittest.mock import Mock
import sys
import os

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from catpoint_security.exceptions import CollaboratorUnavailableError
from catpoint_security.services.error_handler import (
    ComponentStatus,
    ErrorHandler,
    ErrorSeverity,
    GuardedCollaborator,
    collaborator_call
)


class TestErrorHandler(unittest.TestCase):
    """Test cases for ErrorHandler."""

    def setUp(self):
        """Set up test fixtures."""
        self.handler = ErrorHandler(max_records=3)
        self.handler.register_component("repository")

    def test_register_component(self):
        self.assertEqual(self.handler.get_component_health()["repository"], ComponentStatus.HEALTHY)
        self.assertEqual(self.handler.get_error_stats()["component_error_counts"]["repository"], 0)

    def test_handle_error_updates_status(self):
        self.handler.handle_error("repository", IOError("disk"), ErrorSeverity.HIGH, "get_sensors")
        self.assertEqual(self.handler.get_component_health()["repository"], ComponentStatus.DEGRADED)

        self.handler.handle_error("repository", IOError("disk"), ErrorSeverity.CRITICAL)
        self.assertEqual(self.handler.get_component_health()["repository"], ComponentStatus.FAILED)

        self.handler.mark_healthy("repository")
        self.assertEqual(self.handler.get_component_health()["repository"], ComponentStatus.HEALTHY)

    def test_records_are_bounded(self):
        for _ in range(5):
            self.handler.handle_error("repository", IOError("disk"), ErrorSeverity.LOW)

        stats = self.handler.get_error_stats()
        self.assertEqual(stats["total_errors"], 3)
        self.assertEqual(stats["component_error_counts"]["repository"], 5)

    def test_error_summary(self):
        self.handler.handle_error("repository", IOError("disk"), ErrorSeverity.LOW)
        self.handler.handle_error("classifier", RuntimeError("model"), ErrorSeverity.HIGH)

        summary = self.handler.get_error_summary(hours=1)

        self.assertEqual(summary["total_errors"], 2)
        self.assertEqual(summary["component_counts"], {"repository": 1, "classifier": 1})
        self.assertEqual(summary["severity_counts"]["high"], 1)

    def test_reset_error_counts(self):
        self.handler.handle_error("repository", IOError("disk"), ErrorSeverity.CRITICAL)

        self.handler.reset_error_counts()

        self.assertEqual(self.handler.get_error_stats()["component_error_counts"]["repository"], 0)
        self.assertEqual(self.handler.get_component_health()["repository"], ComponentStatus.HEALTHY)


class TestCollaboratorCall(unittest.TestCase):

    def setUp(self):
        """Set up test fixtures."""
        self.handler = ErrorHandler()

    def test_success_passes_through(self):
        func = collaborator_call("repository", error_handler=self.handler)(lambda x: x * 2)

        self.assertEqual(func(4), 8)
        self.assertEqual(self.handler.get_error_stats()["total_errors"], 0)

    def test_failure_is_wrapped(self):
        def get_sensors():
            raise IOError("disk")

        func = collaborator_call("repository", error_handler=self.handler)(get_sensors)

        with self.assertRaises(CollaboratorUnavailableError) as ctx:
            func()

        self.assertEqual(ctx.exception.operation, "get_sensors")
        self.assertIsInstance(ctx.exception.__cause__, IOError)
        self.assertEqual(self.handler.get_error_stats()["total_errors"], 1)

    def test_guarded_collaborator_proxies_calls(self):
        target = Mock()
        target.get_sensors.return_value = {"a"}
        target.name = "repo"
        guarded = GuardedCollaborator(target, "repository", self.handler)

        self.assertEqual(guarded.get_sensors(), {"a"})
        self.assertEqual(guarded.name, "repo")
        self.assertIs(guarded.target, target)

    def test_guarded_collaborator_wraps_failures(self):
        target = Mock()
        target.set_alarm_status.side_effect = ConnectionError("store offline")
        guarded = GuardedCollaborator(target, "repository", self.handler)

        with self.assertRaises(CollaboratorUnavailableError) as ctx:
            guarded.set_alarm_status("ALARM")

        self.assertEqual(ctx.exception.operation, "set_alarm_status")
        self.assertEqual(self.handler.get_component_health()["repository"], ComponentStatus.DEGRADED)


if __name__ == '__main__':
    unittest.main()
