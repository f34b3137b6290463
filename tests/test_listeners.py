"""Unit tests for ready-made status listeners."""

import unittest
from unittest.mock import Mock
import sys
import os

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from catpoint_security.models.security import AlarmStatus
from catpoint_security.services.listeners import CallbackStatusListener, EventHistoryListener


class TestCallbackStatusListener(unittest.TestCase):

    def test_forwards_status(self):
        on_status = Mock()
        listener = CallbackStatusListener(on_status)

        listener.notify(AlarmStatus.ALARM)
        listener.cat_detected(True)
        listener.sensor_status_changed()

        on_status.assert_called_once_with(AlarmStatus.ALARM)

    def test_optional_callbacks(self):
        on_cat = Mock()
        on_sensors = Mock()
        listener = CallbackStatusListener(Mock(), on_cat, on_sensors)

        listener.cat_detected(False)
        listener.sensor_status_changed()

        on_cat.assert_called_once_with(False)
        on_sensors.assert_called_once_with()


class TestEventHistoryListener(unittest.TestCase):

    def test_records_newest_first(self):
        listener = EventHistoryListener()

        listener.notify(AlarmStatus.PENDING_ALARM)
        listener.cat_detected(True)
        listener.sensor_status_changed()

        kinds = [event.kind for event in listener.get_events()]
        self.assertEqual(kinds, ['sensors_changed', 'cat_detected', 'alarm_status'])

    def test_bounded_history(self):
        listener = EventHistoryListener(max_events=2)
        for status in AlarmStatus:
            listener.notify(status)

        events = listener.get_events()
        self.assertEqual([e.value for e in events], [AlarmStatus.ALARM, AlarmStatus.PENDING_ALARM])

    def test_event_to_dict(self):
        listener = EventHistoryListener()
        listener.notify(AlarmStatus.ALARM)

        data = listener.get_events(1)[0].to_dict()

        self.assertEqual(data['kind'], 'alarm_status')
        self.assertEqual(data['value'], 'ALARM')
        self.assertIn('timestamp', data)

    def test_clear(self):
        listener = EventHistoryListener()
        listener.notify(AlarmStatus.ALARM)
        listener.clear()

        self.assertEqual(listener.get_events(), [])


if __name__ == '__main__':
    unittest.main()
