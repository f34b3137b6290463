"""Unit tests for security models."""

import unittest
import sys
import os

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from catpoint_security.models.security import AlarmStatus, ArmingStatus, Sensor, SensorType


class TestAlarmStatus(unittest.TestCase):

    def test_severity_order(self):
        self.assertLess(AlarmStatus.NO_ALARM, AlarmStatus.PENDING_ALARM)
        self.assertLess(AlarmStatus.PENDING_ALARM, AlarmStatus.ALARM)
        self.assertEqual(max(AlarmStatus), AlarmStatus.ALARM)
        self.assertEqual(sorted([AlarmStatus.ALARM, AlarmStatus.NO_ALARM, AlarmStatus.PENDING_ALARM]),
                         [AlarmStatus.NO_ALARM, AlarmStatus.PENDING_ALARM, AlarmStatus.ALARM])

    def test_descriptions(self):
        self.assertEqual(AlarmStatus.ALARM.description, "Awooga!")
        self.assertTrue(AlarmStatus.NO_ALARM.color.startswith("#"))


class TestArmingStatus(unittest.TestCase):

    def test_is_armed(self):
        self.assertFalse(ArmingStatus.DISARMED.is_armed)
        self.assertTrue(ArmingStatus.ARMED_HOME.is_armed)
        self.assertTrue(ArmingStatus.ARMED_AWAY.is_armed)
        self.assertEqual(ArmingStatus.ARMED_HOME.description, "Armed - At Home")


class TestSensor(unittest.TestCase):

    def test_identity_ignores_active_flag(self):
        """Sensors with the same name and type are equal whatever their flag."""
        a = Sensor("door", SensorType.DOOR, active=False)
        b = Sensor("door", SensorType.DOOR, active=True)

        self.assertEqual(a, b)
        self.assertEqual(len({a, b}), 1)

    def test_type_is_part_of_identity(self):
        self.assertNotEqual(Sensor("front", SensorType.DOOR), Sensor("front", SensorType.WINDOW))

    def test_defaults_to_inactive(self):
        self.assertFalse(Sensor("hall", SensorType.MOTION).active)

    def test_dict_conversion(self):
        sensor = Sensor("hall", SensorType.MOTION, active=True)

        data = sensor.to_dict()
        self.assertEqual(data, {'name': 'hall', 'sensor_type': 'MOTION', 'active': True})

        restored = Sensor.from_dict(data)
        self.assertEqual(restored, sensor)
        self.assertTrue(restored.active)


if __name__ == '__main__':
    unittest.main()
