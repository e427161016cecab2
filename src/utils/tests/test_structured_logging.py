"""Tests for JSONFormatter."""

import json
import logging
import unittest

from utils.logging import JSONFormatter


def _record(msg='hello', **extra) -> logging.LogRecord:
    record = logging.LogRecord('test.logger', logging.INFO, __file__, 1, msg, None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestJSONFormatter(unittest.TestCase):

    def setUp(self):
        self.formatter = JSONFormatter()

    def test_basic_fields(self):
        data = json.loads(self.formatter.format(_record()))

        self.assertEqual(data['level'], 'INFO')
        self.assertEqual(data['logger'], 'test.logger')
        self.assertEqual(data['message'], 'hello')
        self.assertTrue(data['timestamp'].endswith('Z'))

    def test_extra_fields_are_flattened(self):
        data = json.loads(self.formatter.format(_record(userId='user-1')))
        self.assertEqual(data['userId'], 'user-1')

    def test_sensitive_extra_fields_are_redacted(self):
        data = json.loads(self.formatter.format(_record(password='Password123', token='abc.def.ghi')))

        self.assertEqual(data['password'], '***')
        self.assertEqual(data['token'], '***')
        self.assertNotIn('Password123', json.dumps(data))

    def test_non_json_values_are_stringified(self):
        data = json.loads(self.formatter.format(_record(fields={'active'})))
        self.assertEqual(data['fields'], "{'active'}")


if __name__ == '__main__':
    unittest.main()
