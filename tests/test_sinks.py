"""
Tests for output sinks and the JSON log formatter
"""

import json
import unittest
from unittest.mock import MagicMock, patch

from kafka.errors import KafkaError, NoBrokersAvailable

from logs_demo.generators.randomizers import FieldRandomizer
from logs_demo.generators.scenarios import (
    SCENARIOS,
    generate_error_logs,
    generate_performance_logs,
)
from logs_demo.sinks import (
    FanoutSink,
    KafkaSink,
    LoguruSink,
    MemorySink,
    Severity,
)
from logs_demo.utils.logging_utils import json_formatter, logger


class TestLoguruSink(unittest.TestCase):
    """Records come out as flat one-line JSON objects"""

    def setUp(self):
        self.lines = []
        self.handler_id = logger.add(
            self.lines.append,
            format=json_formatter('test-service'),
            level='DEBUG'
        )
        self.sink = LoguruSink()

    def tearDown(self):
        logger.remove(self.handler_id)

    def _last(self):
        self.assertTrue(self.lines)
        line = str(self.lines[-1])
        self.assertTrue(line.endswith('\n'))
        self.assertEqual(line.count('\n'), 1)
        return json.loads(line)

    def test_fields_are_flattened(self):
        self.sink.info("Payment processed", {
            'event_type': 'payment_processing',
            'amount': 12.5,
            'retry_attempt': 2,
            '3ds_verified': True,
        })
        payload = self._last()
        self.assertEqual(payload['msg'], "Payment processed")
        self.assertEqual(payload['level'], 'info')
        self.assertEqual(payload['service'], 'test-service')
        self.assertEqual(payload['event_type'], 'payment_processing')
        self.assertEqual(payload['amount'], 12.5)
        self.assertEqual(payload['retry_attempt'], 2)
        self.assertIs(payload['3ds_verified'], True)
        self.assertIn('time', payload)
        self.assertNotIn('_serialized', payload)

    def test_severity_levels(self):
        self.sink.warning("Transaction failed", {'event_type': 'transaction'})
        self.assertEqual(self._last()['level'], 'warning')
        self.sink.error("Critical error occurred", {'event_type': 'error'})
        self.assertEqual(self._last()['level'], 'error')

    def test_braces_in_values_survive(self):
        self.sink.info("Service operating normally", {
            'event_type': 'info',
            'message': 'Normal {operation}',
        })
        self.assertEqual(self._last()['message'], 'Normal {operation}')

    def test_reserved_keys_are_prefixed(self):
        self.sink.info("hello", {'event_type': 'x', 'level': 'custom'})
        payload = self._last()
        self.assertEqual(payload['level'], 'info')
        self.assertEqual(payload['fields.level'], 'custom')

    def test_plain_log_lines(self):
        logger.info("Starting Datadog Logs Demo Application")
        payload = self._last()
        self.assertEqual(payload['msg'], "Starting Datadog Logs Demo Application")
        self.assertEqual(set(payload), {'time', 'level', 'msg', 'service'})
        self.assertEqual(payload['service'], 'test-service')

    def test_record_service_field_is_kept(self):
        generate_performance_logs(self.sink, FieldRandomizer(seed=1))
        performance = json.loads(str(self.lines[0]))
        self.assertEqual(performance['event_type'], 'performance')
        self.assertEqual(performance['service'], 'api-service')
        self.assertNotIn('fields.service', performance)

        with patch.object(FieldRandomizer, 'real', return_value=0.9):
            generate_error_logs(self.sink, FieldRandomizer(seed=1))
        error = self._last()
        self.assertEqual(error['event_type'], 'error')
        self.assertEqual(error['service'], 'checkout-service')
        self.assertNotIn('fields.service', error)

    @patch('logs_demo.generators.scenarios.time')
    def test_scenario_records_survive_serialization(self, mock_time):
        mock_time.time.return_value = 1700000000.0

        for scenario in SCENARIOS:
            memory = MemorySink()
            scenario(memory, FieldRandomizer(seed=31))
            self.lines.clear()
            scenario(self.sink, FieldRandomizer(seed=31))

            payloads = [json.loads(str(line)) for line in self.lines]
            self.assertEqual(len(payloads), len(memory.records), scenario.name)
            for record, payload in zip(memory.records, payloads):
                self.assertEqual(payload['msg'], record.message)
                self.assertEqual(payload['level'], record.severity.value.lower())
                for key, value in record.fields.items():
                    self.assertIn(key, payload, f"{scenario.name}: {key}")
                    self.assertEqual(payload[key], value, f"{scenario.name}: {key}")


class TestMemorySink(unittest.TestCase):

    def test_keeps_order_and_copies_fields(self):
        sink = MemorySink()
        fields = {'event_type': 'a'}
        sink.info("first", fields)
        fields['event_type'] = 'b'
        sink.error("second", fields)

        self.assertEqual([r.message for r in sink.records], ["first", "second"])
        self.assertEqual(sink.records[0].event_type, 'a')
        self.assertEqual(sink.records[1].severity, Severity.ERROR)
        self.assertEqual(len(sink.by_event_type('b')), 1)

        sink.clear()
        self.assertEqual(sink.records, [])


class TestKafkaSink(unittest.TestCase):

    def setUp(self):
        patcher = patch('logs_demo.sinks.KafkaProducer')
        self.mock_producer_cls = patcher.start()
        self.addCleanup(patcher.stop)
        self.mock_producer = self.mock_producer_cls.return_value
        self.now = 0.0
        self.sink = KafkaSink(
            bootstrap_servers='broker1:9092,broker2:9092',
            topic='logs-demo.events',
            reconnect_backoff_seconds=30.0,
            clock=lambda: self.now
        )

    def test_producer_created_lazily(self):
        self.mock_producer_cls.assert_not_called()
        self.sink.info("hello", {'event_type': 'api_request'})
        self.mock_producer_cls.assert_called_once()
        kwargs = self.mock_producer_cls.call_args.kwargs
        self.assertEqual(kwargs['bootstrap_servers'], ['broker1:9092', 'broker2:9092'])

    def test_envelope(self):
        self.sink.emit(Severity.WARNING, "API request failed with client error", {
            'event_type': 'api_request',
            'status_code': 404,
        })

        args, kwargs = self.mock_producer.send.call_args
        self.assertEqual(args[0], 'logs-demo.events')
        self.assertEqual(kwargs['key'], 'api_request')
        envelope = kwargs['value']
        self.assertEqual(envelope['level'], 'warning')
        self.assertEqual(envelope['message'], "API request failed with client error")
        self.assertEqual(envelope['fields']['status_code'], 404)
        self.assertEqual(envelope['source'], 'datadog-logs-demo')
        self.assertIn('message_id', envelope)
        self.assertIn('timestamp', envelope)
        self.assertEqual(self.sink.sent, 1)

    def test_send_failure_is_contained(self):
        self.mock_producer.send.side_effect = KafkaError("broker unavailable")
        self.assertIsNone(self.sink.emit(Severity.INFO, "hello", {'event_type': 'info'}))
        self.assertEqual(self.sink.failed, 1)
        self.assertEqual(self.sink.sent, 0)
        self.assertTrue(self.sink.available)

    def test_unreachable_broker_backs_off(self):
        self.mock_producer_cls.side_effect = NoBrokersAvailable()

        for _ in range(3):
            self.sink.info("hello", {'event_type': 'info'})
        self.assertEqual(self.mock_producer_cls.call_count, 1)
        self.assertEqual(self.sink.failed, 3)
        self.assertFalse(self.sink.available)

        self.now = 29.0
        self.sink.info("hello", {'event_type': 'info'})
        self.assertEqual(self.mock_producer_cls.call_count, 1)

        self.now = 30.0
        self.mock_producer_cls.side_effect = None
        self.sink.info("hello", {'event_type': 'info'})
        self.assertEqual(self.mock_producer_cls.call_count, 2)
        self.assertEqual(self.sink.sent, 1)
        self.assertEqual(self.sink.failed, 4)
        self.assertTrue(self.sink.available)

    def test_flush_and_close(self):
        self.sink.info("hello", {'event_type': 'info'})
        self.sink.flush()
        self.mock_producer.flush.assert_called_once()
        self.sink.close()
        self.mock_producer.close.assert_called_once()
        self.assertIsNone(self.sink._producer)

    def test_close_without_producer(self):
        self.sink.close()
        self.mock_producer_cls.assert_not_called()


class TestFanoutSink(unittest.TestCase):

    def test_emits_to_every_sink(self):
        first, second = MemorySink(), MemorySink()
        other = MagicMock()
        sink = FanoutSink(first, second, other)

        sink.warning("Transaction failed", {'event_type': 'transaction'})
        sink.flush()
        sink.close()

        self.assertEqual(len(first.records), 1)
        self.assertEqual(len(second.records), 1)
        other.emit.assert_called_once_with(
            Severity.WARNING, "Transaction failed", {'event_type': 'transaction'}
        )
        other.flush.assert_called_once()
        other.close.assert_called_once()


if __name__ == '__main__':
    unittest.main()
