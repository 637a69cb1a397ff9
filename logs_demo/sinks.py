"""
Output sinks for generated log records.

A sink accepts one record (severity, message, field mapping) and owns
serialization, timestamping and delivery. Scenario generators never see
delivery failures.
"""

import json
import time
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Callable, Dict, List, Optional

from kafka import KafkaProducer
from kafka.errors import KafkaError

from logs_demo.utils.logging_utils import logger


class Severity(Enum):
    """Severity of an emitted record; values are loguru level names."""
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"


@dataclass
class EmittedRecord:
    """One record handed to a sink."""
    severity: Severity
    message: str
    fields: Dict[str, Any] = field(default_factory=dict)

    @property
    def event_type(self) -> Optional[str]:
        return self.fields.get('event_type')


class LogSink:
    """Base class for record sinks."""

    def emit(self, severity: Severity, message: str, fields: Dict[str, Any]) -> None:
        raise NotImplementedError

    def info(self, message: str, fields: Dict[str, Any]) -> None:
        self.emit(Severity.INFO, message, fields)

    def warning(self, message: str, fields: Dict[str, Any]) -> None:
        self.emit(Severity.WARNING, message, fields)

    def error(self, message: str, fields: Dict[str, Any]) -> None:
        self.emit(Severity.ERROR, message, fields)

    def flush(self) -> None:
        pass

    def close(self) -> None:
        pass


class LoguruSink(LogSink):
    """Writes records through loguru with the fields bound as extras."""

    def emit(self, severity: Severity, message: str, fields: Dict[str, Any]) -> None:
        logger.bind(**fields).log(severity.value, message)


class MemorySink(LogSink):
    """Keeps every record in memory, in emission order."""

    def __init__(self):
        self.records: List[EmittedRecord] = []

    def emit(self, severity: Severity, message: str, fields: Dict[str, Any]) -> None:
        self.records.append(EmittedRecord(severity, message, dict(fields)))

    def by_event_type(self, event_type: str) -> List[EmittedRecord]:
        return [r for r in self.records if r.event_type == event_type]

    def clear(self) -> None:
        self.records.clear()


class KafkaSink(LogSink):
    """
    Publishes records to a Kafka topic, keyed by event_type.

    Delivery outcomes are counted in ``sent`` and ``failed``. When the
    producer cannot be created (no broker reachable), records are counted as
    failed without reconnecting until ``reconnect_backoff_seconds`` pass.
    """

    def __init__(
        self,
        bootstrap_servers: str,
        topic: str,
        client_id: str = 'logs-demo-producer',
        source: str = 'datadog-logs-demo',
        reconnect_backoff_seconds: float = 30.0,
        clock: Callable[[], float] = time.monotonic
    ):
        self.bootstrap_servers = bootstrap_servers
        self.topic = topic
        self.client_id = client_id
        self.source = source
        self.reconnect_backoff_seconds = reconnect_backoff_seconds
        self._clock = clock
        self._producer: Optional[KafkaProducer] = None
        self._unavailable_until: Optional[float] = None
        self.sent = 0
        self.failed = 0

    @property
    def producer(self) -> KafkaProducer:
        """Get or create Kafka producer."""
        if self._producer is None:
            self._producer = KafkaProducer(
                bootstrap_servers=self.bootstrap_servers.split(','),
                client_id=self.client_id,
                value_serializer=lambda v: json.dumps(v, default=str).encode('utf-8'),
                key_serializer=lambda k: k.encode('utf-8') if k else None,
                acks='all',
                retries=3,
                retry_backoff_ms=1000,
                compression_type='gzip',
                linger_ms=10
            )
        return self._producer

    @property
    def available(self) -> bool:
        """False while inside the backoff window after a failed connect."""
        if self._unavailable_until is None:
            return True
        return self._clock() >= self._unavailable_until

    def _create_message(
        self,
        severity: Severity,
        message: str,
        fields: Dict[str, Any]
    ) -> Dict[str, Any]:
        """
        Create a standardized message envelope.

        Args:
            severity: Record severity
            message: Human-readable message
            fields: Structured record payload

        Returns:
            Message envelope with metadata
        """
        return {
            'message_id': str(uuid.uuid4()),
            'timestamp': datetime.now(timezone.utc).isoformat(),
            'source': self.source,
            'level': severity.value.lower(),
            'message': message,
            'fields': fields
        }

    def emit(self, severity: Severity, message: str, fields: Dict[str, Any]) -> None:
        """Send one record to the topic."""
        if not self.available:
            self.failed += 1
            return

        try:
            producer = self.producer
        except KafkaError as e:
            self.failed += 1
            self._unavailable_until = self._clock() + self.reconnect_backoff_seconds
            logger.warning(
                f"Kafka unavailable at {self.bootstrap_servers}, "
                f"retrying in {self.reconnect_backoff_seconds}s: {e}"
            )
            return

        self._unavailable_until = None
        try:
            envelope = self._create_message(severity, message, fields)
            producer.send(self.topic, value=envelope, key=fields.get('event_type'))
            self.sent += 1

        except KafkaError as e:
            self.failed += 1
            logger.error(f"Failed to send record to {self.topic}: {e}")

    def flush(self, timeout: float = 30.0) -> None:
        """Flush pending messages."""
        if self._producer:
            self._producer.flush(timeout=timeout)

    def close(self) -> None:
        """Close the producer."""
        if self._producer:
            self._producer.close()
            self._producer = None
            logger.info(f"Kafka sink closed: {self.sent} sent, {self.failed} failed")


class FanoutSink(LogSink):
    """Emits every record to each wrapped sink in order."""

    def __init__(self, *sinks: LogSink):
        self.sinks = list(sinks)

    def emit(self, severity: Severity, message: str, fields: Dict[str, Any]) -> None:
        for sink in self.sinks:
            sink.emit(severity, message, fields)

    def flush(self) -> None:
        for sink in self.sinks:
            sink.flush()

    def close(self) -> None:
        for sink in self.sinks:
            sink.close()


__all__ = [
    'Severity',
    'EmittedRecord',
    'LogSink',
    'LoguruSink',
    'MemorySink',
    'KafkaSink',
    'FanoutSink'
]
