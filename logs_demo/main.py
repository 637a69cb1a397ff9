"""
Process entry point: configure logging, build the sinks and run the driver.
"""

from typing import Optional

from logs_demo.config import Settings, settings as default_settings
from logs_demo.generators import FieldRandomizer, ScenarioDriver
from logs_demo.sinks import FanoutSink, KafkaSink, LogSink, LoguruSink
from logs_demo.utils.logging_utils import logger, setup_logging


def build_sink(settings: Settings) -> LogSink:
    """Loguru always; Kafka as well when enabled."""
    sink = LoguruSink()
    if not settings.kafka.enabled:
        return sink

    kafka_sink = KafkaSink(
        bootstrap_servers=settings.kafka.bootstrap_servers,
        topic=settings.kafka.topic,
        source=settings.generator.service_name
    )
    logger.info(f"Publishing records to Kafka topic {settings.kafka.topic}")
    return FanoutSink(sink, kafka_sink)


def build_driver(settings: Settings, sink: LogSink) -> ScenarioDriver:
    return ScenarioDriver(
        sink=sink,
        randomizer=FieldRandomizer(seed=settings.generator.seed),
        interval_seconds=settings.generator.interval_seconds
    )


def main(settings: Optional[Settings] = None) -> int:
    settings = settings or default_settings

    setup_logging(
        log_level=settings.logging.level,
        json_output=settings.logging.json_output,
        log_to_file=settings.logging.log_to_file,
        logs_path=settings.logging.logs_path,
        service=settings.generator.service_name
    )

    logger.info("Starting Datadog Logs Demo Application")

    sink = build_sink(settings)
    driver = build_driver(settings, sink)

    try:
        driver.run(max_ticks=settings.generator.max_ticks)
    except KeyboardInterrupt:
        logger.info("Shutting down")
    finally:
        sink.flush()
        sink.close()

    logger.info(f"Generator stopped after {driver.ticks} ticks")
    return 0


if __name__ == '__main__':
    raise SystemExit(main())
