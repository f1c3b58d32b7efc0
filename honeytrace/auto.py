"""Process-wide tracing setup: init(), get_tracer() and stop_tracing()."""

from __future__ import annotations

import logging
import threading
from typing import Any, Optional

from opentelemetry.sdk.trace.export import BatchSpanProcessor, SpanExporter
from opentelemetry.trace import Tracer

from honeytrace.config import HoneytraceConfig, load_config
from honeytrace.errors import ConfigError
from honeytrace.exporter.builder import SpanExporterBuilder
from honeytrace.tracer.provider import TracerProvider

logger = logging.getLogger(__name__)

_lock = threading.Lock()
_provider: Optional[TracerProvider] = None


def build_exporter(config: HoneytraceConfig) -> SpanExporter:
    """Build the event exporter described by the exporter config section."""
    exporter_config = config.exporter
    builder = SpanExporterBuilder(config.tracing.service_name)
    builder.api_host(exporter_config.api_host).debug(exporter_config.debug)
    if exporter_config.dataset:
        builder.dataset(exporter_config.dataset)
    if exporter_config.write_key:
        builder.write_key(exporter_config.write_key)
    for name, value in exporter_config.global_fields.items():
        builder.add_global_field(name, value)
    return builder.build()


def init(
    config_file: Optional[str] = None,
    exporter: Optional[SpanExporter] = None,
    **overrides: Any,
) -> TracerProvider:
    """
    Configure process-wide tracing and return the provider.

    Calling init() again before stop_tracing() returns the existing
    provider unchanged.

    Args:
        config_file: TOML config path (discovered when None)
        exporter: Span exporter to use instead of one built from config
        **overrides: Flat config settings, e.g. service_name="api", sample_rate=10

    Raises:
        ConfigError: if the configuration is invalid or has no service name
    """
    global _provider
    with _lock:
        if _provider is not None:
            logger.warning("init() called while tracing is already active; keeping existing provider")
            return _provider

        config = load_config(config_file=config_file, overrides=overrides)
        service_name = config.tracing.service_name
        if not service_name:
            raise ConfigError("service_name is required (set it in config, env or init())")

        if exporter is None:
            exporter = build_exporter(config)
        provider = TracerProvider(
            sample_rate=config.tracing.sample_rate,
            resource={"service.name": service_name},
            key_attribute=config.tracing.key_attribute,
        )
        provider.add_span_processor(
            BatchSpanProcessor(
                exporter,
                max_queue_size=config.batch.max_queue_size,
                max_export_batch_size=config.batch.max_export_batch_size,
                schedule_delay_millis=config.batch.schedule_delay_millis,
            )
        )
        _provider = provider
        logger.info(
            "Tracing initialized for service %s with sample rate %d",
            service_name,
            config.tracing.sample_rate,
        )
        return provider


def get_tracer_provider() -> Optional[TracerProvider]:
    return _provider


def get_tracer(name: str) -> Tracer:
    """
    Get a tracer from the active provider.

    Raises:
        ConfigError: if init() has not been called
    """
    provider = _provider
    if provider is None:
        raise ConfigError("tracing is not initialized; call honeytrace.init() first")
    return provider.get_tracer(name)


def stop_tracing() -> None:
    """Flush and shut down the active provider, allowing init() again."""
    global _provider
    with _lock:
        provider = _provider
        _provider = None
    if provider is None:
        return
    provider.force_flush()
    provider.shutdown()
    logger.info("Tracing stopped")
