"""
OpenTelemetry Configuration

Sets up tracing and logging for the FCC capacity engine. Until
setup_observability() runs, spans created by the service layer are no-ops.
"""

import os
import logging
from typing import Optional

from opentelemetry import trace
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.sampling import TraceIdRatioBased
from opentelemetry.sdk.trace.export import BatchSpanProcessor, ConsoleSpanExporter
from opentelemetry.sdk.resources import Resource
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter

SERVICE_NAME = 'fcc-capacity-engine'

SAMPLING_RATIOS = {
    'production': 0.1,
    'staging': 0.5,
}

LOG_LEVELS = {
    'production': logging.WARNING,
    'staging': logging.INFO,
    'development': logging.DEBUG,
    'test': logging.WARNING,
}


def build_tracer_provider(environment: str, otlp_endpoint: Optional[str] = None) -> TracerProvider:
    """Create a tracer provider with environment-specific sampling and exporters."""
    sampler = TraceIdRatioBased(SAMPLING_RATIOS.get(environment, 1.0))

    resource = Resource.create({
        "service.name": SERVICE_NAME,
        "service.version": os.getenv('SERVICE_VERSION', '1.0.0'),
        "deployment.environment": environment
    })

    tracer_provider = TracerProvider(sampler=sampler, resource=resource)

    if otlp_endpoint:
        tracer_provider.add_span_processor(
            BatchSpanProcessor(OTLPSpanExporter(endpoint=otlp_endpoint), max_export_batch_size=512)
        )
    elif environment == 'development':
        # Development: console output only
        tracer_provider.add_span_processor(BatchSpanProcessor(ConsoleSpanExporter()))

    return tracer_provider


def setup_observability() -> bool:
    """
    Initialize tracing and logging based on environment configuration.

    Returns:
        True if a tracer provider was installed
    """
    environment = os.getenv('ENVIRONMENT', 'development')
    otel_enabled = os.getenv('OTEL_ENABLED', 'true').lower() == 'true'

    setup_structured_logging(environment)

    if not otel_enabled:
        return False

    tracer_provider = build_tracer_provider(environment, os.getenv('OTEL_EXPORTER_OTLP_ENDPOINT'))
    trace.set_tracer_provider(tracer_provider)
    return True


def setup_structured_logging(environment: str):
    """Configure logging levels for the engine's loggers."""
    log_level = LOG_LEVELS.get(environment, logging.INFO)

    logging.basicConfig(
        level=log_level,
        format='%(asctime)s | %(levelname)-8s | %(name)s | %(message)s',
        handlers=[logging.StreamHandler()]
    )

    if environment == 'production':
        # Production: reduce exporter noise
        logging.getLogger('opentelemetry').setLevel(logging.ERROR)
        logging.getLogger('grpc').setLevel(logging.ERROR)

    logging.getLogger('fcc_capacity').setLevel(log_level)
