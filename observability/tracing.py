from opentelemetry import trace
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
import os
from dotenv import load_dotenv
import logging

# Configure logger
logger = logging.getLogger(__name__)

# Load environment variables
load_dotenv()


def tracing_enabled():
    return os.getenv("ENABLE_TRACING", "false").lower() == "true"


def setup_tracing(app=None):
    """
    Set up OpenTelemetry tracing.

    Args:
        app (FastAPI, optional): FastAPI application to instrument

    Returns:
        bool: True if tracing was installed
    """
    if not tracing_enabled():
        logger.info("Tracing is disabled")
        return False

    try:
        # Set up tracer provider
        tracer_provider = TracerProvider(resource=Resource.create({"service.name": "spahost"}))
        trace.set_tracer_provider(tracer_provider)

        # Set up exporter
        otlp_exporter = OTLPSpanExporter(endpoint=os.getenv("OTLP_ENDPOINT", "localhost:4317"))
        span_processor = BatchSpanProcessor(otlp_exporter)
        tracer_provider.add_span_processor(span_processor)

        # Instrument FastAPI if provided
        if app:
            FastAPIInstrumentor.instrument_app(app)
            logger.info("FastAPI instrumented for tracing")

        logger.info("OpenTelemetry tracing set up successfully")
        return True
    except Exception as e:
        logger.error(f"Failed to set up tracing: {e}")
        return False


def get_tracer():
    """
    Get a tracer for manual instrumentation.

    Returns:
        Tracer: OpenTelemetry tracer
    """
    return trace.get_tracer("spahost.tracer")
