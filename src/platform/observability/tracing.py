"""
OpenTelemetry tracing

- TracingConfig installs the SDK tracer provider at startup and
  auto-instruments FastAPI and SQLAlchemy
- Use cases open their own spans via `trace.get_tracer(__name__)` and tag
  business rejections with `record_rejection`

Exporters (from settings):
- OTEL_EXPORTER_OTLP_ENDPOINT: OTLP gRPC collector, e.g. http://localhost:4317
- OTEL_CONSOLE_EXPORT: print finished spans to stdout
Without either, spans are sampled but go nowhere.
"""

from typing import Any

from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.instrumentation.sqlalchemy import SQLAlchemyInstrumentor
from opentelemetry.sdk.resources import SERVICE_NAME, SERVICE_VERSION, Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor, ConsoleSpanExporter
from opentelemetry.sdk.trace.sampling import ParentBased, TraceIdRatioBased

from src.platform.config.core_setting import settings
from src.platform.exception.exceptions import CustomBaseError


class TracingConfig:
    """
    Usage:
        tracing = TracingConfig(service_name='cinema-service')
        tracing.setup()
        ...
        tracing.shutdown()
    """

    def __init__(
        self,
        *,
        service_name: str,
        otlp_endpoint: str | None = None,
        enable_console: bool | None = None,
        sample_ratio: float | None = None,
    ) -> None:
        self.service_name = service_name
        self.otlp_endpoint = otlp_endpoint or settings.OTEL_EXPORTER_OTLP_ENDPOINT
        self.enable_console = (
            settings.OTEL_CONSOLE_EXPORT if enable_console is None else enable_console
        )
        self.sample_ratio = (
            settings.OTEL_TRACES_SAMPLE_RATIO if sample_ratio is None else sample_ratio
        )
        self._provider: TracerProvider | None = None

    @property
    def is_exporting(self) -> bool:
        return bool(self.otlp_endpoint) or self.enable_console

    def setup(self) -> None:
        """Install the global tracer provider. Call once at startup."""
        resource = Resource(
            attributes={SERVICE_NAME: self.service_name, SERVICE_VERSION: settings.VERSION}
        )
        # Child spans follow the caller's decision; root spans use the ratio
        sampler = ParentBased(root=TraceIdRatioBased(self.sample_ratio))
        self._provider = TracerProvider(resource=resource, sampler=sampler)

        if self.otlp_endpoint:
            self._provider.add_span_processor(
                BatchSpanProcessor(OTLPSpanExporter(endpoint=self.otlp_endpoint))
            )
        if self.enable_console:
            self._provider.add_span_processor(BatchSpanProcessor(ConsoleSpanExporter()))

        trace.set_tracer_provider(self._provider)

    def instrument_fastapi(self, *, app: Any, excluded_urls: str = 'health,metrics') -> None:
        FastAPIInstrumentor.instrument_app(app, excluded_urls=excluded_urls)

    def instrument_sqlalchemy(self, *, engine: Any) -> None:
        # AsyncEngine is instrumented through its sync_engine
        SQLAlchemyInstrumentor().instrument(engine=getattr(engine, 'sync_engine', engine))

    def shutdown(self) -> None:
        if self._provider:
            self._provider.shutdown()


def record_rejection(error: CustomBaseError) -> None:
    """Tag the current span with the domain error a request was rejected with."""
    span = trace.get_current_span()
    span.set_attribute('cinema.error_type', error.error_type.value)
    span.set_attribute('http.response.status_code', error.status_code)
    if error.status_code >= 500:
        span.record_exception(error)
        span.set_status(trace.Status(trace.StatusCode.ERROR, error.message))
