from typing import Any

from opentelemetry.sdk.trace import TracerProvider
import pytest

from src.platform.logging.loguru_io import Logger
from src.platform.logging.loguru_io_config import ExtraField


@pytest.fixture
def captured_records() -> Any:
    records: list[dict[str, Any]] = []
    sink_id = Logger.base.add(lambda message: records.append(message.record), level='INFO')
    yield records
    Logger.base.remove(sink_id)


@pytest.mark.unit
class TestTraceIdInLogs:
    def test_outside_a_span_trace_id_is_placeholder(self, captured_records: list) -> None:
        Logger.base.info('no span here')

        assert captured_records[-1]['extra'][ExtraField.TRACE_ID] == '-'

    def test_inside_a_span_trace_id_is_attached(self, captured_records: list) -> None:
        tracer = TracerProvider().get_tracer(__name__)

        with tracer.start_as_current_span('book') as span:
            Logger.base.info('inside span')
            expected = format(span.get_span_context().trace_id, '032x')

        assert captured_records[-1]['extra'][ExtraField.TRACE_ID] == expected
