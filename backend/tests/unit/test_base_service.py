from concurrent.futures import ThreadPoolExecutor

import pytest

from kalasetu.services.base import BaseService

pytestmark = pytest.mark.unit


class CountingService(BaseService):
    @BaseService.measure_operation("tick")
    def tick(self, fail: bool = False) -> int:
        if fail:
            raise ValueError("boom")
        return 1


@pytest.fixture
def counting_service():
    service = CountingService()
    service.reset_metrics()
    yield service
    service.reset_metrics()


class TestMeasureOperation:
    def test_records_success_and_failure(self, counting_service):
        counting_service.tick()
        with pytest.raises(ValueError):
            counting_service.tick(fail=True)

        metrics = counting_service.get_metrics()["tick"]

        assert metrics["count"] == 2
        assert metrics["failure_count"] == 1
        assert metrics["success_rate"] == 0.5

    def test_concurrent_calls_are_all_counted(self, counting_service):
        calls = 2000
        with ThreadPoolExecutor(max_workers=16) as pool:
            results = list(pool.map(lambda _: counting_service.tick(), range(calls)))

        metrics = counting_service.get_metrics()["tick"]

        assert sum(results) == calls
        assert metrics["count"] == calls
        assert metrics["success_rate"] == 1.0

    def test_reset_clears_only_this_service(self, counting_service):
        counting_service.tick()
        counting_service.reset_metrics()
        assert counting_service.get_metrics() == {}
