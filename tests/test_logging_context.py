"""Tests for request ID propagation in log records."""

import logging

import pytest

from tests.conftest import MONDAY, make_service

from salon_scheduling.logging_context import (
    NO_REQUEST_ID,
    RequestIdFilter,
    get_request_id,
    get_request_logger,
    request_scope,
)
from salon_scheduling.schemas.catalog_schema import RequestedService
from salon_scheduling.scheduling.planner import BookingPlanner


class TestRequestScope:
    def test_default_outside_scope(self):
        assert get_request_id() == NO_REQUEST_ID

    def test_generated_id(self):
        with request_scope() as request_id:
            assert request_id.startswith("REQ-")
            assert get_request_id() == request_id
        assert get_request_id() == NO_REQUEST_ID

    def test_nested_scope_restores_outer(self):
        with request_scope("REQ-outer"):
            with request_scope("REQ-inner"):
                assert get_request_id() == "REQ-inner"
            assert get_request_id() == "REQ-outer"

    def test_reset_after_error(self):
        with pytest.raises(RuntimeError):
            with request_scope("REQ-boom"):
                raise RuntimeError("boom")
        assert get_request_id() == NO_REQUEST_ID


class TestRequestIdFilter:
    def test_filter_injects_request_id(self):
        record = logging.LogRecord("x", logging.INFO, __file__, 1, "msg", None, None)
        with request_scope("REQ-filter"):
            assert RequestIdFilter().filter(record) is True
        assert record.request_id == "REQ-filter"

    def test_filter_attached_once(self):
        logger = get_request_logger("salon_scheduling.test_once")
        get_request_logger("salon_scheduling.test_once")
        assert sum(isinstance(f, RequestIdFilter) for f in logger.filters) == 1

    @pytest.mark.asyncio
    async def test_group_booking_lines_share_one_id(self, store, now, caplog):
        planner = BookingPlanner(store)
        request = [RequestedService(service=make_service("A", 30, category_id=1), quantity=2)]
        with caplog.at_level(logging.INFO, logger="salon_scheduling"):
            await planner.compute_group_booking(request, 2, MONDAY, now=now)
        ids = {
            record.request_id for record in caplog.records
            if record.name.startswith("salon_scheduling.scheduling")
        }
        assert len(ids) == 1
        assert ids != {NO_REQUEST_ID}
