"""Grouping and totals over requested services.

Requested services are carried as a mapping of category id to the list
of services chosen in that category. Totals sum across every category;
the mapping's key order carries no meaning.
"""

import logging
from collections.abc import Mapping
from numbers import Real
from typing import Any

from salon_scheduling.schemas.catalog_schema import CategoryId, Service
from salon_scheduling.scheduling.errors import SchedulingInputError

logger = logging.getLogger(__name__)


def group_services_by_category(services: list[Service]) -> dict[CategoryId, list[Service]]:
    """Group a flat service list into ``{category_id: [services]}``."""
    if not isinstance(services, list):
        raise SchedulingInputError("Input must be a list of services.")
    grouped: dict[CategoryId, list[Service]] = {}
    for service in services:
        grouped.setdefault(service.category_id, []).append(service)
    return grouped


def _iter_category_lists(selected: Any):
    if not isinstance(selected, Mapping):
        raise SchedulingInputError("Invalid input. Selected services must be a mapping.")
    for category_id, services in selected.items():
        if not isinstance(services, list):
            raise SchedulingInputError(
                f"Invalid services list for category {category_id}. Expected a list."
            )
        yield category_id, services


def _numeric_field(service: Any, name: str) -> Real:
    value = service.get(name) if isinstance(service, Mapping) else getattr(service, name, None)
    if value is None:
        return 0
    if isinstance(value, bool) or not isinstance(value, Real):
        raise SchedulingInputError(f"Invalid {name} value {value!r}. It must be a number.")
    return value


def calculate_total_time(selected: Mapping[CategoryId, list[Service]]) -> Real:
    """Total duration in minutes of every selected service, summed exactly."""
    return sum(
        _numeric_field(s, "time")
        for _, services in _iter_category_lists(selected)
        for s in services
    )


def calculate_total_amount(selected: Mapping[CategoryId, list[Service]]) -> Real:
    """Total price of every selected service, summed exactly."""
    return sum(
        _numeric_field(s, "price")
        for _, services in _iter_category_lists(selected)
        for s in services
    )
