"""Service catalog and lane data models."""

from typing import Union

from pydantic import BaseModel, Field, model_validator

ServiceId = Union[int, str]
CategoryId = Union[int, str]


class Service(BaseModel):
    """A bookable service. ``time`` is the duration in minutes."""
    id: ServiceId
    name: str = ""
    category_id: CategoryId = 0
    time: int = Field(ge=0)
    price: int = Field(default=0, ge=0)


class RequestedService(BaseModel):
    """A service requested for a group booking, with how many guests want it."""
    service: Service
    quantity: int = Field(default=1, ge=0)


class Lane(BaseModel):
    """
    Services performed in one concurrent appointment of a group booking.

    A lane never holds two services with the same id, since one technician
    cannot perform two identical services at the same time.
    """

    services: list[Service] = Field(default_factory=list)

    @model_validator(mode="after")
    def _no_duplicate_service_ids(self) -> "Lane":
        seen: set[ServiceId] = set()
        for service in self.services:
            if service.id in seen:
                raise ValueError(f"Lane contains service id {service.id!r} more than once")
            seen.add(service.id)
        return self

    @property
    def total_minutes(self) -> int:
        return sum(s.time for s in self.services)

    @property
    def service_ids(self) -> frozenset[ServiceId]:
        return frozenset(s.id for s in self.services)

    @property
    def category_ids(self) -> list[CategoryId]:
        """Distinct category ids in first-seen order."""
        return list(dict.fromkeys(s.category_id for s in self.services))

    def is_empty(self) -> bool:
        return not self.services

    def grouped_by_category(self) -> dict[CategoryId, list[Service]]:
        grouped: dict[CategoryId, list[Service]] = {}
        for service in self.services:
            grouped.setdefault(service.category_id, []).append(service)
        return grouped
