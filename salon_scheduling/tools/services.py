"""Demo service catalog, technician roster and store seeding."""

import logging
from typing import Optional

from salon_scheduling.schemas.catalog_schema import Service, ServiceId
from salon_scheduling.schemas.technician_schema import technician_from_record
from salon_scheduling.tools.schedule_store import InMemoryScheduleStore

logger = logging.getLogger(__name__)

MANICURE = 1
PEDICURE = 2
ENHANCEMENTS = 3
ADD_ONS = 4

CATEGORY_NAMES: dict[int, str] = {
    MANICURE: "Manicure",
    PEDICURE: "Pedicure",
    ENHANCEMENTS: "Nail Enhancements",
    ADD_ONS: "Add-ons",
}

SERVICE_CATALOG: list[Service] = [
    Service(id=52, name="Essential Manicure", category_id=MANICURE, time=30, price=25),
    Service(id=53, name="Gel Essential Manicure", category_id=MANICURE, time=45, price=40),
    Service(id=54, name="Deluxe Spa Manicure", category_id=MANICURE, time=60, price=46),
    Service(id=60, name="Spa Pedicure", category_id=PEDICURE, time=45, price=39),
    Service(id=61, name="Gel Spa Pedicure", category_id=PEDICURE, time=60, price=55),
    Service(id=62, name="Hot Stone Pedicure", category_id=PEDICURE, time=75, price=69),
    Service(id=70, name="Acrylic Full Set", category_id=ENHANCEMENTS, time=90, price=61),
    Service(id=71, name="Dip Powder", category_id=ENHANCEMENTS, time=60, price=50),
    Service(id=80, name="Nail Art (per set)", category_id=ADD_ONS, time=15, price=10),
    Service(id=81, name="French Tips", category_id=ADD_ONS, time=10, price=6),
]

# (record, qualified category ids)
TECHNICIAN_ROSTER: list[tuple[dict, list[int]]] = [
    ({"id": 1, "name": "Lisa", "unavailability": "2"}, [MANICURE, PEDICURE, ENHANCEMENTS, ADD_ONS]),
    ({"id": 2, "name": "Tracy", "unavailability": "0",
      "vacation_ranges": [{"start": "2025-09-29", "end": "2025-10-16"}]},
     [MANICURE, PEDICURE, ADD_ONS]),
    ({"id": 3, "name": "Kim", "unavailability": "1,3"}, [MANICURE, ENHANCEMENTS, ADD_ONS]),
    ({"id": 4, "name": "Anna", "unavailability": ""}, [PEDICURE, ADD_ONS]),
    ({"id": 999, "name": "No Preference", "unavailability": ""},
     [MANICURE, PEDICURE, ENHANCEMENTS, ADD_ONS]),
]


def get_service(service_id: ServiceId) -> Optional[Service]:
    """Look up a catalog service by id."""
    for service in SERVICE_CATALOG:
        if service.id == service_id:
            return service
    return None


def seed_store(store: Optional[InMemoryScheduleStore] = None) -> InMemoryScheduleStore:
    """Fill a store with the demo roster. Bookings are left empty."""
    store = store or InMemoryScheduleStore()
    for record, categories in TECHNICIAN_ROSTER:
        store.add_technician(technician_from_record(record), categories)
    logger.debug("Seeded store with %d technician(s)", len(TECHNICIAN_ROSTER))
    return store
