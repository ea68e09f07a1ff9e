from salon_scheduling.scheduling.assigner import Assignment, assign, assign_with_availability
from salon_scheduling.scheduling.distributor import distribute
from salon_scheduling.scheduling.errors import BookingConflictError, SchedulingInputError
from salon_scheduling.scheduling.intersector import common_slots
from salon_scheduling.scheduling.overlap import overlaps
from salon_scheduling.scheduling.planner import BookingPlanner
from salon_scheduling.scheduling.slots import available_slots

__all__ = [
    "available_slots",
    "overlaps",
    "distribute",
    "assign",
    "assign_with_availability",
    "Assignment",
    "common_slots",
    "BookingPlanner",
    "SchedulingInputError",
    "BookingConflictError",
]
