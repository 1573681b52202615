from .consulting_hours_service import windows_for, weekly_schedule

from .status_registry import status_of, set_status, set_current_token

from .token_allocator import next_token_number, insert_appointment, has_daily_token_guard

from .booking_service import book, list_appointments, get_appointment, appointment_to_dict

from .lifecycle_service import update_status, can_transition, VALID_TRANSITIONS

from .directory_service import search_doctors, list_doctors, get_doctor, haversine_km

__all__ = [
    # Consulting Hours Directory
    "windows_for",
    "weekly_schedule",
    # Status Registry
    "status_of",
    "set_status",
    "set_current_token",
    # Token Allocator
    "next_token_number",
    "insert_appointment",
    "has_daily_token_guard",
    # Booking Admission
    "book",
    "list_appointments",
    "get_appointment",
    "appointment_to_dict",
    # Lifecycle
    "update_status",
    "can_transition",
    "VALID_TRANSITIONS",
    # Directory / Search
    "search_doctors",
    "list_doctors",
    "get_doctor",
    "haversine_km",
]
