# booking/core/exceptions.py
"""Domain errors raised by the service layer and mapped to HTTP by the routers"""


class AvailabilityFetchError(Exception):
    """Availability or booking data could not be read. The caller may retry."""


class SlotTakenError(Exception):
    """The requested slot was booked by someone else in the meantime"""

    def __init__(self, message: str = "This time slot was just taken. Please choose another one."):
        super().__init__(message)
        self.message = message
