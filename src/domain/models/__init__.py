"""Domain model package.

All domain objects are pure Pydantic models with no ORM or infrastructure
dependencies. Import from this package to avoid coupling application code
to individual module paths.
"""

from .enums import TrackingMode
from .responses import CommandResponse, Request, Response
from .students import StudentRequest, StudentResponse

__all__ = [
    # enums
    "TrackingMode",
    # command-response contract
    "CommandResponse",
    "Request",
    "Response",
    # students
    "StudentRequest",
    "StudentResponse",
]
