from .dto import StaffCreateIn, StaffOut
from .service import StaffService

__all__ = ["StaffService", "StaffCreateIn", "StaffOut"]
