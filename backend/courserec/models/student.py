"""
Student identifier model
"""
from pydantic import BaseModel
from typing import Optional


class StudentIdInfo(BaseModel):
    """Fields decoded from a student identifier.

    Either every field is resolved and ``is_valid`` is true, or ``is_valid``
    is false and every typed field is ``None``. ``department`` is the one
    exception: an unmapped department code leaves it ``None`` on a valid id.
    """

    is_valid: bool = False
    raw: str
    program_code: Optional[str] = None
    program_type: Optional[str] = None
    enrollment_year: Optional[int] = None
    division_code: Optional[str] = None
    division: Optional[str] = None
    department_code: Optional[str] = None
    department: Optional[str] = None
    class_number: Optional[int] = None
    seat_number: Optional[int] = None
