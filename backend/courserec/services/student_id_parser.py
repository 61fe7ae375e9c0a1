# services/student_id_parser.py
"""
Student identifier parser

Identifier layout (9-10 characters, taken from the local part of a school email):

    [program][enrollment year x3][division][department x2][class][seat...]

Example: C109193108 -> four-year bachelor, year 109, day division,
Business Informatics, class 1, seat 08.
"""
import re
from types import MappingProxyType
from typing import Dict, List, Optional

from ..models.student import StudentIdInfo

PROGRAM_TYPES = MappingProxyType(
    {
        "A": "Five-Year Junior College",
        "B": "Two-Year Bachelor",
        "C": "Four-Year Bachelor",
        "D": "Industry-Academia Program",
        "F": "Master",
        "I": "Doctoral",
        "J": "Executive Master",
    }
)

DIVISIONS = MappingProxyType(
    {
        "1": "Day Division",
        "2": "Continuing Education Division",
        "3": "Continuing Education College",
    }
)

DEPARTMENTS = MappingProxyType(
    {
        # College of Engineering (Jiangong campus)
        "41": "Civil Engineering",
        "42": "Mechanical Engineering",
        "43": "Industrial Engineering and Management",
        "46": "Chemical and Materials Engineering",
        "47": "Mold and Die Engineering",
        # College of Electrical Engineering and Computer Science (Jiangong campus)
        "51": "Computer Science and Information Engineering",
        "52": "Electronic Engineering",
        "53": "Institute of Photonics and Communication Engineering",
        "54": "Electrical Engineering",
        # College of Management (Yanchao campus)
        "56": "Information Management",
        "57": "Business Administration",
        "59": "International Business",
        "60": "Tourism Management",
        "61": "Finance and Information",
        "62": "Financial Management",
        "63": "Accounting Information",
        "93": "Business Informatics",
        # College of Humanities and Social Sciences (Yanchao campus)
        "64": "Human Resource Development",
        "65": "Cultural and Creative Industries",
        "66": "Applied Foreign Languages",
        # College of Foreign Languages (First campus)
        "32": "Graduate Program of Interpretation and Translation",
        "33": "Applied English",
        "34": "Applied Japanese",
        # College of Management (First campus)
        "13": "Marketing and Distribution Management",
        "14": "Graduate Program of Franchise Management",
        "15": "Logistics Management",
        "16": "Executive Program of Logistics Management",
        "17": "Institute of Technology Law",
        "18": "Information Management (First Campus)",
        "21": "International Master of Business Administration",
        "22": "Master Program of Entrepreneurship Management",
        # College of Engineering (First campus)
        "01": "Creative Design and Architecture",
        "03": "Graduate Program of Advanced Manufacturing Technology",
        "04": "Mechanical Engineering (Automation)",
        "05": "Mechanical Engineering (Precision Machinery)",
        "06": "Construction Engineering",
        "07": "Environmental and Safety Engineering",
        # College of Electrical Engineering and Computer Science (First campus)
        "10": "Computer and Communication Engineering",
        "11": "Institute of Electrical Engineering",
        "12": "Electronic Engineering (First Campus)",
        # College of Finance (First campus)
        "25": "Money and Banking",
        "26": "Financial Management (First Campus)",
        "29": "Accounting Information (First Campus)",
        "30": "Risk Management and Insurance",
    }
)

# Department groupings used to find related departments
DEPARTMENT_CATEGORIES = MappingProxyType(
    {
        "Informatics": ("51", "56", "18", "10", "93"),
        "Electrical/Electronics": ("52", "53", "54", "11", "12"),
        "Mechanical": ("42", "04", "05", "47"),
        "Civil/Construction": ("41", "06", "01"),
        "Management": ("57", "59", "13", "15", "16", "21", "22", "14"),
        "Finance": ("61", "62", "25", "26", "29", "30", "63"),
        "Humanities/Languages": ("64", "65", "66", "32", "33", "34"),
        "Engineering": ("43", "46", "07", "03"),
    }
)

MIN_ENROLLMENT_YEAR = 90
MAX_ENROLLMENT_YEAR = 130

_DIGITS = re.compile(r"[0-9]+")


def _is_number(value: str) -> bool:
    return _DIGITS.fullmatch(value) is not None


def parse_student_id(student_id: str) -> StudentIdInfo:
    """Decode a student identifier.

    Never raises: malformed input returns an info object with
    ``is_valid=False`` and every typed field left as ``None``.
    """
    invalid = StudentIdInfo(raw=student_id)

    normalized = student_id.strip().upper()
    if not 9 <= len(normalized) <= 10:
        return invalid

    program_code = normalized[0]
    year_str = normalized[1:4]
    division_code = normalized[4]
    department_code = normalized[5:7]
    class_str = normalized[7]
    seat_str = normalized[8:]

    if program_code not in PROGRAM_TYPES:
        return invalid

    if not _is_number(year_str):
        return invalid
    year = int(year_str)
    if not MIN_ENROLLMENT_YEAR <= year <= MAX_ENROLLMENT_YEAR:
        return invalid

    if division_code not in DIVISIONS:
        return invalid

    if not _is_number(class_str) or not _is_number(seat_str):
        return invalid

    return StudentIdInfo(
        is_valid=True,
        raw=student_id,
        program_code=program_code,
        program_type=PROGRAM_TYPES[program_code],
        enrollment_year=year,
        division_code=division_code,
        division=DIVISIONS[division_code],
        department_code=department_code,
        # Unknown department codes do not invalidate the identifier
        department=DEPARTMENTS.get(department_code),
        class_number=int(class_str),
        seat_number=int(seat_str),
    )


def parse_student_id_from_email(email: str) -> Optional[StudentIdInfo]:
    """Parse the local part of an email, None when there is no '@'"""
    if not email or "@" not in email:
        return None
    return parse_student_id(email.split("@")[0])


def get_department_category(department_code: str) -> Optional[str]:
    for category, codes in DEPARTMENT_CATEGORIES.items():
        if department_code in codes:
            return category
    return None


def get_related_departments(department_code: str) -> List[str]:
    """Other department codes in the same category"""
    category = get_department_category(department_code)
    if not category:
        return []
    return [code for code in DEPARTMENT_CATEGORIES[category] if code != department_code]


def get_department_name(department_code: str) -> Optional[str]:
    return DEPARTMENTS.get(department_code)


def get_program_type(program_code: str) -> Optional[str]:
    return PROGRAM_TYPES.get(program_code)


def get_division_name(division_code: str) -> Optional[str]:
    return DIVISIONS.get(division_code)


def get_all_departments() -> List[Dict[str, str]]:
    return [{"code": code, "name": name} for code, name in DEPARTMENTS.items()]
