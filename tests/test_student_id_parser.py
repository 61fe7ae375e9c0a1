import pytest

from courserec.services import student_id_parser as parser


def test_parse_valid_ten_character_id():
    info = parser.parse_student_id("C109193108")

    assert info.is_valid
    assert info.program_code == "C"
    assert info.program_type == "Four-Year Bachelor"
    assert info.enrollment_year == 109
    assert info.division_code == "1"
    assert info.division == "Day Division"
    assert info.department_code == "93"
    assert info.department == "Business Informatics"
    assert info.class_number == 1
    assert info.seat_number == 8


def test_parse_normalizes_case_and_whitespace():
    info = parser.parse_student_id("  c110151101 ")

    assert info.is_valid
    assert info.raw == "  c110151101 "
    assert info.department == "Computer Science and Information Engineering"


def test_parse_nine_character_id():
    info = parser.parse_student_id("F11215111")

    assert info.is_valid
    assert info.program_type == "Master"
    assert info.seat_number == 1


def test_unknown_department_keeps_id_valid():
    info = parser.parse_student_id("C110199101")

    assert info.is_valid
    assert info.department_code == "99"
    assert info.department is None


@pytest.mark.parametrize(
    "raw",
    [
        "",
        "C1101511",  # too short
        "C11015110123",  # too long
        "Z110151101",  # unknown program
        "C1A0151101",  # non-numeric year
        "C089151101",  # year below range
        "C131151101",  # year above range
        "C110951101",  # unknown division
        "C110151X01",  # non-numeric class
        "C1101511X1",  # non-numeric seat
    ],
)
def test_invalid_ids_have_no_fields(raw):
    info = parser.parse_student_id(raw)

    assert info.is_valid is False
    assert info.raw == raw
    for field in (
        "program_code",
        "program_type",
        "enrollment_year",
        "division_code",
        "division",
        "department_code",
        "department",
        "class_number",
        "seat_number",
    ):
        assert getattr(info, field) is None


def test_names_rederive_from_codes():
    info = parser.parse_student_id("J112256205")

    assert info.is_valid
    assert parser.get_program_type(info.program_code) == info.program_type
    assert parser.get_division_name(info.division_code) == info.division
    assert parser.get_department_name(info.department_code) == info.department


def test_parse_from_email():
    info = parser.parse_student_id_from_email("C110151101@nkust.edu.tw")

    assert info is not None
    assert info.department_code == "51"
    assert parser.parse_student_id_from_email("not-an-email") is None
    assert parser.parse_student_id_from_email("") is None


def test_department_category_and_siblings():
    assert parser.get_department_category("51") == "Informatics"
    assert parser.get_department_category("99") is None

    related = parser.get_related_departments("51")
    assert "51" not in related
    assert set(related) == {"56", "18", "10", "93"}
    assert parser.get_related_departments("99") == []


def test_tables_are_read_only():
    with pytest.raises(TypeError):
        parser.DEPARTMENTS["99"] = "Nowhere"


def test_all_departments_listing():
    departments = parser.get_all_departments()

    assert {"code": "51", "name": "Computer Science and Information Engineering"} in departments
    assert len(departments) == len(parser.DEPARTMENTS)
