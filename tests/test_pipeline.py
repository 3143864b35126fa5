from concurrent.futures import ThreadPoolExecutor

import pytest

from app.errors import EmptyInputError
from app.parser import parse_table
from app.pipeline import CleanOptions, clean, clean_records, clean_text, resolve_roles
from app.serializer import serialize

CONTACTS = "\n".join(
    [
        "Number,Name,Gender,Points,Birthday,Anniversary,City",
        "9876543210,John3 Doe!,Male ,100,20/08/1995,,Pune",
        "+91-9876543210,Johnny,M,5,1995-08-20,,Mumbai",
        ",No Number,F,1,,,Delhi",
        ",Also None,F,2,,,Delhi",
        "1234567890,Ann,F,7 pts,19900102,01.02.15,Goa",
    ]
)


def test_resolve_roles():
    roles = resolve_roles(["Id", "Name", "Number", "Birthday"])
    assert roles.number == 2
    assert roles.name == 1
    assert roles.birthday == 3
    assert roles.gender is None
    assert roles.points is None
    assert roles.anniversary is None

def test_number_role_falls_back_to_first_column():
    roles = resolve_roles(["Phone", "Name"])
    assert roles.number == 0
    assert roles.as_names(["Phone", "Name"])["Number"] == "Phone"

def test_role_names_are_case_sensitive():
    roles = resolve_roles(["phone", "name", "gender"])
    assert roles.name is None
    assert roles.gender is None

def test_clean_full_pipeline():
    header, records = clean(CONTACTS)
    assert header == ["Number", "Name", "Gender", "Points", "Birthday", "Anniversary", "City"]
    assert records == [
        {
            "Number": "9876543210",
            "Name": "John Doe",
            "Gender": "Male",
            "Points": "100",
            "Birthday": "1995-08-20",
            "Anniversary": "",
            "City": "Pune",
        },
        {"Number": "", "Name": "No Number", "Gender": "F", "Points": "1", "Birthday": "", "Anniversary": "", "City": "Delhi"},
        {"Number": "", "Name": "Also None", "Gender": "F", "Points": "2", "Birthday": "", "Anniversary": "", "City": "Delhi"},
        {
            "Number": "1234567890",
            "Name": "Ann",
            "Gender": "F",
            "Points": "7",
            "Birthday": "1990-01-02",
            "Anniversary": "2015-02-01",
            "City": "Goa",
        },
    ]

def test_stats_count_duplicates():
    result = clean_text(CONTACTS)
    assert result.stats.rows_in == 5
    assert result.stats.rows_out == 4
    assert result.stats.duplicates_dropped == 1
    assert result.stats.roles["Anniversary"] == "Anniversary"

def test_dedup_uses_first_column_without_number_header():
    text = "Phone,Name\n+91 98765 43210,A\n9876543210,B\n98765-43211,C\n"
    header, records = clean(text)
    assert header == ["Phone", "Name"]
    assert [r["Name"] for r in records] == ["A", "C"]
    assert [r["Phone"] for r in records] == ["9876543210", "9876543211"]

def test_dedup_only_variant_leaves_other_columns():
    options = CleanOptions(sanitize_fields=False)
    _, records = clean(CONTACTS, options)
    assert len(records) == 4
    assert records[0]["Name"] == "John3 Doe!"
    assert records[0]["Birthday"] == "20/08/1995"
    assert records[3]["Points"] == "7 pts"

def test_without_dedup_every_row_survives():
    _, records = clean(CONTACTS, CleanOptions(deduplicate=False))
    assert len(records) == 5
    assert records[1]["Number"] == "9876543210"
    assert records[1]["Name"] == "Johnny"

def test_input_records_are_not_mutated():
    table = parse_table(CONTACTS)
    before = [dict(r) for r in table.records]
    clean_records(table.header, table.records)
    assert table.records == before

def test_unknown_columns_pass_through():
    header, records = clean("Number,Notes\n1,  hello!! \n")
    assert records == [{"Number": "1", "Notes": "hello!!"}]

def test_cleaning_is_idempotent():
    header, records = clean(CONTACTS)
    again_header, again = clean(serialize(header, records))
    assert again_header == header
    assert again == records

def test_serialized_output_round_trips():
    header, records = clean(CONTACTS)
    table = parse_table(serialize(header, records))
    assert table.header == header
    assert len(table.records) == len(records)

def test_no_duplicate_numbers_in_output():
    rows = ["Number,Name"] + [f"+91 98765 4321{i % 3},n{i}" for i in range(30)]
    _, records = clean("\n".join(rows))
    numbers = [r["Number"] for r in records]
    assert numbers == ["9876543210", "9876543211", "9876543212"]
    assert [r["Name"] for r in records] == ["n0", "n1", "n2"]

def test_concurrent_runs_do_not_share_seen_numbers():
    text = "Number,Name\n9876543210,A\n9876543210,B\n1111111111,C\n"

    with ThreadPoolExecutor(max_workers=8) as pool:
        results = list(pool.map(lambda _: clean(text), range(32)))

    for header, records in results:
        assert [r["Name"] for r in records] == ["A", "C"]

def test_empty_input_fails():
    with pytest.raises(EmptyInputError):
        clean("   \n\n")
