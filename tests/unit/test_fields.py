# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
from datetime import datetime

import pytest

from ttr import fields


def test_fld_001_full_column_order_starts_with_id_and_title() -> None:
    assert fields.FIELD_NAMES[:2] == ("ID", "Title")
    assert len(fields.FIELD_NAMES) == len(set(fields.FIELD_NAMES))
    assert "Section Hierarchy" in fields.FIELD_NAMES


def test_fld_002_persisted_fields_exclude_modification_and_title() -> None:
    assert fields.PERSISTED_FIELDS == (
        "ID",
        "Created By",
        "Created On",
        "Priority",
        "References",
        "Suite",
        "Suite ID",
        "Type",
    )
    assert not fields.is_persisted("Updated By")
    assert not fields.is_persisted("Updated On")
    assert not fields.is_persisted("Title")


def test_fld_003_inline_fields_exclude_title_and_sections() -> None:
    inline_names = {spec.name for spec in fields.INLINE_FIELDS}

    assert "Title" not in inline_names
    assert "Section" not in inline_names
    assert "Section Depth" not in inline_names
    assert {"Steps", "Expected Result", "Priority"} <= inline_names


def test_fld_004_date_fields_use_fixed_pattern() -> None:
    moment = datetime(2024, 1, 2, 15, 4)

    assert fields.format_value("Created On", moment) == "01/02/2024 03:04 PM"
    assert fields.format_value("Updated On", "already text") == "already text"


def test_fld_005_depth_is_rendered_as_decimal() -> None:
    assert fields.format_value("Section Depth", 2) == "2"


def test_fld_006_unknown_field_cannot_be_formatted() -> None:
    with pytest.raises(KeyError):
        fields.format_value("Custom Field", "x")


def test_fld_007_canonical_name_ignores_case_and_spacing() -> None:
    assert fields.canonical_name("suite   id") == "Suite ID"
    assert fields.canonical_name(" EXPECTED RESULT ") == "Expected Result"
    assert fields.canonical_name("Custom Field") is None


def test_fld_008_annotation_pattern_is_flexible() -> None:
    pattern = fields.FieldSpec("Expected Result").pattern

    match = pattern.match("  expected   RESULT :  shows dashboard  ")

    assert match is not None
    assert match.group(1) == "shows dashboard"
