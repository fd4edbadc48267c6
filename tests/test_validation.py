"""Tests for identifier validation and meeting type normalization."""
import pytest

from dex_mcp.validation import (
    MEETING_TYPE_MAP,
    MEETING_TYPES,
    canonicalize_meeting_type,
    is_valid_uuid,
)


class TestIsValidUuid:
    """Test the UUID format check applied before every id-based request."""

    def test_accepts_v4_uuid(self):
        assert is_valid_uuid("4e87699a-71f4-4dad-9c11-9623c21eb017")

    def test_accepts_uppercase(self):
        assert is_valid_uuid("4E87699A-71F4-4DAD-9C11-9623C21EB017")

    @pytest.mark.parametrize("value", [
        "not-a-uuid",
        "",
        "12345",
        # third group must start with 1-5
        "4e87699a-71f4-6dad-9c11-9623c21eb017",
        # fourth group must start with 8, 9, a or b
        "4e87699a-71f4-4dad-7c11-9623c21eb017",
        "4e87699a71f44dad9c119623c21eb017",
        " 4e87699a-71f4-4dad-9c11-9623c21eb017",
        "4e87699a-71f4-4dad-9c11-9623c21eb017\n",
    ])
    def test_rejects_malformed(self, value):
        assert not is_valid_uuid(value)

    def test_non_string_is_rejected(self):
        assert not is_valid_uuid(None)
        assert not is_valid_uuid(12345)


class TestCanonicalizeMeetingType:
    """Test mapping of free-text meeting types to Dex enum values."""

    def test_there_are_fourteen_types(self):
        assert len(MEETING_TYPES) == 14
        assert len(set(MEETING_TYPES)) == 14

    @pytest.mark.parametrize("key", MEETING_TYPES)
    def test_canonical_keys_map_to_themselves(self, key):
        assert canonicalize_meeting_type(key) == key

    @pytest.mark.parametrize("label", ["Skype/Teams", "skype teams", "SKYPE_TEAMS", "  Skype   Teams "])
    def test_spelling_variants_agree(self, label):
        assert canonicalize_meeting_type(label) == "skype_teams"

    @pytest.mark.parametrize("label,expected", [
        ("Note", "note"),
        ("Call", "call"),
        ("Email", "email"),
        ("Text/Messaging", "text_messaging"),
        ("Text messaging", "text_messaging"),
        ("Linkedin", "linkedin"),
        ("Party/Social", "party_social"),
        ("Party social", "party_social"),
        ("Coffee", "coffee"),
        ("Meal", "meal"),
        ("Custom", "custom"),
    ])
    def test_display_names(self, label, expected):
        assert canonicalize_meeting_type(label) == expected

    @pytest.mark.parametrize("value", [None, "", "not_a_real_type", "phone call"])
    def test_unknown_defaults_to_note(self, value):
        assert canonicalize_meeting_type(value) == "note"

    def test_table_values_are_all_canonical(self):
        assert set(MEETING_TYPE_MAP.values()) <= set(MEETING_TYPES)

    def test_table_is_read_only(self):
        with pytest.raises(TypeError):
            MEETING_TYPE_MAP["zoom"] = "call"
