"""Tests for the category and star key domains."""

import pytest

from decade_guide_mcp.core.keys import (
    CATEGORY_GROUPS,
    CATEGORY_PALACE_NAMES,
    CATEGORY_TAGS,
    STAR_ENGLISH_NAMES,
    CategoryKey,
    SubjectKey,
    as_category,
    as_subject,
    english_star_name,
    parse_category,
    parse_subject,
)


class TestKeyDomains:
    """Test the enumerations and their metadata."""

    def test_category_order(self) -> None:
        """Categories should follow the decade palace order."""
        assert [c.value for c in CategoryKey] == [
            "大命", "大兄", "大夫", "大子", "大财", "大疾",
            "大迁", "大友", "大官", "大田", "大福", "大父",
        ]

    def test_subject_count(self) -> None:
        """There should be 18 distinct stars."""
        assert len(SubjectKey) == 18
        assert len({s.value for s in SubjectKey}) == 18

    def test_metadata_complete(self) -> None:
        """Every key should have display metadata."""
        assert set(CATEGORY_TAGS) == set(CategoryKey)
        assert set(CATEGORY_PALACE_NAMES) == set(CategoryKey)
        assert set(CATEGORY_GROUPS) == set(CategoryKey)
        assert set(STAR_ENGLISH_NAMES) == set(SubjectKey)

    def test_category_properties(self) -> None:
        """Category properties should expose tag, palace and group."""
        assert CategoryKey.DA_FU_WELLBEING.tag == "Da Fu (大福)"
        assert CategoryKey.DA_FU_WELLBEING.palace_name == "Wellbeing Palace"
        assert CategoryKey.DA_CAI.group == "Prosperity Palaces"
        assert str(CategoryKey.DA_MING) == "大命"

    def test_subject_properties(self) -> None:
        """Stars should expose their English names."""
        assert SubjectKey.QI_SHA.english_name == "Qi Sha"
        assert str(SubjectKey.QI_SHA) == "七杀"


class TestStrictConversion:
    """Test exact member/value conversion used by the repository."""

    def test_as_category(self) -> None:
        """Members and exact values should convert; anything else should not."""
        assert as_category(CategoryKey.DA_MING) is CategoryKey.DA_MING
        assert as_category("大命") is CategoryKey.DA_MING
        assert as_category("Da Ming") is None
        assert as_category(" 大命") is None
        assert as_category(None) is None

    def test_as_subject(self) -> None:
        """Members and exact values should convert; English names should not."""
        assert as_subject("紫微") is SubjectKey.ZI_WEI
        assert as_subject(SubjectKey.WEN_QU) is SubjectKey.WEN_QU
        assert as_subject("Zi Wei") is None
        assert as_subject(CategoryKey.DA_MING) is None


class TestParsing:
    """Test lenient parsing of user input."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("大命", CategoryKey.DA_MING),
            (" 大官 ", CategoryKey.DA_GUAN),
            ("Da Ming", CategoryKey.DA_MING),
            ("da  xiong", CategoryKey.DA_XIONG),
            ("Da Fu (大夫)", CategoryKey.DA_FU_SPOUSE),
            ("Da Fu (大福)", CategoryKey.DA_FU_WELLBEING),
            ("DA FU (大父)", CategoryKey.DA_FU_PARENTS),
        ],
    )
    def test_parse_category(self, value: str, expected: CategoryKey) -> None:
        """Keys and romanised tags should resolve."""
        assert parse_category(value) is expected

    @pytest.mark.parametrize("value", ["Da Fu", "大命2", "Life Palace", ""])
    def test_parse_category_unresolved(self, value: str) -> None:
        """Ambiguous or unknown input should resolve to None."""
        assert parse_category(value) is None

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("七杀", SubjectKey.QI_SHA),
            ("Qi Sha", SubjectKey.QI_SHA),
            ("tian   liang", SubjectKey.TIAN_LIANG),
            ("ZUO FU", SubjectKey.ZUO_FU),
        ],
    )
    def test_parse_subject(self, value: str, expected: SubjectKey) -> None:
        """Chinese and English star names should resolve."""
        assert parse_subject(value) is expected

    def test_parse_subject_unknown(self) -> None:
        """Stars outside the table should resolve to None."""
        assert parse_subject("禄存") is None
        assert parse_subject("Lu Cun") is None

    def test_english_star_name(self) -> None:
        """Known stars get English names; others pass through unchanged."""
        assert english_star_name("破军") == "Po Jun"
        assert english_star_name("禄存") == "禄存"
