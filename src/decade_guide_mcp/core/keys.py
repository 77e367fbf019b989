"""
Closed key domains for decade cycle guidance.

Contains:
- CategoryKey: the twelve decade palace tags, in palace order
- SubjectKey: the eighteen stars that carry authored guidance
- Display metadata (romanised tags, palace names, palace groups, star names)
"""

from enum import Enum


class CategoryKey(str, Enum):
    """Decade palace tags, ordered anticlockwise from the cycle's life palace."""

    DA_MING = "大命"
    DA_XIONG = "大兄"
    DA_FU_SPOUSE = "大夫"
    DA_ZI = "大子"
    DA_CAI = "大财"
    DA_JI = "大疾"
    DA_QIAN = "大迁"
    DA_YOU = "大友"
    DA_GUAN = "大官"
    DA_TIAN = "大田"
    DA_FU_WELLBEING = "大福"
    DA_FU_PARENTS = "大父"

    def __str__(self) -> str:
        return self.value

    @property
    def tag(self) -> str:
        """Romanised tag, e.g. 'Da Ming' or 'Da Fu (大福)'."""
        return CATEGORY_TAGS[self]

    @property
    def palace_name(self) -> str:
        return CATEGORY_PALACE_NAMES[self]

    @property
    def group(self) -> str:
        return CATEGORY_GROUPS[self]


class SubjectKey(str, Enum):
    """Primary and assistant stars with authored guidance."""

    ZI_WEI = "紫微"
    PO_JUN = "破军"
    TIAN_FU = "天府"
    LIAN_ZHEN = "廉贞"
    TAI_YIN = "太阴"
    TAN_LANG = "贪狼"
    JU_MEN = "巨门"
    TIAN_TONG = "天同"
    TIAN_XIANG = "天相"
    WU_QU = "武曲"
    TIAN_LIANG = "天梁"
    TAI_YANG = "太阳"
    QI_SHA = "七杀"
    TIAN_JI = "天机"
    ZUO_FU = "左辅"
    YOU_BI = "右弼"
    WEN_CHANG = "文昌"
    WEN_QU = "文曲"

    def __str__(self) -> str:
        return self.value

    @property
    def english_name(self) -> str:
        return STAR_ENGLISH_NAMES[self]


CATEGORY_TAGS = {
    CategoryKey.DA_MING: "Da Ming",
    CategoryKey.DA_XIONG: "Da Xiong",
    CategoryKey.DA_FU_SPOUSE: "Da Fu (大夫)",
    CategoryKey.DA_ZI: "Da Zi",
    CategoryKey.DA_CAI: "Da Cai",
    CategoryKey.DA_JI: "Da Ji",
    CategoryKey.DA_QIAN: "Da Qian",
    CategoryKey.DA_YOU: "Da You",
    CategoryKey.DA_GUAN: "Da Guan",
    CategoryKey.DA_TIAN: "Da Tian",
    CategoryKey.DA_FU_WELLBEING: "Da Fu (大福)",
    CategoryKey.DA_FU_PARENTS: "Da Fu (大父)",
}

CATEGORY_PALACE_NAMES = {
    CategoryKey.DA_MING: "Life Palace",
    CategoryKey.DA_XIONG: "Siblings Palace",
    CategoryKey.DA_FU_SPOUSE: "Spouse Palace",
    CategoryKey.DA_ZI: "Children Palace",
    CategoryKey.DA_CAI: "Wealth Palace",
    CategoryKey.DA_JI: "Health Palace",
    CategoryKey.DA_QIAN: "Travel Palace",
    CategoryKey.DA_YOU: "Friends Palace",
    CategoryKey.DA_GUAN: "Career Palace",
    CategoryKey.DA_TIAN: "Property Palace",
    CategoryKey.DA_FU_WELLBEING: "Wellbeing Palace",
    CategoryKey.DA_FU_PARENTS: "Parents Palace",
}

# Palace groupings used when presenting a whole cycle
CATEGORY_GROUPS = {
    # Relationship
    CategoryKey.DA_MING: "Relationship Palaces",
    CategoryKey.DA_XIONG: "Relationship Palaces",
    CategoryKey.DA_FU_SPOUSE: "Relationship Palaces",
    CategoryKey.DA_ZI: "Relationship Palaces",
    CategoryKey.DA_YOU: "Relationship Palaces",
    CategoryKey.DA_FU_PARENTS: "Relationship Palaces",

    # Prosperity
    CategoryKey.DA_CAI: "Prosperity Palaces",
    CategoryKey.DA_GUAN: "Prosperity Palaces",

    # Environmental
    CategoryKey.DA_JI: "Environmental Palaces",
    CategoryKey.DA_QIAN: "Environmental Palaces",
    CategoryKey.DA_TIAN: "Environmental Palaces",
    CategoryKey.DA_FU_WELLBEING: "Environmental Palaces",
}

STAR_ENGLISH_NAMES = {
    SubjectKey.ZI_WEI: "Zi Wei",
    SubjectKey.PO_JUN: "Po Jun",
    SubjectKey.TIAN_FU: "Tian Fu",
    SubjectKey.LIAN_ZHEN: "Lian Zhen",
    SubjectKey.TAI_YIN: "Tai Yin",
    SubjectKey.TAN_LANG: "Tan Lang",
    SubjectKey.JU_MEN: "Ju Men",
    SubjectKey.TIAN_TONG: "Tian Tong",
    SubjectKey.TIAN_XIANG: "Tian Xiang",
    SubjectKey.WU_QU: "Wu Qu",
    SubjectKey.TIAN_LIANG: "Tian Liang",
    SubjectKey.TAI_YANG: "Tai Yang",
    SubjectKey.QI_SHA: "Qi Sha",
    SubjectKey.TIAN_JI: "Tian Ji",
    SubjectKey.ZUO_FU: "Zuo Fu",
    SubjectKey.YOU_BI: "You Bi",
    SubjectKey.WEN_CHANG: "Wen Chang",
    SubjectKey.WEN_QU: "Wen Qu",
}

_CATEGORY_VALUES = {member.value: member for member in CategoryKey}
_SUBJECT_VALUES = {member.value: member for member in SubjectKey}
_CATEGORY_BY_TAG = {tag.lower(): key for key, tag in CATEGORY_TAGS.items()}
_SUBJECT_BY_ENGLISH = {name.lower(): key for key, name in STAR_ENGLISH_NAMES.items()}


def as_category(value: object) -> CategoryKey | None:
    """Return the CategoryKey for a member or its exact value, else None."""
    if isinstance(value, CategoryKey):
        return value
    if isinstance(value, str):
        return _CATEGORY_VALUES.get(value)
    return None


def as_subject(value: object) -> SubjectKey | None:
    """Return the SubjectKey for a member or its exact value, else None."""
    if isinstance(value, SubjectKey):
        return value
    if isinstance(value, str):
        return _SUBJECT_VALUES.get(value)
    return None


def parse_category(value: str) -> CategoryKey | None:
    """Resolve user input to a CategoryKey.

    Accepts the Chinese key ('大命') or a romanised tag ('Da Ming',
    'da xiong', 'Da Fu (大福)'). A bare 'Da Fu' names three palaces
    and resolves to None, as does anything unrecognised.

    Args:
        value: Key or tag supplied by a caller.

    Returns:
        The matching CategoryKey, or None.
    """
    text = value.strip()
    if text in _CATEGORY_VALUES:
        return _CATEGORY_VALUES[text]
    return _CATEGORY_BY_TAG.get(" ".join(text.split()).lower())


def parse_subject(value: str) -> SubjectKey | None:
    """Resolve a Chinese or English star name ('七杀', 'Qi Sha') to a SubjectKey."""
    text = value.strip()
    if text in _SUBJECT_VALUES:
        return _SUBJECT_VALUES[text]
    return _SUBJECT_BY_ENGLISH.get(" ".join(text.split()).lower())


def english_star_name(name: str) -> str:
    """Get the English name for a star, or the name unchanged if unknown."""
    subject = _SUBJECT_VALUES.get(name)
    return STAR_ENGLISH_NAMES[subject] if subject else name
