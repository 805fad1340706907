import pytest

from faq_api.text import normalize, remove_spaces


def test_strips_invisibles():
    assert normalize("환\u200b불") == "환불"
    assert normalize("\ufeff환불") == "환불"
    assert normalize("a\u200cb\u200dc") == "abc"


def test_compatibility_and_casefold():
    assert normalize("ＡＢＣ") == "abc"
    assert normalize("ｶﾀｶﾅ") == "カタカナ"
    assert normalize("Straße") == "strasse"


def test_none_is_empty():
    assert normalize(None) == ""
    assert remove_spaces(None) == ""


def test_remove_spaces():
    assert remove_spaces("  환 불\t규정\n") == "환불규정"
    assert remove_spaces("Ｒｅｆｕｎｄ　Policy") == "refundpolicy"


@pytest.mark.parametrize("text", [
    "승선권 환불 규정이 어떻게 되나요?",
    "手荷物はいくつまで持ち込めますか？",
    "ＡＢＣ ｶﾀｶﾅ Straße İstanbul ﬁ",
    "\ufeff\u200bMixed 한글 English 中文",
    "",
])
def test_normalize_is_idempotent(text):
    once = normalize(text)
    assert normalize(once) == once
    assert remove_spaces(remove_spaces(text)) == remove_spaces(text)
