import pytest

from faq_api.text import (
    CONTAINMENT_SCORE,
    bigram_set,
    calculate_score,
    char_set,
    jaccard,
)


def test_exact_ignores_spaces_and_case():
    assert calculate_score("환불", "환불") == 1.0
    assert calculate_score("환불 규정", "환불규정") == 1.0
    assert calculate_score("Refund Policy", "refund policy") == 1.0


def test_containment_below_exact():
    assert calculate_score("환불", "승선권 환불 규정") == CONTAINMENT_SCORE
    assert calculate_score("승선권 환불 규정", "환불") == CONTAINMENT_SCORE
    assert CONTAINMENT_SCORE < 1.0


def test_bigram_jaccard():
    # {ab, bc, cd} vs {ab, bx, xy} → 1 / 5
    assert calculate_score("abcd", "abxy") == pytest.approx(0.2)


def test_char_jaccard_fallback():
    # sin bigramas en común → caracteres {a,b,c} vs {c,x,a} → 2 / 4
    assert calculate_score("abc", "cxa") == pytest.approx(0.5)


def test_fuzzy_never_outranks_containment():
    # mismos bigramas, ninguno contiene al otro
    assert calculate_score("abab", "baba") <= CONTAINMENT_SCORE


@pytest.mark.parametrize("q,c", [("", "환불"), ("환불", ""), (None, "x"), ("   ", "x"), ("\u200b", "x")])
def test_empty_scores_zero(q, c):
    assert calculate_score(q, c) == 0.0


def test_scores_bounded_and_jaccard_symmetric():
    pairs = [
        ("짐 몇 개", "짐은 몇 개까지 가지고 탈 수 있나요?"),
        ("차량 선적 예약", "반려동물 동반"),
        ("refund", "baggage"),
        ("退款規定", "船票退款規定是什麼"),
        ("abcd", "abxy"),
        ("abc", "cxa"),
    ]
    for q, c in pairs:
        s = calculate_score(q, c)
        assert 0.0 <= s <= 1.0
        assert jaccard(bigram_set(q), bigram_set(c)) == jaccard(bigram_set(c), bigram_set(q))
        assert jaccard(char_set(q), char_set(c)) == jaccard(char_set(c), char_set(q))


def test_bigram_set_short_strings():
    assert bigram_set("a") == set()
    assert bigram_set("") == set()
    assert bigram_set("a b") == {"ab"}
