import json

import pandas as pd

from faq_api.lang import KO, ZH_HANT
from faq_api.answers import pick_answer
from faq_api.schema import FlatField, LocalizedField
from faq_api.utils import corpus_report, load_faqs


def _write_json(path, data, bom=False):
    text = json.dumps(data, ensure_ascii=False)
    if bom:
        text = "\ufeff" + text
    path.write_text(text, encoding="utf-8")


def test_load_json_with_bom(tmp_path):
    faqs_path = tmp_path / "faqs.json"
    _write_json(faqs_path, [
        {"id": "a", "question": "환불", "answers": {"ko": "환불 안내"}},
        {"id": "b", "question": {"ko": "짐", "ja": "手荷物"}, "answer": "기본"},
    ], bom=True)

    faqs = load_faqs(faqs_path)
    assert [f.id for f in faqs] == ["a", "b"]
    assert isinstance(faqs[0].question, FlatField)
    assert isinstance(faqs[1].question, LocalizedField)
    assert isinstance(faqs, tuple)


def test_first_valid_path_wins(tmp_path):
    broken = tmp_path / "broken.json"
    broken.write_text("{not json", encoding="utf-8")
    not_a_list = tmp_path / "obj.json"
    _write_json(not_a_list, {"id": "x"})
    good = tmp_path / "good.json"
    _write_json(good, [{"id": "ok", "question": "q"}])

    faqs = load_faqs([tmp_path / "missing.json", broken, not_a_list, good])
    assert [f.id for f in faqs] == ["ok"]


def test_missing_corpus_is_empty(tmp_path):
    assert load_faqs([tmp_path / "nope.json", tmp_path / "nope.csv"]) == ()


def test_ids_default_and_duplicates(tmp_path):
    faqs_path = tmp_path / "faqs.json"
    _write_json(faqs_path, [
        {"question": "sin id"},
        {"id": "dup", "question": "primero"},
        {"id": "dup", "question": "segundo"},
        "no soy un objeto",
        {"id": "", "question": "id vacío"},
    ])
    faqs = load_faqs(faqs_path)
    assert [f.id for f in faqs] == ["0", "dup", "4"]
    assert faqs[1].question_text() == "primero"


def test_load_csv_with_pandas(tmp_path):
    faqs_path = tmp_path / "faqs.csv"
    df = pd.DataFrame({
        "id": ["baggage", "pets"],
        "question": ["짐은 몇 개까지?", "반려동물 동반"],
        "aliases": ["짐|수하물| 캐리어 ", ""],
        "keywords_core": ["", "강아지"],
        "answer_ko": ["2개까지 무료", ""],
        "answer_zh_tw": ["", "可以攜帶寵物"],
        "url": ["https://example.com/baggage", ""],
    })
    df.to_csv(faqs_path, index=False)

    faqs = load_faqs(faqs_path)
    assert [f.id for f in faqs] == ["baggage", "pets"]
    assert faqs[0].aliases.for_lang() == ("짐", "수하물", "캐리어")
    assert faqs[0].url == "https://example.com/baggage"
    assert faqs[1].url is None
    assert faqs[1].keywords_core.for_lang() == ("강아지",)
    assert pick_answer(faqs[0], KO) == "2개까지 무료"
    assert pick_answer(faqs[1], ZH_HANT) == "可以攜帶寵物"


def test_corpus_report(tmp_path):
    faqs_path = tmp_path / "faqs.json"
    _write_json(faqs_path, [
        {"id": "a", "question": "환불", "aliases": ["취소"], "answers": {"ko": "환불 안내", "zh-tw": "退款"}},
        {"id": "b", "question": "짐"},
    ])
    report = corpus_report(load_faqs(faqs_path))

    assert list(report["id"]) == ["a", "b"]
    assert list(report["n_candidates"]) == [2, 1]
    assert bool(report.loc[0, "ko"]) is True
    assert bool(report.loc[0, "zh-hant"]) is True
    assert bool(report.loc[0, "en"]) is False
    assert list(report["answerable"]) == [True, False]


def test_corpus_report_empty():
    report = corpus_report([])
    assert report.empty
    assert "answerable" in report.columns
