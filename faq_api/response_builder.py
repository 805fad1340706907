# faq_api/response_builder.py
import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional

from faq_api.answers import get_fallback_answer
from faq_api.candidates import build_candidates
from faq_api.lang import JA, JA_ONLY_TERMS
from faq_api.matcher import FaqMatcher, MatchResult
from faq_api.text import remove_spaces

log = logging.getLogger(__name__)


def append_log(path: Optional[str], payload: Dict[str, Any]) -> None:
    """Agrega una línea JSON al log de consultas (si hay ruta configurada)."""
    if not path:
        return
    log_path = Path(path)
    try:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        payload = {**payload, "ts": datetime.now(timezone.utc).isoformat()}
        with log_path.open("a", encoding="utf-8") as f:
            f.write(json.dumps(payload, ensure_ascii=False) + "\n")
    except OSError as e:
        log.warning("No se pudo escribir el log de consultas %s: %s", log_path, e)


def _final_lang(result: MatchResult, lang: str) -> str:
    # "手荷物" y similares se detectan como chino pero la FAQ es japonesa
    if lang.startswith("zh") and result.matched_text in JA_ONLY_TERMS:
        return JA
    return lang


def build_response(
    matcher: FaqMatcher,
    result: Optional[MatchResult],
    lang: str,
    contact: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Payload de /ask. Sin match → match=None y mensaje genérico en el idioma resuelto.
    """
    if result is None:
        return {
            "ok": True,
            "lang": lang,
            "match": None,
            "answer": get_fallback_answer(lang, matcher.cfg.zh_default, contact),
        }

    final_lang = _final_lang(result, lang)
    entry = result.entry
    answer = matcher.answer_for(result, final_lang)
    if not answer:
        log.warning("FAQ %s matcheó pero no tiene respuesta en ningún idioma", entry.id)
        answer = get_fallback_answer(final_lang, matcher.cfg.zh_default, contact)

    url = entry.url
    url_title = entry.url_title
    sources = [{"id": entry.id, "url": url, "title": url_title or url}] if url else None

    return {
        "ok": True,
        "lang": final_lang,
        "match": {
            "id": entry.id,
            "question": entry.raw_question,
            "matched": result.matched_text,
            "matched_from": result.matched_from,
            "score": round(result.score, 3),
        },
        "answer": answer,
        "url": url,
        "url_title": url_title,
        # compatibilidad con frontends que esperan answer_url / answer_title
        "answer_url": url,
        "answer_title": url_title,
        "sources": sources,
    }


def build_debug(matcher: FaqMatcher, query: str, lang: str, result: Optional[MatchResult]) -> Dict[str, Any]:
    """Detalle para ?diag=1."""
    debug: Dict[str, Any] = {
        "query_clean": remove_spaces(query),
        "threshold": round(matcher.threshold_for(query), 3),
        "min_query_chars": matcher.cfg.min_query_chars,
    }
    if result is not None:
        debug["candidates_preview"] = [
            {"text": c.text, "from": c.source}
            for c in build_candidates(result.entry, lang)[:8]
        ]
    return debug
