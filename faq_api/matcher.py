# faq_api/matcher.py
import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from faq_api.answers import pick_answer
from faq_api.candidates import build_candidates
from faq_api.config import MatcherConfig
from faq_api.lang import detect_lang
from faq_api.schema import FaqEntry
from faq_api.text import calculate_score, remove_spaces

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class MatchResult:
    score: float
    entry: FaqEntry
    matched_text: str
    matched_from: str


def find_best_match(
    query: str,
    lang: Optional[str],
    faqs: Sequence[FaqEntry],
    cfg: Optional[MatcherConfig] = None,
) -> Optional[MatchResult]:
    """
    Recorre el corpus y devuelve el mejor candidato si supera el umbral efectivo.
    - exacto (sin espacios, normalizado) → corta el recorrido con score 1.0
    - consultas más cortas que min_query_chars sólo matchean por exacto
    - empate → gana el primero visto (comparación estricta)
    """
    cfg = cfg or MatcherConfig()
    q = str(query or "").strip()
    q_clean = remove_spaces(q)
    if not q_clean:
        return None

    too_short = len(q_clean) < cfg.min_query_chars
    best: Optional[MatchResult] = None

    for entry in faqs:
        for cand in build_candidates(entry, lang):
            if remove_spaces(cand.text) == q_clean:
                return MatchResult(1.0, entry, cand.text, cand.source)
            if too_short:
                continue
            sc = calculate_score(q, cand.text)
            if best is None or sc > best.score:
                best = MatchResult(sc, entry, cand.text, cand.source)

    if too_short or best is None:
        return None

    threshold = cfg.effective_threshold(len(q_clean))
    if best.score >= threshold:
        return best
    log.debug("Sin match para %r: mejor=%.3f (%s) < umbral=%.3f", q, best.score, best.entry.id, threshold)
    return None


class FaqMatcher:
    """
    Fachada sobre un corpus inmutable ya cargado (ver utils.load_faqs).
    Sin estado global: cada instancia recibe su corpus y su configuración.
    """

    def __init__(self, faqs: Sequence[FaqEntry], cfg: Optional[MatcherConfig] = None):
        self.faqs = tuple(faqs)
        self.cfg = cfg or MatcherConfig()

    def __len__(self) -> int:
        return len(self.faqs)

    def resolve_language(
        self,
        query: str,
        explicit: Optional[str] = None,
        accept_language: Optional[str] = None,
    ) -> str:
        return detect_lang(query, explicit=explicit, accept_language=accept_language, zh_default=self.cfg.zh_default)

    def threshold_for(self, query: str) -> float:
        return self.cfg.effective_threshold(len(remove_spaces(query)))

    def match(self, query: str, lang: Optional[str] = None) -> Optional[MatchResult]:
        return find_best_match(query, lang, self.faqs, self.cfg)

    def answer_for(self, result: MatchResult, lang: Optional[str]) -> str:
        return pick_answer(result.entry, lang, zh_default=self.cfg.zh_default)
