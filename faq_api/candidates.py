# faq_api/candidates.py
from dataclasses import dataclass
from typing import List, Optional

from faq_api.schema import FaqEntry

# Procedencia de cada candidato (útil para debug y para el payload de respuesta)
QUESTION = "question"
ALIAS = "alias"
CORE = "core"
RELATED = "related"


@dataclass(frozen=True)
class Candidate:
    text: str
    source: str


def build_candidates(entry: FaqEntry, lang: Optional[str] = None) -> List[Candidate]:
    """
    Todos los textos comparables de una FAQ: pregunta, alias, keywords core y related,
    en ese orden. Con esquema por idioma se usa `lang` (o el fallback ko → en → ja → zh).
    Sin duplicados (source, text).
    """
    out: List[Candidate] = []
    seen = set()

    def add(values, source):
        for text in values:
            key = (source, text)
            if not text or key in seen:
                continue
            seen.add(key)
            out.append(Candidate(text=text, source=source))

    add(entry.question.for_lang(lang), QUESTION)
    add(entry.aliases.for_lang(lang), ALIAS)
    add(entry.keywords_core.for_lang(lang), CORE)
    add(entry.keywords_related.for_lang(lang), RELATED)
    return out
