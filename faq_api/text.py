# faq_api/text.py
import re
import unicodedata
from typing import Set

# ZWSP / ZWNJ / ZWJ / BOM
_INVISIBLES = re.compile(r"[\u200b-\u200d\ufeff]")
_WHITESPACE = re.compile(r"\s+")

# Contención pura: por debajo del exacto, por encima de cualquier Jaccard
CONTAINMENT_SCORE = 0.98


def normalize(text) -> str:
    """
    Canoniza un texto para compararlo:
    - quita caracteres invisibles (zero-width, BOM)
    - normalización Unicode NFKC (ancho completo/medio, compatibilidad)
    - casefold
    None → "".
    """
    if text is None:
        return ""
    s = _INVISIBLES.sub("", str(text))
    s = unicodedata.normalize("NFKC", s)
    # casefold puede des-normalizar algunos caracteres; NFKC de nuevo deja el resultado estable
    return unicodedata.normalize("NFKC", s.casefold())


def remove_spaces(text) -> str:
    return _WHITESPACE.sub("", normalize(text))


def char_set(text) -> Set[str]:
    return set(remove_spaces(text))


def bigram_set(text) -> Set[str]:
    t = remove_spaces(text)
    if len(t) < 2:
        return set()
    return {t[i:i + 2] for i in range(len(t) - 1)}


def jaccard(a: Set[str], b: Set[str]) -> float:
    if not a or not b:
        return 0.0
    inter = len(a & b)
    return inter / (len(a) + len(b) - inter)


def calculate_score(query, candidate) -> float:
    """
    Similitud en [0, 1] por niveles (el primero que aplica gana):
      1.0   exacto (sin espacios, normalizado)
      0.98  uno contiene al otro
      ...   Jaccard de bigramas si comparten alguno
      ...   Jaccard de caracteres (fallback)
    """
    q = remove_spaces(query)
    c = remove_spaces(candidate)
    if not q or not c:
        return 0.0
    if q == c:
        return 1.0
    if q in c or c in q:
        return CONTAINMENT_SCORE

    # Bigramas discriminan mucho mejor que caracteres sueltos en CJK / coreano
    s = jaccard(bigram_set(q), bigram_set(c))
    if s > 0:
        return min(s, CONTAINMENT_SCORE)
    return min(jaccard(char_set(q), char_set(c)), CONTAINMENT_SCORE)
