# faq_api/lang.py
import re
from typing import Dict, Optional

# ===== Tags canónicos =====
KO = "ko"
JA = "ja"
EN = "en"
ZH_HANS = "zh-hans"
ZH_HANT = "zh-hant"

LANG_TAGS = (KO, JA, EN, ZH_HANS, ZH_HANT)

# Orden de fallback compartido por candidatos y respuestas
FALLBACK_ORDER = (KO, EN, JA, ZH_HANT, ZH_HANS)

# Idioma por defecto si ninguna fuente decide (público principal: coreano)
DEFAULT_LANG = KO

# Política para chino ambiguo ("zh" a secas, ideogramas sin pistas japonesas).
# Las revisiones anteriores del servicio no coincidían (simplificado vs. tradicional);
# se puede cambiar con FAQ_ZH_DEFAULT, ver config.py.
ZH_DEFAULT = ZH_HANS

# Grafías conocidas → tag canónico. Lo que no está acá se resuelve por subtags.
_TAG_TABLE: Dict[str, str] = {
    "ko": KO, "ko-kr": KO, "kor": KO, "kr": KO,
    "ja": JA, "ja-jp": JA, "jpn": JA, "jp": JA,
    "en": EN, "en-us": EN, "en-gb": EN, "eng": EN,
    "zh-hans": ZH_HANS, "zh-cn": ZH_HANS, "zh-sg": ZH_HANS, "zh-my": ZH_HANS,
    "zh-hans-cn": ZH_HANS, "zh-hans-sg": ZH_HANS, "zhcn": ZH_HANS, "zh-chs": ZH_HANS,
    "zh-hant": ZH_HANT, "zh-tw": ZH_HANT, "zh-hk": ZH_HANT, "zh-mo": ZH_HANT,
    "zh-hant-tw": ZH_HANT, "zh-hant-hk": ZH_HANT, "zh-hant-mo": ZH_HANT,
    "zhtw": ZH_HANT, "zh-cht": ZH_HANT,
}

_HANT_SUBTAGS = {"hant", "tw", "hk", "mo"}
_HANS_SUBTAGS = {"hans", "cn", "sg", "my"}

# ===== Heurística por escritura =====
_HANGUL = re.compile(r"[\u1100-\u11ff\u3130-\u318f\uac00-\ud7a3]")
_KANA = re.compile(r"[\u3040-\u309f\u30a0-\u30ff\uff66-\uff9f]")
_CJK = re.compile(r"[\u3400-\u4dbf\u4e00-\u9fff\uf900-\ufaff]")
_LATIN = re.compile(r"[A-Za-z]")

# Kanji exclusivos del japonés (nunca caracteres válidos en chino tradicional)
JA_ONLY_TERMS = ("手荷物", "船内持込", "船內持込")
JA_KANJI_HINTS = JA_ONLY_TERMS + ("円", "様")
_JA_HINTS = re.compile("|".join(re.escape(h) for h in JA_KANJI_HINTS))


def _zh_variant(subtags, zh_default: str) -> str:
    if _HANT_SUBTAGS.intersection(subtags):
        return ZH_HANT
    if _HANS_SUBTAGS.intersection(subtags):
        return ZH_HANS
    return zh_default


def normalize_lang_tag(raw, zh_default: str = ZH_DEFAULT) -> Optional[str]:
    """
    Normaliza un tag de idioma suelto ("ZH_TW", "ja-JP", "zh;q=0.8", ...)
    al conjunto canónico. Devuelve None si está vacío o no se reconoce.
    """
    if raw is None:
        return None
    s = str(raw).split(";", 1)[0].strip().lower().replace("_", "-")
    if not s:
        return None
    if s in _TAG_TABLE:
        return _TAG_TABLE[s]

    parts = [p for p in s.split("-") if p]
    if not parts:
        return None
    primary = parts[0]
    if primary == "zh":
        return _zh_variant(parts[1:], zh_default)
    if primary in (KO, JA, EN):
        return primary
    return None


def detect_by_script(text, zh_default: str = ZH_DEFAULT) -> Optional[str]:
    s = str(text or "")
    if _HANGUL.search(s):
        return KO
    if _KANA.search(s):
        return JA
    if _CJK.search(s):
        if _JA_HINTS.search(s):
            return JA
        return zh_default
    if _LATIN.search(s):
        return EN
    return None


def detect_lang(
    query,
    explicit: Optional[str] = None,
    accept_language: Optional[str] = None,
    zh_default: str = ZH_DEFAULT,
) -> str:
    """
    Resuelve el idioma de la consulta. Primera fuente decisiva gana:
      1) parámetro explícito (?lang= / body.lang), salvo "auto"
      2) escritura del texto de la consulta
      3) primer tag de Accept-Language
      4) coreano
    """
    if explicit and str(explicit).strip().lower() != "auto":
        tag = normalize_lang_tag(explicit, zh_default)
        if tag:
            return tag

    tag = detect_by_script(query, zh_default)
    if tag:
        return tag

    if accept_language:
        primary = str(accept_language).split(",", 1)[0]
        tag = normalize_lang_tag(primary, zh_default)
        if tag:
            return tag

    return DEFAULT_LANG
