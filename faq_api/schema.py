# faq_api/schema.py
"""
Modelo de datos del corpus de FAQs.

Los campos question / aliases / keywords_core / keywords_related vienen en dos
esquemas históricos:
  - plano:       "question": "환불 규정", "aliases": ["환불", ...]
  - por idioma:  "question": {"ko": "...", "en": "..."}, "aliases": {"ko": [...], ...}
La forma se inspecciona UNA vez al parsear (parse_entry); el resto del código
sólo ve FlatField / LocalizedField y llama a for_lang().
"""
import logging
import re
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple, Union

from faq_api.lang import FALLBACK_ORDER, LANG_TAGS, ZH_DEFAULT, normalize_lang_tag

log = logging.getLogger(__name__)

_LEGACY_ANSWER_KEY = re.compile(r"^answer[_-](.+)$", re.IGNORECASE)


@dataclass(frozen=True)
class FlatField:
    values: Tuple[str, ...] = ()

    def for_lang(self, lang: Optional[str] = None) -> Tuple[str, ...]:
        return self.values


@dataclass(frozen=True)
class LocalizedField:
    values: Mapping[str, Tuple[str, ...]] = field(default_factory=lambda: MappingProxyType({}), hash=False)

    def for_lang(self, lang: Optional[str] = None) -> Tuple[str, ...]:
        order = ((lang,) if lang else ()) + FALLBACK_ORDER
        for tag in order:
            vals = self.values.get(tag)
            if vals:
                return vals
        return ()


Field = Union[FlatField, LocalizedField]


@dataclass(frozen=True)
class AnswerSet:
    # tag canónico → texto
    by_lang: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}), hash=False)
    default: str = ""  # campo "answer" sin idioma
    extras: Tuple[str, ...] = ()  # resto, en orden de inserción

    def is_empty(self) -> bool:
        return not (self.by_lang or self.default or self.extras)


@dataclass(frozen=True)
class FaqEntry:
    id: str
    question: Field = FlatField()
    aliases: Field = FlatField()
    keywords_core: Field = FlatField()
    keywords_related: Field = FlatField()
    answers: AnswerSet = AnswerSet()
    url: Optional[str] = None
    url_title: Optional[str] = None
    raw_question: Any = field(default=None, hash=False)

    def question_text(self, lang: Optional[str] = None) -> str:
        vals = self.question.for_lang(lang)
        return vals[0] if vals else ""


# ===== Parsing (dict crudo → FaqEntry) =====

def _as_strings(value) -> Tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, (list, tuple)):
        items = value
    else:
        items = [value]
    out = []
    for v in items:
        if v is None:
            continue
        s = str(v)
        if s.strip():
            out.append(s)
    return tuple(out)


def parse_field(value, zh_default: str = ZH_DEFAULT) -> Field:
    if isinstance(value, Mapping):
        per_lang: Dict[str, Tuple[str, ...]] = {}
        for key, raw in value.items():
            tag = normalize_lang_tag(key, zh_default)
            if tag is None:
                log.debug("Tag de idioma desconocido en campo localizado: %r", key)
                continue
            vals = _as_strings(raw)
            # un tag canónico explícito gana sobre una variante regional ya vista
            if vals and (tag not in per_lang or str(key).lower() == tag):
                per_lang[tag] = vals
        return LocalizedField(MappingProxyType(per_lang))
    return FlatField(_as_strings(value))


def _clean_key(key) -> str:
    return str(key).strip().lower().replace("_", "-")


def parse_answers(raw: Mapping[str, Any], zh_default: str = ZH_DEFAULT) -> AnswerSet:
    """
    Junta los tres esquemas de respuesta:
      - "answers": {"ko": ..., "ZH_TW": ..., ...}
      - campos legacy "answer_ko", "answer_zh_tw", ...
      - "answer" sin idioma (default incondicional)
    """
    by_lang: Dict[str, str] = {}
    extras = []

    structured = raw.get("answers")
    pairs = [(k, v, True) for k, v in structured.items()] if isinstance(structured, Mapping) else []
    for key, value in raw.items():
        m = _LEGACY_ANSWER_KEY.match(str(key))
        # answer_url / answer_title no son respuestas
        if m and normalize_lang_tag(m.group(1), zh_default):
            pairs.append((m.group(1), value, False))

    # 1ª pasada: claves ya canónicas; 2ª: variantes regionales rellenan huecos
    regional = []
    for key, value, from_answers in pairs:
        if not isinstance(value, str) or not value.strip():
            continue
        k = _clean_key(key)
        if k in LANG_TAGS:
            by_lang.setdefault(k, value)
        else:
            regional.append((k, value, from_answers))
    for k, text, from_answers in regional:
        tag = normalize_lang_tag(k, zh_default)
        if tag:
            by_lang.setdefault(tag, text)
        elif from_answers:
            extras.append(text)

    default = raw.get("answer")
    if not isinstance(default, str) or not default.strip():
        default = ""
    return AnswerSet(by_lang=MappingProxyType(by_lang), default=default, extras=tuple(extras))


def _opt_str(value) -> Optional[str]:
    if value is None:
        return None
    s = str(value).strip()
    return s or None


def parse_entry(raw: Mapping[str, Any], fallback_id: Any = None, zh_default: str = ZH_DEFAULT) -> FaqEntry:
    entry_id = raw.get("id")
    if entry_id is None or str(entry_id).strip() == "":
        entry_id = fallback_id
    return FaqEntry(
        id=str(entry_id),
        question=parse_field(raw.get("question"), zh_default),
        aliases=parse_field(raw.get("aliases"), zh_default),
        keywords_core=parse_field(raw.get("keywords_core"), zh_default),
        keywords_related=parse_field(raw.get("keywords_related"), zh_default),
        answers=parse_answers(raw, zh_default),
        url=_opt_str(raw.get("url")),
        url_title=_opt_str(raw.get("url_title")),
        raw_question=raw.get("question"),
    )
