# faq_api/answers.py
from typing import Optional

from faq_api.lang import EN, FALLBACK_ORDER, JA, KO, ZH_DEFAULT, ZH_HANS, ZH_HANT, normalize_lang_tag
from faq_api.schema import FaqEntry

# Mensaje cuando no hay match (o el match no tiene respuesta en ningún idioma)
FALLBACK_MESSAGES = {
    KO: "등록된 FAQ에서 답변을 찾지 못했습니다. 고객센터로 문의해 주세요.",
    JA: "該当するFAQが見つかりませんでした。カスタマーセンターまでお問い合わせください。",
    EN: "We couldn't find a matching FAQ. Please contact our customer center.",
    ZH_HANS: "未找到相关的常见问题，请联系客服中心。",
    ZH_HANT: "未找到相關的常見問題，請聯絡客服中心。",
}

# Línea de contacto opcional (Settings.contact / FAQ_CONTACT), p. ej. un teléfono
CONTACT_TEMPLATES = {
    KO: "[전화번호] {contact}",
    JA: "[電話番号] {contact}",
    EN: "[Tel] {contact}",
    ZH_HANS: "[电话号码] {contact}",
    ZH_HANT: "[電話號碼] {contact}",
}


def pick_answer(entry: FaqEntry, lang: Optional[str], zh_default: str = ZH_DEFAULT) -> str:
    """
    Respuesta localizada con fallback determinístico:
    idioma pedido → ko → en → ja → zh-hant → zh-hans → campo "answer" → cualquiera → "".
    """
    answers = entry.answers
    tag = normalize_lang_tag(lang, zh_default)
    order = ((tag,) if tag else ()) + FALLBACK_ORDER
    for t in order:
        text = answers.by_lang.get(t)
        if text:
            return text
    if answers.default:
        return answers.default
    if answers.extras:
        return answers.extras[0]
    return ""


def get_fallback_answer(lang: Optional[str], zh_default: str = ZH_DEFAULT, contact: Optional[str] = None) -> str:
    tag = normalize_lang_tag(lang, zh_default) or KO
    message = FALLBACK_MESSAGES.get(tag, FALLBACK_MESSAGES[KO])
    if contact:
        message = f"{message} {CONTACT_TEMPLATES[tag].format(contact=contact)}"
    return message
