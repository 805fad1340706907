# faq_api/utils.py
import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

import pandas as pd

from faq_api.candidates import build_candidates
from faq_api.lang import FALLBACK_ORDER, ZH_DEFAULT
from faq_api.schema import FaqEntry, parse_entry

log = logging.getLogger(__name__)

# Columnas de lista en CSV: "환불|환불 규정|취소"
CSV_LIST_COLUMNS = ("aliases", "keywords_core", "keywords_related")
CSV_LIST_SEP = "|"


def _read_json(path: Path) -> Optional[List[Any]]:
    try:
        # utf-8-sig: tolera BOM al inicio del archivo
        with path.open("r", encoding="utf-8-sig") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        log.error("No se pudo leer %s: %s", path, e)
        return None
    if not isinstance(data, list):
        log.error("%s no contiene una lista de FAQs (tipo %s)", path, type(data).__name__)
        return None
    return data


def _read_csv(path: Path) -> Optional[List[Dict[str, Any]]]:
    try:
        df = pd.read_csv(path, dtype=str, keep_default_na=False, encoding="utf-8-sig")
    except (OSError, ValueError) as e:
        log.error("No se pudo leer %s: %s", path, e)
        return None

    rows = []
    for record in df.to_dict(orient="records"):
        row: Dict[str, Any] = {}
        for col, value in record.items():
            value = (value or "").strip()
            if not value:
                continue
            if col in CSV_LIST_COLUMNS:
                row[col] = [v.strip() for v in value.split(CSV_LIST_SEP) if v.strip()]
            else:
                row[col] = value
        rows.append(row)
    return rows


def load_faqs(paths: Union[str, Path, Sequence[Union[str, Path]]], zh_default: str = ZH_DEFAULT) -> Tuple[FaqEntry, ...]:
    """
    Carga el corpus desde la primera ruta válida (.json o .csv).
    Nunca lanza: si ninguna ruta sirve, loguea y devuelve un corpus vacío.
    """
    if isinstance(paths, (str, Path)):
        paths = [paths]

    for p in paths:
        path = Path(p)
        if not path.is_file():
            log.debug("FAQ path inexistente: %s", path)
            continue
        raw = _read_csv(path) if path.suffix.lower() == ".csv" else _read_json(path)
        if raw is None:
            continue
        faqs = _parse_all(raw, zh_default)
        log.info("Se cargaron %d FAQs desde %s", len(faqs), path)
        return faqs

    log.error("No se pudo cargar el corpus de FAQs desde ninguna ruta: %s", [str(p) for p in paths])
    return ()


def _parse_all(raw: List[Any], zh_default: str) -> Tuple[FaqEntry, ...]:
    faqs = []
    seen_ids = set()
    for i, item in enumerate(raw):
        if not isinstance(item, dict):
            log.warning("[FAQ OMITIDA] %d: no es un objeto", i)
            continue
        entry = parse_entry(item, fallback_id=i, zh_default=zh_default)
        if entry.id in seen_ids:
            log.warning("[FAQ OMITIDA] %d: id duplicado %r", i, entry.id)
            continue
        seen_ids.add(entry.id)
        faqs.append(entry)
    return tuple(faqs)


def corpus_report(faqs: Sequence[FaqEntry]) -> pd.DataFrame:
    """
    Cobertura por FAQ: cantidad de candidatos y qué idiomas tienen respuesta.
    `answerable=False` marca entradas que matchean pero no tienen ningún texto.
    """
    rows = []
    for entry in faqs:
        row = {
            "id": entry.id,
            "question": entry.question_text(),
            "n_candidates": len(build_candidates(entry)),
        }
        for tag in FALLBACK_ORDER:
            row[tag] = tag in entry.answers.by_lang
        row["default"] = bool(entry.answers.default)
        row["answerable"] = not entry.answers.is_empty()
        rows.append(row)
    columns = ["id", "question", "n_candidates", *FALLBACK_ORDER, "default", "answerable"]
    return pd.DataFrame(rows, columns=columns)
