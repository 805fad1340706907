# faq_api/config.py
import os
from dataclasses import dataclass, field
from typing import Optional, Tuple

from faq_api.lang import LANG_TAGS, ZH_DEFAULT, ZH_HANS, ZH_HANT

# Curva por largo de consulta (sin espacios): estricta para consultas muy cortas.
# Más allá del último escalón rige base_threshold.
DEFAULT_DYNAMIC_THRESHOLDS: Tuple[Tuple[int, float], ...] = (
    (1, 0.90),
    (2, 0.60),
    (3, 0.45),
    (4, 0.38),
    (5, 0.34),
)


@dataclass(frozen=True)
class MatcherConfig:
    # Umbrales (ajustables por entorno; versiones previas usaban 0.08 como base)
    base_threshold: float = 0.30
    floor_threshold: float = 0.08
    min_query_chars: int = 2
    dynamic_thresholds: Tuple[Tuple[int, float], ...] = DEFAULT_DYNAMIC_THRESHOLDS

    # Chino ambiguo → simplificado o tradicional
    zh_default: str = ZH_DEFAULT

    def __post_init__(self):
        if self.zh_default not in (ZH_HANS, ZH_HANT):
            raise ValueError(f"zh_default debe ser {ZH_HANS!r} o {ZH_HANT!r}, no {self.zh_default!r}")
        if self.min_query_chars < 0:
            raise ValueError("min_query_chars no puede ser negativo")
        steps = sorted(self.dynamic_thresholds)
        for (_, prev), (_, cur) in zip(steps, steps[1:]):
            if cur > prev:
                raise ValueError(f"dynamic_thresholds debe ser no creciente: {steps}")
        # ordenado para dynamic_threshold()
        object.__setattr__(self, "dynamic_thresholds", tuple(steps))

    def dynamic_threshold(self, length: int) -> float:
        for max_len, threshold in self.dynamic_thresholds:
            if length <= max_len:
                return threshold
        return self.base_threshold

    def effective_threshold(self, length: int) -> float:
        return max(self.dynamic_threshold(length), self.floor_threshold, self.base_threshold)


@dataclass(frozen=True)
class Settings:
    faq_paths: Tuple[str, ...] = ("data/faqs.json", "api/faqs.json")
    allow_origins: Tuple[str, ...] = ("*",)
    log_level: str = "INFO"
    log_path: Optional[str] = None
    contact: Optional[str] = None
    matcher: MatcherConfig = field(default_factory=MatcherConfig)


def _get_env(name: str, default: Optional[str] = None) -> Optional[str]:
    value = os.getenv(name, default)
    if value is None:
        return None
    value = value.strip()
    return value if value else None


def _float_env(name: str, default: float) -> float:
    raw = _get_env(name)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{name} debe ser numérico, no {raw!r}") from None


def _int_env(name: str, default: int) -> int:
    raw = _get_env(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} debe ser entero, no {raw!r}") from None


def parse_dynamic_thresholds(raw: str) -> Tuple[Tuple[int, float], ...]:
    """ "1:0.9,2:0.6,3:0.45" → ((1, 0.9), (2, 0.6), (3, 0.45)) """
    steps = []
    for chunk in raw.split(","):
        chunk = chunk.strip()
        if not chunk:
            continue
        length, sep, threshold = chunk.partition(":")
        if not sep:
            raise ValueError(f"Escalón inválido en FAQ_DYNAMIC_THRESHOLDS: {chunk!r}")
        try:
            steps.append((int(length), float(threshold)))
        except ValueError:
            raise ValueError(f"Escalón inválido en FAQ_DYNAMIC_THRESHOLDS: {chunk!r}") from None
    return tuple(steps)


def load_matcher_config() -> MatcherConfig:
    dyn_raw = _get_env("FAQ_DYNAMIC_THRESHOLDS")
    zh_default = (_get_env("FAQ_ZH_DEFAULT") or ZH_DEFAULT).lower().replace("_", "-")
    if zh_default not in LANG_TAGS:
        raise ValueError(f"FAQ_ZH_DEFAULT desconocido: {zh_default!r}")
    return MatcherConfig(
        base_threshold=_float_env("FAQ_THRESHOLD", 0.30),
        floor_threshold=_float_env("FAQ_THRESHOLD_FLOOR", 0.08),
        min_query_chars=_int_env("FAQ_MIN_QUERY_CHARS", 2),
        dynamic_thresholds=parse_dynamic_thresholds(dyn_raw) if dyn_raw else DEFAULT_DYNAMIC_THRESHOLDS,
        zh_default=zh_default,
    )


def load_settings() -> Settings:
    paths = tuple(p for p in (_get_env("FAQ_PATH"),) if p) + Settings.faq_paths
    origins = tuple(o.strip() for o in (_get_env("ALLOW_ORIGINS", "*") or "*").split(",") if o.strip())
    return Settings(
        faq_paths=paths,
        allow_origins=origins or ("*",),
        log_level=_get_env("LOG_LEVEL", "INFO") or "INFO",
        log_path=_get_env("FAQ_LOG_PATH"),
        contact=_get_env("FAQ_CONTACT"),
        matcher=load_matcher_config(),
    )
