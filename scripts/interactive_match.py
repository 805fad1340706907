# scripts/interactive_match.py
import os
import sys

# Ajustar path para importar desde /faq_api
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from faq_api.config import load_matcher_config
from faq_api.matcher import FaqMatcher
from faq_api.utils import load_faqs


def main():
    cfg = load_matcher_config()
    faqs = load_faqs(os.getenv("FAQ_PATH", "data/faqs.json"), zh_default=cfg.zh_default)
    matcher = FaqMatcher(faqs, cfg)

    print(f"{len(matcher)} FAQs cargadas. Escribí una consulta o 'salir' para terminar.\n")

    while True:
        try:
            q = input("Consulta: ").strip()
        except (EOFError, KeyboardInterrupt):
            print("\nFin.")
            break

        if q.lower() in {"salir", "exit", "quit"}:
            print("Fin.")
            break
        if not q:
            continue

        lang = matcher.resolve_language(q)
        result = matcher.match(q, lang)

        print("\n--- RESULTADO ---")
        print(f"[lang] {lang}  [umbral] {matcher.threshold_for(q):.2f}")
        if result is None:
            print("[sin match]")
        else:
            print(f"[match {result.score:.3f}] {result.entry.id} ← {result.matched_text!r} ({result.matched_from})")
            print(f"[respuesta]\n{matcher.answer_for(result, lang)}")
        print("-----------------\n")


if __name__ == "__main__":
    main()
