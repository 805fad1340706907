# scripts/check_corpus.py
import sys

from faq_api.utils import corpus_report, load_faqs

if __name__ == "__main__":
    path = sys.argv[1] if len(sys.argv) > 1 else "data/faqs.json"
    faqs = load_faqs(path)
    print(f"Se cargaron {len(faqs)} FAQs.")

    report = corpus_report(faqs)
    print(report.to_string(index=False))

    sin_respuesta = report[~report["answerable"]]
    if not sin_respuesta.empty:
        print(f"\n[ATENCIÓN] {len(sin_respuesta)} FAQs sin respuesta en ningún idioma:")
        print(sin_respuesta[["id", "question"]].to_string(index=False))
        sys.exit(1)
