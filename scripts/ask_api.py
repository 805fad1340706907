# scripts/ask_api.py
import sys

import requests

URL = "http://127.0.0.1:8000/ask"


def ask(q, lang=None):
    payload = {"question": q}
    if lang:
        payload["lang"] = lang
    r = requests.post(URL, json=payload, timeout=30)
    r.raise_for_status()
    data = r.json()
    match = data.get("match") or {}
    print("\nQ:", q)
    print("lang:", data.get("lang"))
    print("match:", match.get("id"), "| from:", match.get("matched_from"), "| score:", match.get("score"))
    print("answer:\n", data.get("answer"))
    return data


if __name__ == "__main__":
    if len(sys.argv) > 1:
        ask(" ".join(sys.argv[1:]))
    else:
        ask("환불")
        ask("짐")
        ask("How do I get a refund?")
        ask("手荷物はいくつまで？")
