# faq_api/main.py
import logging
from typing import Optional, Union

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from faq_api.config import Settings, load_settings
from faq_api.matcher import FaqMatcher
from faq_api.response_builder import append_log, build_debug, build_response
from faq_api.utils import load_faqs

VERSION = "1.2"

log = logging.getLogger("faq-api")


def setup_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        level=getattr(logging, level.upper(), logging.INFO),
    )


class AskRequest(BaseModel):
    # números se aceptan como texto ("123")
    question: Optional[Union[str, int, float]] = ""
    lang: Optional[str] = None


def create_app(matcher: Optional[FaqMatcher] = None, settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or load_settings()
    setup_logging(settings.log_level)

    if matcher is None:
        # Corpus cargado una sola vez; si falla queda vacío y todo devuelve "sin match"
        faqs = load_faqs(settings.faq_paths, zh_default=settings.matcher.zh_default)
        matcher = FaqMatcher(faqs, settings.matcher)

    app = FastAPI(title="Multilingual FAQ API", version=VERSION)
    app.state.matcher = matcher
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.allow_origins),
        allow_credentials=False,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
        max_age=86400,
    )

    @app.exception_handler(RequestValidationError)
    async def invalid_body(request: Request, exc: RequestValidationError):
        # JSON roto o tipos inválidos → mismo formato de error que el resto de /ask
        log.info("Body inválido en %s: %s", request.url.path, exc.errors())
        return JSONResponse(status_code=400, content={"ok": False, "error": "Invalid request body"})

    @app.exception_handler(Exception)
    async def unhandled_error(request: Request, exc: Exception):
        log.exception("Error no controlado en %s", request.url.path)
        return JSONResponse(status_code=500, content={"ok": False, "error": str(exc) or "Internal Server Error"})

    def answer(question: str, explicit_lang: Optional[str], request: Request, diag: bool = False):
        lang = matcher.resolve_language(
            question,
            explicit=explicit_lang,
            accept_language=request.headers.get("accept-language"),
        )
        result = matcher.match(question, lang)
        payload = build_response(matcher, result, lang, contact=settings.contact)
        if diag:
            payload["debug"] = build_debug(matcher, question, lang, result)
        append_log(settings.log_path, {
            "query": question,
            "lang": lang,
            "match_id": result.entry.id if result else None,
            "score": round(result.score, 3) if result else None,
        })
        return payload

    @app.get("/health")
    def health():
        return {"status": "ok", "version": app.version, "faqs_count": len(matcher)}

    @app.get("/ask")
    def ask_get(request: Request, q: Optional[str] = None, lang: Optional[str] = None, diag: Optional[str] = None):
        question = (q or "").strip()
        if not question:
            # Sin consulta: estado del servicio
            sample = matcher.faqs[0].raw_question if matcher.faqs else None
            return {
                "ok": True,
                "version": f"faq-api v{app.version}",
                "methods": ["GET", "POST"],
                "faqs_count": len(matcher),
                "sample": sample,
            }
        return answer(question, lang, request, diag=(diag == "1"))

    @app.post("/ask")
    def ask_post(req: AskRequest, request: Request):
        question = str(req.question if req.question is not None else "").strip()
        if not question:
            return JSONResponse(status_code=400, content={"ok": False, "error": 'Missing "question" in POST body'})
        return answer(question, req.lang, request)

    return app


app = create_app()
