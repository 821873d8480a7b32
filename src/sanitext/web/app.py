"""Sanitext Web App: FastAPI backend.

Endpoints:
  GET  /health                → status / version
  GET  /api/profiles          → available option profiles
  GET  /api/profiles/{id}     → option values of one profile
  POST /api/normalize         → normalize plain text
  POST /api/sanitize          → full sanitize pipeline on an HTML fragment
  POST /api/highlight         → HTML fragment with highlight markers + findings

Run with:
  uvicorn sanitext.web.app:app --reload --port 8000
"""

from __future__ import annotations

import logging
import os
from typing import Optional

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from sanitext.core.allowlist import scrub_surrogates
from sanitext.core.highlight import clear_highlights, collect_findings, highlight_chars
from sanitext.core.normalizer import normalize
from sanitext.core.options import SanitizeOptions
from sanitext.core.pipeline import sanitize_markup
from sanitext.core.profiles import ProfileManager, ProfileNotFoundError
from sanitext.core.tree import parse_fragment, serialize

# ---------------------------------------------------------------------------
# Configuration via environment variables
# ---------------------------------------------------------------------------

_MAX_INPUT_KB = int(os.environ.get("SANITEXT_MAX_INPUT_KB", "512"))
_MAX_INPUT_CHARS = _MAX_INPUT_KB * 1024

# CORS origins: "*" = all, otherwise a comma-separated list
_CORS_ORIGINS_RAW = os.environ.get("SANITEXT_CORS_ORIGINS", "*")
_CORS_ORIGINS: list[str] = (
    ["*"]
    if _CORS_ORIGINS_RAW in ("*", "")
    else [o.strip() for o in _CORS_ORIGINS_RAW.split(",") if o.strip()]
)
# allow_credentials is incompatible with allow_origins=["*"]
_CORS_ALLOW_CREDENTIALS = "*" not in _CORS_ORIGINS

_logger = logging.getLogger(__name__)

_profiles = ProfileManager()

# ---------------------------------------------------------------------------
# FastAPI application
# ---------------------------------------------------------------------------

app = FastAPI(
    title="Sanitext API",
    description="Rich-text sanitizer with highlight preview",
    version="0.1.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=_CORS_ORIGINS,
    allow_credentials=_CORS_ALLOW_CREDENTIALS,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ---------------------------------------------------------------------------
# Request bodies
# ---------------------------------------------------------------------------


class _OptionsBody(BaseModel):
    # Flag name (camelCase or snake_case) → value; overrides the profile
    options: Optional[dict[str, bool]] = None
    profile: Optional[str] = None


class NormalizeRequest(_OptionsBody):
    text: str


class MarkupRequest(_OptionsBody):
    markup: str


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _resolve_options(body: _OptionsBody) -> SanitizeOptions:
    """Profile (or defaults) first, then explicit flag overrides."""
    base = SanitizeOptions()
    if body.profile:
        try:
            base = _profiles.load_options(body.profile)
        except ProfileNotFoundError:
            raise HTTPException(status_code=404, detail=f"Unknown profile: {body.profile}")
    try:
        return SanitizeOptions.from_mapping(body.options, base=base, strict=True)
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc))


def _accept_input(payload: str) -> str:
    """Enforce the size limit and return *payload* as encodable UTF-8 text."""
    if len(payload) > _MAX_INPUT_CHARS:
        raise HTTPException(
            status_code=413,
            detail=f"Input exceeds the maximum allowed size ({_MAX_INPUT_KB} KB).",
        )
    return scrub_surrogates(payload)


@app.on_event("startup")
async def _log_startup() -> None:
    _logger.info(
        "Sanitext started: max_input=%dKB cors=%s", _MAX_INPUT_KB, _CORS_ORIGINS_RAW
    )


# ---------------------------------------------------------------------------
# Health check
# ---------------------------------------------------------------------------


@app.get("/health")
async def health():
    from sanitext import __version__
    return {"status": "ok", "version": __version__}


# ---------------------------------------------------------------------------
# Profiles
# ---------------------------------------------------------------------------


@app.get("/api/profiles")
async def list_profiles():
    return {"profiles": [p.to_dict() for p in _profiles.list_profiles()]}


@app.get("/api/profiles/{profile_id}")
async def get_profile(profile_id: str):
    try:
        options = _profiles.load_options(profile_id)
    except ProfileNotFoundError:
        raise HTTPException(status_code=404, detail=f"Unknown profile: {profile_id}")
    return {"id": profile_id, "options": options.to_dict(camel_case=True)}


# ---------------------------------------------------------------------------
# Sanitizing
# ---------------------------------------------------------------------------


@app.post("/api/normalize")
async def normalize_text(body: NormalizeRequest):
    text = _accept_input(body.text)
    options = _resolve_options(body)
    return {"text": normalize(text, options)}


@app.post("/api/sanitize")
async def sanitize(body: MarkupRequest):
    """Sanitize an HTML fragment. Any highlight markers are stripped first."""
    markup = _accept_input(body.markup)
    options = _resolve_options(body)
    soup = parse_fragment(markup)
    clear_highlights(soup)
    result = sanitize_markup(serialize(soup), options)
    return {"markup": result, "options": options.to_dict(camel_case=True)}


@app.post("/api/highlight")
async def highlight(body: MarkupRequest):
    """Return the fragment with problem characters wrapped in markers."""
    markup = _accept_input(body.markup)
    options = _resolve_options(body)
    soup = parse_fragment(markup)
    clear_highlights(soup)
    count = highlight_chars(soup, options)
    return {
        "markup": serialize(soup),
        "count": count,
        "findings": [f.to_dict() for f in collect_findings(soup, options)],
    }
