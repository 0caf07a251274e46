from __future__ import annotations
import logging
from typing import Dict, List, Optional, Tuple

from fastapi import FastAPI, Query, HTTPException
from pydantic import BaseModel

from .config import Config
from .engine import GematriaBuilder, GematriaContext
from .methods import GematriaMethod, UnsupportedMethodError

logger = logging.getLogger(__name__)

app = FastAPI(title="gemcalc", description="Hebrew gematria calculator")

_config = Config()

# One context per (method, preserve_vowels), built on first use and reused
_contexts: Dict[Tuple[GematriaMethod, bool], GematriaContext] = {}

class GematriaOut(BaseModel):
    text: str
    word: str
    method: GematriaMethod
    value: int

class SearchOut(BaseModel):
    value: int
    method: GematriaMethod
    matches: List[str]

class GroupOut(BaseModel):
    value: int
    count: int
    words: List[str]

class MethodOut(BaseModel):
    method: GematriaMethod
    implemented: bool

def get_context(method: Optional[GematriaMethod], preserve_vowels: Optional[bool]) -> GematriaContext:
    try:
        method = method or _config.method
    except ValueError as e:
        # GEMCALC_METHOD names no known method
        raise HTTPException(status_code=400, detail=str(e))
    preserve = _config.PRESERVE_VOWELS if preserve_vowels is None else preserve_vowels
    key = (method, preserve)
    ctx = _contexts.get(key)
    if ctx is None:
        try:
            ctx = (
                GematriaBuilder()
                .with_method(method)
                .with_cache(_config.CACHE)
                .with_vowels(preserve)
                .init_gematria()
            )
        except UnsupportedMethodError as e:
            raise HTTPException(status_code=400, detail=str(e))
        logger.info("Created context for %s (preserve_vowels=%s)", method.value, preserve)
        _contexts[key] = ctx
    return ctx

@app.get("/gematria", response_model=GematriaOut)
def api_gematria(
    text: str = Query(..., min_length=1, description="Hebrew word or phrase"),
    method: Optional[GematriaMethod] = None,
    preserve_vowels: Optional[bool] = None,
):
    result = get_context(method, preserve_vowels).calculate(text)
    return GematriaOut(text=text, word=result.word, method=result.method, value=result.value)

@app.get("/search", response_model=SearchOut)
def api_search(
    text: str = Query(..., description="Text to search in"),
    word: Optional[str] = Query(None, description="Find words with the same value as this word"),
    value: Optional[int] = Query(None, ge=0, description="Find words with this value"),
    method: Optional[GematriaMethod] = None,
    preserve_vowels: Optional[bool] = None,
):
    ctx = get_context(method, preserve_vowels)
    if value is None:
        if not word:
            raise HTTPException(status_code=400, detail="Provide either value or word")
        value = ctx.calculate(word).value
    return SearchOut(value=value, method=ctx.method, matches=ctx.search_matching_values(value, text))

@app.get("/groups", response_model=List[GroupOut])
def api_groups(
    text: str = Query(..., description="Text whose words are grouped by value"),
    method: Optional[GematriaMethod] = None,
    preserve_vowels: Optional[bool] = None,
):
    groups = get_context(method, preserve_vowels).group_words_by_gematria(text)
    return [GroupOut(value=v, count=len(words), words=words) for v, words in groups]

@app.get("/methods", response_model=List[MethodOut])
def api_methods():
    implemented = set(GematriaMethod.implemented())
    return [MethodOut(method=m, implemented=m in implemented) for m in GematriaMethod]
