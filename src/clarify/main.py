"""
HTTP surface for Clarify.

Exposes error enrichment to evaluation services that run out of process.
"""

import json
import logging
from fastapi import FastAPI, Request, HTTPException

from . import __version__
from .errors import ErrorEnricher, FailureDescriptor, StaticWorkbook

logger = logging.getLogger(__name__)


app = FastAPI(title="Clarify - Tax Formula Error Enrichment")

_enricher = ErrorEnricher()


@app.post("/enrich")
async def enrich(request: Request):
    """
    Describe a failed formula evaluation.

    Expects {"formula_name": ..., "presentation": ..., "failure": {...}}.
    """
    try:
        payload = await request.json()
    except json.JSONDecodeError:
        raise HTTPException(status_code=400, detail="Invalid payload")

    if not isinstance(payload, dict) or not isinstance(payload.get("failure"), dict):
        raise HTTPException(status_code=400, detail="Missing 'failure' object")

    formula_name = payload.get("formula_name")
    workbook = StaticWorkbook(
        formula_name="" if formula_name is None else str(formula_name),
        presentation=payload.get("presentation")
    )
    descriptor = FailureDescriptor.from_dict(payload["failure"])

    result = _enricher.enrich(workbook, descriptor)
    logger.info(f"Enriched failure for formula '{result.formula_name}'")

    return result.to_dict()


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {
        "status": "healthy",
        "service": "clarify"
    }


@app.get("/")
async def root():
    """Root endpoint with service info"""
    return {
        "name": "Clarify",
        "description": "User-facing messages for failed tax formula evaluations",
        "version": __version__,
        "classifiers": [classifier.name for classifier in _enricher.chain]
    }
