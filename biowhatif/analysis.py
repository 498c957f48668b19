"""Mutation analysis: prompt Gemini and normalize its JSON reply."""

import logging
from typing import Callable

from biowhatif.config import Settings
from biowhatif.errors import UpstreamError, ValidationError
from biowhatif.llm import build_llm, reply_text
from biowhatif.models import MutationAnalysis
from biowhatif.normalizer import normalize_analysis
from biowhatif.prompts import DEFAULT_DEPTH, build_analysis_prompt

logger = logging.getLogger(__name__)


class MutationAnalyzer:
    def __init__(self, settings: Settings, llm_factory: Callable = build_llm):
        self.settings = settings
        self.llm_factory = llm_factory

    async def analyze(self, mutation: str, explanation_depth: str = DEFAULT_DEPTH) -> MutationAnalysis:
        if not isinstance(mutation, str) or not mutation.strip():
            raise ValidationError("mutation string is required")

        llm = self.llm_factory(self.settings)
        prompt = build_analysis_prompt(mutation, explanation_depth)
        logger.info(
            "Analyzing mutation (%d chars, depth=%s, model=%s)",
            len(mutation.strip()), explanation_depth, self.settings.gemini_model,
        )

        try:
            response = await llm.ainvoke(prompt)
        except Exception as e:
            logger.error("Gemini analysis call failed: %s", e)
            raise UpstreamError(f"Analysis failed: {e}") from e

        text = reply_text(response)
        if not text:
            raise UpstreamError("No response from model")
        return normalize_analysis(text)
