"""
ATS keyword analysis of a job description through the OpenAI chat API.
"""

import logging
from typing import AsyncIterator, Optional

from openai import AsyncOpenAI, OpenAIError
from pydantic import ValidationError

from jobtrack.config import get_openai_api_key, get_openai_model
from jobtrack.schemas.analysis import ATSAnalysis

logger = logging.getLogger(__name__)

MIN_DESCRIPTION_LENGTH = 50

SYSTEM_PROMPT = (
    "You are an expert ATS (Applicant Tracking System) analyzer. Analyze job "
    "descriptions and identify important keywords, skills, and provide "
    "recommendations for ATS optimization."
)

USER_PROMPT = """Analyze this job description and provide:
1. Important keywords and their significance (high, medium, low)
2. Potentially missing but commonly required skills for this role
3. Recommendations for ATS optimization

Format the response as a JSON object with these keys:
- keywords: array of objects with 'text' and 'importance'
- missingSkills: array of strings
- recommendations: array of strings

Job Description:
{description}"""


class AnalysisError(Exception):
    """Base class for job description analysis failures."""


class AnalysisInputError(AnalysisError):
    """The description is too short to analyze."""


class AnalysisConfigError(AnalysisError):
    """No OpenAI API key is configured."""


class AnalysisUpstreamError(AnalysisError):
    """The OpenAI call failed or returned something unusable."""


async def get_openai_client() -> AsyncIterator[Optional[AsyncOpenAI]]:
    """One OpenAI client per request, closed afterwards. Yields None without a key."""
    api_key = get_openai_api_key()
    if not api_key:
        yield None
        return

    async with AsyncOpenAI(api_key=api_key) as client:
        yield client


async def analyze_job_description(
    description: str,
    client: Optional[AsyncOpenAI],
    model: Optional[str] = None,
) -> ATSAnalysis:
    """
    Ask the model for keywords, missing skills and recommendations.

    The length check runs before anything else, so a short description never
    costs a network call, even when no API key is configured.
    """
    if not description or len(description.strip()) < MIN_DESCRIPTION_LENGTH:
        raise AnalysisInputError("Please provide a longer job description for analysis")

    if client is None:
        raise AnalysisConfigError(
            "OpenAI API key is not properly configured. Please configure OPENAI_API_KEY in your environment."
        )

    logger.info("Starting job description analysis (%d chars)", len(description))
    try:
        response = await client.chat.completions.create(
            model=model or get_openai_model(),
            messages=[
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": USER_PROMPT.format(description=description)},
            ],
            response_format={"type": "json_object"},
        )
    except OpenAIError as e:
        logger.error("OpenAI request failed: %s", e)
        raise AnalysisUpstreamError(f"Failed to analyze job description: {e}") from e

    content = response.choices[0].message.content if response.choices else None
    if not content:
        raise AnalysisUpstreamError("No response content received from OpenAI")

    try:
        result = ATSAnalysis.model_validate_json(content)
    except ValidationError as e:
        logger.error("Unusable analysis payload: %s", content)
        raise AnalysisUpstreamError(f"Failed to analyze job description: {e}") from e

    logger.info("Analysis completed: %d keywords", len(result.keywords))
    return result
