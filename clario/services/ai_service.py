import json
import logging
import re
from typing import Any, Dict, List, Optional

import openai
from fastapi import Request
from openai import AsyncOpenAI
from pydantic import ValidationError
from pydantic.alias_generators import to_snake

from clario.ai.schemas import ClauseAnalysisResult, ClauseCheckResult
from clario.config import Settings

logger = logging.getLogger(__name__)


class AIServiceError(Exception):
    """Any failure talking to the language model or interpreting its answer."""


ASSISTANT_SYSTEM_PROMPT = """You are Clario, an AI legal assistant. You help users with:
- Legal document analysis
- Clause-by-clause explanations
- Legal term definitions
- Risk assessment
- Compliance guidance
- Document simplification

Always provide accurate, helpful legal information. If you're unsure about something, say so.
Be professional but approachable. Focus on practical legal advice."""

CLAUSE_ANALYSIS_PROMPT = """Analyze the following legal document and provide a clause-by-clause breakdown.
For each clause, identify:
1. The clause text
2. The type of clause (liability, termination, payment, confidentiality, indemnification, force-majeure, etc.)
3. Risk level (low, medium, high, critical)
4. Whether it's standard or non-standard
5. Analysis and recommendations
6. Suggested improvements if needed

Document:
{document}

Return only JSON with the following structure:
{{
  "clauses": [
    {{
      "clause": "exact clause text",
      "type": "clause type",
      "riskLevel": "low|medium|high|critical",
      "status": "standard|non-standard|missing|risky",
      "analysis": "detailed analysis",
      "recommendations": ["recommendation1", "recommendation2"],
      "standardClause": "suggested standard clause if applicable"
    }}
  ],
  "overallRisk": "percentage between 0 and 100",
  "summary": "overall document analysis"
}}"""

SIMPLIFY_PROMPT = """Simplify the following legal document by:
1. Replacing legal jargon with plain language
2. Breaking up long, complex sentences
3. Using simpler vocabulary while maintaining legal accuracy
4. Keeping the same meaning and legal effect
5. Maintaining the document structure

Original Document:
{document}

Return only the simplified version without any additional commentary."""

STANDARD_CLAUSES = (
    "Liability limitation",
    "Indemnification",
    "Termination",
    "Force majeure",
    "Confidentiality",
    "Governing law",
    "Dispute resolution",
    "Payment terms",
    "Intellectual property",
    "Data protection",
)

CLAUSE_CHECK_PROMPT = """Analyze the following legal document and check for standard clauses.
Identify:
1. Which standard clauses are present
2. Which standard clauses are missing
3. Any non-standard or unusual clauses
4. Risk assessment for each clause
5. Recommendations for improvement

Standard clauses to check for:
{clauses}

Document:
{document}

Return only JSON:
{{
  "standardClauses": [
    {{
      "name": "clause name",
      "present": true,
      "text": "clause text if present",
      "riskLevel": "low|medium|high|critical",
      "recommendation": "suggestion"
    }}
  ],
  "missingClauses": ["list of missing standard clauses"],
  "nonStandardClauses": ["list of unusual clauses"],
  "overallRisk": "percentage between 0 and 100"
}}"""

GENERATION_TEMPLATES = {
    "nda": """Generate a comprehensive Non-Disclosure Agreement (NDA) with the following parameters:
- Parties: {parties}
- Purpose: {purpose}
- Duration: {duration}
- Jurisdiction: {jurisdiction}

Include standard NDA clauses for confidentiality, exceptions, return of information, and remedies.""",
    "employment": """Generate an Employment Agreement with the following parameters:
- Position: {position}
- Salary: {salary}
- Start Date: {start_date}
- Location: {location}

Include standard employment clauses for duties, compensation, benefits, confidentiality, and termination.""",
    "privacy": """Generate a Privacy Policy for a {business_type} company that:
- Collects: {data_types}
- Uses data for: {purposes}
- Shares with: {sharing}

Include standard privacy policy sections for data collection, use, sharing, and user rights.""",
}

GENERATION_DEFAULTS = {
    "nda": {
        "parties": "Company and Recipient",
        "purpose": "Business discussions",
        "duration": "2 years",
        "jurisdiction": "State of incorporation",
    },
    "employment": {
        "position": "Employee",
        "salary": "To be determined",
        "start_date": "Upon execution",
        "location": "Company offices",
    },
    "privacy": {
        "business_type": "technology",
        "data_types": "personal information, usage data",
        "purposes": "service provision, analytics",
        "sharing": "service providers, legal requirements",
    },
}

GENERIC_GENERATION_PROMPT = """Generate a legal document of type: {doc_type}
Parameters: {parameters}

Create a comprehensive, professional legal document with all necessary clauses and provisions."""

_CODE_FENCE = re.compile(r"^\s*```(?:json)?\s*(.*?)\s*```\s*$", re.DOTALL)


def build_generation_prompt(doc_type: str, parameters: Dict[str, Any]) -> str:
    """Fill the template for ``doc_type``; unknown types get the generic prompt."""
    template = GENERATION_TEMPLATES.get(doc_type)
    if template is None:
        return GENERIC_GENERATION_PROMPT.format(
            doc_type=doc_type,
            parameters=json.dumps(parameters, default=str)
        )

    # Callers may send camelCase keys (startDate) as well as snake_case
    supplied = {to_snake(k): v for k, v in parameters.items() if v not in (None, "")}
    values = {**GENERATION_DEFAULTS[doc_type], **supplied}
    return template.format(**{k: values[k] for k in GENERATION_DEFAULTS[doc_type]})


def parse_json_payload(content: Optional[str]) -> Any:
    """Decode a JSON reply, tolerating a surrounding Markdown code fence."""
    if not content:
        raise AIServiceError("AI service returned an empty response")
    match = _CODE_FENCE.match(content)
    if match:
        content = match.group(1)
    try:
        return json.loads(content)
    except json.JSONDecodeError as e:
        raise AIServiceError(f"AI service returned malformed JSON: {e}") from e


class AIService:
    """Adapter between Clario's legal operations and the chat-completion provider."""

    def __init__(self, settings: Settings, client: Optional[AsyncOpenAI] = None):
        self.model = settings.openai_model
        self._api_key = settings.openai_api_key
        self._timeout = settings.ai_timeout_seconds
        self._client = client

    @property
    def client(self) -> AsyncOpenAI:
        if self._client is None:
            if not self._api_key:
                raise AIServiceError("AI service is not configured")
            self._client = AsyncOpenAI(
                api_key=self._api_key,
                timeout=self._timeout,
                max_retries=0
            )
        return self._client

    async def _complete(
        self,
        operation: str,
        messages: List[Dict[str, str]],
        temperature: float,
        max_tokens: int
    ) -> str:
        try:
            response = await self.client.chat.completions.create(
                model=self.model,
                messages=messages,
                temperature=temperature,
                max_tokens=max_tokens
            )
        except openai.OpenAIError as e:
            logger.error(f"OpenAI API error during {operation}: {str(e)}")
            raise AIServiceError(f"AI service error during {operation}") from e

        if not response.choices:
            logger.error(f"OpenAI returned no choices during {operation}")
            raise AIServiceError(f"AI service returned no answer during {operation}")

        content = response.choices[0].message.content or ""
        logger.info(f"AI {operation} completed - model: {self.model}, response length: {len(content)}")
        return content

    async def chat(self, message: str, context: Optional[str] = None) -> str:
        user_content = f"{context}\n\nUser question: {message}" if context else message
        return await self._complete(
            "chat",
            [
                {"role": "system", "content": ASSISTANT_SYSTEM_PROMPT},
                {"role": "user", "content": user_content}
            ],
            temperature=0.7,
            max_tokens=2000
        )

    async def analyze_clauses(self, document_text: str) -> ClauseAnalysisResult:
        content = await self._complete(
            "clause analysis",
            [
                {
                    "role": "system",
                    "content": "You are a legal AI assistant specializing in contract analysis and clause review. Provide accurate, professional legal analysis."
                },
                {"role": "user", "content": CLAUSE_ANALYSIS_PROMPT.format(document=document_text)}
            ],
            temperature=0.3,
            max_tokens=4000
        )
        payload = parse_json_payload(content)
        try:
            return ClauseAnalysisResult.model_validate(payload)
        except ValidationError as e:
            logger.error(f"Clause analysis response rejected: {e.error_count()} validation error(s)")
            raise AIServiceError("AI service returned an unexpected clause analysis shape") from e

    async def simplify(self, document_text: str) -> str:
        content = await self._complete(
            "simplification",
            [
                {
                    "role": "system",
                    "content": "You are a legal document simplification expert. Convert complex legal language into clear, understandable text while preserving legal meaning."
                },
                {"role": "user", "content": SIMPLIFY_PROMPT.format(document=document_text)}
            ],
            temperature=0.4,
            max_tokens=3000
        )
        if not content.strip():
            raise AIServiceError("AI service returned an empty simplification")
        return content.strip()

    async def check_standard_clauses(self, document_text: str) -> ClauseCheckResult:
        prompt = CLAUSE_CHECK_PROMPT.format(
            clauses="\n".join(f"- {name}" for name in STANDARD_CLAUSES),
            document=document_text
        )
        content = await self._complete(
            "standard clause check",
            [
                {
                    "role": "system",
                    "content": "You are a legal compliance expert specializing in standard contract clauses and risk assessment."
                },
                {"role": "user", "content": prompt}
            ],
            temperature=0.2,
            max_tokens=3000
        )
        payload = parse_json_payload(content)
        try:
            return ClauseCheckResult.model_validate(payload)
        except ValidationError as e:
            logger.error(f"Clause check response rejected: {e.error_count()} validation error(s)")
            raise AIServiceError("AI service returned an unexpected clause check shape") from e

    async def generate_document(self, doc_type: str, parameters: Optional[Dict[str, Any]] = None) -> str:
        content = await self._complete(
            "document generation",
            [
                {
                    "role": "system",
                    "content": "You are a legal document generation expert. Create professional, comprehensive legal documents that are legally sound and well-structured."
                },
                {"role": "user", "content": build_generation_prompt(doc_type, parameters or {})}
            ],
            temperature=0.3,
            max_tokens=4000
        )
        if not content.strip():
            raise AIServiceError("AI service returned an empty document")
        return content


def get_ai_service(request: Request) -> AIService:
    return request.app.state.ai_service
