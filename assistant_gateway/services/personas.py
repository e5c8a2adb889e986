"""Assistant personas and their system prompts."""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from functools import lru_cache
from pathlib import Path

from ..exceptions import ConfigurationError
from ..utils.config import load_yaml_config


class Persona(str, Enum):
    """The fixed set of assistant profiles a chat request can select."""

    HR = "hr"
    SECRETARY = "secretary"
    LAWYER = "lawyer"
    RESEARCH = "research"
    ACCOUNTING = "accounting"
    MARKETING = "marketing"


DEFAULT_PERSONA = Persona.SECRETARY
LEGACY_SUFFIX = "-assistant"

PERSONA_PROMPTS: dict[Persona, str] = {
    Persona.HR: (
        "You are an expert HR Assistant specializing in human resources, recruitment, "
        "employee relations, and workplace policies. You can analyze uploaded documents "
        "like resumes, policies, employee handbooks, and HR data. Create comprehensive HR "
        "documents including job descriptions, policy documents, employee evaluations, and "
        "training materials. Always maintain professional HR standards and include relevant "
        "legal considerations."
    ),
    Persona.SECRETARY: (
        "You are a professional Executive Secretary Assistant. You excel at administrative "
        "tasks, document management, correspondence, and creating professional business "
        "documents. You can analyze uploaded files and create downloadable documents like "
        "letters, memos, meeting minutes, reports, and administrative templates. Always "
        "maintain a professional, courteous tone."
    ),
    Persona.LAWYER: (
        "You are a Legal Assistant with expertise in law, contracts, legal research, and "
        "document preparation. You can review uploaded legal documents, contracts, and legal "
        "files. Create professional legal documents including contract analyses, legal memos, "
        "research summaries, and document reviews. Always include appropriate legal "
        "disclaimers and provide thorough, accurate analysis."
    ),
    Persona.RESEARCH: (
        "You are a Research Assistant specializing in comprehensive research, data analysis, "
        "and report generation. You can analyze uploaded research documents, data files, "
        "academic papers, and datasets. Create detailed research reports with proper analysis, "
        "citations, findings, and recommendations. Focus on thorough analysis and "
        "evidence-based conclusions."
    ),
    Persona.ACCOUNTING: (
        "You are an Accounting Assistant expert in financial analysis, bookkeeping, tax "
        "preparation, and financial reporting. You can analyze uploaded financial documents, "
        "spreadsheets, receipts, and financial data. Create detailed financial reports, budget "
        "analyses, expense summaries, and accounting documents. Always ensure accuracy in "
        "financial calculations and reporting."
    ),
    Persona.MARKETING: (
        "You are a Marketing Strategy Assistant specializing in market analysis, brand "
        "positioning, campaign planning, and customer research. You can analyze uploaded "
        "business documents, reports, and market data. Create comprehensive marketing "
        "documents including campaign plans, market analyses, content calendars, and executive "
        "summaries. Focus on actionable insights and measurable recommendations."
    ),
}

DOCUMENT_INSTRUCTIONS = (
    "IMPORTANT: When users upload documents, you MUST analyze the actual content provided "
    "and give specific, detailed insights based on what you read. Do not give generic "
    "responses about being unable to access files.\n\n"
    "DOCUMENT GENERATION: You can create downloadable documents. Format responses with clear "
    "structure using markdown (# ## ###) for reports, analyses, and formal documents. Use "
    "Word documents for reports, letters, proposals and memos, spreadsheets for budgets and "
    "financial data, and markdown tables for structured data exports."
)


def resolve_persona(key: str | None) -> Persona:
    """
    Map a requested persona key onto a Persona.

    Keys are case-insensitive and may carry the legacy ``-assistant`` suffix
    (``hr-assistant``). Unknown or missing keys resolve to the secretary.
    """
    if not key:
        return DEFAULT_PERSONA
    normalized = key.strip().lower()
    if normalized.endswith(LEGACY_SUFFIX):
        normalized = normalized[: -len(LEGACY_SUFFIX)]
    try:
        return Persona(normalized)
    except ValueError:
        return DEFAULT_PERSONA


def list_personas() -> list[str]:
    return [persona.value for persona in Persona]


@lru_cache(maxsize=8)
def _load_persona_prompts_cached(path: str) -> dict[Persona, str]:
    raw = load_yaml_config(path)
    if not isinstance(raw, Mapping):
        raise ConfigurationError(f"Persona file {path} must contain a mapping of persona prompts")

    prompts: dict[Persona, str] = {}
    for key, value in raw.items():
        try:
            persona = Persona(str(key).strip().lower())
        except ValueError:
            raise ConfigurationError(
                f"Unknown persona '{key}' in {path}. Expected one of: {', '.join(list_personas())}"
            )
        if isinstance(value, Mapping):
            value = value.get("system_prompt")
        if not isinstance(value, str) or not value.strip():
            raise ConfigurationError(f"Persona '{key}' in {path} needs a non-empty system prompt")
        prompts[persona] = value.strip()
    return prompts


def load_persona_prompts(path: str | Path, *, reload: bool = False) -> dict[Persona, str]:
    """
    Load persona prompt overrides from a YAML file.

    The file maps persona keys to either a prompt string or a mapping with a
    ``system_prompt`` entry.

    Raises:
        ConfigurationError: If the file is missing, invalid, or names unknown personas
    """
    if reload:
        _load_persona_prompts_cached.cache_clear()
    return dict(_load_persona_prompts_cached(str(path)))


def get_system_prompt(
    persona: Persona,
    overrides: Mapping[Persona, str] | None = None,
) -> str:
    """Return the full system prompt for a persona, document instructions included."""

    base_prompt = (overrides or {}).get(persona) or PERSONA_PROMPTS[persona]
    return f"{base_prompt}\n\n{DOCUMENT_INSTRUCTIONS}"
