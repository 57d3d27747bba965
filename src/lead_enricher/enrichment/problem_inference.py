"""
Keyword-driven inference of likely business problems from page text.
"""

import logging
from typing import FrozenSet, List, Tuple
from dataclasses import dataclass


logger = logging.getLogger(__name__)

MIN_TEXT_LENGTH = 30
MAX_PROBLEMS = 3


@dataclass(frozen=True)
class ProblemKeywordRule:
    keywords: FrozenSet[str]
    suggestion: str


def _rule(keywords, suggestion) -> ProblemKeywordRule:
    return ProblemKeywordRule(keywords=frozenset(keywords), suggestion=suggestion)


# Order matters: suggestions are reported in table order.
PROBLEM_RULES: Tuple[ProblemKeywordRule, ...] = (
    _rule(
        ['excel', 'spreadsheet', 'manual process', 'manually', 'paperwork', 'paper-based'],
        "Relies on manual processes and spreadsheets; likely needs workflow automation",
    ),
    _rule(
        ['legacy system', 'legacy software', 'outdated system', 'mainframe', 'on-premise'],
        "Running legacy systems; likely facing modernization and maintenance costs",
    ),
    _rule(
        ['hiring', 'careers', 'job openings', 'vacancies', 'join our team', 'we are growing'],
        "Actively hiring; likely scaling operations and onboarding new staff",
    ),
    _rule(
        ['customer support', 'customer service', 'helpdesk', 'help desk', 'support ticket', '24/7'],
        "Handles significant customer support volume; may benefit from support tooling",
    ),
    _rule(
        ['integration', 'multiple systems', 'data silos', 'disconnected'],
        "Juggles disconnected tools; likely needs data integration",
    ),
    _rule(
        ['compliance', 'gdpr', 'hipaa', 'regulatory', 'audit'],
        "Operates under regulatory pressure; compliance and audit workload is likely high",
    ),
    _rule(
        ['ecommerce', 'e-commerce', 'online store', 'shop now', 'checkout'],
        "Sells online; conversion and order fulfilment are likely priorities",
    ),
    _rule(
        ['logistics', 'supply chain', 'warehouse', 'shipping', 'fleet'],
        "Runs physical operations; logistics visibility is likely a pain point",
    ),
)


def infer_problems(text: str) -> List[str]:
    """Match page text against PROBLEM_RULES.

    Returns at most three distinct suggestions in table order, or nothing
    when the text is too short to say anything useful.
    """
    if not text or len(text) < MIN_TEXT_LENGTH:
        return []

    lowered = text.lower()
    problems = []
    for rule in PROBLEM_RULES:
        if any(keyword in lowered for keyword in rule.keywords):
            if rule.suggestion not in problems:
                problems.append(rule.suggestion)
            if len(problems) == MAX_PROBLEMS:
                break

    logger.debug(f"Inferred {len(problems)} problems from {len(text)} characters of text")
    return problems


def summarize_problems(problems: List[str]) -> str:
    if not problems:
        return "Not enough public information to infer business problems."
    return "Likely challenges: " + "; ".join(problems) + "."
