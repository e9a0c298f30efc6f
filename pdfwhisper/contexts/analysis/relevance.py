"""
Keyword relevance scoring against a persona and a job-to-be-done.

Score components, summed and clamped to [0, 1]:
1. Term frequency of each persona keyword (matches / total words) x persona_weight
2. Term frequency of each job keyword x job_weight
3. Context bonus per keyword: for every occurrence, each *other* distinct
   keyword found within context_window characters on either side adds
   context_increment, capped at context_cap per keyword. Job keyword bonuses
   are multiplied by job_context_multiplier.
4. professional_term_bonus for each professional/academic term present

Keywords match whole words only ("trend" does not match "trends").
"""

import re
from typing import Dict, Iterable, List, Optional

from pdfwhisper.contexts.analysis.keywords import extract_keywords
from pdfwhisper.contexts.analysis.settings import ScoringWeights
from pdfwhisper.utils.text_processing import round_half_up

# Prior that technical prose is more likely to be relevant
PROFESSIONAL_TERMS = (
    "analysis",
    "research",
    "study",
    "method",
    "approach",
    "results",
    "conclusion",
    "data",
    "findings",
)


def _distinct(keywords: Iterable[str]) -> List[str]:
    """Drop repeated keywords, keeping first-seen order."""
    return list(dict.fromkeys(keywords))


def to_importance_rank(score: float) -> int:
    """Scale a [0, 1] relevance score to an integer rank in [0, 10]."""
    return round_half_up(score * 10)


class RelevanceScorer:
    """
    Scores text spans for one persona / job pair.

    Keyword lists and their word-boundary patterns are built once, so a single
    scorer can be reused for every section and sentence of an analysis run.
    Scoring is pure: the same text always yields the same score.

    Attributes:
        persona_keywords: Distinct keywords from the persona description
        job_keywords: Distinct keywords from the job-to-be-done description
        weights: ScoringWeights in use

    Example:
        >>> scorer = RelevanceScorer("Investment Analyst", "Analyze revenue trends")
        >>> scorer.score("Revenue trends improved across all segments")
    """

    def __init__(
        self,
        persona: str,
        job_to_be_done: str,
        weights: Optional[ScoringWeights] = None,
    ):
        self.weights = weights or ScoringWeights()
        self.persona_keywords = _distinct(extract_keywords(persona.lower()))
        self.job_keywords = _distinct(extract_keywords(job_to_be_done.lower()))
        self._all_keywords = _distinct(self.persona_keywords + self.job_keywords)
        self._patterns: Dict[str, re.Pattern] = {
            keyword: re.compile(r"\b" + re.escape(keyword) + r"\b")
            for keyword in self._all_keywords
        }

    def score(self, text: str) -> float:
        """
        Relevance of text in [0, 1].

        Args:
            text: Any span of document text (case-insensitive)

        Returns:
            Clamped relevance score; 0.0 for text without words
        """
        lower_text = text.lower()
        total_words = len(lower_text.split())
        if total_words == 0:
            return 0.0

        w = self.weights
        score = 0.0

        for keyword in self.persona_keywords:
            score += self._frequency(lower_text, keyword, total_words) * w.persona_weight
            score += self.context_bonus(lower_text, keyword)

        for keyword in self.job_keywords:
            score += self._frequency(lower_text, keyword, total_words) * w.job_weight
            score += self.context_bonus(lower_text, keyword) * w.job_context_multiplier

        for term in PROFESSIONAL_TERMS:
            if term in lower_text:
                score += w.professional_term_bonus

        return min(max(score, 0.0), 1.0)

    def _frequency(self, lower_text: str, keyword: str, total_words: int) -> float:
        matches = sum(1 for _ in self._patterns[keyword].finditer(lower_text))
        return matches / total_words

    def context_bonus(self, lower_text: str, keyword: str) -> float:
        """
        Proximity bonus for one keyword across all of its occurrences.

        Args:
            lower_text: Lower-cased text being scored
            keyword: One of this scorer's keywords

        Returns:
            Bonus in [0, context_cap]
        """
        w = self.weights
        bonus = 0.0

        for match in self._patterns[keyword].finditer(lower_text):
            start = max(0, match.start() - w.context_window)
            end = min(len(lower_text), match.end() + w.context_window)
            window = lower_text[start:end]

            for other in self._all_keywords:
                if other != keyword and self._patterns[other].search(window):
                    bonus += w.context_increment

            if bonus >= w.context_cap:
                break

        return min(bonus, w.context_cap)


def score_relevance(
    text: str,
    persona: str,
    job_to_be_done: str,
    weights: Optional[ScoringWeights] = None,
) -> float:
    """One-off relevance score; prefer RelevanceScorer when scoring many spans."""
    return RelevanceScorer(persona, job_to_be_done, weights=weights).score(text)
