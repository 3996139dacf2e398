"""
Symptom term standardization.

Maps common lay and clinical variants onto the canonical terms used by
the reference conditions before scoring.
"""

from typing import Iterable

from symptolens.schemas.conditions import normalize_terms

TERM_VARIATIONS = {
    "fever": ["high temperature", "elevated temperature", "febrile", "pyrexia", "feverish"],
    "headache": ["head pain", "cephalgia", "head discomfort", "cranial pain"],
    "nausea": ["feeling sick", "queasy", "sick to stomach", "sick to my stomach"],
    "vomiting": ["throwing up", "throw up", "emesis"],
    "abdominal pain": ["stomach ache", "stomachache", "belly ache", "tummy ache"],
    "shortness of breath": ["breathless", "short of breath", "dyspnea"],
    "fatigue": ["tiredness", "exhaustion", "lethargy"],
    "itching": ["itchy", "pruritus"],
    "runny nose": ["rhinorrhea", "running nose"],
    "congestion": ["stuffy nose", "blocked nose"],
}


def standardize_term(term: str) -> str:
    """Canonical form of a term; unknown terms come back lowercased and stripped."""
    lower = term.strip().lower()
    for standard, variations in TERM_VARIATIONS.items():
        if lower == standard:
            return standard
        if any(variation == lower for variation in variations):
            return standard
    return lower


def standardize_factors(factors: Iterable[str]) -> list[str]:
    """Standardize, then drop blanks and duplicates keeping first-seen order."""
    return normalize_terms([standardize_term(f) for f in factors])
