"""
URL and domain normalization utilities.

Handles URL parsing with a default scheme and public-suffix classification.
"""

from .domain import (
    DomainClassification,
    DomainClassifier,
    DomainKind,
    get_domain_classifier,
    reset_domain_classifier,
)
from .url_normalizer import (
    InvalidDomainError,
    NormalizedURL,
    NotAURLError,
    URLNormalizer,
    URLParseError,
)

__all__ = [
    "URLNormalizer",
    "NormalizedURL",
    "URLParseError",
    "NotAURLError",
    "InvalidDomainError",
    "DomainClassifier",
    "DomainClassification",
    "DomainKind",
    "get_domain_classifier",
    "reset_domain_classifier",
]
