"""
Domain classification against the Public Suffix List.

Splits a host into subdomain prefix, registrable root and public suffix, and
tells ICANN-delegated suffixes (".com", ".co.uk") apart from privately
operated ones (".googleapis.com", ".blogspot.com").
"""

import ipaddress
import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from publicsuffixlist import PublicSuffixList

logger = logging.getLogger(__name__)

_LABEL_RE = re.compile(r"^[a-z0-9_-]{1,63}$")


class DomainKind(str, Enum):
    """Which section of the Public Suffix List the suffix came from."""

    ICANN = "icann"
    PRIVATE = "private"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class DomainClassification:
    """
    Public-suffix view of a DNS host.

    Attributes:
        host: Host that was classified (lowercase, no trailing dot)
        kind: ICANN, PRIVATE or UNKNOWN suffix
        suffix: Public suffix (e.g. 'co.uk'); the last label for unknown TLDs
        root: Registrable domain (e.g. 'example.co.uk'), None if the host is a suffix
        prefix: Labels left of the root (e.g. 'www'), None if there are none
    """

    host: str
    kind: DomainKind
    suffix: str
    root: Optional[str]
    prefix: Optional[str]

    @property
    def is_icann(self) -> bool:
        return self.kind is DomainKind.ICANN

    @property
    def is_private(self) -> bool:
        return self.kind is DomainKind.PRIVATE

    @property
    def name(self) -> Optional[str]:
        """Root with its suffix stripped ('example.co.uk' -> 'example')."""
        if self.root is None:
            return None
        name = self.root
        if self.suffix and name.endswith(self.suffix):
            name = name[: -len(self.suffix)]
        return name.rstrip(".")

    def is_usable(self, private_requires_root: bool = False) -> bool:
        """
        Whether the host counts as a real domain.

        ICANN suffixes need a registrable root. Private suffixes are accepted
        on their own unless private_requires_root is set.
        """
        if self.is_icann:
            return self.root is not None
        if self.is_private:
            return self.root is not None or not private_requires_root
        return False


class DomainClassifier:
    """
    Classify hosts using the Public Suffix List.

    Usage:
        classifier = DomainClassifier()
        result = classifier.classify("www.example.co.uk")
        print(result.root)    # example.co.uk
        print(result.prefix)  # www
    """

    def __init__(self):
        """Load the full list and the ICANN-only section."""
        self.psl = PublicSuffixList()
        self.icann_psl = PublicSuffixList(only_icann=True)

    def classify(self, host: Optional[str]) -> Optional[DomainClassification]:
        """
        Classify a host.

        Args:
            host: Hostname (already IDNA-encoded)

        Returns:
            DomainClassification, or None if the host is not a DNS name
            (empty, IP literal, invalid labels)
        """
        if not host:
            return None

        host = host.lower()
        if host.endswith("."):
            host = host[:-1]

        if not self._is_dns_name(host):
            logger.debug("Host %r is not a DNS name", host)
            return None

        suffix = self.psl.publicsuffix(host, accept_unknown=True)
        known_suffix = self.psl.publicsuffix(host, accept_unknown=False)

        if known_suffix is None:
            kind = DomainKind.UNKNOWN
        elif self.icann_psl.publicsuffix(host, accept_unknown=False) == known_suffix:
            kind = DomainKind.ICANN
        else:
            kind = DomainKind.PRIVATE

        root = self.psl.privatesuffix(host, accept_unknown=True)
        prefix = None
        if root is not None and len(host) > len(root):
            prefix = host[: -len(root) - 1]

        return DomainClassification(
            host=host,
            kind=kind,
            suffix=suffix or "",
            root=root,
            prefix=prefix,
        )

    @staticmethod
    def _is_dns_name(host: str) -> bool:
        if not host or len(host) > 253:
            return False

        try:
            ipaddress.ip_address(host.strip("[]"))
            return False
        except ValueError:
            pass

        return all(_LABEL_RE.match(label) for label in host.split("."))


# Global classifier instance
_classifier: Optional[DomainClassifier] = None


def get_domain_classifier() -> DomainClassifier:
    """Get or create the global classifier (the suffix list is parsed once)."""
    global _classifier
    if _classifier is None:
        _classifier = DomainClassifier()
    return _classifier


def reset_domain_classifier() -> None:
    """Reset the global classifier (for testing)."""
    global _classifier
    _classifier = None
