"""
URL normalization.

Turns a raw token into a structured URL:
- Parse directly when the token is an absolute, authority-based URL
- Otherwise retry with the default scheme (https) prefixed
- Lowercase scheme/host, convert host to punycode
- Resolve the port (declared, else the scheme's well-known default)
"""

import dataclasses
import logging
from dataclasses import dataclass
from typing import Optional
from urllib.parse import SplitResult, parse_qsl, quote, urlsplit

from .domain import DomainClassifier, get_domain_classifier

logger = logging.getLogger(__name__)

# Characters left as-is when percent-encoding path, query and fragment
_PATH_SAFE = "/%:@!$&'()*+,;=-._~"
_QUERY_SAFE = _PATH_SAFE + "?"

_FORBIDDEN_HOST_CHARS = frozenset(" \t\r\n#%/<>?@\\^|")

# Schemes whose empty path is serialized as "/"
_HIERARCHICAL_SCHEMES = frozenset({"http", "https", "ws", "wss", "ftp", "file"})


class URLParseError(ValueError):
    """Base class for tokens that cannot be turned into a NormalizedURL."""


class NotAURLError(URLParseError):
    """Neither the token nor its default-scheme form parses as a URL."""


class InvalidDomainError(URLParseError):
    """The host is not a registrable ICANN or private domain (strict policy)."""


@dataclass(frozen=True)
class NormalizedURL:
    """
    Normalized URL components.

    Attributes:
        scheme: Normalized scheme (lowercase)
        username: User name from the userinfo ('' if absent)
        password: Password from the userinfo (None if absent)
        host: Normalized host (lowercase, punycode, IPv6 in brackets)
        explicit_port: Declared port, None if absent or default for the scheme
        path: Percent-encoded path
        query: Query string without '?' ('' if absent)
        fragment: Fragment without '#' ('' if absent)
        port: Declared port, else the scheme default, else ''
        had_explicit_scheme: False if the default scheme had to be prefixed
        raw: Original token
    """

    scheme: str
    username: str
    password: Optional[str]
    host: str
    explicit_port: Optional[int]
    path: str
    query: str
    fragment: str
    port: str
    had_explicit_scheme: bool
    raw: str

    @property
    def authority(self) -> str:
        """userinfo@host:port, with the port only when it is not the default."""
        netloc = self.host
        if self.explicit_port is not None:
            netloc = f"{netloc}:{self.explicit_port}"

        if self.username or self.password:
            userinfo = self.username
            if self.password:
                userinfo = f"{userinfo}:{self.password}"
            netloc = f"{userinfo}@{netloc}"

        return netloc

    def to_url(self) -> str:
        """Reconstruct the normalized URL string."""
        url = f"{self.scheme}://{self.authority}{self.path}"
        if self.query:
            url = f"{url}?{self.query}"
        if self.fragment:
            url = f"{url}#{self.fragment}"
        return url

    def path_segments(self) -> Optional[list[str]]:
        """Path split on '/', or None if the path is not rooted."""
        if not self.path.startswith("/"):
            return None
        return self.path[1:].split("/")

    def query_pairs(self) -> list[tuple[str, str]]:
        """Decoded (key, value) pairs of the query string, in order."""
        return parse_qsl(self.query, keep_blank_values=True)

    def with_query(self, query: str) -> "NormalizedURL":
        """Copy of this URL with its query string replaced."""
        return dataclasses.replace(self, query=query)


class URLNormalizer:
    """
    URL normalization engine.

    Usage:
        normalizer = URLNormalizer()
        result = normalizer.normalize("Example.COM:8080/path?a=1")
        print(result.to_url())  # https://example.com:8080/path?a=1
        print(result.port)      # 8080
    """

    # Default ports for common schemes
    DEFAULT_PORTS = {
        "http": 80,
        "https": 443,
        "ws": 80,
        "wss": 443,
        "ftp": 21,
    }

    def __init__(
        self,
        default_scheme: str = "https",
        domain_policy: str = "lenient",
        private_requires_root: bool = False,
        classifier: Optional[DomainClassifier] = None,
    ):
        """
        Initialize normalizer.

        Args:
            default_scheme: Scheme prefixed to tokens without one
            domain_policy: 'lenient' or 'strict' (reject unusable domains)
            private_requires_root: Passed to the strict domain check
            classifier: Domain classifier (shared global instance if None)
        """
        if domain_policy not in ("lenient", "strict"):
            raise ValueError(f"Unknown domain policy: {domain_policy}")

        self.default_scheme = default_scheme.lower()
        self.domain_policy = domain_policy
        self.private_requires_root = private_requires_root
        self.classifier = classifier or get_domain_classifier()

    def normalize(self, url: str) -> NormalizedURL:
        """
        Normalize a URL-like token.

        Args:
            url: Raw token, with or without scheme

        Returns:
            NormalizedURL

        Raises:
            NotAURLError: If neither the token nor its default-scheme form parses
            InvalidDomainError: If the host is not a usable domain (strict policy)
        """
        if not url or not isinstance(url, str):
            raise NotAURLError(f"Invalid URL: {url!r}")

        token = url.strip()
        parsed = self._split(token)
        had_explicit_scheme = parsed is not None

        if parsed is None:
            separator = ":" if token.startswith("//") else "://"
            parsed = self._split(f"{self.default_scheme}{separator}{token}")
            if parsed is None:
                raise NotAURLError(f"Not a URL: {url!r}")

        scheme = parsed.scheme.lower()
        host = self._normalize_host(parsed)
        port = parsed.port

        if self.domain_policy == "strict":
            classification = self.classifier.classify(host)
            if classification is None or not classification.is_usable(
                self.private_requires_root
            ):
                raise InvalidDomainError(f"Invalid domain in {url!r}: {host!r}")

        return NormalizedURL(
            scheme=scheme,
            username=parsed.username or "",
            password=parsed.password,
            host=host,
            explicit_port=self._normalize_port(port, scheme),
            path=self._normalize_path(parsed.path, scheme),
            query=quote(parsed.query, safe=_QUERY_SAFE),
            fragment=quote(parsed.fragment, safe=_QUERY_SAFE),
            port=self._resolve_port(port, scheme),
            had_explicit_scheme=had_explicit_scheme,
            raw=url,
        )

    def _split(self, candidate: str) -> Optional[SplitResult]:
        """
        Parse an absolute, authority-based URL.

        Returns None for anything that has no scheme, no host, an invalid
        port or a host with forbidden characters.
        """
        try:
            parsed = urlsplit(candidate)
            # Accessing .port validates it
            parsed.port
        except ValueError:
            return None

        if not parsed.scheme or not parsed.netloc or not parsed.hostname:
            return None

        if "[" in parsed.netloc:
            return parsed

        if any(ch in _FORBIDDEN_HOST_CHARS for ch in parsed.hostname):
            return None

        return parsed

    def _normalize_host(self, parsed: SplitResult) -> str:
        """
        Normalize host: lowercase and convert to punycode if needed.

        IPv6 literals keep their brackets.
        """
        host = parsed.hostname.lower()

        if "[" in parsed.netloc:
            return f"[{host}]"

        if not host.isascii():
            try:
                # This handles internationalized domain names
                host = host.encode("idna").decode("ascii")
            except UnicodeError:
                # Invalid IDN, keep as-is; classification will reject it
                pass

        return host

    def _normalize_port(self, port: Optional[int], scheme: str) -> Optional[int]:
        """Return None if the port is absent or the default for the scheme."""
        if port is None:
            return None

        if port == self.DEFAULT_PORTS.get(scheme):
            return None

        return port

    def _resolve_port(self, port: Optional[int], scheme: str) -> str:
        """Declared port, else the scheme's well-known default, else ''."""
        if port is not None:
            return str(port)

        default = self.DEFAULT_PORTS.get(scheme)
        return str(default) if default is not None else ""

    def _normalize_path(self, path: str, scheme: str) -> str:
        """Percent-encode the path; an empty hierarchical path becomes '/'."""
        if not path and scheme in _HIERARCHICAL_SCHEMES:
            return "/"
        return quote(path, safe=_PATH_SAFE)
