"""
Field accessors over a normalized URL.

Every accessor returns Optional[str]: None when the field is absent
(no password, no query, no usable domain), '' when it is present but empty.
Callers decide how absence is printed.
"""

from types import MappingProxyType
from typing import Callable, Optional

from url_fields.normalization import (
    DomainClassification,
    DomainClassifier,
    NormalizedURL,
    get_domain_classifier,
)

_UNSET = object()


class URLFields:
    """
    Named fields of one URL.

    Domain classification is computed on first use and cached.

    Usage:
        fields = URLFields(normalizer.normalize("www.example.co.uk/a?k=v"))
        fields.get("subdomain")  # 'www'
        fields.get("name")       # 'example'
        fields.keys()            # ('k',)
    """

    def __init__(
        self,
        normalized: NormalizedURL,
        classifier: Optional[DomainClassifier] = None,
        private_requires_root: bool = False,
    ):
        self.normalized = normalized
        self._classifier = classifier or get_domain_classifier()
        self._private_requires_root = private_requires_root
        self._classification = _UNSET

    @property
    def classification(self) -> Optional[DomainClassification]:
        """Classification of the host, None unless it is a usable domain."""
        if self._classification is _UNSET:
            result = self._classifier.classify(self.normalized.host)
            if result is not None and not result.is_usable(self._private_requires_root):
                result = None
            self._classification = result
        return self._classification

    def get(self, field: str) -> Optional[str]:
        """
        Look up a single-valued field by name or alias.

        Raises:
            ValueError: For the multi-valued keys/values aliases; use
                keys() or values() instead
            KeyError: For unknown field names
        """
        name = FIELD_ALIASES.get(field, field)
        if name in MULTI_VALUE_FIELDS:
            raise ValueError(f"'{field}' is multi-valued, use URLFields.{name}()")
        return ACCESSORS[name](self)

    def as_dict(self) -> dict[str, Optional[str]]:
        """All single-valued fields keyed by canonical name."""
        return {name: accessor(self) for name, accessor in ACCESSORS.items()}

    # URL parts

    def scheme(self) -> str:
        return self.normalized.scheme

    def url(self) -> str:
        return self.normalized.to_url()

    def authority(self) -> str:
        return self.normalized.authority

    def username(self) -> str:
        return self.normalized.username

    def password(self) -> Optional[str]:
        return self.normalized.password

    def port(self) -> Optional[str]:
        return self.normalized.port or None

    def path(self) -> str:
        """
        Structural path of the URL.

        Without a usable domain the whole URL after 'scheme://' is returned
        instead, so unclassifiable hosts degrade to an opaque path.
        """
        if self.classification is not None:
            return self.normalized.path
        return self.url()[len(self.scheme()) + 3 :]

    def query(self) -> Optional[str]:
        return self.normalized.query or None

    def fragment(self) -> Optional[str]:
        return self.normalized.fragment or None

    # Domain parts

    def domain(self) -> Optional[str]:
        if self.classification is None:
            return None
        return self.classification.host

    def subdomain(self) -> Optional[str]:
        if self.classification is None:
            return None
        return self.classification.prefix

    def apex(self) -> Optional[str]:
        if self.classification is None:
            return None
        return self.classification.root

    def name(self) -> Optional[str]:
        if self.classification is None:
            return None
        return self.classification.name

    def suffix(self) -> Optional[str]:
        """Last label of the domain ('example.co.uk' -> 'uk')."""
        domain = self.domain()
        if not domain or "." not in domain:
            return None
        return domain.rsplit(".", 1)[1]

    def public_suffix(self) -> Optional[str]:
        """Full public suffix of the domain ('example.co.uk' -> 'co.uk')."""
        if self.classification is None:
            return None
        return self.classification.suffix

    # Conditional separators

    def slash(self) -> str:
        return "://" if self.scheme() else ""

    def at(self) -> str:
        return "@" if self.username() else ""

    def colon(self) -> str:
        return ":" if self.port() else ""

    def question(self) -> str:
        return "?" if self.query() else ""

    def hashtag(self) -> str:
        return "#" if self.fragment() else ""

    # Multi-valued

    def keys(self) -> tuple[str, ...]:
        """Query keys in order, one per pair."""
        return tuple(key for key, _ in self.normalized.query_pairs())

    def values(self) -> tuple[str, ...]:
        """Query values in order, one per pair."""
        return tuple(value for _, value in self.normalized.query_pairs())


ACCESSORS: "MappingProxyType[str, Callable[[URLFields], Optional[str]]]" = MappingProxyType(
    {
        "scheme": URLFields.scheme,
        "url": URLFields.url,
        "authority": URLFields.authority,
        "username": URLFields.username,
        "password": URLFields.password,
        "domain": URLFields.domain,
        "subdomain": URLFields.subdomain,
        "apex": URLFields.apex,
        "name": URLFields.name,
        "suffix": URLFields.suffix,
        "public_suffix": URLFields.public_suffix,
        "port": URLFields.port,
        "path": URLFields.path,
        "query": URLFields.query,
        "fragment": URLFields.fragment,
        "slash": URLFields.slash,
        "at": URLFields.at,
        "colon": URLFields.colon,
        "question": URLFields.question,
        "hashtag": URLFields.hashtag,
    }
)

# Fields producing one output line per query pair
MULTI_VALUE_FIELDS = frozenset({"keys", "values"})

FIELD_ALIASES: "MappingProxyType[str, str]" = MappingProxyType(
    {
        alias: field
        for field, aliases in {
            "scheme": ("s", "scheme", "schemes"),
            "url": ("c", "url"),
            "authority": ("a", "auth", "authority"),
            "username": ("u", "user", "users", "username", "usernames"),
            "password": ("x", "pass", "password", "passwords"),
            "domain": ("d", "domain", "domains"),
            "subdomain": ("S", "sub", "subdomain", "subdomains"),
            "apex": ("r", "root", "roots", "apex", "apexes"),
            "name": ("n", "name", "names"),
            "suffix": ("t", "tld", "suffix"),
            "public_suffix": ("ps", "public_suffix"),
            "port": ("P", "port", "ports"),
            "path": ("p", "path", "paths"),
            "query": ("q", "query", "queries"),
            "keys": ("k", "key", "keys"),
            "values": ("v", "val", "value", "values"),
            "fragment": ("f", "fragment", "fragments"),
        }.items()
        for alias in aliases
    }
)
