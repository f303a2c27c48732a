"""
Placeholder template rendering.

A pattern such as '%s%/%d%p' is rendered in a single left-to-right pass:
every two-character placeholder code is replaced by the matching field of
the URL, all other characters are copied verbatim, and substituted text is
never scanned again.
"""

import logging
import re
from types import MappingProxyType
from typing import Optional

from url_fields.fields import FIELD_ALIASES, URLFields

logger = logging.getLogger(__name__)

# Placeholder code -> field name. '%%' is the literal percent escape.
PLACEHOLDERS: "MappingProxyType[str, Optional[str]]" = MappingProxyType(
    {
        "%s": "scheme",
        "%c": "url",
        "%a": "authority",
        "%u": "username",
        "%x": "password",
        "%d": "domain",
        "%S": "subdomain",
        "%r": "apex",
        "%n": "name",
        "%t": "suffix",
        "%P": "port",
        "%p": "path",
        "%q": "query",
        "%f": "fragment",
        "%/": "slash",
        "%@": "at",
        "%:": "colon",
        "%?": "question",
        "%#": "hashtag",
        "%%": None,
    }
)

PLACEHOLDER_HELP = """\
%s | scheme
%c | url-like with scheme (https is default)
%a | authority
%u | username
%x | password
%d | domain
%S | subdomain
%r | apex | root
%n | name (example.tld -> example)
%t | tld | suffix
%P | port
%p | path
%q | query
%f | fragment
%/ | inserts :// if a scheme is present
%@ | inserts @ if user info is present
%: | inserts : if a port is present
%? | inserts ? if a query string exists
%# | inserts # if a fragment exists
%% | a literal percent character
dedup | merge equivalent URLs and their query parameters
json | every field as a JSON object"""


class TemplateError(ValueError):
    """The placeholder table could not be compiled."""


class TemplateEngine:
    """
    Render placeholder templates against URL fields.

    Usage:
        engine = TemplateEngine()
        engine.render("%s%/%d%p", fields)  # 'https://example.com/a'
        engine.resolve_named("domains")    # 'domain'
    """

    def __init__(self, placeholders=PLACEHOLDERS):
        """
        Compile the placeholder matcher.

        Args:
            placeholders: Mapping of placeholder code to field name
                (None for the literal '%')

        Raises:
            TemplateError: If a code is empty or the matcher fails to compile
        """
        if not placeholders or not all(placeholders):
            raise TemplateError("Placeholder codes must be non-empty")

        self.placeholders = placeholders

        # Longest codes first so alternation yields leftmost-longest matches
        codes = sorted(placeholders, key=len, reverse=True)
        try:
            self._matcher = re.compile("|".join(re.escape(code) for code in codes))
        except re.error as e:
            raise TemplateError(f"Failed to compile placeholders: {e}") from e

    def render(self, pattern: str, fields: URLFields) -> str:
        """
        Substitute every placeholder in pattern.

        Absent fields render as ''.

        Args:
            pattern: Template string
            fields: Field accessors for one URL

        Returns:
            Rendered string
        """

        def substitute(match: re.Match) -> str:
            field = self.placeholders[match.group()]
            if field is None:
                return "%"
            return fields.get(field) or ""

        return self._matcher.sub(substitute, pattern)

    @staticmethod
    def resolve_named(name: str) -> Optional[str]:
        """Canonical field name if name is exactly a field alias, else None."""
        return FIELD_ALIASES.get(name)
