"""
Batch processor.

Normalizes a sequence of raw tokens and turns them into output lines
according to the selected pattern:
- 'dedup': merged URLs, in equivalence order
- 'json': one JSON object per URL
- a field name or alias: that field, one line per URL
- anything else: a placeholder template, one line per URL
"""

import logging
from typing import Iterable, Iterator, Optional

from url_fields.config import Config, get_config
from url_fields.dedup import deduplicate
from url_fields.fields import MULTI_VALUE_FIELDS, URLFields, URLRecord
from url_fields.normalization import NormalizedURL, URLNormalizer, URLParseError
from url_fields.template import TemplateEngine, TemplateError

logger = logging.getLogger(__name__)

DEDUP_KEYWORD = "dedup"
JSON_KEYWORD = "json"


class URLProcessor:
    """
    Process raw URL tokens into output lines.

    Tokens that fail normalization are dropped; the rest of the batch is
    processed normally. Output order follows input order except in dedup
    mode, which emits URLs in sorted equivalence order.
    """

    def __init__(
        self,
        config: Optional[Config] = None,
        normalizer: Optional[URLNormalizer] = None,
        engine: Optional[TemplateEngine] = None,
    ):
        """
        Initialize processor.

        Args:
            config: Configuration (global config if None)
            normalizer: URL normalizer (built from config if None)
            engine: Template engine (creates new if None)
        """
        self.config = config or get_config()
        norm_config = self.config.normalization
        self.normalizer = normalizer or URLNormalizer(
            default_scheme=norm_config.default_scheme,
            domain_policy=norm_config.domain_policy,
            private_requires_root=norm_config.private_requires_root,
        )
        self.engine = engine
        self._stats = {"tokens": 0, "accepted": 0, "rejected": 0}

    def normalize_all(self, tokens: Iterable[str]) -> Iterator[NormalizedURL]:
        """Normalize tokens in order, skipping those that are not URLs."""
        for token in tokens:
            self._stats["tokens"] += 1
            try:
                url = self.normalizer.normalize(token)
            except URLParseError as e:
                self._stats["rejected"] += 1
                logger.debug("Skipping token %r: %s", token, e)
                continue
            self._stats["accepted"] += 1
            yield url

    def fields(self, url: NormalizedURL) -> URLFields:
        """Field accessors for one URL."""
        return URLFields(
            url,
            classifier=self.normalizer.classifier,
            private_requires_root=self.config.normalization.private_requires_root,
        )

    def process(self, pattern: str, tokens: Iterable[str]) -> Iterator[str]:
        """
        Turn tokens into output lines.

        Args:
            pattern: 'dedup', 'json', a field alias or a template
            tokens: Raw URL-like strings

        Yields:
            Output lines
        """
        urls = self.normalize_all(tokens)

        if pattern == DEDUP_KEYWORD:
            yield from self._process_dedup(urls)
        elif pattern == JSON_KEYWORD:
            for url in urls:
                yield URLRecord.from_fields(self.fields(url)).model_dump_json()
        else:
            field = TemplateEngine.resolve_named(pattern)
            if field is not None:
                yield from self._process_field(field, urls)
            else:
                yield from self._process_template(pattern, urls)

        logger.info(
            "Processed %d tokens (%d accepted, %d rejected)",
            self._stats["tokens"],
            self._stats["accepted"],
            self._stats["rejected"],
        )

    def _process_dedup(self, urls: Iterable[NormalizedURL]) -> Iterator[str]:
        for url in deduplicate(urls, strategy=self.config.dedup.strategy):
            yield url.to_url()

    def _process_field(
        self, field: str, urls: Iterable[NormalizedURL]
    ) -> Iterator[str]:
        suppress = self.config.output.suppress_empty_fields

        for url in urls:
            fields = self.fields(url)
            if field in MULTI_VALUE_FIELDS:
                values = getattr(fields, field)()
            else:
                values = (fields.get(field),)

            for value in values:
                if not value and suppress:
                    continue
                yield value or ""

    def _process_template(
        self, pattern: str, urls: Iterable[NormalizedURL]
    ) -> Iterator[str]:
        suppress = self.config.output.suppress_empty_templates

        try:
            engine = self.engine or TemplateEngine()
        except TemplateError:
            logger.exception("Template engine unavailable, no output rendered")
            # Consume the batch so rejections are still counted
            for _ in urls:
                pass
            return

        for url in urls:
            line = engine.render(pattern, self.fields(url))
            if not line and suppress:
                continue
            yield line

    def get_stats(self) -> dict:
        """
        Get processing statistics.

        Returns:
            Dictionary with token, accepted and rejected counts
        """
        return dict(self._stats)
