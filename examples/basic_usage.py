"""
Basic usage example.

Demonstrates the URL normalizer, field accessors, templates and dedup.
"""

from url_fields.config import Config
from url_fields.fields import URLFields
from url_fields.normalization import URLNormalizer
from url_fields.processor import URLProcessor
from url_fields.template import TemplateEngine


def main():
    """Run basic usage example."""
    print("=" * 60)
    print("url-fields: Basic Usage Example")
    print("=" * 60)

    normalizer = URLNormalizer()
    engine = TemplateEngine()

    # Example 1: Fields of a single URL
    print("\n1. Single URL Fields")
    print("-" * 60)

    raw_url = "user:secret@WWW.Example.CO.UK:8080/path/page?z=1&a=2#section"
    print(f"Raw URL: {raw_url}")

    fields = URLFields(normalizer.normalize(raw_url))
    for name, value in fields.as_dict().items():
        print(f"  {name:<14} {value!r}")

    # Example 2: Templates
    print("\n\n2. Templates")
    print("-" * 60)

    for template in ("%s%/%d%p", "%n.%t", "%S|%r|%P", "100%% of %d"):
        print(f"  {template:<12} -> {engine.render(template, fields)}")

    # Example 3: Dedup
    print("\n\n3. Dedup")
    print("-" * 60)

    tokens = [
        "https://example.com/blog/first-post?utm_source=a",
        "https://example.com/blog/second-post?ref=b",
        "https://example.com/items/42/details",
        "https://example.com/items/43/details?page=2",
        "https://example.com/about/team/people",
    ]
    print(f"Input: {len(tokens)} URLs")

    processor = URLProcessor(config=Config())
    for line in processor.process("dedup", tokens):
        print(f"  {line}")

    print(f"\nStats: {processor.get_stats()}")


if __name__ == "__main__":
    main()
