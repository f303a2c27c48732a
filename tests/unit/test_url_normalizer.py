"""Unit tests for URL normalization."""

import pytest

from url_fields.normalization import (
    InvalidDomainError,
    NormalizedURL,
    NotAURLError,
    URLNormalizer,
)


class TestURLNormalizer:
    """Test suite for URLNormalizer."""

    @pytest.fixture
    def normalizer(self):
        """Create a lenient URLNormalizer instance."""
        return URLNormalizer()

    @pytest.fixture
    def strict_normalizer(self):
        """Create a URLNormalizer that rejects unusable domains."""
        return URLNormalizer(domain_policy="strict")

    def test_explicit_scheme(self, normalizer):
        """Test a URL with a scheme is parsed directly."""
        result = normalizer.normalize("https://test.com")

        assert result.scheme == "https"
        assert result.host == "test.com"
        assert result.port == "443"
        assert result.explicit_port is None
        assert result.path == "/"
        assert result.had_explicit_scheme is True
        assert result.to_url() == "https://test.com/"
        assert result.raw == "https://test.com"

    def test_default_scheme(self, normalizer):
        """Test https is prefixed when the token has no scheme."""
        result = normalizer.normalize("test.com")

        assert result.scheme == "https"
        assert result.port == "443"
        assert result.had_explicit_scheme is False
        assert result.to_url() == "https://test.com/"

    def test_default_scheme_matches_explicit(self, normalizer):
        """Test prefixing https by hand gives the same URL."""
        for token in ("test.com", "test.com/a/b?k=v#f", "user:pass@test.com:81/x"):
            implicit = normalizer.normalize(token)
            explicit = normalizer.normalize(f"https://{token}")

            assert implicit.to_url() == explicit.to_url()
            assert implicit.port == explicit.port
            assert implicit.had_explicit_scheme is False
            assert explicit.had_explicit_scheme is True

    def test_explicit_port(self, normalizer):
        """Test a declared port is kept."""
        result = normalizer.normalize("http://test.com:743")

        assert result.port == "743"
        assert result.explicit_port == 743
        assert result.authority == "test.com:743"
        assert result.to_url() == "http://test.com:743/"

    def test_port_without_scheme(self, normalizer):
        """Test host:port is retried with the default scheme."""
        result = normalizer.normalize("test.com:103")

        assert result.to_url() == "https://test.com:103/"
        assert result.port == "103"

    def test_default_port_removal(self, normalizer):
        """Test default ports are dropped from the authority but still reported."""
        result = normalizer.normalize("https://test.com:443/path")
        assert result.authority == "test.com"
        assert result.port == "443"

        result = normalizer.normalize("http://test.com:80/path")
        assert result.authority == "test.com"
        assert result.port == "80"

    def test_known_default_ports(self, normalizer):
        """Test well-known default ports per scheme."""
        assert normalizer.normalize("http://test.com").port == "80"
        assert normalizer.normalize("ftp://test.com").port == "21"
        assert normalizer.normalize("wss://test.com").port == "443"
        assert normalizer.normalize("foo://test.com").port == ""

    def test_userinfo(self, normalizer):
        """Test username and password are extracted."""
        result = normalizer.normalize("user:pass@test.com")

        assert result.username == "user"
        assert result.password == "pass"
        assert result.host == "test.com"
        assert result.authority == "user:pass@test.com"

    def test_userinfo_without_password(self, normalizer):
        """Test a missing password is None."""
        result = normalizer.normalize("https://user@test.com/")

        assert result.username == "user"
        assert result.password is None
        assert result.authority == "user@test.com"

    def test_cannot_be_a_base_is_retried(self, normalizer):
        """Test scheme-only tokens such as mailto: are retried with https."""
        result = normalizer.normalize("mailto:user@example.com")

        assert result.had_explicit_scheme is False
        assert result.scheme == "https"
        assert result.username == "mailto"
        assert result.password == "user"
        assert result.host == "example.com"

    def test_scheme_relative(self, normalizer):
        """Test scheme-relative tokens get the default scheme."""
        result = normalizer.normalize("//example.com/path")

        assert result.scheme == "https"
        assert result.host == "example.com"
        assert result.path == "/path"
        assert result.had_explicit_scheme is False

    def test_case_normalization(self, normalizer):
        """Test scheme and host are lowercased, path is not."""
        result = normalizer.normalize("HTTPS://Example.COM/Path")

        assert result.scheme == "https"
        assert result.host == "example.com"
        assert result.path == "/Path"

    def test_punycode_conversion(self, normalizer):
        """Test internationalized domain names are converted to punycode."""
        result = normalizer.normalize("https://中国.example.com/path")
        assert result.host.startswith("xn--")
        assert result.host.endswith(".example.com")

    def test_ipv6_host(self, normalizer):
        """Test IPv6 literals keep their brackets."""
        result = normalizer.normalize("http://[::1]:8080/x")

        assert result.host == "[::1]"
        assert result.authority == "[::1]:8080"
        assert result.to_url() == "http://[::1]:8080/x"

    def test_path_percent_encoding(self, normalizer):
        """Test non-ASCII path characters are encoded and escapes kept."""
        result = normalizer.normalize("https://test.com/café")
        assert result.path == "/caf%C3%A9"

        result = normalizer.normalize("https://memoryleaks.ir/tag/%d9%87%da%a9/")
        assert result.path == "/tag/%d9%87%da%a9/"

    def test_query_and_fragment(self, normalizer):
        """Test query and fragment are split off."""
        result = normalizer.normalize("test.com/p?a=1&b=2#frag")

        assert result.path == "/p"
        assert result.query == "a=1&b=2"
        assert result.fragment == "frag"
        assert result.to_url() == "https://test.com/p?a=1&b=2#frag"

    def test_path_segments(self, normalizer):
        """Test path segments keep empty trailing segments."""
        assert normalizer.normalize("test.com/a/b/").path_segments() == ["a", "b", ""]
        assert normalizer.normalize("test.com").path_segments() == [""]
        assert normalizer.normalize("foo://test.com").path_segments() is None

    def test_query_pairs(self, normalizer):
        """Test query pairs are decoded and blank values kept."""
        result = normalizer.normalize("test.com/?a=1&b=&c=x+y")
        assert result.query_pairs() == [("a", "1"), ("b", ""), ("c", "x y")]

    def test_with_query(self, normalizer):
        """Test with_query returns a modified copy."""
        url = normalizer.normalize("test.com/a?x=1")
        replaced = url.with_query("y=2")

        assert replaced.to_url() == "https://test.com/a?y=2"
        assert url.query == "x=1"

    def test_invalid_url(self, normalizer):
        """Test tokens that are not URLs raise NotAURLError."""
        with pytest.raises(NotAURLError):
            normalizer.normalize("")

        with pytest.raises(NotAURLError):
            normalizer.normalize(None)

        with pytest.raises(NotAURLError):
            normalizer.normalize("test.com:abc")

        with pytest.raises(NotAURLError):
            normalizer.normalize("[::1")

    def test_not_a_url_is_value_error(self, normalizer):
        """Test parse errors are ValueErrors."""
        with pytest.raises(ValueError):
            normalizer.normalize("test.com:abc")

    def test_lenient_keeps_unknown_domains(self, normalizer):
        """Test the lenient policy keeps hosts without a usable domain."""
        assert normalizer.normalize("test.invalid").host == "test.invalid"
        assert normalizer.normalize("foo/bar").host == "foo"

    def test_strict_rejects_invalid_domains(self, strict_normalizer):
        """Test the strict policy rejects hosts without a usable domain."""
        with pytest.raises(InvalidDomainError):
            strict_normalizer.normalize("test.invalid")

        with pytest.raises(InvalidDomainError):
            strict_normalizer.normalize("http://test.invalid")

        with pytest.raises(InvalidDomainError):
            strict_normalizer.normalize("foo/bar")

        with pytest.raises(InvalidDomainError):
            strict_normalizer.normalize("http://127.0.0.1/")

    def test_strict_accepts_valid_domains(self, strict_normalizer):
        """Test the strict policy keeps ICANN and private domains."""
        assert strict_normalizer.normalize("test.com").host == "test.com"
        assert strict_normalizer.normalize("user:pass@test.com").host == "test.com"
        assert strict_normalizer.normalize("test.com/foo/bar").host == "test.com"
        assert strict_normalizer.normalize("googleapis.com").host == "googleapis.com"

    def test_strict_private_requires_root(self):
        """Test private suffixes without a root can be rejected."""
        normalizer = URLNormalizer(domain_policy="strict", private_requires_root=True)

        with pytest.raises(InvalidDomainError):
            normalizer.normalize("googleapis.com")

        assert normalizer.normalize("foo.github.io").host == "foo.github.io"

    def test_unknown_policy(self):
        """Test unknown domain policies are refused."""
        with pytest.raises(ValueError):
            URLNormalizer(domain_policy="sometimes")


class TestNormalizedURL:
    """Test NormalizedURL dataclass."""

    def test_immutability(self):
        """Test NormalizedURL is immutable (frozen)."""
        url = NormalizedURL(
            scheme="https",
            username="",
            password=None,
            host="example.com",
            explicit_port=None,
            path="/path",
            query="a=1",
            fragment="",
            port="443",
            had_explicit_scheme=True,
            raw="https://example.com/path?a=1",
        )

        with pytest.raises(Exception):  # FrozenInstanceError
            url.scheme = "http"

    def test_authority_with_empty_password(self):
        """Test an empty password is not rendered."""
        url = NormalizedURL(
            scheme="https",
            username="user",
            password="",
            host="example.com",
            explicit_port=8443,
            path="/",
            query="",
            fragment="",
            port="8443",
            had_explicit_scheme=True,
            raw="https://user:@example.com:8443/",
        )

        assert url.authority == "user@example.com:8443"
        assert url.to_url() == "https://user@example.com:8443/"
