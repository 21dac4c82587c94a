import pytest
from hypothesis import given, strategies as st

from boostmap.config import Settings
from boostmap.keys.codec import KeyCodec


class TestSettings:
    def test_default_values(self):
        """Test that Settings has sensible defaults."""
        settings = Settings()
        assert settings.digest_algorithm == "sha256"
        assert settings.json_indent is None

    def test_custom_values(self):
        """Test that Settings accepts custom values."""
        settings = Settings(digest_algorithm="md5", json_indent=2)
        assert settings.digest_algorithm == "md5"
        assert settings.json_indent == 2


class TestDigestConfiguration:
    def test_codec_uses_default_algorithm(self):
        """A codec without an explicit algorithm uses the Settings default."""
        assert KeyCodec().digest_algorithm == Settings().digest_algorithm

    @pytest.mark.parametrize("algorithm", ["md5", "sha1", "sha256", "blake2b"])
    def test_codec_accepts_hashlib_algorithms(self, algorithm):
        """Any hashlib algorithm name can digest composite keys."""
        codec = KeyCodec(algorithm)
        token = codec.tokenize([1, 2, 3])
        assert codec.resolve(token) == [1, 2, 3]

    def test_codec_rejects_unknown_algorithm(self):
        """Unknown digest names fail at construction."""
        with pytest.raises(ValueError, match="Unknown digest algorithm"):
            KeyCodec("definitely-not-a-hash")

    @given(indent=st.integers(min_value=0, max_value=16))
    def test_non_negative_indent_is_accepted(self, indent):
        """For any non-negative indent, Settings should keep it."""
        assert Settings(json_indent=indent).json_indent == indent
