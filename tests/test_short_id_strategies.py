"""
Tests for short id generation strategies.
"""
import string

import pytest

from shortlink_app.services.short_id_strategies import RandomShortIdStrategy


class TestRandomStrategy:
    """Test random short id strategy"""

    def test_generates_correct_length(self):
        """Test that random strategy generates ids of default length 8"""
        strategy = RandomShortIdStrategy()

        assert len(strategy.generate()) == 8

    def test_custom_length(self):
        strategy = RandomShortIdStrategy(length=12)

        assert len(strategy.generate()) == 12

    def test_uses_alphanumeric_alphabet(self):
        """Test that ids only contain A-Z, a-z and 0-9"""
        strategy = RandomShortIdStrategy()
        allowed = set(string.ascii_letters + string.digits)

        for _ in range(200):
            assert set(strategy.generate()) <= allowed

    def test_generates_different_ids(self):
        """Test that random strategy generates different ids"""
        strategy = RandomShortIdStrategy()

        ids = {strategy.generate() for _ in range(100)}

        # With 62^8 possibilities a repeat in 100 draws is practically impossible
        assert len(ids) == 100

    @pytest.mark.parametrize("length", [0, -1])
    def test_rejects_non_positive_length(self, length):
        with pytest.raises(ValueError):
            RandomShortIdStrategy(length=length)
