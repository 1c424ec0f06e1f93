import pytest

from devicequery.device.driver import UNSUPPORTED, Unsupported, as_flag, is_supported


class TestAttributeValue:
    def test_unsupported_renders_not_available(self):
        assert str(UNSUPPORTED) == "N/A"
        assert UNSUPPORTED is Unsupported.TOKEN

    @pytest.mark.parametrize("value", [0, 1, 2147483647])
    def test_integers_are_supported(self, value):
        assert is_supported(value) is True

    def test_unsupported_is_not_supported(self):
        assert is_supported(UNSUPPORTED) is False

    @pytest.mark.parametrize("value,expected", [(0, False), (1, True), (2, True)])
    def test_as_flag(self, value, expected):
        assert as_flag(value) is expected

    def test_as_flag_keeps_unsupported(self):
        assert as_flag(UNSUPPORTED) is UNSUPPORTED
