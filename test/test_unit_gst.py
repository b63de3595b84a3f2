# Test type: Unit Test
# Validation to be executed: Validates GST calculation in exclusive and
#   inclusive mode.
# Command: pytest test/test_unit_gst.py -v

"""Unit tests for fincalc.services.gst_service module."""

import pytest

from fincalc.services.gst_service import calculate_gst


class TestCalculateGst:

    def test_exclusive_18_percent(self):
        """1000 excl. GST @ 18 % → GST 180, total 1180."""
        result = calculate_gst(1_000, 18, "exclusive")
        assert result["netAmount"] == 1_000.0
        assert result["gstAmount"] == 180.0
        assert result["totalAmount"] == 1_180.0
        assert result["type"] == "exclusive"

    def test_inclusive_18_percent(self):
        """1180 incl. GST @ 18 % → net 1000, GST 180."""
        result = calculate_gst(1_180, 18, "inclusive")
        assert result["netAmount"] == 1_000.0
        assert result["gstAmount"] == 180.0
        assert result["totalAmount"] == 1_180.0

    def test_zero_rate(self):
        result = calculate_gst(499.99, 0, "inclusive")
        assert result["netAmount"] == 499.99
        assert result["gstAmount"] == 0.0

    def test_rounded_to_paise(self):
        result = calculate_gst(99.99, 28)
        assert result["gstAmount"] == 28.0
        assert result["totalAmount"] == 127.99

    @pytest.mark.parametrize("rate", [0, 5, 12, 18, 28])
    def test_parts_add_up(self, rate):
        result = calculate_gst(2_345.67, rate, "inclusive")
        assert result["netAmount"] + result["gstAmount"] == pytest.approx(result["totalAmount"], abs=0.01)

    def test_unknown_type(self):
        with pytest.raises(ValueError):
            calculate_gst(100, 18, "reverse")
