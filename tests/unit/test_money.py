"""Tests for tk_common.money: Decimal rand arithmetic."""

from decimal import Decimal

from src.tk_common.money import (
    amounts_match,
    calculate_service_fee,
    money_display,
    to_money,
)


class TestToMoney:
    def test_quantizes_to_cents(self) -> None:
        assert to_money(Decimal("10.5")) == Decimal("10.50")
        assert str(to_money(7)) == "7.00"

    def test_rounds_half_up(self) -> None:
        assert to_money(Decimal("0.005")) == Decimal("0.01")
        assert to_money(Decimal("2.675")) == Decimal("2.68")

    def test_accepts_strings(self) -> None:
        assert to_money("315") == Decimal("315.00")


class TestCalculateServiceFee:
    def test_five_percent(self) -> None:
        assert calculate_service_fee(Decimal("300.00"), Decimal("0.05")) == Decimal("15.00")

    def test_half_cent_rounds_up(self) -> None:
        # 10.10 * 0.05 = 0.505
        assert calculate_service_fee(Decimal("10.10"), Decimal("0.05")) == Decimal("0.51")

    def test_zero_subtotal(self) -> None:
        assert calculate_service_fee(Decimal("0"), Decimal("0.05")) == Decimal("0.00")

    def test_zero_rate(self) -> None:
        assert calculate_service_fee(Decimal("120.00"), Decimal("0")) == Decimal("0.00")


class TestMoneyDisplay:
    def test_thousands_separator(self) -> None:
        assert money_display(Decimal("1500")) == "R 1,500.00"

    def test_small_amount(self) -> None:
        assert money_display(Decimal("0.5")) == "R 0.50"

    def test_custom_symbol(self) -> None:
        assert money_display(Decimal("99.99"), "$") == "$ 99.99"

    def test_negative(self) -> None:
        assert money_display(Decimal("-15")) == "-R 15.00"


class TestAmountsMatch:
    def test_exact(self) -> None:
        assert amounts_match(Decimal("315.00"), Decimal("315.00"), Decimal("0.01"))

    def test_within_tolerance(self) -> None:
        assert amounts_match(Decimal("315.00"), Decimal("315.01"), Decimal("0.01"))
        assert amounts_match(Decimal("315.00"), Decimal("314.99"), Decimal("0.01"))

    def test_outside_tolerance(self) -> None:
        assert not amounts_match(Decimal("315.00"), Decimal("315.02"), Decimal("0.01"))
        assert not amounts_match(Decimal("210.00"), Decimal("200.00"), Decimal("0.01"))
