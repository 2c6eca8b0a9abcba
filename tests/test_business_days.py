from datetime import date, datetime

import pytest

from term_loan_calc.business_days import (
    adjust_payment_date,
    get_days_between,
    is_business_day,
    is_weekend,
    next_business_day,
)


class TestBusinessDay:
    def test_weekend(self):
        assert is_weekend(date(2024, 3, 16))
        assert is_weekend(date(2024, 3, 17))
        assert not is_weekend(date(2024, 3, 18))

    def test_holiday_is_not_business_day(self):
        assert not is_business_day(date(2024, 7, 1))

    def test_regular_weekday(self):
        assert is_business_day(date(2024, 2, 15))


class TestAdjustPaymentDate:
    def test_business_day_unchanged(self):
        assert adjust_payment_date(date(2024, 2, 15)) == date(2024, 2, 15)

    def test_weekend_rolls_to_monday(self):
        assert adjust_payment_date(date(2024, 3, 16)) == date(2024, 3, 18)

    @pytest.mark.parametrize(
        "due, expected",
        [
            # Good Friday, weekend, Easter Monday
            (date(2024, 3, 29), date(2024, 4, 2)),
            # Christmas (Sat), Sunday, Boxing Day observed Monday
            (date(2021, 12, 25), date(2021, 12, 28)),
            # Saturday, Christmas (Sun), Christmas/Boxing Day observed Monday
            (date(2022, 12, 24), date(2022, 12, 27)),
            # Across the year end
            (date(2022, 12, 31), date(2023, 1, 2)),
        ],
    )
    def test_runs_of_non_business_days(self, due, expected):
        adjusted = adjust_payment_date(due)
        assert adjusted == expected
        assert adjusted > due
        assert adjust_payment_date(adjusted) == adjusted

    def test_every_adjusted_day_is_business_day(self):
        day = date(2024, 1, 1)
        for offset in range(366):
            adjusted = adjust_payment_date(date.fromordinal(day.toordinal() + offset))
            assert is_business_day(adjusted)

    def test_next_business_day_is_strictly_after(self):
        assert next_business_day(date(2024, 2, 15)) == date(2024, 2, 16)
        # Friday before Family Day
        assert next_business_day(date(2024, 2, 16)) == date(2024, 2, 20)


class TestDaysBetween:
    def test_dates(self):
        assert get_days_between(date(2024, 1, 15), date(2024, 2, 15)) == 31
        assert get_days_between(date(2024, 2, 15), date(2024, 2, 15)) == 0

    def test_datetimes_round_partial_days_up(self):
        assert get_days_between(datetime(2024, 1, 1), datetime(2024, 1, 2, 1)) == 2
        assert get_days_between(datetime(2024, 1, 1), datetime(2024, 1, 3)) == 2

    def test_mixed_date_and_datetime(self):
        assert get_days_between(date(2024, 1, 1), datetime(2024, 1, 3, 12)) == 2
