"""Date matching for recurring payments. No database needed."""

import pytest
from datetime import date

from apps.recurring.models import Frequency
from apps.recurring.occurrences import (
    next_occurrence,
    occurrences_between,
    occurs_on,
)


class TestOccursOn:

    @pytest.mark.parametrize('day, expected', [
        (date(2025, 1, 15), True),
        (date(2025, 2, 15), True),
        (date(2026, 7, 15), True),
        (date(2025, 2, 14), False),
        (date(2024, 12, 15), False),
    ])
    def test_monthly(self, day, expected):
        assert occurs_on(date(2025, 1, 15), Frequency.MONTHLY, day) is expected

    @pytest.mark.parametrize('day, expected', [
        (date(2025, 3, 10), True),
        (date(2025, 9, 10), True),
        (date(2026, 3, 10), True),
        (date(2025, 6, 10), False),
        (date(2025, 4, 10), False),
    ])
    def test_semi_annual(self, day, expected):
        assert occurs_on(date(2025, 3, 10), Frequency.SEMI_ANNUAL, day) is expected

    @pytest.mark.parametrize('day, expected', [
        (date(2026, 5, 1), True),
        (date(2030, 5, 1), True),
        (date(2025, 11, 1), False),
        (date(2026, 6, 1), False),
    ])
    def test_annual(self, day, expected):
        assert occurs_on(date(2025, 5, 1), Frequency.ANNUAL, day) is expected

    def test_start_date_itself(self):
        assert occurs_on(date(2025, 5, 1), Frequency.ANNUAL, date(2025, 5, 1))


class TestOccurrencesBetween:

    def test_monthly_range(self):
        dates = occurrences_between(
            date(2025, 1, 5), Frequency.MONTHLY, date(2025, 2, 1), date(2025, 4, 30)
        )

        assert dates == [date(2025, 2, 5), date(2025, 3, 5), date(2025, 4, 5)]

    def test_range_before_start_is_clipped(self):
        dates = occurrences_between(
            date(2025, 3, 5), Frequency.MONTHLY, date(2025, 1, 1), date(2025, 4, 30)
        )

        assert dates == [date(2025, 3, 5), date(2025, 4, 5)]

    def test_31st_skips_short_months(self):
        """Months without the start day have no occurrence."""
        dates = occurrences_between(
            date(2025, 1, 31), Frequency.MONTHLY, date(2025, 1, 1), date(2025, 6, 30)
        )

        assert dates == [date(2025, 1, 31), date(2025, 3, 31), date(2025, 5, 31)]

    def test_leap_day_annual(self):
        dates = occurrences_between(
            date(2024, 2, 29), Frequency.ANNUAL, date(2024, 1, 1), date(2032, 12, 31)
        )

        assert dates == [date(2024, 2, 29), date(2028, 2, 29), date(2032, 2, 29)]

    def test_semi_annual_range(self):
        dates = occurrences_between(
            date(2025, 3, 20), Frequency.SEMI_ANNUAL, date(2025, 1, 1), date(2026, 12, 31)
        )

        assert dates == [date(2025, 3, 20), date(2025, 9, 20), date(2026, 3, 20), date(2026, 9, 20)]

    def test_inverted_range_is_empty(self):
        assert occurrences_between(
            date(2025, 1, 5), Frequency.MONTHLY, date(2025, 6, 1), date(2025, 1, 1)
        ) == []

    def test_range_ends_before_start(self):
        assert occurrences_between(
            date(2025, 6, 5), Frequency.MONTHLY, date(2025, 1, 1), date(2025, 5, 31)
        ) == []

    def test_every_result_matches_occurs_on(self):
        start = date(2024, 8, 30)
        for frequency in Frequency.values:
            for day in occurrences_between(start, frequency, date(2024, 1, 1), date(2027, 12, 31)):
                assert occurs_on(start, frequency, day)


class TestNextOccurrence:

    def test_same_day_counts(self):
        assert next_occurrence(date(2025, 1, 5), Frequency.MONTHLY, date(2025, 3, 5)) == date(2025, 3, 5)

    def test_after_day_of_month(self):
        assert next_occurrence(date(2025, 1, 5), Frequency.MONTHLY, date(2025, 3, 6)) == date(2025, 4, 5)

    def test_before_start(self):
        assert next_occurrence(date(2025, 6, 1), Frequency.ANNUAL, date(2020, 1, 1)) == date(2025, 6, 1)

    def test_skips_to_next_valid_month(self):
        assert next_occurrence(date(2025, 1, 31), Frequency.MONTHLY, date(2025, 2, 1)) == date(2025, 3, 31)

    def test_none_after_last_representable_date(self):
        assert next_occurrence(date(2025, 1, 5), Frequency.MONTHLY, date(9999, 12, 6)) is None


class TestLastRepresentableDate:

    def test_range_reaching_last_date(self):
        dates = occurrences_between(date(2025, 1, 5), Frequency.MONTHLY, date(9999, 11, 1), date.max)

        assert dates == [date(9999, 11, 5), date(9999, 12, 5)]
