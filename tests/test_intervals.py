import pytest

from coursehub.domain.scheduling.intervals import contains, normalize_hhmm, overlaps, to_minutes
from coursehub.domain.shared.errors import ValidationError


class TestOverlaps:
    @pytest.mark.parametrize(
        "a, b",
        [
            (("09:00", "10:30"), ("10:00", "11:00")),
            (("09:00", "12:00"), ("10:00", "11:00")),
            (("10:00", "11:00"), ("09:00", "12:00")),
            (("09:00", "10:00"), ("09:00", "10:00")),
        ],
    )
    def test_overlap_is_symmetric(self, a, b):
        assert overlaps(*a, *b) is True
        assert overlaps(*b, *a) is True

    def test_adjacent_is_not_overlap(self):
        assert overlaps("09:00", "10:30", "10:30", "11:30") is False
        assert overlaps("10:30", "11:30", "09:00", "10:30") is False

    def test_disjoint(self):
        assert overlaps("08:00", "09:00", "13:00", "14:00") is False

    def test_containment_is_overlap(self):
        assert contains("09:00", "12:00", "10:00", "11:00")
        assert overlaps("09:00", "12:00", "10:00", "11:00")

    def test_contains_boundaries_inclusive(self):
        assert contains("09:00", "10:00", "09:00", "10:00")
        assert not contains("09:00", "10:00", "08:59", "10:00")

    def test_works_on_numbers(self):
        assert overlaps(0, 10, 5, 15)
        assert not overlaps(0, 10, 10, 20)


class TestNormalizeHHMM:
    def test_pads_single_digit_hour(self):
        assert normalize_hhmm("9:00") == "09:00"

    def test_keeps_valid(self):
        assert normalize_hhmm("23:59") == "23:59"
        assert normalize_hhmm(" 00:00 ") == "00:00"

    @pytest.mark.parametrize("bad", ["24:00", "9:5", "0900", "ab:cd", "", None, "12:60"])
    def test_rejects_malformed(self, bad):
        with pytest.raises(ValidationError, match="HH:MM"):
            normalize_hhmm(bad)

    def test_padded_strings_compare_like_times(self):
        # "9:00" 을 그대로 비교하면 "10:00" 보다 커진다
        assert "9:00" > "10:00"
        assert normalize_hhmm("9:00") < normalize_hhmm("10:00")

    def test_to_minutes(self):
        assert to_minutes("01:30") == 90
        assert to_minutes("9:05") == 545
