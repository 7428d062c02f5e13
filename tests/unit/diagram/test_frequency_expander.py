"""Unit tests for frequency expansion."""

import pytest

from src.gtfs_bc.diagram.frequency_expander import expand_frequencies, generate_trips_by_frequency
from src.gtfs_bc.frequency.domain.entities.frequency import FrequencyRule


@pytest.fixture
def template(make_trip):
    return make_trip("TPL", [
        ("A", "08:00:00", "08:00:00"),
        ("B", "08:05:00", "08:05:00"),
        ("C", "08:10:00", "08:10:00"),
    ])


class TestGenerateTripsByFrequency:
    """Tests for generate_trips_by_frequency."""

    def test_three_instances(self, template):
        """08:00-08:30 every 10 minutes gives 08:00, 08:10 and 08:20."""
        rule = FrequencyRule("TPL", "08:00:00", "08:30:00", 600)
        instances = generate_trips_by_frequency(template, rule)

        assert [t.id for t in instances] == ["TPL_08:00:00", "TPL_08:10:00", "TPL_08:20:00"]

    def test_offsets_preserved(self, template):
        rule = FrequencyRule("TPL", "08:00:00", "08:30:00", 600)
        second = generate_trips_by_frequency(template, rule)[1]

        assert [st.arrival_time for st in second.stop_times] == ["08:10:00", "08:15:00", "08:20:00"]
        assert all(st.trip_id == "TPL_08:10:00" for st in second.stop_times)

    def test_dwell_preserved(self, make_trip):
        """Arrival and departure offsets are shifted independently."""
        trip = make_trip("TPL", [("A", "06:00:00", "06:00:00"), ("B", "06:05:00", "06:07:00")])
        rule = FrequencyRule("TPL", "07:00:00", "07:01:00", 300)

        instance = generate_trips_by_frequency(trip, rule)[0]
        assert instance.stop_times[1].arrival_time == "07:05:00"
        assert instance.stop_times[1].departure_time == "07:07:00"

    def test_end_time_is_exclusive(self, template):
        rule = FrequencyRule("TPL", "08:00:00", "08:20:00", 600)
        assert len(generate_trips_by_frequency(template, rule)) == 2

    def test_past_midnight(self, template):
        rule = FrequencyRule("TPL", "24:30:00", "25:00:00", 1800)
        instance = generate_trips_by_frequency(template, rule)[0]

        assert instance.id == "TPL_24:30:00"
        assert instance.stop_times[-1].departure_time == "24:40:00"

    def test_template_untouched(self, template):
        rule = FrequencyRule("TPL", "09:00:00", "09:30:00", 600)
        generate_trips_by_frequency(template, rule)

        assert template.id == "TPL"
        assert template.stop_times[0].arrival_time == "08:00:00"


class TestExpandFrequencies:
    """Tests for expand_frequencies."""

    def test_no_rules_passthrough(self, template, make_trip):
        other = make_trip("OTHER", [("A", "07:00:00", "07:00:00")])
        assert expand_frequencies([template, other], []) == [template, other]

    def test_template_replaced_in_place(self, template, make_trip):
        """Instances take the template's position and the template is gone."""
        before = make_trip("BEFORE", [("A", "07:00:00", "07:00:00")])
        after = make_trip("AFTER", [("A", "09:00:00", "09:00:00")])
        rule = FrequencyRule("TPL", "08:00:00", "08:30:00", 600)

        expanded = expand_frequencies([before, template, after], [rule])

        assert [t.id for t in expanded] == [
            "BEFORE", "TPL_08:00:00", "TPL_08:10:00", "TPL_08:20:00", "AFTER",
        ]

    def test_several_rules_same_template(self, template):
        rules = [
            FrequencyRule("TPL", "08:00:00", "08:20:00", 600),
            FrequencyRule("TPL", "17:00:00", "17:30:00", 900),
        ]
        expanded = expand_frequencies([template], rules)

        assert [t.id for t in expanded] == [
            "TPL_08:00:00", "TPL_08:10:00", "TPL_17:00:00", "TPL_17:15:00",
        ]

    def test_missing_template_skipped(self, template, caplog):
        """A rule for an unknown trip is a warning, not an error."""
        rule = FrequencyRule("GHOST", "08:00:00", "09:00:00", 600)

        expanded = expand_frequencies([template], [rule])

        assert expanded == [template]
        assert "GHOST" in caplog.text

    def test_zero_headway_skipped(self, template):
        rule = FrequencyRule("TPL", "08:00:00", "09:00:00", 0)
        assert expand_frequencies([template], [rule]) == [template]

    def test_template_without_stop_times_skipped(self, make_trip):
        empty = make_trip("EMPTY", [])
        rule = FrequencyRule("EMPTY", "08:00:00", "09:00:00", 600)
        assert expand_frequencies([empty], [rule]) == [empty]
