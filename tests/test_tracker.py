import pytest

from iacguard.tracker import CITracker, new_tracker


def test_tracker_counters_in_sequence():
    tracker = CITracker(output_lines=3)

    tracker.track_query_load(1)
    assert tracker.loaded_queries == 1

    tracker.track_query_execution(1)
    assert tracker.executed_queries == 1

    tracker.track_file_found()
    assert tracker.found_files == 1

    tracker.track_file_parse()
    assert tracker.parsed_files == 1

    tracker.track_query_executing(1)
    assert tracker.executing_queries == 1

    tracker.failed_compute_similarity_id()
    assert tracker.failed_similarity_id == 1

    tracker.failed_detect_line()
    assert tracker.executed_queries == 0

    assert tracker.output_lines == 3


def test_new_tracker():
    assert new_tracker(3) == CITracker(output_lines=3)


@pytest.mark.parametrize("lines", [0, 31, -1])
def test_new_tracker_out_of_range(lines):
    with pytest.raises(ValueError, match="minimum is 1 and maximum is 30"):
        new_tracker(lines)


@pytest.mark.parametrize("lines", [1, 30])
def test_new_tracker_bounds_accepted(lines):
    assert new_tracker(lines).output_lines == lines