import pytest

from domains.file_organizer.processors.age import age_in_days, bucket_for_age, classify_age

NOW = 1_700_000_000.0
DAY = 86400


@pytest.mark.parametrize(
    "days, expected",
    [
        (0, None),
        (7, None),
        (7.99, None),
        (8, "Previous_30_days"),
        (30, "Previous_30_days"),
        (30.5, "Previous_30_days"),
        (31, "Previous_60_days"),
        (45, "Previous_60_days"),
        (59, "Previous_60_days"),
        (60, "Older_than_60_days"),
        (400, "Older_than_60_days"),
    ],
)
def test_bucket_boundaries(days, expected):
    assert bucket_for_age(NOW - days * DAY, NOW) == expected


def test_future_modification_is_fresh():
    assert age_in_days(NOW + 3 * DAY, NOW) < 0
    assert bucket_for_age(NOW + 3 * DAY, NOW) is None


def test_classify_age_reads_mtime(tmp_path, backdate):
    path = tmp_path / "report.txt"
    path.write_text("old")
    backdate(path, 45, now=NOW)

    assert classify_age(path, now=NOW) == "Previous_60_days"


def test_classify_age_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        classify_age(tmp_path / "missing.txt", now=NOW)
