"""Tests for the TSV dataset adapter."""

import pytest
from unittest.mock import Mock, patch
from reviewpulse.core.errors import DatasetLoadError
from reviewpulse.services.dataset import ReviewDataset, parse_reviews


class TestParseReviews:
    """Test row filtering."""

    def test_blank_rows_are_discarded(self):
        raw = "id\ttext\n1\tGreat phone\n2\t\n3\t   \n4\tTerrible battery\n"
        assert parse_reviews(raw) == ["Great phone", "Terrible battery"]

    def test_order_is_preserved(self):
        raw = "text\nfirst\nsecond\nthird\n"
        assert parse_reviews(raw) == ["first", "second", "third"]

    def test_review_text_is_kept_verbatim(self):
        raw = "text\n  Works well  \n"
        assert parse_reviews(raw) == ["  Works well  "]

    def test_numeric_values_are_kept_as_text(self):
        raw = "id\ttext\n1\t5\n2\t7\n"
        assert parse_reviews(raw) == ["5", "7"]

    def test_quotes_are_part_of_the_text(self):
        raw = 'id\ttext\n1\t"Best" toaster I own\n2\tSecond review\n'
        assert parse_reviews(raw) == ['"Best" toaster I own', "Second review"]

    def test_unbalanced_quote_does_not_swallow_rows(self):
        raw = 'text\nShe said "wow and left\nNext review\n'
        assert parse_reviews(raw) == ['She said "wow and left', "Next review"]

    def test_na_like_text_is_a_review(self):
        raw = "text\nN/A\nNone\nGood stuff\n"
        assert parse_reviews(raw) == ["N/A", "None", "Good stuff"]

    def test_missing_text_column(self):
        raw = "id\treview\n1\tGreat phone\n"
        with pytest.raises(DatasetLoadError, match="text"):
            parse_reviews(raw)

    def test_empty_resource(self):
        with pytest.raises(DatasetLoadError):
            parse_reviews("")

    def test_header_only(self):
        with pytest.raises(DatasetLoadError):
            parse_reviews("id\ttext\n")


class TestReviewDataset:
    """Test loading from files and URLs."""

    def test_load_from_file(self, tmp_path):
        path = tmp_path / "reviews.tsv"
        path.write_text("id\ttext\tstars\n1\tLoved it\t5\n2\tHated it\t1\n", encoding="utf-8")
        dataset = ReviewDataset(str(path))
        assert not dataset.loaded
        assert dataset.load() == ["Loved it", "Hated it"]
        assert dataset.rows() == ["Loved it", "Hated it"]
        assert dataset.loaded

    def test_missing_file(self, tmp_path):
        dataset = ReviewDataset(str(tmp_path / "missing.tsv"))
        with pytest.raises(DatasetLoadError):
            dataset.load()
        assert dataset.rows() == []

    def test_file_that_is_not_utf8(self, tmp_path):
        path = tmp_path / "reviews.tsv"
        path.write_bytes(b"id\ttext\n1\tCaf\xe9 was great\n")
        dataset = ReviewDataset(str(path))
        with pytest.raises(DatasetLoadError, match="Failed to read"):
            dataset.load()

    @patch("reviewpulse.services.dataset.requests.get")
    def test_load_from_url(self, mock_get):
        response = Mock()
        response.text = "text\nRemote review one\nRemote review two\n"
        response.raise_for_status.return_value = None
        mock_get.return_value = response

        dataset = ReviewDataset("https://example.com/reviews.tsv")
        assert dataset.load() == ["Remote review one", "Remote review two"]
        mock_get.assert_called_once()
        assert mock_get.call_args[0][0] == "https://example.com/reviews.tsv"

    def test_bundled_sample_dataset(self):
        from pathlib import Path

        sample = Path(__file__).parent.parent / "data" / "reviews.tsv"
        rows = ReviewDataset(str(sample)).load()
        assert len(rows) == 12
        assert all(row.strip() for row in rows)
