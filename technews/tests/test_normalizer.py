import time
import unittest
from datetime import datetime, timezone

from technews.normalizer import (
    SUMMARY_MAX_CHARS,
    clean_summary,
    extract_image,
    extract_published_at,
    extract_summary,
    normalize_items,
)
from technews.params import parse_since


def _item(title, published=None, **extra):
    item = {"title": title, "link": f"https://example.com/{title}"}
    if published is not None:
        item["published"] = published
    item.update(extra)
    return item


class TimestampExtractionTests(unittest.TestCase):
    def test_fields_probed_in_priority_order(self):
        item = {"updated": "2025-02-01T00:00:00Z", "created": "2025-03-01T00:00:00Z"}
        self.assertEqual(extract_published_at(item), datetime(2025, 2, 1, tzinfo=timezone.utc))

    def test_first_present_field_wins_even_if_unparseable(self):
        item = {"published": "not a date", "updated": "2025-02-01T00:00:00Z"}
        self.assertIsNone(extract_published_at(item))

    def test_feedparser_struct_time_companion_is_used(self):
        item = {
            "published": "Sat, 01 Mar 2025 10:00:00 +0100",
            "published_parsed": time.struct_time((2025, 3, 1, 9, 0, 0, 5, 60, 0)),
        }
        self.assertEqual(extract_published_at(item), datetime(2025, 3, 1, 9, 0, tzinfo=timezone.utc))

    def test_rfc2822_text(self):
        item = {"published": "Mon, 25 Nov 2024 12:00:00 GMT"}
        self.assertEqual(extract_published_at(item), datetime(2024, 11, 25, 12, 0, tzinfo=timezone.utc))

    def test_no_date_field(self):
        self.assertIsNone(extract_published_at({"title": "x"}))


class SummaryTests(unittest.TestCase):
    def test_tags_stripped_and_whitespace_collapsed(self):
        raw = "<p>Hello <b>big</b>\n\n   world</p><br/><img src='a.png'>"
        self.assertEqual(clean_summary(raw), "Hello big world")

    def test_truncated_without_ellipsis(self):
        raw = "<div>" + ("word " * 200) + "</div>"
        summary = clean_summary(raw)
        self.assertEqual(len(summary), SUMMARY_MAX_CHARS)
        self.assertFalse(summary.endswith("..."))

    def test_no_angle_brackets_survive(self):
        for raw in ("a < b and c > d", "<p>unterminated <b", "x <<<>>> y"):
            summary = clean_summary(raw)
            self.assertNotIn("<", summary)
            self.assertNotIn(">", summary)
            self.assertLessEqual(len(summary), SUMMARY_MAX_CHARS)

    def test_snippet_preferred_over_body(self):
        item = {"summary": "Short", "content": [{"value": "<p>Long body</p>"}]}
        self.assertEqual(extract_summary(item), "Short")

    def test_body_used_when_snippet_absent(self):
        item = {"content": [{"type": "text/html", "value": "<p>Long <i>body</i></p>"}]}
        self.assertEqual(extract_summary(item), "Long body")

    def test_missing_summary_is_empty(self):
        self.assertEqual(extract_summary({}), "")


class ImageTests(unittest.TestCase):
    def test_enclosure_with_image_type_and_no_extension(self):
        item = {"enclosures": [{"href": "https://x/cover", "type": "image/jpeg"}]}
        self.assertEqual(extract_image(item), "https://x/cover")

    def test_untyped_enclosure_with_image_extension(self):
        item = {"enclosure": {"url": "https://x/pic.WEBP?w=600"}}
        self.assertEqual(extract_image(item), "https://x/pic.WEBP?w=600")

    def test_non_image_enclosure_falls_back_to_inline_img(self):
        item = {
            "enclosures": [{"href": "https://x/episode.mp3", "type": "audio/mpeg"}],
            "content": [{"value": '<figure><img alt="" src="https://x/inline.png"></figure>'}],
        }
        self.assertEqual(extract_image(item), "https://x/inline.png")

    def test_untyped_enclosure_without_extension_is_ignored(self):
        item = {"enclosure": {"url": "https://x/download"}}
        self.assertEqual(extract_image(item), "")

    def test_no_image_anywhere(self):
        self.assertEqual(extract_image({"summary": "<p>text only</p>"}), "")


class NormalizeItemsTests(unittest.TestCase):
    def test_sorted_most_recent_first_with_limit(self):
        items = [
            _item("jan", "2025-01-01T00:00:00Z"),
            _item("mar", "2025-03-01T00:00:00Z"),
            _item("feb", "2025-02-01T00:00:00Z"),
        ]
        articles = normalize_items(items, limit=2)
        self.assertEqual([a.title for a in articles], ["mar", "feb"])

    def test_undated_items_sort_last_in_original_order(self):
        items = [
            _item("undated-1"),
            _item("old", "2020-01-01T00:00:00Z"),
            _item("undated-2"),
            _item("new", "2025-01-01T00:00:00Z"),
        ]
        articles = normalize_items(items, limit=50)
        self.assertEqual([a.title for a in articles], ["new", "old", "undated-1", "undated-2"])
        self.assertEqual(articles[-1].published, "")

    def test_sorting_is_idempotent(self):
        items = [
            _item("b", "2025-02-01T00:00:00Z"),
            _item("none"),
            _item("a", "2025-03-01T00:00:00Z"),
        ]
        first = normalize_items(items, limit=50)
        again = normalize_items([a.model_dump() for a in first], limit=50)
        self.assertEqual([a.title for a in again], [a.title for a in first])

    def test_since_bare_date_uses_utc_plus_8_midnight(self):
        items = [
            _item("before", "2024-12-31T23:59:00+08:00"),
            _item("boundary", "2025-01-01T00:00:00+08:00"),
            _item("undated"),
        ]
        articles = normalize_items(items, limit=50, since=parse_since("2025-01-01"))
        self.assertEqual([a.title for a in articles], ["boundary"])

    def test_undated_items_kept_without_since(self):
        articles = normalize_items([_item("undated")], limit=5)
        self.assertEqual(len(articles), 1)
        self.assertEqual(articles[0].published, "")

    def test_out_of_range_dates_become_undated_instead_of_failing(self):
        items = [
            _item("edge-of-range", "0001-01-01T00:00:00+08:00"),
            _item("huge-year", "Mon, 01 Jan 99999999999999999999 00:00:00 GMT"),
            _item("valid", "2025-03-01T00:00:00Z"),
        ]
        articles = normalize_items(items, limit=5)
        self.assertEqual([a.title for a in articles], ["valid", "edge-of-range", "huge-year"])
        self.assertEqual([a.published for a in articles[1:]], ["", ""])

        bounded = normalize_items(items, limit=5, since=parse_since("2025-01-01"))
        self.assertEqual([a.title for a in bounded], ["valid"])

    def test_missing_metadata_still_produces_article(self):
        articles = normalize_items([{}], limit=5, source="The Verge")
        self.assertEqual(len(articles), 1)
        article = articles[0]
        self.assertEqual(article.title, "")
        self.assertEqual(article.link, "")
        self.assertEqual(article.summary, "")
        self.assertEqual(article.image, "")
        self.assertEqual(article.source, "The Verge")

    def test_output_shape_and_published_format(self):
        items = [_item("  padded  ", "2025-03-01T08:30:00+08:00", summary="<p>Hi</p>")]
        article = normalize_items(items, limit=1)[0]
        self.assertEqual(
            set(article.model_dump()),
            {"title", "link", "published", "summary", "source", "image"},
        )
        self.assertEqual(article.title, "padded")
        self.assertEqual(article.published, "2025-03-01T00:30:00.000Z")
        self.assertEqual(article.summary, "Hi")


if __name__ == "__main__":
    unittest.main()
