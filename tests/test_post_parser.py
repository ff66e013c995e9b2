"""Tests for post parsing."""

from datetime import datetime, timezone

import pytest

from mdrss.core import FrontMatterExtractor, MissingOrInvalidDate, PostParser, slugify
from mdrss.core.post_parser import filename_stem, first_paragraph

BASE = "https://x.io/posts"


@pytest.fixture
def parser():
    """Create parser with default settings."""
    return PostParser()


def test_parse_scenario_front_matter(parser):
    """Test the dated front matter scenario."""
    content = "---\ntitle: Hello\ndate: 2024-01-05\n---\nBody text.\n"
    
    result = parser.parse_document("2024-01-05-hello.md", content, BASE)
    
    assert result.ok
    post = result.post
    assert post.title == "Hello"
    assert post.link == "https://x.io/posts/2024-01-05-hello"
    assert post.guid == post.link
    assert post.publish_date == datetime(2024, 1, 5, tzinfo=timezone.utc)
    assert post.description == "Body text."
    assert post.source_filename == "2024-01-05-hello.md"


def test_title_and_description_from_body(parser):
    """Test heading and first paragraph fallbacks."""
    result = parser.parse({"date": "2024-01-05"}, "# First Post\n\nSome text.", "first.md", BASE)
    
    assert result.post.title == "First Post"
    assert result.post.description == "Some text."


def test_no_front_matter_fails_only_on_date(parser):
    """Test a document without front matter falls back for all but the date."""
    result = parser.parse_document("notes.md", "# First Post\n\nSome text.", BASE)
    
    assert not result.ok
    assert isinstance(result.error, MissingOrInvalidDate)
    assert result.error.filename == "notes.md"
    assert result.error.value is None


def test_title_from_filename(parser):
    """Test filename stem is used when there is no title or heading."""
    result = parser.parse({"date": "2024-01-05"}, "Just text.", "my_first-post.md", BASE)
    
    assert result.post.title == "My First Post"


def test_title_from_unusable_filename(parser):
    """Test a stem made only of separators gives a placeholder title."""
    result = parser.parse({"date": "2024-01-05"}, "", "---.md", BASE)
    
    assert result.post.title == "Untitled"
    assert result.post.link.startswith(BASE + "/")
    assert len(result.post.link) > len(BASE) + 1


def test_empty_title_metadata_falls_back(parser):
    """Test an empty title value is treated as absent."""
    result = parser.parse({"title": "  ", "date": "2024-01-05"}, "## Sub heading ##\n", "a.md", BASE)
    
    assert result.post.title == "Sub heading"


def test_link_ignores_metadata(parser):
    """Test link always comes from the filename."""
    result = parser.parse(
        {"date": "2024-01-05", "link": "https://other", "url": "https://other"},
        "",
        "Hello World!.md",
        BASE + "/",
    )
    
    assert result.post.link == "https://x.io/posts/hello-world"


def test_description_from_metadata(parser):
    """Test metadata description wins over the body."""
    result = parser.parse({"date": "2024-01-05", "description": "Meta"}, "Body.", "a.md", BASE)
    
    assert result.post.description == "Meta"


def test_description_truncated():
    """Test long paragraphs are cut with a marker within the limit."""
    parser = PostParser(description_max_length=20)
    body = "word " * 30
    
    result = parser.parse({"date": "2024-01-05"}, body, "a.md", BASE)
    
    description = result.post.description
    assert len(description) <= 20
    assert description.endswith("…")


def test_description_empty_body(parser):
    """Test missing description and empty body give an empty description."""
    result = parser.parse({"date": "2024-01-05", "title": "T"}, "# Only heading\n", "a.md", BASE)
    
    assert result.post.description == ""


def test_author_passed_through(parser):
    """Test author metadata is kept."""
    result = parser.parse({"date": "2024-01-05", "author": "John Doe"}, "", "a.md", BASE)
    
    assert result.post.author == "John Doe"


def test_metadata_keys_case_insensitive(parser):
    """Test mixed-case keys passed directly still match."""
    result = parser.parse({"Title": "Hi", "DATE": "2024-01-05"}, "", "a.md", BASE)
    
    assert result.post.title == "Hi"


@pytest.mark.parametrize(
    "value,expected",
    [
        ("2024-01-05", datetime(2024, 1, 5, tzinfo=timezone.utc)),
        ("2024-01-05 10:30:00", datetime(2024, 1, 5, 10, 30, tzinfo=timezone.utc)),
        ("2023-09-14T12:34:56Z", datetime(2023, 9, 14, 12, 34, 56, tzinfo=timezone.utc)),
        ("2023-09-14T14:34:56+02:00", datetime(2023, 9, 14, 12, 34, 56, tzinfo=timezone.utc)),
        ("2023-09-14T12:34:56", datetime(2023, 9, 14, 12, 34, 56, tzinfo=timezone.utc)),
    ],
)
def test_accepted_date_formats(parser, value, expected):
    """Test every default date format parses to UTC."""
    assert parser.parse_date(value) == expected


def test_invalid_date(parser):
    """Test unparsable dates are reported with the raw value."""
    result = parser.parse({"date": "next tuesday"}, "", "a.md", BASE)
    
    assert not result.ok
    assert result.post is None
    assert result.error.value == "next tuesday"
    assert "next tuesday" in str(result.error)


def test_impossible_date(parser):
    """Test calendar-invalid dates are rejected."""
    result = parser.parse({"date": "2024-02-30"}, "", "a.md", BASE)
    
    assert not result.ok


def test_pub_date_alias(parser):
    """Test pub_date is accepted when date is absent."""
    result = parser.parse({"pub_date": "2023-09-14T12:34:56Z"}, "", "a.md", BASE)
    
    assert result.post.publish_date == datetime(2023, 9, 14, 12, 34, 56, tzinfo=timezone.utc)


def test_date_wins_over_pub_date(parser):
    """Test date takes precedence over pub_date."""
    result = parser.parse({"date": "2024-01-05", "pub_date": "2020-01-01"}, "", "a.md", BASE)
    
    assert result.post.publish_date.year == 2024


def test_custom_date_formats():
    """Test a custom format list replaces the defaults."""
    parser = PostParser(date_formats=["%d/%m/%Y"])
    
    assert parser.parse_date("05/01/2024") == datetime(2024, 1, 5, tzinfo=timezone.utc)
    assert parser.parse_date("2024-01-05") is None


def test_parser_rejects_bad_settings():
    """Test invalid parser settings fail early."""
    with pytest.raises(ValueError):
        PostParser(date_formats=[])
    
    with pytest.raises(ValueError):
        PostParser(description_max_length=1)


def test_custom_extractor():
    """Test parse_document uses the configured delimiter."""
    parser = PostParser(extractor=FrontMatterExtractor("-rss-"))
    content = "-rss-\ntitle: Test Title\npub_date: 2023-09-14T12:34:56Z\n-rss-\n"
    
    result = parser.parse_document("test.md", content, "https://example.com")
    
    assert result.post.title == "Test Title"
    assert result.post.link == "https://example.com/test"


def test_slugify():
    """Test slug rules."""
    assert slugify("2024-01-05-hello") == "2024-01-05-hello"
    assert slugify("Hello  World!!") == "hello-world"
    assert slugify("__Draft__") == "draft"
    assert slugify("日本語") == slugify("日本語")
    assert len(slugify("日本語")) == 12


def test_filename_stem():
    """Test directories and extensions are dropped."""
    assert filename_stem("posts/2024/hello.md") == "hello"
    assert filename_stem("posts\\hello.markdown") == "hello"


def test_title_skips_code_blocks(parser):
    """Test comment lines inside a fenced block are not headings."""
    body = "```bash\n# install deps\npip install x\n```\n\n# Real Title\n\nText."
    
    result = parser.parse({"date": "2024-01-05"}, body, "setup.md", BASE)
    
    assert result.post.title == "Real Title"
    assert result.post.description == "Text."


def test_title_skips_tilde_fence(parser):
    """Test tilde fences close only on a matching marker."""
    body = "~~~~\n# not a title\n```\n# still code\n~~~~\n## Usage\n"
    
    result = parser.parse({"date": "2024-01-05"}, body, "notes.md", BASE)
    
    assert result.post.title == "Usage"
    assert result.post.description == ""


def test_unclosed_fence_runs_to_end(parser):
    """Test an unclosed fence hides the rest of the body."""
    body = "```\n# comment\nprint(1)\n"
    
    result = parser.parse({"date": "2024-01-05"}, body, "snippet-post.md", BASE)
    
    assert result.post.title == "Snippet Post"
    assert result.post.description == ""


def test_first_paragraph_code_blocks():
    """Test a code block ends a paragraph and never becomes one."""
    assert first_paragraph("```\ncode\n```\nAfter code.") == "After code."
    assert first_paragraph("Intro line\n```py\nx = 1\n```\nmore") == "Intro line"
    assert first_paragraph("  ```\n  indented fence\n  ```\n\nText") == "Text"
    assert first_paragraph("```inline` code\nstill text") == "```inline` code still text"


def test_first_paragraph():
    """Test paragraph detection skips headings and joins lines."""
    body = "\n# Title\n\nFirst line\n  second   line\n\nSecond paragraph."
    
    assert first_paragraph(body) == "First line second line"
    assert first_paragraph("# Only\n## Headings") == ""
