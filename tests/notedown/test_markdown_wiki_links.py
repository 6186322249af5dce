"""
Tests for wiki link and entry title helpers
"""
from notedown.markdown_wiki_links import (
    LinkTrigger, extract_entry_ids_from_content, extract_tags_from_title, find_link_trigger
)


def test_extract_entry_ids():
    """Test finding the entries linked from some text."""
    content = "See [[b]] and [[a|Alpha]], then [[b]] again and [[ c ]]."
    assert extract_entry_ids_from_content(content) == ["b", "a", "c"]


def test_extract_entry_ids_without_links():
    """Test text with no wiki links."""
    assert extract_entry_ids_from_content("plain [link](url) [[]]") == []


def test_find_link_trigger():
    """Test finding an unfinished wiki link before the cursor."""
    assert find_link_trigger("see [[ent", 9) == LinkTrigger(search_term="ent", start_pos=4)
    assert find_link_trigger("[[", 2) == LinkTrigger(search_term="", start_pos=0)


def test_no_link_trigger_after_closed_link():
    """Test that a finished wiki link is not a trigger."""
    assert find_link_trigger("[[done]] more", 13) is None
    assert find_link_trigger("no links", 3) is None


def test_link_trigger_only_looks_before_cursor():
    """Test that text after the cursor is ignored."""
    assert find_link_trigger("ab [[cd", 2) is None
    assert find_link_trigger("[[abc]]", 4) == LinkTrigger(search_term="ab", start_pos=0)


def test_extract_tags_from_title():
    """Test splitting hashtags out of a title."""
    tags, title = extract_tags_from_title("Meeting notes #work #planning")
    assert tags == ["work", "planning"]
    assert title == "Meeting notes"


def test_extract_tags_from_middle_of_title():
    """Test that tags anywhere in the title are removed and spacing tidied."""
    tags, title = extract_tags_from_title("#idea A  new #draft plan")
    assert tags == ["idea", "draft"]
    assert title == "A new plan"


def test_title_without_tags():
    """Test a title with no tags."""
    assert extract_tags_from_title("Just a title") == ([], "Just a title")
