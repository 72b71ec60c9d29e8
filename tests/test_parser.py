"""Tests for the tolerant Markdown checklist parser."""

import pytest

from modcheck.parser import ChecklistParser, parse_checklist, split_lines


class TestSplitLines:
    """Tests for line splitting with preserved endings."""

    def test_mixed_endings(self):
        assert split_lines("a\r\nb\nc") == [("a", "\r\n"), ("b", "\n"), ("c", "")]

    def test_empty(self):
        assert split_lines("") == []

    def test_blank_lines_kept(self):
        assert split_lines("\n\n") == [("", "\n"), ("", "\n")]


class TestSections:
    """Tests for heading recognition."""

    def test_sample_sections(self, sample_text):
        document = parse_checklist(sample_text)
        titles = [section.title for section in document.sections]
        assert titles == ["Modernization Checklist", "General Fixup", "Deployment"]
        assert [section.level for section in document.sections] == [1, 2, 2]

    def test_closing_hashes_stripped_from_title(self):
        document = parse_checklist("## Database ##\n")
        assert document.sections[0].title == "Database"
        assert document.sections[0].heading == "## Database ##"

    def test_hash_without_space_is_not_heading(self):
        document = parse_checklist("#hashtag\n")
        assert document.sections == []
        assert document.preamble == ["#hashtag\n"]

    def test_section_notes(self, sample_text):
        document = parse_checklist(sample_text)
        assert document.sections[0].notes == [
            "\n",
            "Work through these before moving the app to the cloud.\n",
            "\n",
        ]
        assert document.sections[0].items == []


class TestItems:
    """Tests for list item recognition and nesting."""

    def test_sample_items(self, sample_text):
        document = parse_checklist(sample_text)
        fixup = document.sections[1]
        assert [item.text for item in fixup.items] == [
            "Upgrade to a supported runtime",
            "Remove hard-coded connection strings",
            "Replace local file storage",
        ]
        assert [item.checked for item in fixup.items] == [True, False, False]
        nested = fixup.items[1].children
        assert [item.text for item in nested] == [
            "Move secrets to a vault",
            "Read settings from environment variables",
        ]
        assert nested[1].notes == ["    See the twelve-factor docs.\n"]

    def test_ordered_items_and_uppercase_mark(self, sample_text):
        deployment = parse_checklist(sample_text).sections[2]
        assert [item.layout.bullet for item in deployment.items] == ["1.", "2."]
        assert deployment.items[1].checked is True
        assert deployment.items[1].layout.mark == "X"

    def test_fenced_code_is_opaque(self, sample_text):
        deployment = parse_checklist(sample_text).sections[2]
        assert "  - [ ] not an item\n" in deployment.notes
        assert "# not a heading\n" in deployment.notes
        assert len(deployment.items) == 2

    def test_items_without_checkbox(self):
        document = parse_checklist("## Notes\n* first\n+ second\n")
        items = document.sections[0].items
        assert [item.text for item in items] == ["first", "second"]
        assert all(item.layout.mark is None for item in items)
        assert not any(item.checked for item in items)

    def test_empty_label_with_checkbox(self):
        item = parse_checklist("- [x]\n").sections[0].items[0]
        assert item.text == ""
        assert item.checked is True
        assert item.layout.box_spacing == ""

    def test_checkbox_glued_to_text_is_label(self):
        item = parse_checklist("- [x]done\n").sections[0].items[0]
        assert item.text == "[x]done"
        assert item.layout.mark is None

    def test_horizontal_rule_is_prose(self):
        document = parse_checklist("## A\n---\n")
        assert document.sections[0].items == []
        assert document.sections[0].notes == ["---\n"]

    @pytest.mark.parametrize("rule", ["* * *", "- - -", "_ _ _", "  *  *  *  ", "-\t-\t-"])
    def test_spaced_thematic_break_is_prose(self, rule):
        document = parse_checklist(f"## A\n- [ ] real\n{rule}\n")
        section = document.sections[0]
        assert [item.text for item in section.items] == ["real"]
        assert section.items[0].notes == [f"{rule}\n"]

    def test_plus_run_is_still_an_item(self):
        item = parse_checklist("+ + +\n").sections[0].items[0]
        assert item.layout.bullet == "+"
        assert item.text == "+ +"

    def test_items_before_heading_use_implicit_section(self):
        document = parse_checklist("intro\n- [ ] a\n# Later\n- [ ] b\n")
        assert document.preamble == ["intro\n"]
        assert document.sections[0].is_implicit
        assert document.sections[0].title == ""
        assert [item.text for item in document.sections[0].items] == ["a"]
        assert document.sections[1].title == "Later"

    def test_heading_closes_open_items(self):
        document = parse_checklist("# A\n- a\n# B\n  - b\n")
        assert document.sections[1].items[0].text == "b"
        assert document.sections[0].items[0].children == []


class TestMalformedNesting:
    """Tests for tolerant handling of irregular indentation."""

    def test_orphan_child_attaches_to_section(self):
        document = parse_checklist("## S\n    - [ ] orphan\n- [ ] top\n")
        assert [item.text for item in document.sections[0].items] == ["orphan", "top"]

    def test_attaches_to_nearest_shallower_item(self):
        text = "## S\n- a\n    - b\n  - c\n"
        a = parse_checklist(text).sections[0].items[0]
        assert [child.text for child in a.children] == ["b", "c"]
        assert a.children[0].children == []

    def test_tabs_measured_with_tab_size(self):
        text = "## S\n- a\n\t- b\n    - c\n"
        a = ChecklistParser(tab_size=4).parse(text).sections[0].items[0]
        assert [child.text for child in a.children] == ["b", "c"]

        a = ChecklistParser(tab_size=2).parse(text).sections[0].items[0]
        assert [child.text for child in a.children] == ["b"]
        assert [child.text for child in a.children[0].children] == ["c"]

    def test_deep_nesting(self):
        text = "- a\n  - b\n    - c\n      - d\n"
        a = parse_checklist(text).sections[0].items[0]
        assert a.children[0].children[0].children[0].text == "d"


class TestRoundTrip:
    """Rendering a parsed document reproduces the source text."""

    @pytest.mark.parametrize(
        "text",
        [
            "",
            "\n",
            "just prose, no newline",
            "# Title",
            "## A ##  \r\n- [ ] one\r\n  - [X]   two  \r\n",
            "1)  [x]\tspaced\n10. [ ] ten\n",
            "- \n-\n- [ ]\n",
            "```\n- [ ] open fence never closed\n",
            "~~~\n```\n~~~\n- [ ] after\n",
            "\t- tab indented\n  \t- mixed\n",
            "* * *\n- - -\n",
            "## A\n- [ ] real\n\n* * *\n\n- - -\n",
        ],
    )
    def test_round_trip(self, text):
        assert parse_checklist(text).render() == text

    def test_sample_round_trip(self, sample_text):
        assert parse_checklist(sample_text).render() == sample_text

    def test_parser_is_reusable(self, sample_text):
        parser = ChecklistParser()
        first = parser.parse(sample_text)
        second = parser.parse("# Other\n")
        assert first is not second
        assert first.render() == sample_text
        assert second.render() == "# Other\n"
