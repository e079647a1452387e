"""Tests for heading scanning, language section isolation and subsections."""

import pytest

from ruwikt.sections import (
    Heading,
    find_subsection,
    iter_headings,
    label_key,
    language_headings,
    locate_language_section,
    looks_like_language,
)


class TestHeadings:
    """Test heading line recognition."""

    def test_levels_and_labels(self):
        text = "= {{-ru-}} =\n=== Морфологические свойства ===\n==== Значение ====\n"
        headings = iter_headings(text)
        assert [(h.level, h.label) for h in headings] == [
            (1, "{{-ru-}}"),
            (3, "Морфологические свойства"),
            (4, "Значение"),
        ]

    def test_offsets_cover_line(self):
        text = "intro\n== Russian ==\nbody"
        (heading,) = iter_headings(text)
        assert isinstance(heading, Heading)
        assert text[heading.start : heading.end] == "== Russian =="

    def test_unbalanced_is_not_heading(self):
        assert iter_headings("== Russian =\n") == []

    def test_inline_equals_not_heading(self):
        assert iter_headings("a == b == c\n") == []

    def test_label_key(self):
        assert label_key("  Значение  1 ") == "значение"
        assert label_key("Usage   Examples") == "usage examples"

    @pytest.mark.parametrize(
        "label,expected",
        [
            ("Russian", True),
            ("Old English", True),
            ("Serbo-Croatian", True),
            ("Украинский", True),
            ("{{-uk-}}", True),
            ("{{-chu-}}", True),
            ("дом I", False),
            ("{{сущ ru}}", False),
            ("Этимология 2", False),
        ],
    )
    def test_looks_like_language(self, label, expected):
        assert looks_like_language(label) is expected


class TestLocateLanguageSection:
    """Test isolation of the target-language section."""

    def test_plain_name_heading(self, dom_page):
        section = locate_language_section(dom_page, "Russian")
        assert "=== Существительное ===" in section
        assert "# жилое здание" in section
        assert "будинок" not in section
        assert "== Russian ==" not in section

    def test_template_heading(self, ru_wikt_page):
        section = locate_language_section(ru_wikt_page, "Russian")
        assert "==== Значение ====" in section
        assert "[[будинок]]" not in section
        assert "{{-uk-}}" not in section

    def test_russian_name_heading(self):
        page = "== Русский ==\n# дом\n== Английский ==\n# house\n"
        assert locate_language_section(page, "Russian") == "\n# дом\n"

    def test_template_heading_with_spaces(self):
        page = "= {{ -ru- }} =\ntext\n"
        assert locate_language_section(page, "Russian") == "\ntext\n"

    def test_runs_to_end_of_document(self):
        page = "== English ==\nx\n== Russian ==\n=== Noun ===\ny\n"
        assert locate_language_section(page, "Russian") == "\n=== Noun ===\ny\n"

    def test_nested_headings_do_not_end_section(self):
        page = "== Russian ==\n=== Существительное ===\n==== Значение ====\n# a\n"
        section = locate_language_section(page, "Russian")
        assert section.endswith("# a\n")

    def test_non_language_heading_does_not_end_section(self):
        page = "= {{-ru-}} =\n== дом I ==\n# a\n== дом II ==\n# b\n= {{-uk-}} =\n# c\n"
        section = locate_language_section(page, "Russian")
        assert "# a" in section
        assert "# b" in section
        assert "# c" not in section

    def test_first_matching_heading_wins(self):
        page = "== Russian ==\nfirst\n== English ==\n== Russian ==\nsecond\n"
        assert locate_language_section(page, "Russian") == "\nfirst\n"

    def test_missing_language(self):
        assert locate_language_section("== English ==\n# house\n", "Russian") == ""

    def test_empty_document(self):
        assert locate_language_section("", "Russian") == ""

    def test_other_language_by_name(self, dom_page):
        section = locate_language_section(dom_page, "Ukrainian")
        assert "# будинок" in section

    @pytest.mark.parametrize("language", ["Russian", "русский", "Русский", "{{-ru-}}"])
    def test_any_bound_spelling_selects_all_headings(self, language):
        assert language_headings(language) == ("Russian", "Русский", "{{-ru-}}")

    def test_unbound_language_matches_itself(self):
        assert language_headings("Ukrainian") == ("Ukrainian",)

    @pytest.mark.parametrize("language", ["Русский", "{{-ru-}}"])
    def test_native_spelling_finds_template_heading(self, ru_wikt_page, language):
        section = locate_language_section(ru_wikt_page, language)
        assert "==== Значение ====" in section
        assert "[[будинок]]" not in section

    def test_crlf_document(self):
        page = "== Russian ==\r\n# дом\r\n== English ==\r\n# house\r\n"
        assert locate_language_section(page, "Russian") == "\n# дом\n"


class TestFindSubsection:
    """Test lookup of named subsections."""

    SECTION = (
        "=== Существительное ===\n"
        "==== Значение ====\n"
        "# один\n"
        "===== Примечание =====\n"
        "вложено\n"
        "==== Синонимы ====\n"
        "* два\n"
        "=== Глагол ===\n"
        "==== Синонимы ====\n"
        "* три\n"
    )

    def test_body_includes_deeper_headings(self):
        body = find_subsection(self.SECTION, ["Значение"])
        assert "# один" in body
        assert "вложено" in body
        assert "* два" not in body

    def test_stops_at_shallower_heading(self):
        body = find_subsection(self.SECTION, ["Синонимы"])
        assert body == "\n* два\n"

    def test_any_title_variant(self):
        assert find_subsection(self.SECTION, ["Synonyms", "Синонимы"]) == "\n* два\n"

    def test_case_insensitive(self):
        assert find_subsection(self.SECTION, ["синонимы"]) == "\n* два\n"

    def test_missing_is_none(self):
        assert find_subsection(self.SECTION, ["Антонимы"]) is None

    def test_empty_body_is_empty_string(self):
        assert find_subsection("==== Антонимы ====\n==== Синонимы ====\n", ["Антонимы"]) == "\n"
