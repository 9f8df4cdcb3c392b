"""Tests for the excluded sources filter."""

import pytest

from license_vetting.content_id import ContentId, InvalidContentId
from license_vetting.exceptions import FileProcessingError
from license_vetting.exclusion import ExcludedSourcesFilter


class TestExcludedSourcesFilter:
    """Test pattern matching on content ids."""

    def test_no_patterns_keeps_everything(self, left_pad):
        id_filter = ExcludedSourcesFilter()
        assert id_filter.is_empty
        assert id_filter.keep(left_pad)

    def test_exact_match(self, left_pad, code_frame):
        id_filter = ExcludedSourcesFilter(["npm/npmjs/-/left-pad/1.3.0"])
        assert not id_filter.keep(left_pad)
        assert id_filter.keep(code_frame)

    def test_wildcard_matches_any_version(self, left_pad):
        id_filter = ExcludedSourcesFilter(["npm/npmjs/-/left-pad/*"])
        assert not id_filter.keep(left_pad)
        assert not id_filter.keep(ContentId("npm", "npmjs", "-", "left-pad", "2.0.0"))
        assert id_filter.keep(ContentId("npm", "npmjs", "-", "left-pad-extra", "1.0.0"))

    def test_wildcard_matches_across_segments(self, commons_lang, code_frame):
        id_filter = ExcludedSourcesFilter(["maven/mavencentral/org.apache.*"])
        assert not id_filter.keep(commons_lang)
        assert id_filter.keep(code_frame)

    def test_regex_characters_are_literal(self):
        id_filter = ExcludedSourcesFilter(["npm/npmjs/-/a.b/*"])
        assert id_filter.keep(ContentId("npm", "npmjs", "-", "axb", "1.0.0"))
        assert not id_filter.keep(ContentId("npm", "npmjs", "-", "a.b", "1.0.0"))

    def test_pattern_must_match_whole_id(self, left_pad):
        id_filter = ExcludedSourcesFilter(["left-pad*"])
        assert id_filter.keep(left_pad)

    def test_invalid_ids_can_be_excluded(self):
        id_filter = ExcludedSourcesFilter(["internal-*"])
        assert not id_filter.keep(InvalidContentId("internal-tooling"))

    def test_blank_lines_and_comments_are_ignored(self, left_pad):
        id_filter = ExcludedSourcesFilter(["", "# nothing", "   "])
        assert id_filter.is_empty
        assert id_filter.keep(left_pad)

    def test_filter_keeps_order(self, left_pad, code_frame, commons_lang):
        id_filter = ExcludedSourcesFilter(["npm/npmjs/-/left-pad/*"])
        ids = [code_frame, left_pad, commons_lang, left_pad]
        assert id_filter.filter(ids) == [code_frame, commons_lang]


class TestExcludedSourcesFile:
    """Test loading patterns from a file."""

    def test_from_file(self, tmp_path, left_pad, code_frame):
        path = tmp_path / "excluded.txt"
        path.write_text("# vendored\nnpm/npmjs/-/left-pad/*\n\n")
        id_filter = ExcludedSourcesFilter.from_file(str(path))
        assert id_filter.filter([left_pad, code_frame]) == [code_frame]

    def test_no_file_keeps_everything(self):
        assert ExcludedSourcesFilter.from_file(None).is_empty

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(FileProcessingError):
            ExcludedSourcesFilter.from_file(str(tmp_path / "missing.txt"))
