"""Tests for page_loader.services.naming."""

import pytest

from page_loader.services.naming import (
    naming_for,
    normalize_ref,
    page_filename,
    resolve_ref,
    resource_filename,
    resources_dir_name,
    sanitize,
)

_PAGE = "https://example.com/a/b"


class TestSanitize:
    def test_replaces_every_non_alphanumeric_character(self):
        assert sanitize("example.com/a_b~c") == "example-com-a-b-c"

    def test_non_ascii_letters_are_replaced(self):
        assert sanitize("café") == "caf-"

    def test_consecutive_separators_are_not_collapsed(self):
        assert sanitize("a//b") == "a--b"


class TestPageFilename:
    def test_host_and_path(self):
        assert page_filename(_PAGE) == "example-com-a-b.html"

    def test_is_deterministic(self):
        assert page_filename(_PAGE) == page_filename(_PAGE)

    def test_query_and_fragment_are_ignored(self):
        assert page_filename("https://example.com/a/b?x=1#top") == "example-com-a-b.html"

    def test_bare_host_keeps_root_slash(self):
        assert page_filename("https://example.com") == "example-com-.html"

    def test_port_is_part_of_the_host(self):
        assert page_filename("http://localhost:8080/docs") == "localhost-8080-docs.html"

    @pytest.mark.parametrize("url", ["https://example.com:443/a/b", "http://example.com:80/a/b"])
    def test_default_port_is_dropped(self, url):
        assert page_filename(url) == "example-com-a-b.html"

    def test_port_of_the_other_scheme_is_kept(self):
        assert page_filename("https://example.com:80/a") == "example-com-80-a.html"

    def test_malformed_url_raises_value_error(self):
        with pytest.raises(ValueError):
            page_filename("http://example.com:notaport/a")


class TestResourcesDirName:
    @pytest.mark.parametrize(
        "url",
        [
            _PAGE,
            "https://example.com",
            "https://codica.la/cursos",
            "http://localhost:3000/a.b/c.html",
        ],
    )
    def test_is_page_filename_with_files_suffix(self, url):
        expected = page_filename(url)[: -len(".html")] + "_files"
        assert resources_dir_name(url) == expected

    def test_example(self):
        assert resources_dir_name(_PAGE) == "example-com-a-b_files"

    def test_naming_for_bundles_both_names(self):
        naming = naming_for(_PAGE)
        assert naming.page_filename == "example-com-a-b.html"
        assert naming.resources_dir_name == "example-com-a-b_files"


class TestResourceFilename:
    def test_root_relative_image_keeps_extension(self):
        assert resource_filename(_PAGE, "/img/x.png") == "example-com-img-x.png"

    def test_document_relative_reference_is_resolved(self):
        assert resource_filename(_PAGE, "style.css") == "example-com-a-style.css"

    def test_absolute_reference(self):
        ref = "https://example.com/packs/js/runtime.js"
        assert resource_filename(_PAGE, ref) == "example-com-packs-js-runtime.js"

    def test_protocol_relative_reference(self):
        assert resource_filename(_PAGE, "//example.com/img/x.png") == "example-com-img-x.png"

    def test_missing_extension_defaults_to_html(self):
        assert resource_filename(_PAGE, "/courses") == "example-com-courses.html"

    def test_query_string_and_fragment_are_dropped(self):
        assert resource_filename(_PAGE, "/app.css?v=3#x") == "example-com-app.css"

    def test_only_last_segment_counts_for_extension(self):
        assert resource_filename(_PAGE, "/v1.2/assets") == "example-com-v1-2-assets.html"

    def test_dotfile_has_no_extension(self):
        assert resource_filename(_PAGE, "/.well-known") == "example-com--well-known.html"

    def test_surrounding_whitespace_is_ignored(self):
        assert resource_filename(_PAGE, " /img/x.png ") == "example-com-img-x.png"

    def test_embedded_tabs_and_newlines_are_ignored(self):
        assert resource_filename(_PAGE, "/img/\n\tx.png\r") == "example-com-img-x.png"


class TestNormalizeRef:
    def test_strips_spaces_and_control_characters_at_both_ends(self):
        assert normalize_ref("\x00 \x1f/img/x.png \n") == "/img/x.png"

    def test_removes_tabs_and_newlines_inside(self):
        assert normalize_ref("/a\tb/\nc.css") == "/ab/c.css"

    def test_keeps_inner_spaces(self):
        assert normalize_ref("/my file.png") == "/my file.png"

    def test_resolve_ref_uses_the_cleaned_reference(self):
        assert resolve_ref(_PAGE, "  /img/x.png  ") == "https://example.com/img/x.png"
