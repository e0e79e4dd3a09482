"""Tests for page_loader.services.extractor.collect_resources."""

from page_loader.services.extractor import collect_resources, parse_html

_PAGE = "https://example.com/a/b"

_HTML = """
<!DOCTYPE html>
<html>
<head>
  <link rel="icon" href="/favicon.ico">
  <link rel="stylesheet" href="/assets/app.css">
  <link rel="Canonical" href="/a/b">
  <link rel="stylesheet" href="https://fonts.example.net/font.css">
  <script src="/packs/runtime.js"></script>
  <script>console.log("inline");</script>
</head>
<body>
  <img src="/img/x.png">
  <img src="https://other.com/y.png">
  <img src="data:image/gif;base64,R0lGODlhAQABAAAAACw=">
  <img alt="no source">
  <script src="//example.com/packs/app.js"></script>
  <a href="/not-a-resource">link</a>
</body>
</html>
"""


def _refs(html: str):
    return [(r.node.name, r.attr, r.ref) for r in collect_resources(parse_html(html), _PAGE)]


class TestCollectResources:
    def test_collects_only_local_resources_in_group_order(self):
        assert _refs(_HTML) == [
            ("img", "src", "/img/x.png"),
            ("script", "src", "/packs/runtime.js"),
            ("script", "src", "//example.com/packs/app.js"),
            ("link", "href", "/assets/app.css"),
            ("link", "href", "/a/b"),
        ]

    def test_icon_links_are_ignored(self):
        html = '<link rel="icon" href="/favicon.ico"><link rel="shortcut icon" href="/f.ico">'
        assert _refs(html) == []

    def test_anchor_links_are_ignored(self):
        assert _refs('<a href="/other-page">x</a>') == []

    def test_empty_document_has_no_resources(self):
        assert _refs("<html><head></head><body>Hello</body></html>") == []

    def test_empty_src_is_ignored(self):
        assert _refs('<img src="">') == []

    def test_references_point_at_the_parsed_nodes(self):
        soup = parse_html('<img src="/img/x.png">')
        [resource] = collect_resources(soup, _PAGE)
        resource.node[resource.attr] = "local/x.png"
        assert soup.find("img")["src"] == "local/x.png"

    def test_order_is_deterministic(self):
        assert _refs(_HTML) == _refs(_HTML)
