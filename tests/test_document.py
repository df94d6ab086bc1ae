from linkcrawler.document import NO_TITLE, Anchor, Document, extract_unseen_links, page_title


def test_anchors_in_document_order_with_missing_href():
    doc = Document.from_html('<a href="http://a.test/">a</a><a name="top">x</a><a href="/rel">r</a>')

    assert doc.anchors() == [
        Anchor(href="http://a.test/"),
        Anchor(href=None),
        Anchor(href="/rel"),
    ]


def test_extract_filters_invalid_and_normalizes():
    doc = Document.from_html(
        '<a>no href</a>'
        '<a href="/relative">relative</a>'
        '<a href="mailto:me@a.test">mail</a>'
        '<a href="https://b.test/page?x=1#top">b</a>'
        '<a href="http://a.test">a</a>'
    )

    assert extract_unseen_links(doc, lambda u: False) == [
        "https://b.test/page/",
        "http://a.test/",
    ]


def test_extract_dedups_within_page_keeping_first_position():
    doc = Document.from_html(
        '<a href="http://a.test/x">1</a>'
        '<a href="http://b.test/">2</a>'
        '<a href="http://a.test/x/#again">3</a>'
        '<a href="http://a.test/x?page=2">4</a>'
    )

    assert extract_unseen_links(doc, lambda u: False) == ["http://a.test/x/", "http://b.test/"]


def test_extract_skips_seen_urls():
    doc = Document.from_html('<a href="http://a.test/">a</a><a href="http://b.test/">b</a>')
    seen = {"http://a.test/"}

    assert extract_unseen_links(doc, seen.__contains__) == ["http://b.test/"]


def test_extract_strips_whitespace_around_href():
    doc = Document.from_html('<a href="  http://a.test/x \n">a</a>')

    assert extract_unseen_links(doc, lambda u: False) == ["http://a.test/x/"]


def test_page_title_fallback():
    doc = Document.from_html("<html><body><p>untitled</p></body></html>")

    assert doc.title() is None
    assert page_title(doc) == NO_TITLE == "No title"


def test_page_title_is_html_decoded():
    doc = Document.from_html("<html><head><title>Tom &amp;amp; Jerry &amp;lt;3</title></head></html>")

    assert page_title(doc) == "Tom & Jerry <3"


def test_page_title_uses_first_title_element():
    doc = Document.from_html("<html><head><title>First</title><title>Second</title></head></html>")

    assert page_title(doc) == "First"
