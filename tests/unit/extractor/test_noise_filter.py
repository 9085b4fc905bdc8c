"""
Unit tests for NoiseFilter.
"""

from bs4 import BeautifulSoup

from siftcore.extractor.noise_filter import NoiseFilter


def parse(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, "html.parser")


class TestNoiseFilter:
    """Test cases for NoiseFilter."""

    def test_removes_structural_and_script_elements(self):
        doc = parse(
            "<body><nav><a href='/'>Home</a></nav><div class='ad'>Buy now</div>"
            "<script>track()</script><p>Keep me</p></body>"
        )

        removed = NoiseFilter().remove_noise(doc)

        assert removed == 3
        assert doc.find("nav") is None
        assert doc.find("script") is None
        assert doc.select_one(".ad") is None
        assert doc.find("p").get_text() == "Keep me"

    def test_removes_pattern_matched_elements(self):
        doc = parse(
            "<body>"
            "<div class='cookie-consent'>Cookies</div>"
            "<div id='cookie-bar'>More cookies</div>"
            "<div class='popup-window'>Popup</div>"
            "<div class='newsletter-signup'>Subscribe</div>"
            "<div hidden>Hidden</div>"
            "<div aria-hidden='true'>Also hidden</div>"
            "<div role='complementary'>Aside</div>"
            "<p>Body text</p>"
            "</body>"
        )

        NoiseFilter().remove_noise(doc)

        assert doc.body.get_text() == "Body text"

    def test_header_and_footer_outside_article_are_removed(self):
        doc = parse("<body><header>Site header</header><main><p>Text</p></main><footer>Site footer</footer></body>")

        NoiseFilter().remove_noise(doc)

        assert doc.find("header") is None
        assert doc.find("footer") is None

    def test_header_and_footer_inside_article_are_kept(self):
        doc = parse(
            "<body><article><header><h1>Title</h1></header><p>Text</p>"
            "<footer>Posted by Ada</footer></article></body>"
        )

        NoiseFilter().remove_noise(doc)

        assert doc.find("header") is not None
        assert doc.find("footer").get_text() == "Posted by Ada"

    def test_never_removes_body_or_html(self):
        doc = parse("<html class='modal-open'><body class='modal-open'><p>Text</p></body></html>")

        removed = NoiseFilter().remove_noise(doc)

        assert removed == 0
        assert doc.body is not None
        assert doc.find("p") is not None

    def test_nested_matches_are_removed_once(self):
        doc = parse("<body><aside><nav>Links</nav><div class='ad'>Ad</div></aside><p>Text</p></body>")

        NoiseFilter().remove_noise(doc)

        assert doc.body.get_text() == "Text"

    def test_no_matches_is_a_no_op(self):
        html = "<body><p>Plain page</p></body>"
        doc = parse(html)

        assert NoiseFilter().remove_noise(doc) == 0
        assert str(doc) == str(parse(html))

    def test_custom_selectors(self):
        doc = parse("<body><div class='promo'>Promo</div><nav>Nav</nav></body>")

        NoiseFilter(selectors=[".promo"]).remove_noise(doc)

        assert doc.select_one(".promo") is None
        assert doc.find("nav") is not None
