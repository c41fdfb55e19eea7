"""Shared test fixtures and configuration."""
from __future__ import annotations

from collections.abc import Callable

import pytest

from pagelens.ingredients import PageDetails, PageIngredients
from pagelens.parser.structure import Heading, Image, Link, StructuralSnapshot
from pagelens.text.metrics import analyze_text, count_words, detect_language


@pytest.fixture
def mock_url() -> str:
    """Return a mock URL for testing."""
    return "https://example.com/coffee-guide"


@pytest.fixture
def page_details(mock_url: str) -> PageDetails:
    """Return page details for the coffee article."""
    return PageDetails(url=mock_url, title="Best Coffee Beans for Home Brewing")


@pytest.fixture
def valid_html() -> str:
    """Return a valid English article for testing."""
    return """<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <title>Best Coffee Beans for Home Brewing: A Complete Buying Guide</title>
    <meta name="description" content="Find the best coffee beans for home brewing. We compare arabica and robusta, explain roasting levels and show how to keep beans fresh so every cup tastes great.">
    <meta name="author" content="Jane Doe">
    <meta property="article:published_time" content="2024-03-01T08:00:00Z">
    <script type="application/ld+json">{"@context": "https://schema.org", "@type": "Article", "headline": "Best Coffee Beans"}</script>
</head>
<body>
    <nav><a href="/">Home</a> <a href="/shop">Shop</a></nav>
    <article>
        <h1>Best Coffee Beans and Arabica Picks</h1>
        <p>Coffee beans decide the taste of every cup you brew at home. This guide explains how to pick them.</p>

        <h2>Choosing Arabica Beans</h2>
        <p>Arabica beans are sweeter and more complex than robusta. They grow at high altitude and need careful farming.</p>
        <img src="/img/beans.jpg" alt="Roasted coffee beans">
        <img src="/img/grinder.jpg">

        <h2>Roasting Levels Explained</h2>
        <p>Light roasts keep bright, fruity notes. Dark roasts taste bold and smoky. Medium roasts sit in between.</p>
        <p>Read our <a href="https://example.com/brewing">brewing guide</a> or the <a href="https://coffee.org/research" rel="nofollow">coffee research</a> for more.</p>
        <p>Questions? <a href="mailto:hello@example.com">Email us</a> or jump to the <a href="#top">top</a>.</p>
    </article>
    <script>console.log("tracking");</script>
</body>
</html>"""


@pytest.fixture
def short_html() -> str:
    """Return HTML shorter than the minimum accepted length."""
    return """<!DOCTYPE html>
<html>
<head><title>Minimal</title></head>
<body><p>Content</p></body>
</html>"""


@pytest.fixture
def html_no_h1() -> str:
    """Return HTML without any H1 heading."""
    return """<!DOCTYPE html>
<html>
<head><title>No Heading Page</title></head>
<body>
    <h2>Only a subheading</h2>
    <p>Some content without a main heading for the page.</p>
</body>
</html>"""


@pytest.fixture
def html_multiple_h1() -> str:
    """Return HTML with multiple H1 tags."""
    return """<!DOCTYPE html>
<html>
<head>
    <title>Multiple H1 Test</title>
    <meta name="description" content="Testing multiple H1 tags">
</head>
<body>
    <h1>First H1</h1>
    <p>Content</p>
    <h1>Second H1</h1>
    <p>More content</p>
</body>
</html>"""


@pytest.fixture
def chinese_html() -> str:
    """Return a Traditional Chinese article."""
    return """<!DOCTYPE html>
<html lang="zh-Hant">
<head>
    <title>咖啡豆挑選指南：烘焙程度與產地完整解析</title>
    <meta name="description" content="本文介紹如何挑選咖啡豆，從阿拉比卡與羅布斯塔的差異、烘焙程度到保存方式，帶你在家也能沖出一杯好咖啡。">
</head>
<body>
    <h1>咖啡豆挑選指南</h1>
    <p>咖啡豆的品質決定了每一杯咖啡的風味。挑選咖啡豆時要注意產地與烘焙日期。</p>
    <h2>烘焙程度</h2>
    <p>淺焙保留果酸，深焙帶來苦甜與焦糖香氣。中焙則介於兩者之間。</p>
    <h2>保存方式</h2>
    <p>咖啡豆開封後應放在密封罐中，並避免陽光直射。</p>
</body>
</html>"""


@pytest.fixture
def english_article_html() -> Callable[..., str]:
    """Return a builder for English articles with a given number of body words."""

    def build(
        words: int = 320,
        title: str = "Best Coffee Beans for Home Brewing",
        h1: str = "Best Coffee Beans Guide",
        meta: str | None = None,
        h2s: tuple[str, ...] = (),
    ) -> str:
        sentence = "Fresh coffee beans make a better cup every single morning at home."
        sentence_words = sentence.split()
        body_words = [sentence_words[i % len(sentence_words)] for i in range(words - len(h1.split()))]
        paragraphs = []
        for start in range(0, len(body_words), 24):
            chunk = " ".join(body_words[start:start + 24])
            paragraphs.append(f"<p>{chunk}.</p>")
        meta_tag = f'<meta name="description" content="{meta}">' if meta is not None else ""
        headings = "".join(f"<h2>{h}</h2>" for h in h2s)
        return (
            f"<!DOCTYPE html><html><head><title>{title}</title>{meta_tag}</head>"
            f"<body><h1>{h1}</h1>{headings}{''.join(paragraphs)}</body></html>"
        )

    return build


@pytest.fixture
def snapshot_factory() -> Callable[..., StructuralSnapshot]:
    """Return a builder for structural snapshots with only the given fields set."""

    def build(
        title: str = "",
        meta_description: str | None = None,
        headings: list[tuple[int, str]] | None = None,
        images: list[Image] | None = None,
        links: list[Link] | None = None,
        paragraphs: list[str] | None = None,
        text_content: str = "",
        word_count: int | None = None,
    ) -> StructuralSnapshot:
        return StructuralSnapshot(
            title=title,
            meta_description=meta_description,
            headings=[
                Heading(level=level, text=text, order=i)
                for i, (level, text) in enumerate(headings or [])
            ],
            images=images or [],
            links=links or [],
            videos=[],
            paragraphs=paragraphs or [],
            text_content=text_content,
            word_count=count_words(text_content) if word_count is None else word_count,
            text_stats=analyze_text(text_content),
            language=detect_language(text_content),
        )

    return build


@pytest.fixture
def ingredients_factory(mock_url: str) -> Callable[..., PageIngredients]:
    """Return a builder for canonical ingredients, bypassing input validation."""

    def build(focus: str = "", related: tuple[str, ...] = ()) -> PageIngredients:
        return PageIngredients(
            html_content="<html></html>",
            page_details=PageDetails(url=mock_url, title="Test"),
            focus_keyword=focus,
            related_keywords=tuple(related),
        )

    return build
