"""Structural extraction of headings, media, links and text from HTML."""
from __future__ import annotations

import copy
import logging
import re
from dataclasses import asdict, dataclass, field
from datetime import datetime
from urllib.parse import urljoin, urlparse

import extruct
from bs4 import BeautifulSoup
from readability import Document
from soupsieve import SelectorSyntaxError

from pagelens.config.settings import settings
from pagelens.errors import ExtractionError
from pagelens.text.metrics import TextStats, analyze_text, count_words, detect_language

logger = logging.getLogger(__name__)

HEADING_TAGS = ["h1", "h2", "h3", "h4", "h5", "h6"]

# Elements whose boundaries end a paragraph of text content
BLOCK_TAGS = [
    "address", "article", "aside", "blockquote", "dd", "details", "div", "dl",
    "dt", "figcaption", "figure", "footer", "form", "h1", "h2", "h3", "h4",
    "h5", "h6", "header", "hr", "li", "main", "nav", "ol", "p", "pre",
    "section", "summary", "table", "tr", "ul",
]

NEVER_EXTERNAL_PREFIXES = ("#", "mailto:", "tel:", "javascript:")

AUTHOR_SELECTORS = [
    'meta[name="author"]',
    '[rel="author"]',
    ".author",
    ".byline",
    ".post-author",
    ".author-name",
]

DATE_SELECTORS = [
    'meta[property="article:published_time"]',
    'meta[name="publishdate"]',
    'meta[name="date"]',
    "time[datetime]",
    ".published-date",
    ".post-date",
]

_BLANK_LINES_RE = re.compile(r"\n{3,}")


@dataclass
class ExtractionOptions:
    """Caller-supplied scoping of the analyzed content.

    Without selectors the whole document body is analyzed.
    """
    content_selectors: list[str] = field(default_factory=list)
    exclude_selectors: list[str] = field(default_factory=list)
    base_url: str = ""
    extract_main_content: bool = False


@dataclass(frozen=True)
class Heading:
    level: int
    text: str
    order: int


@dataclass(frozen=True)
class Image:
    src: str
    alt: str | None = None
    title: str | None = None
    width: int | None = None
    height: int | None = None

    @property
    def has_alt(self) -> bool:
        return bool(self.alt and self.alt.strip())


@dataclass(frozen=True)
class Link:
    href: str
    text: str
    is_external: bool
    is_nofollow: bool
    rel: str | None = None
    target: str | None = None


@dataclass(frozen=True)
class Video:
    src: str
    kind: str
    title: str | None = None


@dataclass(frozen=True)
class StructuralSnapshot:
    """Read-only structural view of one document."""
    title: str
    meta_description: str | None
    headings: list[Heading]
    images: list[Image]
    links: list[Link]
    videos: list[Video]
    paragraphs: list[str]
    text_content: str
    word_count: int
    text_stats: TextStats
    language: str = "english"
    author: str | None = None
    published_date: str | None = None
    structured_data: list[dict] = field(default_factory=list)

    def headings_at(self, level: int) -> list[Heading]:
        return [h for h in self.headings if h.level == level]

    @property
    def subheadings(self) -> list[Heading]:
        """H2 and deeper headings."""
        return [h for h in self.headings if h.level >= 2]

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return asdict(self)


def _clean_text(text: str) -> str:
    return " ".join(text.split())


def _int_attr(value: str | None) -> int | None:
    if value and str(value).strip().isdigit():
        return int(str(value).strip())
    return None


def _origin(url: str) -> tuple[str, str, int | None]:
    parsed = urlparse(url)
    default_port = {"http": 80, "https": 443}.get(parsed.scheme)
    return parsed.scheme, (parsed.hostname or "").lower(), parsed.port or default_port


def is_external_link(href: str, base_url: str = "") -> bool:
    """Classify a link target against the page origin.

    Fragment, mail, phone and javascript targets are never external. Without a
    base URL only absolute http(s) targets are external.
    """
    href = (href or "").strip()
    if not href or href.lower().startswith(NEVER_EXTERNAL_PREFIXES):
        return False

    if not base_url:
        return urlparse(href).scheme in {"http", "https"} or href.startswith("//")

    resolved = urljoin(base_url, href)
    if urlparse(resolved).scheme not in {"http", "https"}:
        return False
    return _origin(resolved) != _origin(base_url)


def _select_content_root(soup: BeautifulSoup, options: ExtractionOptions):
    try:
        if options.exclude_selectors:
            for element in soup.select(", ".join(options.exclude_selectors)):
                element.decompose()

        for selector in options.content_selectors:
            element = soup.select_one(selector)
            if element is not None:
                return element
    except SelectorSyntaxError as exc:
        raise ExtractionError(f"Invalid CSS selector: {exc}") from exc

    if options.content_selectors:
        logger.debug("No content selector matched, analyzing the whole body")

    if options.extract_main_content:
        main_html = Document(str(soup)).summary(html_partial=True)
        main_soup = BeautifulSoup(main_html, "lxml")
        return main_soup.body or main_soup

    return soup.body or soup


def _extract_text(root) -> str:
    """Extract visible text with block elements separated by blank lines."""
    clone = copy.copy(root)
    for tag in clone.find_all(list(settings.extraction.stripped_tags)):
        tag.decompose()
    for br in clone.find_all("br"):
        br.replace_with("\n")
    for tag in clone.find_all(BLOCK_TAGS):
        tag.insert_before("\n\n")
        tag.insert_after("\n\n")

    lines = [_clean_text(line) for line in clone.get_text().split("\n")]
    return _BLANK_LINES_RE.sub("\n\n", "\n".join(lines)).strip()


def _extract_headings(root) -> list[Heading]:
    return [
        Heading(level=int(tag.name[1]), text=_clean_text(tag.get_text(" ")), order=index)
        for index, tag in enumerate(root.find_all(HEADING_TAGS))
    ]


def _extract_images(root) -> list[Image]:
    return [
        Image(
            src=img.get("src", ""),
            alt=img.get("alt"),
            title=img.get("title"),
            width=_int_attr(img.get("width")),
            height=_int_attr(img.get("height")),
        )
        for img in root.find_all("img")
    ]


def _extract_links(root, base_url: str) -> list[Link]:
    links = []
    for anchor in root.find_all("a", href=True):
        href = anchor.get("href", "")
        rel = anchor.get("rel") or []
        if isinstance(rel, str):
            rel = rel.split()
        links.append(Link(
            href=href,
            text=_clean_text(anchor.get_text(" ")),
            is_external=is_external_link(href, base_url),
            is_nofollow="nofollow" in [r.lower() for r in rel],
            rel=" ".join(rel) or None,
            target=anchor.get("target"),
        ))
    return links


def _extract_videos(root) -> list[Video]:
    videos = []
    for element in root.find_all(["video", "iframe"]):
        src = element.get("src", "")
        if element.name == "iframe" and not ("youtube" in src or "vimeo" in src):
            continue
        videos.append(Video(src=src, kind=element.name, title=element.get("title")))
    return videos


def _extract_paragraphs(root) -> list[str]:
    paragraphs = []
    for p in root.find_all("p"):
        text = _clean_text(p.get_text(" "))
        if text:
            paragraphs.append(text)
    return paragraphs


def _extract_author(soup: BeautifulSoup) -> str | None:
    for selector in AUTHOR_SELECTORS:
        element = soup.select_one(selector)
        if element is None:
            continue
        value = element.get("content") if element.name == "meta" else element.get_text(" ")
        if value and value.strip():
            return _clean_text(value)
    return None


def _extract_published_date(soup: BeautifulSoup) -> str | None:
    for selector in DATE_SELECTORS:
        element = soup.select_one(selector)
        if element is None:
            continue
        raw = element.get("content") or element.get("datetime") or element.get_text()
        raw = (raw or "").strip()
        if not raw:
            continue
        try:
            return datetime.fromisoformat(raw.replace("Z", "+00:00")).isoformat()
        except ValueError:
            continue
    return None


def _extract_structured_data(html: str, base_url: str) -> list[dict]:
    """Extract JSON-LD and microdata items; malformed markup yields nothing."""
    try:
        data = extruct.extract(
            html,
            base_url=base_url or None,
            syntaxes=["json-ld", "microdata"],
            uniform=True,
        )
    except Exception as exc:
        logger.debug("Structured data extraction failed: %s", exc)
        return []

    items = []
    for syntax in ("json-ld", "microdata"):
        for item in data.get(syntax, []):
            if isinstance(item, dict):
                items.append(item)
    return items[:20]


def extract_structure(html: str, options: ExtractionOptions | None = None) -> StructuralSnapshot:
    """Build a structural snapshot of an HTML document.

    Args:
        html: Raw HTML string
        options: Optional content scoping and base URL

    Returns:
        StructuralSnapshot of the analyzed content

    Raises:
        ExtractionError: If a selector is invalid or the document has neither
            a title nor any text
    """
    options = options or ExtractionOptions()
    soup = BeautifulSoup(html or "", "lxml")

    title = _clean_text(soup.title.get_text()) if soup.title else ""
    description_tag = soup.find("meta", attrs={"name": "description"})
    meta_description = (
        _clean_text(description_tag["content"])
        if description_tag and description_tag.get("content") is not None
        else None
    )

    base_tag = soup.find("base", href=True)
    base_url = options.base_url or (base_tag["href"] if base_tag else "")

    author = _extract_author(soup)
    published_date = _extract_published_date(soup)
    structured_data = _extract_structured_data(html, base_url)

    root = _select_content_root(soup, options)
    text_content = _extract_text(root)

    if not title and not text_content:
        raise ExtractionError("No meaningful title or text content found")

    return StructuralSnapshot(
        title=title,
        meta_description=meta_description,
        headings=_extract_headings(root),
        images=_extract_images(root),
        links=_extract_links(root, base_url),
        videos=_extract_videos(root),
        paragraphs=_extract_paragraphs(root),
        text_content=text_content,
        word_count=count_words(text_content),
        text_stats=analyze_text(text_content, settings.extraction.reading_words_per_minute),
        language=detect_language(text_content),
        author=author,
        published_date=published_date,
        structured_data=structured_data,
    )
