"""
HTML Parser - turn raw markup into the structure the sustainability checks read.

Extracts:
- Document metadata (<title>, <meta>, <link>)
- Resource references (stylesheets, scripts, images, fonts, media)
- Semantic structure (headings, landmarks, ARIA attributes, skip links)
- Schema.org JSON-LD blocks
- Form inputs
"""
import json
import re
from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple
from urllib.parse import urljoin

from bs4 import BeautifulSoup, Doctype, Tag

from wsg_check.services.errors import ParseError


@dataclass(frozen=True)
class MetaTag:
    name: Optional[str] = None
    property: Optional[str] = None
    http_equiv: Optional[str] = None
    charset: Optional[str] = None
    content: Optional[str] = None


@dataclass(frozen=True)
class LinkRef:
    rel: Optional[str] = None
    href: Optional[str] = None
    type: Optional[str] = None
    media: Optional[str] = None


@dataclass(frozen=True)
class ResourceReference:
    """External resource referenced by the page."""
    type: str  # stylesheet | script | image | font | media | other
    url: str
    attributes: Dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class HeadingNode:
    level: int
    text: str


@dataclass(frozen=True)
class StructuredData:
    """Single JSON-LD block."""
    type: str
    data: dict


@dataclass(frozen=True)
class FormInputInfo:
    type: str
    has_label: bool
    has_autocomplete: bool
    has_inputmode: bool


@dataclass(frozen=True)
class ParsedPage:
    """Parsed representation of one HTML document."""
    title: Optional[str] = None
    lang: Optional[str] = None
    meta_tags: Tuple[MetaTag, ...] = ()
    links: Tuple[LinkRef, ...] = ()
    resources: Tuple[ResourceReference, ...] = ()
    headings: Tuple[HeadingNode, ...] = ()
    has_skip_link: bool = False
    landmarks: Tuple[str, ...] = ()
    aria_attributes: Tuple[str, ...] = ()
    structured_data: Tuple[StructuredData, ...] = ()
    doctype: Optional[str] = None
    form_inputs: Tuple[FormInputInfo, ...] = ()


SKIP_LINK_PATTERNS = [
    re.compile(r'skip.*nav', re.I),
    re.compile(r'skip.*content', re.I),
    re.compile(r'skip.*main', re.I),
    re.compile(r'jump.*content', re.I),
    re.compile(r'go.*main', re.I),
]

# Elements that carry an implicit landmark role
LANDMARK_ELEMENTS = ('header', 'nav', 'main', 'aside', 'footer', 'section', 'form')

LANDMARK_ROLES = {
    'banner', 'navigation', 'main', 'complementary',
    'contentinfo', 'search', 'form', 'region',
}

PRELOAD_TYPES = {'font': 'font', 'script': 'script', 'style': 'stylesheet', 'image': 'image'}

# Inline or in-memory URLs never cause a network request
INLINE_URL_SCHEMES = ('data:', 'blob:')


def _attrs(tag: Tag) -> Dict[str, str]:
    """Tag attributes as plain strings (multi-valued attributes are space-joined)."""
    return {
        key: ' '.join(value) if isinstance(value, list) else str(value)
        for key, value in tag.attrs.items()
    }


def _resolve(href: Optional[str], base_url: Optional[str]) -> str:
    """Absolute URL for href, or '' when it is empty or an inline data:/blob: URL."""
    if not href:
        return ''
    href = href.strip()
    if href.lower().startswith(INLINE_URL_SCHEMES):
        return ''
    if not base_url:
        return href
    try:
        return urljoin(base_url, href)
    except ValueError:
        return href


def _rel(tag: Tag) -> str:
    return _attrs(tag).get('rel', '').lower()


def parse_html(html: str, base_url: Optional[str] = None) -> ParsedPage:
    """Parse an HTML string into a ParsedPage.

    Args:
        html: Raw HTML source
        base_url: Used to resolve relative resource URLs

    Raises:
        ParseError: When the markup cannot be loaded at all
    """
    try:
        soup = BeautifulSoup(html, 'html.parser')
    except Exception as e:
        raise ParseError(f"Failed to parse HTML: {e}") from e

    # Doctype
    doctype = None
    for node in soup.contents:
        if isinstance(node, Doctype):
            doctype = f'<!DOCTYPE {node}>'
            break

    # Title / lang
    title_tag = soup.find('title')
    title = title_tag.get_text(strip=True) or None if title_tag else None
    html_tag = soup.find('html')
    lang = html_tag.get('lang') if html_tag else None

    # Meta tags
    head = soup.find('head') or soup
    meta_tags = []
    for meta in head.find_all('meta'):
        attrs = _attrs(meta)
        meta_tags.append(MetaTag(
            name=attrs.get('name'),
            property=attrs.get('property'),
            http_equiv=attrs.get('http-equiv'),
            charset=attrs.get('charset'),
            content=attrs.get('content'),
        ))

    # Head links
    links = []
    for link in head.find_all('link'):
        attrs = _attrs(link)
        links.append(LinkRef(
            rel=attrs.get('rel'),
            href=attrs.get('href'),
            type=attrs.get('type'),
            media=attrs.get('media'),
        ))

    resources = _collect_resources(soup, base_url)

    # Headings
    headings = [
        HeadingNode(level=int(h.name[1]), text=h.get_text(strip=True))
        for h in soup.find_all(['h1', 'h2', 'h3', 'h4', 'h5', 'h6'])
    ]

    # Skip link
    has_skip_link = False
    for anchor in soup.find_all('a', href=True):
        if not anchor['href'].startswith('#'):
            continue
        text = anchor.get_text(strip=True)
        aria_label = anchor.get('aria-label', '')
        if any(p.search(text) or p.search(aria_label) for p in SKIP_LINK_PATTERNS):
            has_skip_link = True
            break

    # Landmarks
    landmarks = [name for name in LANDMARK_ELEMENTS if soup.find(name)]
    for el in soup.find_all(attrs={'role': True}):
        role = _attrs(el).get('role', '').strip().lower()
        if role in LANDMARK_ROLES and role not in landmarks:
            landmarks.append(role)

    # ARIA attributes
    aria = sorted({
        key for el in soup.find_all(True) for key in el.attrs if key.startswith('aria-')
    })

    return ParsedPage(
        title=title,
        lang=lang,
        meta_tags=tuple(meta_tags),
        links=tuple(links),
        resources=tuple(resources),
        headings=tuple(headings),
        has_skip_link=has_skip_link,
        landmarks=tuple(landmarks),
        aria_attributes=tuple(aria),
        structured_data=tuple(_collect_structured_data(soup)),
        doctype=doctype,
        form_inputs=tuple(_collect_form_inputs(soup)),
    )


def _collect_resources(soup: BeautifulSoup, base_url: Optional[str]) -> list:
    resources = []

    for link in soup.find_all('link'):
        attrs = _attrs(link)
        url = _resolve(attrs.get('href'), base_url)
        if not url:
            continue
        rel = _rel(link).split()
        if 'stylesheet' in rel:
            resources.append(ResourceReference('stylesheet', url, attrs))
        elif 'preload' in rel:
            kind = PRELOAD_TYPES.get(attrs.get('as', '').lower(), 'other')
            resources.append(ResourceReference(kind, url, attrs))

    for script in soup.find_all('script', src=True):
        attrs = _attrs(script)
        url = _resolve(attrs.get('src'), base_url)
        if url:
            resources.append(ResourceReference('script', url, attrs))

    for img in soup.find_all('img'):
        attrs = _attrs(img)
        seen = set()
        url = _resolve(attrs.get('src'), base_url)
        if url:
            seen.add(url)
            resources.append(ResourceReference('image', url, attrs))
        # srcset candidates not already referenced via src
        for part in attrs.get('srcset', '').split(','):
            candidate = part.strip().split(' ')[0] if part.strip() else ''
            src_url = _resolve(candidate, base_url)
            if src_url and src_url not in seen:
                seen.add(src_url)
                resources.append(ResourceReference('image', src_url, {'srcset': attrs['srcset']}))

    for media in soup.find_all(['video', 'audio', 'source'], src=True):
        attrs = _attrs(media)
        url = _resolve(attrs.get('src'), base_url)
        if url:
            resources.append(ResourceReference('media', url, attrs))

    return resources


def _collect_structured_data(soup: BeautifulSoup) -> list:
    blocks = []
    for script in soup.find_all('script', attrs={'type': 'application/ld+json'}):
        try:
            parsed = json.loads(script.get_text())
        except json.JSONDecodeError:
            # Malformed JSON-LD is ignored
            continue
        items = parsed if isinstance(parsed, list) else [parsed]
        for item in items:
            if isinstance(item, dict):
                schema_type = item.get('@type')
                blocks.append(StructuredData(
                    type=schema_type if isinstance(schema_type, str) else 'unknown',
                    data=item,
                ))
    return blocks


def _collect_form_inputs(soup: BeautifulSoup) -> list:
    labelled_ids = {label['for'] for label in soup.find_all('label', attrs={'for': True})}

    inputs = []
    for el in soup.find_all(['input', 'select', 'textarea']):
        attrs = _attrs(el)
        if el.name == 'input' and attrs.get('type', '').lower() == 'hidden':
            continue
        input_type = attrs.get('type') or ('text' if el.name == 'input' else el.name)
        element_id = attrs.get('id')
        has_label = (element_id is not None and element_id in labelled_ids) or el.find_parent('label') is not None
        inputs.append(FormInputInfo(
            type=input_type,
            has_label=has_label,
            has_autocomplete='autocomplete' in attrs,
            has_inputmode='inputmode' in attrs,
        ))
    return inputs
