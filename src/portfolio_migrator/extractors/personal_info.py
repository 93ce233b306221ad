"""Personal information extraction strategies.

Each field is recovered by an ordered chain of strategies. A strategy is a
plain function ``(BeautifulSoup) -> str | None``; ``first_match`` tries them
in order and returns the first value found, or ``None`` when every strategy
came up empty. Strategies are module-level so they can be tested one by one
against small HTML fixtures.
"""

import re
from collections.abc import Callable, Sequence
from urllib.parse import urlparse

from bs4 import BeautifulSoup, Tag

from ..models import (
    DEFAULT_BIO,
    DEFAULT_EMAIL,
    DEFAULT_NAME,
    DEFAULT_TITLE,
    PersonalInfo,
)

Strategy = Callable[[BeautifulSoup], str | None]

GREETINGS = frozenset({"hello", "hi", "hey", "hola", "welcome"})
SECTION_HEADINGS = frozenset(
    {"education", "experience", "skills", "projects", "about", "about me", "contact", "work"}
)

NAME_SELECTORS = (
    "h1",
    ".name",
    ".title",
    '[class*="name"]',
    "header h1",
    "header h2",
    ".hero h1",
    ".intro h1",
)
TITLE_SELECTORS = (
    ".subtitle",
    ".role",
    ".position",
    ".job-title",
    '[class*="subtitle"]',
    "h2",
    ".hero h2",
    ".intro h2",
)
BIO_SELECTORS = (
    ".bio",
    ".about",
    ".description",
    ".intro p",
    ".hero p",
    '[class*="bio"]',
    '[class*="about"]',
)
LOCATION_SELECTORS = (
    ".location",
    ".address",
    '[class*="location"]',
    '[class*="address"]',
)

# Role phrase (lowercase) -> normalized title, most specific first
ROLE_KEYWORDS: tuple[tuple[str, str], ...] = (
    ("ux/ui designer", "UX/UI Designer"),
    ("ui/ux designer", "UI/UX Designer"),
    ("ui/ux", "UI/UX Designer"),
    ("ux/ui", "UX/UI Designer"),
    ("product designer", "Product Designer"),
    ("full-stack developer", "Full-Stack Developer"),
    ("full stack developer", "Full-Stack Developer"),
    ("frontend developer", "Frontend Developer"),
    ("front-end developer", "Frontend Developer"),
    ("backend developer", "Backend Developer"),
    ("software engineer", "Software Engineer"),
    ("developer", "Developer"),
    ("designer", "Designer"),
)

SOCIAL_DOMAINS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("linkedin", ("linkedin.com",)),
    ("twitter", ("twitter.com", "x.com")),
    ("github", ("github.com",)),
    ("instagram", ("instagram.com",)),
)

EMAIL_PATTERN = re.compile(r"\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}\b")
PHONE_PATTERN = re.compile(r"(\+?1?[-.\s]?)?\(?([0-9]{3})\)?[-.\s]?([0-9]{3})[-.\s]?([0-9]{4})")

MIN_BIO_LENGTH = 50
MIN_PARAGRAPH_BIO_LENGTH = 100


def first_match(soup: BeautifulSoup, strategies: Sequence[Strategy]) -> str | None:
    """Return the first non-empty value produced by ``strategies``."""
    for strategy in strategies:
        value = strategy(soup)
        if value:
            return value
    return None


def _text(element: Tag | None, separator: str = " ") -> str:
    if element is None:
        return ""
    return " ".join(element.get_text(separator, strip=True).split())


def _first_text(soup: BeautifulSoup, selector: str) -> str:
    return _text(soup.select_one(selector))


def _page_title(soup: BeautifulSoup) -> str:
    return soup.title.get_text(strip=True) if soup.title else ""


def _body_text(soup: BeautifulSoup) -> str:
    body = soup.body or soup
    return body.get_text(" ", strip=True)


def _is_greeting(text: str) -> bool:
    return text.strip(" !,.").lower() in GREETINGS


# -- name -------------------------------------------------------------------


def name_from_title_possessive(soup: BeautifulSoup) -> str | None:
    """``"Jane's Portfolio"`` -> ``"Jane"``."""
    title = _page_title(soup)
    if "'s" not in title:
        return None
    name = title.split("'s")[0].strip()
    if name and not _is_greeting(name):
        return name
    return None


def name_from_headings(soup: BeautifulSoup) -> str | None:
    for selector in NAME_SELECTORS:
        name = _first_text(soup, selector)
        if 2 < len(name) < 50 and not _is_greeting(name):
            return name
    return None


def name_from_title_prefix(soup: BeautifulSoup) -> str | None:
    """``"Jane Doe - Designer"`` -> ``"Jane Doe"``."""
    prefix = re.split(r"[-|]", _page_title(soup))[0].strip()
    if prefix and not _is_greeting(prefix):
        return prefix
    return None


NAME_STRATEGIES: tuple[Strategy, ...] = (
    name_from_title_possessive,
    name_from_headings,
    name_from_title_prefix,
)


# -- title / role -----------------------------------------------------------


def _match_role(text: str) -> str | None:
    lowered = text.lower()
    for phrase, role in ROLE_KEYWORDS:
        if phrase in lowered:
            return role
    return None


def title_from_page_title(soup: BeautifulSoup) -> str | None:
    return _match_role(_page_title(soup))


def title_from_bio(soup: BeautifulSoup) -> str | None:
    bio = first_match(soup, BIO_STRATEGIES)
    return _match_role(bio) if bio else None


def title_from_headings(soup: BeautifulSoup) -> str | None:
    for selector in TITLE_SELECTORS:
        title = _first_text(soup, selector)
        if 5 < len(title) < 100 and title.lower() not in SECTION_HEADINGS:
            return title
    return None


# -- bio --------------------------------------------------------------------


def bio_from_selectors(soup: BeautifulSoup) -> str | None:
    for selector in BIO_SELECTORS:
        bio = _first_text(soup, selector)
        if len(bio) > MIN_BIO_LENGTH:
            return bio
    return None


def bio_from_paragraphs(soup: BeautifulSoup) -> str | None:
    for paragraph in soup.find_all("p"):
        text = _text(paragraph)
        if len(text) > MIN_PARAGRAPH_BIO_LENGTH:
            return text
    return None


BIO_STRATEGIES: tuple[Strategy, ...] = (bio_from_selectors, bio_from_paragraphs)

TITLE_STRATEGIES: tuple[Strategy, ...] = (
    title_from_page_title,
    title_from_bio,
    title_from_headings,
)


# -- contact ----------------------------------------------------------------


def _link_target(soup: BeautifulSoup, scheme: str) -> str | None:
    link = soup.find("a", href=re.compile(rf"^{scheme}:", re.IGNORECASE))
    if not isinstance(link, Tag):
        return None
    target = str(link.get("href", ""))[len(scheme) + 1 :]
    return target.split("?")[0].strip() or None


def email_from_mailto(soup: BeautifulSoup) -> str | None:
    return _link_target(soup, "mailto")


def email_from_text(soup: BeautifulSoup) -> str | None:
    match = EMAIL_PATTERN.search(_body_text(soup))
    return match.group(0) if match else None


def phone_from_tel(soup: BeautifulSoup) -> str | None:
    return _link_target(soup, "tel")


def phone_from_text(soup: BeautifulSoup) -> str | None:
    match = PHONE_PATTERN.search(_body_text(soup))
    return match.group(0).strip() if match else None


def location_from_selectors(soup: BeautifulSoup) -> str | None:
    for selector in LOCATION_SELECTORS:
        location = _first_text(soup, selector)
        if 3 < len(location) < 100:
            return location
    return None


EMAIL_STRATEGIES: tuple[Strategy, ...] = (email_from_mailto, email_from_text)
PHONE_STRATEGIES: tuple[Strategy, ...] = (phone_from_tel, phone_from_text)
LOCATION_STRATEGIES: tuple[Strategy, ...] = (location_from_selectors,)


def _host_matches(href: str, domain: str) -> bool:
    host = (urlparse(href).hostname or "").lower()
    return host == domain or host.endswith(f".{domain}")


def extract_social_links(soup: BeautifulSoup) -> dict[str, str]:
    """Map platform names to profile URLs found in anchors.

    A later matching anchor overwrites an earlier one for the same platform.
    """
    links: dict[str, str] = {}
    for anchor in soup.find_all("a"):
        href = str(anchor.get("href", ""))
        text = anchor.get_text(strip=True).lower()
        label = str(anchor.get("title", "")).lower()
        for platform, domains in SOCIAL_DOMAINS:
            if (
                any(_host_matches(href, domain) for domain in domains)
                or platform in text
                or platform in label
            ):
                links[platform] = href
                break
    return links


def extract_personal_info(soup: BeautifulSoup) -> PersonalInfo:
    """Run every strategy chain and assemble a PersonalInfo.

    Required fields that no strategy found are filled with their sentinel
    value and listed in ``fallback_fields``.
    """
    fallbacks: set[str] = set()

    def required(field_name: str, strategies: Sequence[Strategy], default: str) -> str:
        value = first_match(soup, strategies)
        if value is None:
            fallbacks.add(field_name)
            return default
        return value

    name = required("name", NAME_STRATEGIES, DEFAULT_NAME)
    title = required("title", TITLE_STRATEGIES, DEFAULT_TITLE)
    bio = required("bio", BIO_STRATEGIES, DEFAULT_BIO)
    email = required("email", EMAIL_STRATEGIES, DEFAULT_EMAIL)

    return PersonalInfo(
        name=name,
        title=title,
        bio=bio,
        email=email,
        phone=first_match(soup, PHONE_STRATEGIES),
        location=first_match(soup, LOCATION_STRATEGIES),
        social_links=extract_social_links(soup),
        fallback_fields=frozenset(fallbacks),
    )
