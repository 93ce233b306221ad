"""Skills extraction.

Walks the page's "Skills" section when one exists and falls back to
pattern-matching the whole body text. The last fallback (skills derived from
project technologies) lives in the content extractor, since it needs the
extracted projects.
"""

import re

from bs4 import BeautifulSoup, Tag

from ..models import Skill
from .heuristics import categorize_skill, categorize_skill_by_section, is_skill_section

HEADING_TAGS = ("h1", "h2", "h3", "h4", "h5", "h6")
SKILL_DELIMITERS = re.compile(r"[,•·\n\r]+")
_SKILL_LIST = r"[:\s]+([\w\s,•·\n\r-]+?)(?:\n\n|\r\r|$)"
BODY_SKILL_PATTERNS = (
    re.compile(r"(?:Skills?|Technologies?|Tools?)" + _SKILL_LIST, re.I),
    re.compile(r"(?:Design|Frontend|Backend|Tools?)" + _SKILL_LIST, re.I),
)

SECTION_PROFICIENCY = 80
INFERRED_PROFICIENCY = 75
MAX_BLOCK_LENGTH = 500


def split_skill_tokens(text: str) -> list[str]:
    """Split a block of text into candidate skill names.

    Keeps tokens of 2-49 characters that are neither pure numbers nor URLs.
    """
    tokens = []
    for raw in SKILL_DELIMITERS.split(text):
        token = raw.strip()
        if not 2 <= len(token) < 50:
            continue
        if token.isdigit() or "http" in token:
            continue
        tokens.append(token)
    return tokens


def find_skills_heading(soup: BeautifulSoup) -> Tag | None:
    """Find the h2/h3 whose text is exactly "skills" (case-insensitive)."""
    for heading in soup.find_all(["h2", "h3"]):
        if heading.get_text(strip=True).lower() == "skills":
            return heading
    return None


def _section_blocks(heading: Tag) -> list[str]:
    """Collect the text of element siblings after ``heading`` up to the next heading."""
    blocks = []
    for sibling in heading.find_next_siblings():
        if sibling.name in HEADING_TAGS:
            break
        text = sibling.get_text("\n", strip=True)
        if 2 < len(text) < MAX_BLOCK_LENGTH:
            blocks.append(text)
    return blocks


def skills_from_section(soup: BeautifulSoup) -> list[Skill]:
    """Extract skills listed under sub-headings of the Skills section."""
    skills_heading = find_skills_heading(soup)
    if skills_heading is None or skills_heading.parent is None:
        return []

    skills: list[Skill] = []
    seen: set[str] = set()
    for category_heading in skills_heading.parent.find_all("h3"):
        section_name = category_heading.get_text(strip=True)
        if not is_skill_section(section_name):
            continue
        for block in _section_blocks(category_heading):
            for name in split_skill_tokens(block):
                if name in seen:
                    continue
                seen.add(name)
                skills.append(
                    Skill(
                        name=name,
                        category=categorize_skill_by_section(section_name, name),
                        proficiency=SECTION_PROFICIENCY,
                    )
                )
    return skills


def skills_from_body_text(soup: BeautifulSoup) -> list[Skill]:
    """Extract skills from ``Label: a, b, c`` style lists anywhere in the body."""
    body = soup.body or soup
    text = body.get_text("\n")

    skills: list[Skill] = []
    seen: set[str] = set()
    for pattern in BODY_SKILL_PATTERNS:
        for match in pattern.finditer(text):
            listed = re.sub(r"^[^:]+:", "", match.group(0)).strip()
            for name in split_skill_tokens(listed):
                if name in seen:
                    continue
                seen.add(name)
                skills.append(
                    Skill(
                        name=name,
                        category=categorize_skill(name),
                        proficiency=INFERRED_PROFICIENCY,
                    )
                )
    return skills


def skills_from_technologies(technologies: list[str]) -> list[Skill]:
    """Turn project technologies into skills, keeping first-seen order."""
    return [
        Skill(name=tech, category=categorize_skill(tech), proficiency=INFERRED_PROFICIENCY)
        for tech in dict.fromkeys(technologies)
    ]
