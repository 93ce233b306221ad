"""Keyword tables used to classify extracted content.

Everything here is a pure function of its text input. The tables are tuned
for a design-oriented portfolio, hence ``design`` as the default bucket.
"""

import re

from ..models import SkillCategory

SKILL_KEYWORDS: dict[SkillCategory, tuple[str, ...]] = {
    "frontend": (
        "react", "vue", "angular", "javascript", "typescript", "html", "css", "sass",
        "scss", "tailwind", "bootstrap", "jquery", "next.js", "nuxt", "svelte",
    ),
    "backend": (
        "node.js", "express", "django", "flask", "rails", "laravel", "php", "python",
        "java", "c#", "go", "rust", "mongodb", "mysql", "postgresql", "redis",
    ),
    "design": (
        "figma", "sketch", "adobe", "photoshop", "illustrator", "xd", "ui", "ux",
        "design", "wireframe", "prototype",
    ),
    "tools": (
        "git", "docker", "kubernetes", "aws", "azure", "gcp", "jenkins", "webpack",
        "vite", "npm", "yarn",
    ),
}

# Section heading fragment -> category, checked in order
SECTION_CATEGORIES: tuple[tuple[tuple[str, ...], SkillCategory], ...] = (
    (("design",), "design"),
    (("tools", "methods"), "tools"),
    (("frontend", "front-end"), "frontend"),
    (("backend", "back-end"), "backend"),
)

# Technologies implied by a known project title
PROJECT_TECHNOLOGIES: dict[str, tuple[str, ...]] = {
    "hypd": ("UI/UX Design", "Mobile App Design", "Figma", "Prototyping"),
    "greencloz": ("UI/UX Design", "Web Design", "Figma", "User Research"),
    "aero": ("UI/UX Design", "VR Design", "AI Integration", "Figma"),
}

# Keywords scanned in project container text, with their display names
TECHNOLOGY_KEYWORDS: dict[str, str] = {
    "react": "React",
    "vue": "Vue",
    "angular": "Angular",
    "figma": "Figma",
    "sketch": "Sketch",
    "adobe": "Adobe",
    "ui": "UI",
    "ux": "UX",
    "design": "Design",
    "prototype": "Prototype",
}

PROJECT_CATEGORIES: tuple[tuple[tuple[str, ...], str], ...] = (
    (("mobile", "app"), "mobile"),
    (("web", "website"), "web"),
    (("ui", "ux", "design"), "design"),
    (("vr", "ar"), "vr/ar"),
)

DEFAULT_SKILL_CATEGORY: SkillCategory = "design"
DEFAULT_PROJECT_CATEGORY = "design"


def _has_word(text: str, word: str) -> bool:
    """Match ``word`` in ``text`` without matching inside longer words."""
    return re.search(rf"(?<![a-z0-9]){re.escape(word)}(?![a-z0-9])", text) is not None


def categorize_skill(skill_name: str) -> SkillCategory:
    """Categorize a skill by keywords in its name."""
    skill = skill_name.lower()
    for category, keywords in SKILL_KEYWORDS.items():
        if any(keyword in skill for keyword in keywords):
            return category
    return DEFAULT_SKILL_CATEGORY


def categorize_skill_by_section(section_name: str, skill_name: str) -> SkillCategory:
    """Categorize a skill by the section heading it was listed under.

    Falls back to the skill name when the heading is not recognized.
    """
    section = section_name.lower()
    for fragments, category in SECTION_CATEGORIES:
        if any(fragment in section for fragment in fragments):
            return category
    return categorize_skill(skill_name)


def is_skill_section(heading: str) -> bool:
    """Check whether a heading names a known skill sub-section."""
    text = heading.lower()
    return any(fragment in text for fragments, _ in SECTION_CATEGORIES for fragment in fragments)


def categorize_project(title: str, description: str) -> str:
    combined = f"{title} {description}".lower()
    for words, category in PROJECT_CATEGORIES:
        if any(_has_word(combined, word) for word in words):
            return category
    return DEFAULT_PROJECT_CATEGORY


def infer_technologies(title: str, container_text: str) -> list[str]:
    """Infer project technologies from its title and surrounding text."""
    technologies: list[str] = []

    title_lower = title.lower()
    for known_title, implied in PROJECT_TECHNOLOGIES.items():
        if known_title in title_lower:
            technologies.extend(implied)
            break

    text = container_text.lower()
    for keyword, display in TECHNOLOGY_KEYWORDS.items():
        already_listed = any(keyword in tech.lower() for tech in technologies)
        if not already_listed and _has_word(text, keyword):
            technologies.append(display)

    return technologies
