"""Content extraction for the legacy portfolio page.

Turns one fetched HTML document into projects, personal info, skills and an
image inventory using layered DOM heuristics. The source markup is not under
our control, so every extractor is best-effort: missing data yields empty
lists or sentinel values. Only a total fetch failure raises.
"""

import asyncio
import re
from pathlib import PurePosixPath
from urllib.parse import urljoin, urlparse

import httpx
from bs4 import BeautifulSoup, Tag

from ..config import ScrapingOptions
from ..errors import ContentExtractionError, ErrorHandler
from ..models import ExtractedContent, ExtractedImage, ImageType, PersonalInfo, Project, Skill
from ..utils.logging import MigrationLogger
from .fetcher import HtmlFetcher
from .heuristics import categorize_project, infer_technologies
from .personal_info import extract_personal_info
from .skills import skills_from_body_text, skills_from_section, skills_from_technologies

HEADING_TAGS = ["h1", "h2", "h3", "h4", "h5", "h6"]
BACKGROUND_IMAGE_PATTERN = re.compile(r"background-image:\s*url\(['\"]?([^'\")]+)['\"]?\)", re.I)
PROJECT_CONTAINER_CLASSES = ("project", "portfolio-item", "work-item")
PROJECT_TITLE_PATTERN = re.compile(r"^[A-Z][a-zA-Z\s]+$")

LOCAL_IMAGE_DIRS: dict[ImageType, str] = {
    "project": "/projects",
    "profile": "/images/profile",
    "hero": "/images/hero",
    "gallery": "/images/gallery",
}


class ContentExtractor:
    """Extract structured portfolio content from the legacy site.

    Each ``extract_*`` coroutine fetches the page on its own, so the four
    extractions are independently retryable and independently fallible.
    """

    KNOWN_PROJECT_TITLES: tuple[str, ...] = ("HYPD", "GreenCloz", "Aero")
    GALLERY_ALT = "Gallery Image"
    PROFILE_ALT_MARKERS: tuple[str, ...] = ("UI/UX Designer",)
    EXCLUDED_PATH_MARKERS: tuple[str, ...] = ("/about/",)
    PROJECT_PATH_MARKER = "/home/"
    LIVE_HOSTS: tuple[str, ...] = ("behance.net", "dribbble.com")
    MIN_DESCRIPTION_LENGTH = 20
    MAX_TITLE_LENGTH = 50

    def __init__(
        self,
        options: ScrapingOptions,
        logger: MigrationLogger | None = None,
        client: httpx.AsyncClient | None = None,
        known_titles: tuple[str, ...] | None = None,
    ) -> None:
        """Initialize the extractor.

        Args:
            options: Source URL, timeout and retry configuration
            logger: Run logger shared with the rest of the migration
            client: Optional HTTP client (injected in tests)
            known_titles: Project titles recognized in alt text and headings
        """
        self.options = options
        self._logger = logger or MigrationLogger()
        self._fetcher = HtmlFetcher(
            timeout=options.timeout,
            retry_attempts=options.retry_attempts,
            retry_delay=options.retry_delay,
            client=client,
            logger=self._logger,
        )
        self.known_titles = known_titles or self.KNOWN_PROJECT_TITLES

    async def _load(self) -> BeautifulSoup:
        result = await self._fetcher.fetch(self.options.base_url)
        return BeautifulSoup(result.content, "html.parser")

    async def extract_all_content(self) -> ExtractedContent:
        """Run the four extractions concurrently.

        The first failure cancels the extractions still running.

        Raises:
            ContentExtractionError: Wrapping the first extraction failure
        """
        self._logger.info(f"Starting content extraction from {self.options.base_url}")
        try:
            async with asyncio.TaskGroup() as group:
                projects = group.create_task(self.extract_projects())
                personal_info = group.create_task(self.extract_personal_info())
                skills = group.create_task(self.extract_skills())
                images = group.create_task(self.extract_images())
        except ExceptionGroup as group_error:
            first = group_error.exceptions[0]
            cause = ErrorHandler.handle_error(first, "content extraction")
            self._logger.error("Failed to extract content", cause)
            raise ContentExtractionError(
                f"Content extraction failed: {cause.message}",
                stage="extract_all_content",
                cause=cause,
            ) from first

        return ExtractedContent(
            projects=projects.result(),
            personal_info=personal_info.result(),
            skills=skills.result(),
            images=images.result(),
        )

    # -- projects ------------------------------------------------------------

    async def extract_projects(self) -> list[Project]:
        """Extract projects, image-driven first, heading-driven as fallback."""
        self._logger.info("Extracting projects...")
        soup = await self._load()
        return self.parse_projects(soup)

    def parse_projects(self, soup: BeautifulSoup) -> list[Project]:
        candidates = [img for img in soup.find_all("img") if self._is_project_image(img)]
        self._logger.debug(f"Found {len(candidates)} potential project images")

        projects = self._projects_from_images(soup, candidates)
        if not projects:
            self._logger.warn("No projects found through images, trying heading-based extraction")
            projects = self._projects_from_headings(soup)

        self._logger.info(f"Successfully extracted {len(projects)} projects")
        return projects

    def _is_project_image(self, img: Tag) -> bool:
        alt = str(img.get("alt", ""))
        src = str(img.get("src", ""))
        if not alt or alt == self.GALLERY_ALT:
            return False
        if any(marker in src for marker in self.EXCLUDED_PATH_MARKERS):
            return False
        if any(marker in alt for marker in self.PROFILE_ALT_MARKERS):
            return False
        if any(title in alt for title in self.known_titles):
            return True
        return self.PROJECT_PATH_MARKER in src and len(alt) < 50

    def _projects_from_images(self, soup: BeautifulSoup, images: list[Tag]) -> list[Project]:
        projects = []
        for index, img in enumerate(images, start=1):
            alt = str(img.get("alt", ""))
            src = str(img.get("src", ""))
            container = img.find_parent(["div", "section", "article"]) or img.parent
            if not src or container is None:
                continue

            title = self._container_title(container) or alt
            description = self._container_description(container)
            live_url, github_url = self._nearby_links(container)
            if not live_url and not github_url:
                live_url = self._global_live_link(soup, title)

            projects.append(
                Project(
                    id=index,
                    image=self.resolve_url(src),
                    title=title,
                    description=description or f"{title} project showcase",
                    technologies=infer_technologies(title, container.get_text(" ")),
                    live_url=live_url,
                    github_url=github_url,
                    category=categorize_project(title, description),
                )
            )
        return projects

    def _container_title(self, container: Tag) -> str | None:
        for heading in container.find_all(HEADING_TAGS):
            text = heading.get_text(strip=True)
            if 0 < len(text) < self.MAX_TITLE_LENGTH:
                return text
        return None

    def _container_description(self, container: Tag) -> str:
        for paragraph in container.find_all("p"):
            text = paragraph.get_text(" ", strip=True)
            if len(text) > self.MIN_DESCRIPTION_LENGTH:
                return text
        return ""

    def _is_live_host(self, href: str) -> bool:
        return any(host in href for host in self.LIVE_HOSTS)

    def _nearby_links(self, container: Tag) -> tuple[str | None, str | None]:
        """Search the container and its adjacent element siblings for project links."""
        live_url: str | None = None
        github_url: str | None = None

        area = [container, container.find_previous_sibling(), container.find_next_sibling()]
        anchors: list[Tag] = []
        for element in area:
            if not isinstance(element, Tag):
                continue
            if element.name == "a" and element.get("href"):
                anchors.append(element)
            anchors.extend(element.find_all("a", href=True))

        for anchor in anchors:
            href = str(anchor["href"])
            text = anchor.get_text(strip=True).lower()
            if self._is_live_host(href) or "view" in text or "project" in text:
                live_url = href
            elif "github.com" in href:
                github_url = href
        return live_url, github_url

    def _global_live_link(self, soup: BeautifulSoup, title: str) -> str | None:
        """Find a hosted-showcase link anywhere on the page that names ``title``."""
        needle = title.lower()
        live_url = None
        for anchor in soup.find_all("a", href=True):
            href = str(anchor["href"])
            text = anchor.get_text(strip=True).lower()
            if self._is_live_host(href) and (needle in href.lower() or needle in text):
                live_url = href
        return live_url

    def _projects_from_headings(self, soup: BeautifulSoup) -> list[Project]:
        projects = []
        for index, heading in enumerate(soup.find_all("h3"), start=1):
            title = heading.get_text(strip=True)
            if not 2 < len(title) < self.MAX_TITLE_LENGTH:
                continue
            if not (
                any(known in title for known in self.known_titles)
                or PROJECT_TITLE_PATTERN.match(title)
            ):
                continue

            container = heading.find_parent(["div", "section"])
            if container is None:
                continue
            image = container.find("img")
            image_src = str(image.get("src", "")) if isinstance(image, Tag) else ""
            if not image_src:
                continue

            paragraph = container.find("p")
            description = paragraph.get_text(" ", strip=True) if paragraph else ""
            link = container.find("a", href=True)

            projects.append(
                Project(
                    id=index,
                    image=self.resolve_url(image_src),
                    title=title,
                    description=description or f"{title} project showcase",
                    technologies=infer_technologies(title, container.get_text(" ")),
                    live_url=str(link["href"]) if isinstance(link, Tag) else None,
                    category=categorize_project(title, description),
                )
            )
        return projects

    # -- personal info -------------------------------------------------------

    async def extract_personal_info(self) -> PersonalInfo:
        """Extract owner details; unfound required fields get sentinels."""
        self._logger.info("Extracting personal information...")
        soup = await self._load()
        info = extract_personal_info(soup)
        if info.fallback_fields:
            self._logger.warn(
                "Personal info fields fell back to defaults",
                {"fields": sorted(info.fallback_fields)},
            )
        self._logger.info("Successfully extracted personal information", {"name": info.name})
        return info

    # -- skills --------------------------------------------------------------

    async def extract_skills(self) -> list[Skill]:
        """Extract skills from the Skills section, body text, or project technologies."""
        self._logger.info("Extracting skills...")
        soup = await self._load()

        skills = skills_from_section(soup)
        if not skills:
            self._logger.debug("No skills found through headings, trying body text")
            skills = skills_from_body_text(soup)

        if not skills:
            self._logger.debug("No skills section found, deriving skills from projects")
            projects = await self.extract_projects()
            skills = skills_from_technologies(
                [tech for project in projects for tech in project.technologies]
            )

        self._logger.info(f"Successfully extracted {len(skills)} skills")
        return skills

    # -- images --------------------------------------------------------------

    async def extract_images(self) -> list[ExtractedImage]:
        """Inventory every <img> and inline background image on the page."""
        self._logger.info("Extracting images...")
        soup = await self._load()
        images = self.parse_images(soup)
        self._logger.info(f"Successfully extracted {len(images)} images")
        return images

    def parse_images(self, soup: BeautifulSoup) -> list[ExtractedImage]:
        images: list[ExtractedImage] = []

        for index, img in enumerate(soup.find_all("img")):
            src = str(img.get("src", ""))
            if not src:
                continue
            image_type = self._image_type(src, str(img.get("alt", "")), img)
            images.append(self._extracted(src, image_type, index, img))

        styled = soup.find_all(style=BACKGROUND_IMAGE_PATTERN)
        offset = len(images)
        for index, element in enumerate(styled):
            match = BACKGROUND_IMAGE_PATTERN.search(str(element.get("style", "")))
            if not match:
                continue
            src = match.group(1).strip()
            image_type = self._image_type(src, "", element)
            images.append(self._extracted(src, image_type, offset + index, element))

        return images

    def _extracted(
        self, src: str, image_type: ImageType, index: int, element: Tag
    ) -> ExtractedImage:
        return ExtractedImage(
            url=self.resolve_url(src),
            local_path=self.local_path(src, image_type, index),
            type=image_type,
            project_id=self._project_id(element) if image_type == "project" else None,
        )

    def _image_type(self, src: str, alt: str, element: Tag) -> ImageType:
        src_lower = src.lower()
        alt_lower = alt.lower()

        def mentions(*words: str) -> bool:
            return any(word in src_lower or word in alt_lower for word in words)

        if mentions("project"):
            return "project"
        if mentions("profile", "avatar"):
            return "profile"
        if mentions("hero", "banner"):
            return "hero"
        if _project_ancestor(element) is not None:
            return "project"
        return "gallery"

    def _project_id(self, element: Tag) -> int | None:
        parent = _project_ancestor(element)
        if parent is None:
            return None
        raw = str(parent.get("data-id") or parent.get("id") or "")
        digits = re.sub(r"\D", "", raw)
        return int(digits) if digits else None

    @staticmethod
    def local_path(src: str, image_type: ImageType, index: int) -> str:
        """Plan the local path of an image: ``<type dir>/image-<n>.<ext>``."""
        extension = PurePosixPath(urlparse(src).path).suffix.lstrip(".") or "jpg"
        return f"{LOCAL_IMAGE_DIRS[image_type]}/image-{index + 1}.{extension}"

    def resolve_url(self, url: str) -> str:
        """Resolve ``url`` against the configured base URL."""
        if url.startswith(("http://", "https://")):
            return url
        if url.startswith("//"):
            return f"https:{url}"
        if url.startswith("/"):
            base = urlparse(self.options.base_url)
            return f"{base.scheme}://{base.netloc}{url}"
        return urljoin(self.options.base_url, url)


def _project_ancestor(element: Tag) -> Tag | None:
    """Nearest ancestor (or the element itself) with a project-like class."""
    node: Tag | None = element
    while isinstance(node, Tag):
        classes = " ".join(node.get("class") or []).lower()
        if any(marker in classes for marker in PROJECT_CONTAINER_CLASSES):
            return node
        node = node.parent
    return None
