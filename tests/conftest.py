"""Shared test fixtures for Portfolio Migrator."""

import logging
from collections.abc import Awaitable, Callable, Iterator

import httpx
import pytest

from portfolio_migrator.config import ScrapingOptions
from portfolio_migrator.utils.logging import LogLevel, MigrationLogger

BASE_URL = "https://portfolio.example.com/"

Handler = Callable[[httpx.Request], httpx.Response | Awaitable[httpx.Response]]
ClientFactory = Callable[[Handler], httpx.AsyncClient]

SAMPLE_PAGE = """
<!DOCTYPE html>
<html>
<head><title>Jane Doe's Portfolio</title></head>
<body>
    <div class="hero" style="background-image: url('/assets/hero-banner.jpg')">
        <header><h1>Jane Doe</h1></header>
    </div>
    <section class="about">
        <img src="/about/profile.jpg" alt="Jane Doe - UI/UX Designer">
        <p class="bio">I am a UI/UX designer with six years of experience crafting mobile apps
        and websites for growing brands.</p>
        <p class="location">Bangalore, India</p>
    </section>
    <section class="work">
        <div class="project" data-id="1">
            <img src="/home/hypd.png" alt="HYPD">
            <h3>HYPD</h3>
            <p>A mobile app for discovering fashion creators and their collections.</p>
            <a href="https://www.behance.net/gallery/hypd">View project</a>
        </div>
    </section>
    <section class="work">
        <div class="project" data-id="2">
            <img src="/home/greencloz.jpg" alt="GreenCloz">
            <h3>GreenCloz</h3>
            <p>A sustainable fashion web platform built with Figma prototypes.</p>
        </div>
    </section>
    <section class="skills">
        <h2>Skills</h2>
        <h3>Design</h3>
        <ul><li>Figma</li><li>Prototyping</li></ul>
        <h3>Tools &amp; Methods</h3>
        <p>Git, Notion</p>
    </section>
    <div class="gallery">
        <img src="/gallery/shot.webp" alt="Gallery Image">
    </div>
    <footer>
        <a href="mailto:jane@example.com">Email me</a>
        <a href="tel:+1-555-123-4567">Call</a>
        <a href="https://www.linkedin.com/in/janedoe">LinkedIn</a>
        <a href="https://github.com/janedoe">GitHub</a>
    </footer>
</body>
</html>
"""


@pytest.fixture(autouse=True)
def reset_package_logging() -> Iterator[None]:
    """Drop handlers installed by setup_logging so tests do not leak them."""
    yield
    logger = logging.getLogger("portfolio_migrator")
    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def sample_page() -> str:
    """A legacy portfolio page with projects, skills, contact links and images."""
    return SAMPLE_PAGE


@pytest.fixture
def make_client() -> ClientFactory:
    """Build an AsyncClient whose requests are answered by a handler (no network)."""

    def factory(handler: Handler) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(handler))

    return factory


@pytest.fixture
def scraping_options() -> ScrapingOptions:
    """Fast-failing scraping options for tests."""
    return ScrapingOptions(base_url=BASE_URL, timeout=1.0, retry_attempts=1, retry_delay=0)


@pytest.fixture
def run_logger() -> MigrationLogger:
    """A run logger that keeps every entry."""
    return MigrationLogger(LogLevel.DEBUG)
