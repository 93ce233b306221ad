"""Services layer - migration orchestration and output."""

from .content_writer import ContentWriter, skills_document
from .migration_service import MigrationUtils

__all__ = ["ContentWriter", "MigrationUtils", "skills_document"]
