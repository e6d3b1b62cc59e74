import logging
from typing import Dict, Any, List, Optional, Tuple
from datetime import datetime

from ...models import AgentRole, FilmPackage, StoryboardImage

logger = logging.getLogger(__name__)

STATUS_LABELS = {
    "rendering": "RENDERING...",
    "ready": "Ready",
    "failed": "Failed to load",
}


class StoryboardFormatterAgent:
    """Agent responsible for formatting package reports for display and export."""

    def __init__(self):
        logger.info("Initializing StoryboardFormatterAgent")

    def project_header(self, package: FilmPackage) -> str:
        title = package.input.title.strip().upper() or "UNTITLED"
        return f"PRJ: {title} // MOD: {package.input.mode.value.upper()}"

    def format_report(self, package: FilmPackage, role: AgentRole) -> Optional[str]:
        """Markdown export of a single role's artifact, or None if it is absent."""
        content = package.artifact_for(role)
        if content is None:
            return None

        return "\n".join([
            f"# {AgentRole(role).value} Report",
            "",
            f"`{self.project_header(package)}`",
            "",
            content,
            "",
        ])

    def format_package(self, package: FilmPackage) -> str:
        """Markdown export of every populated artifact plus the storyboard.

        Args:
            package: The film package to export

        Returns:
            Markdown document with sections in pipeline order
        """
        logger.info(f"Formatting package {package.id}")

        title = package.input.title.strip() or "Untitled"
        output = [
            f"# {title}",
            "",
            f"`{self.project_header(package)}`",
            "",
            f"Generated on: {datetime.now().isoformat()}",
            "",
        ]

        for role in package.populated_roles():
            output.extend([f"## {role.value}", "", package.artifact_for(role), ""])

        if package.generated_images:
            summary = self.storyboard_summary(package.generated_images)
            output.extend(["## Storyboard", "", f"Success rate: {summary['success_rate']}", ""])
            for i, image in enumerate(package.generated_images, start=1):
                output.append(f"{i}. [{STATUS_LABELS[image.status]}] {image.prompt}")
            output.append("")

        return "\n".join(output)

    def latest_report(self, package: FilmPackage) -> Optional[Tuple[AgentRole, str]]:
        """Most recent artifact in pipeline order, or None before the first role finishes."""
        populated = package.populated_roles()
        if not populated:
            return None
        role = populated[-1]
        return role, package.artifact_for(role)

    def storyboard_summary(self, images: List[StoryboardImage]) -> Dict[str, Any]:
        """Count slots by status and compute the success rate."""
        counts = {"ready": 0, "failed": 0, "rendering": 0}
        for image in images:
            counts[image.status] += 1

        total = len(images)
        rate = (counts["ready"] / total) * 100 if total else 0.0
        return {
            "total": total,
            "ready": counts["ready"],
            "failed": counts["failed"],
            "rendering": counts["rendering"],
            "success_rate": f"{rate:.1f}%",
        }
