"""Unit tests for package export formatting"""

from cinemind.models import AgentRole, FilmPackage, ProductionMode, StoryInput, StoryboardImage
from cinemind.storyboard.agents.storyboard_formatter_agent import StoryboardFormatterAgent


def _package(title="Echo"):
    package = FilmPackage(input=StoryInput(content="idea", title=title, mode=ProductionMode.FESTIVAL))
    package.set_artifact(AgentRole.DIRECTOR, "## Act One")
    package.set_artifact(AgentRole.PRODUCER, "Budget notes")
    return package


class TestStoryboardFormatterAgent:
    def setup_method(self):
        self.formatter = StoryboardFormatterAgent()

    def test_project_header(self):
        assert self.formatter.project_header(_package()) == "PRJ: ECHO // MOD: FESTIVAL"
        assert self.formatter.project_header(_package(title="")) == "PRJ: UNTITLED // MOD: FESTIVAL"

    def test_format_report(self):
        report = self.formatter.format_report(_package(), AgentRole.DIRECTOR)
        assert report.startswith("# Director Report")
        assert "## Act One" in report

    def test_format_report_absent_artifact(self):
        assert self.formatter.format_report(_package(), AgentRole.MARKETING) is None

    def test_format_package_orders_sections(self):
        document = self.formatter.format_package(_package())
        assert document.index("## Director") < document.index("## Producer")
        assert "## Marketing" not in document
        assert "## Storyboard" not in document

    def test_format_package_lists_storyboard(self):
        package = _package()
        package.generated_images = [
            StoryboardImage(prompt="frame a").resolved("data:image/png;base64,AAA"),
            StoryboardImage(prompt="frame b").resolved(None),
        ]
        document = self.formatter.format_package(package)
        assert "1. [Ready] frame a" in document
        assert "2. [Failed to load] frame b" in document
        assert "Success rate: 50.0%" in document

    def test_storyboard_summary(self):
        images = [
            StoryboardImage(prompt="a").resolved("data:x"),
            StoryboardImage(prompt="b").resolved(None),
            StoryboardImage(prompt="c"),
            StoryboardImage(prompt="d").resolved("data:y"),
        ]
        summary = self.formatter.storyboard_summary(images)
        assert summary == {
            "total": 4,
            "ready": 2,
            "failed": 1,
            "rendering": 1,
            "success_rate": "50.0%",
        }

    def test_storyboard_summary_empty(self):
        assert self.formatter.storyboard_summary([])["success_rate"] == "0.0%"

    def test_latest_report_is_newest_artifact(self):
        role, content = self.formatter.latest_report(_package())
        assert role == AgentRole.PRODUCER
        assert content == "Budget notes"

    def test_latest_report_before_any_artifact(self):
        package = FilmPackage(input=StoryInput(content="idea"))
        assert self.formatter.latest_report(package) is None
