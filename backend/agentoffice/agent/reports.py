from pathlib import Path

from jinja2 import Environment, FileSystemLoader, StrictUndefined

from agentoffice.agent.state import utcnow


class ReportRenderer:
    """Renders the Markdown reports the office agents hand back as results."""

    def __init__(self, template_dir: Path | None = None):
        template_dir = template_dir or Path(__file__).parent / "templates"
        self.env = Environment(
            loader=FileSystemLoader(str(template_dir)),
            keep_trailing_newline=False,
            trim_blocks=True,
            lstrip_blocks=True,
            undefined=StrictUndefined,
        )

    def render(self, name: str, **context) -> str:
        template = self.env.get_template(f"{name}.md.j2")
        context.setdefault("generated_at", utcnow().strftime("%Y-%m-%d %H:%M UTC"))
        return template.render(**context)


report_renderer = ReportRenderer()


def render_report(name: str, **context) -> str:
    return report_renderer.render(name, **context)
