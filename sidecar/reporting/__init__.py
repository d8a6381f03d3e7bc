from .renderer import GENERATOR_NAME, TEMPLATES, metadata_footer, render_report

__all__ = ["GENERATOR_NAME", "TEMPLATES", "metadata_footer", "render_report"]
