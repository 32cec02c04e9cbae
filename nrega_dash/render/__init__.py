from .renderer import DashboardRenderer, build_sections, write_text

__all__ = ["DashboardRenderer", "build_sections", "write_text"]
