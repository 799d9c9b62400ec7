"""SolMint console styling."""

from __future__ import annotations

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.text import Text
from rich.theme import Theme

SOLMINT_THEME = Theme(
    {
        "solmint.banner.primary": "bold #9945FF",
        "solmint.banner.secondary": "bold #14F195",
        "solmint.header": "bold #A855F7",
        "solmint.menu.key": "bold #14F195",
        "solmint.menu.label": "#E6FFFA",
        "solmint.info": "#38BDF8",
        "solmint.success": "bold #14F195",
        "solmint.warning": "#FBBF24",
        "solmint.error": "bold #FB7185",
        "solmint.text.secondary": "#94A3B8",
    }
)

ROLE_STYLES: dict[str, str] = {
    "system": "solmint.menu.label",
    "success": "solmint.success",
    "warning": "solmint.warning",
    "error": "solmint.error",
}


def themed_console(**kwargs) -> Console:
    return Console(theme=SOLMINT_THEME, **kwargs)


def render_banner(version: str) -> Panel:
    title = Text()
    title.append("SolMint", style="solmint.banner.primary")
    title.append(" token manager", style="solmint.banner.secondary")
    subtitle = Text(f"v{version}", style="solmint.text.secondary")
    return Panel(title, subtitle=subtitle, box=box.ROUNDED, expand=False)


__all__ = ["ROLE_STYLES", "SOLMINT_THEME", "render_banner", "themed_console"]
