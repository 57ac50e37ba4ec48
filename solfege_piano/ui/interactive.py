"""交互式界面基础功能模块"""

from typing import List, Optional
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.text import Text
from rich.table import Table


class InteractiveManager:
    """交互式界面管理器 - 提供通用的控制台输出功能"""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    def show_welcome(self, title: str = "Solfège Piano 视唱听写"):
        """显示欢迎信息"""
        welcome_text = Text(title, style="bold cyan")
        panel = Panel(
            welcome_text,
            title="🎹 欢迎",
            border_style="cyan",
            padding=(1, 2),
        )
        self.console.print(panel)
        self.console.print()

    def show_error(self, message: str):
        """显示错误信息"""
        self.console.print(f"[red]❌ {escape(message)}[/red]")

    def show_success(self, message: str):
        """显示成功信息"""
        self.console.print(f"[green]✅ {escape(message)}[/green]")

    def show_warning(self, message: str):
        """显示警告信息"""
        self.console.print(f"[yellow]⚠️ {escape(message)}[/yellow]")

    def show_info(self, message: str):
        """显示信息"""
        self.console.print(f"[blue]ℹ️ {escape(message)}[/blue]")

    def show_table(
        self,
        title: str,
        headers: List[str],
        rows: List[List[str]],
        show_lines: bool = False,
    ):
        """
        显示表格

        Args:
            title: 表格标题
            headers: 表头
            rows: 行数据
            show_lines: 是否显示行分割线
        """
        table = Table(
            title=title,
            show_header=True,
            header_style="bold cyan",
            show_lines=show_lines,
        )

        for header in headers:
            table.add_column(header)

        for row in rows:
            table.add_row(*row)

        self.console.print(table)
