"""
Rich printer module for displaying chat results in the terminal.
"""
from typing import Optional
from rich.console import Console
from rich.markdown import Markdown
from rich.panel import Panel
from rich.text import Text

from .schemas import ChatResult

console = Console()


class RichPrinter:
    """
    Displays a ChatResult using rich.

    Replies are rendered as markdown in a green panel; failures show the
    diagnostic verbatim in a red one.

    Attributes:
        title: Title for the reply panel
        code_theme: Theme for code blocks
        inline_code_theme: Theme for inline code
        show_provider_info: Whether to show provider information in title
        border_style: Border style for the reply panel
    """

    def __init__(
        self,
        title: str = "Response",
        code_theme: str = "coffee",
        inline_code_theme: str = "monokai",
        show_provider_info: bool = True,
        border_style: str = "green",
        console: Console = console,
    ):
        self.title = title
        self.code_theme = code_theme
        self.inline_code_theme = inline_code_theme
        self.show_provider_info = show_provider_info
        self.border_style = border_style
        self.console = console
        self._result: Optional[ChatResult] = None

    def print_chat(self, result: ChatResult) -> ChatResult:
        """
        Display a chat result with rich formatting.

        Args:
            result: Result returned by ChatRelay.chat_completion()

        Returns:
            The same result for chaining
        """
        self._result = result

        if result.ok:
            panel = Panel(
                self._build_content(result.text or ""),
                title=self._build_title(self.title, result.provider),
                border_style=self.border_style,
                padding=(1, 2),
            )
        else:
            panel = Panel(
                Text(result.error or "", style="red"),
                title=self._build_title("Error", result.provider),
                border_style="red",
                padding=(1, 2),
            )

        self.console.print(panel)
        return result

    def _build_title(self, title: str, provider: Optional[str]) -> str:
        """Build the panel title."""
        title_parts = [f"[bold]{title}[/bold]"]

        if self.show_provider_info and provider:
            title_parts.append(f"[dim]({provider})[/dim]")

        return " ".join(title_parts)

    def _build_content(self, text: str):
        if not text.strip():
            return Text("(empty response)", style="dim italic")

        return Markdown(
            text,
            code_theme=self.code_theme,
            inline_code_theme=self.inline_code_theme
        )

    def get_result(self) -> Optional[ChatResult]:
        """Get the last printed result."""
        return self._result
