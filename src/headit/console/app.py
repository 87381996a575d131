"""Interactive console application for headit."""

from prompt_toolkit import PromptSession
from rich.console import Console
from rich.panel import Panel

from headit.cli_commands.shared import render_rules_table
from headit.console.completer import CommandCompleter
from headit.console.history import HistoryManager
from headit.console.router import InputRouter, RoutedInput, parse_switch
from headit.modules.session import Editor, Scope, SyncSession, TextEdited, UIMode
from headit.modules.sync import SyncResult
from headit.utils.async_utils import safe_async_run

BANNER = """[bold green]headit console[/bold green]

[dim]Rules:[/dim]
  [cyan]list[/cyan]                     - Show rules of the current host
  [cyan]add[/cyan] KEY VALUE | KEY: VALUE - Add a rule
  [cyan]set[/cyan] N key|value TEXT       - Edit a rule (synced after typing stops)
  [cyan]toggle[/cyan] N \\[on|off], [cyan]remove[/cyan] N, [cyan]all[/cyan] on|off
  [cyan]text[/cyan]                     - Edit the current host's rules as text
  [cyan]show[/cyan]                     - Print the text form

[dim]Session:[/dim]
  [cyan]host[/cyan] NAME, [cyan]scope[/cyan] scoped|global, [cyan]mode[/cyan] table|text
  [cyan]sync[/cyan] \\[force], [cyan]config[/cyan], [cyan]history[/cyan], [cyan]clear[/cyan], [cyan]exit[/cyan]
"""


class ConsoleApp:
    """Interactive console driving one SyncSession."""

    def __init__(self, session: SyncSession, history: HistoryManager | None = None) -> None:
        self.session = session
        self.console = Console()
        self.history = history or HistoryManager()
        self.completer = CommandCompleter()
        self.router = InputRouter()
        self.running = False
        self.prompt: PromptSession | None = None
        self.session.on_sync(self._report_sync)

    def _print_banner(self) -> None:
        self.console.print(Panel(BANNER, border_style="green"))

    def _build_prompt(self) -> str:
        """Build context-aware prompt string."""
        mode = self.session.mode
        if mode.scope is Scope.GLOBAL:
            target = "*"
        else:
            target = self.session.host or "no host"
            if len(target) > 24:
                target = target[:21] + "..."
        suffix = "/text" if mode.editor is Editor.FREE_TEXT else ""
        return f"headit[{target}{suffix}]> "

    def _report_sync(self, result: SyncResult) -> None:
        if result.skipped:
            return
        if result.ok:
            self.console.print(f"[dim]synced {result.hosts} host(s)[/dim]")
        else:
            self.console.print(f"[yellow]sync failed: {result.error}[/yellow]")

    def run(self) -> None:
        """Run the console until the user exits."""
        safe_async_run(self.run_async())

    async def run_async(self) -> None:
        self.prompt = PromptSession(
            history=self.history.get_history(),
            completer=self.completer,
        )
        await self.session.activate()
        self._print_banner()
        self.running = True
        try:
            while self.running:
                try:
                    line = await self.prompt.prompt_async(self._build_prompt())
                except KeyboardInterrupt:
                    continue
                except EOFError:
                    break
                await self.handle_line(line)
        finally:
            await self.session.deactivate()
            self.console.print("[dim]Goodbye.[/dim]")

    async def handle_line(self, line: str) -> None:
        """Route one input line and apply it."""
        try:
            routed = self.router.route(line)
            if routed.event is not None:
                self.session.emit(routed.event)
                if routed.event.structural:
                    self._print_rules()
            elif routed.action:
                await self._handle_action(routed)
        except (IndexError, KeyError, TypeError, ValueError) as exc:
            message = exc.args[0] if exc.args else exc
            self.console.print(f"[red]{message}[/red]")

    async def _handle_action(self, routed: RoutedInput) -> None:
        action, args = routed.action, routed.args
        session = self.session

        if action == "exit":
            self.running = False
        elif action == "list":
            self._print_rules()
        elif action == "show":
            text = session.render_text()
            if text:
                self.console.print(text, markup=False, highlight=False)
            else:
                self.console.print("[dim](no rules)[/dim]")
        elif action == "text":
            await self._edit_text()
        elif action == "host":
            if len(args) != 1:
                raise ValueError("Usage: host NAME")
            await session.debounce.flush()
            session.host = args[0]
            self._print_rules()
        elif action == "scope":
            if len(args) != 1:
                raise ValueError("Usage: scope scoped|global")
            await session.debounce.flush()
            session.mode = UIMode.parse(args[0], session.mode.editor.value)
            self._print_rules()
        elif action == "mode":
            if len(args) != 1:
                raise ValueError("Usage: mode table|text")
            session.mode = UIMode.parse(session.mode.scope.value, args[0])
        elif action == "sync":
            force = bool(args) and (args[0].lower() == "force" or parse_switch(args[0]))
            await session.debounce.flush()
            await session.sync_now(force=force)
        elif action == "config":
            settings = session.settings
            self.console.print(f"endpoint={settings.base_url}")
            self.console.print(f"default-enabled={str(settings.default_enabled).lower()}")
        elif action == "history":
            for entry in self.history.get_recent():
                self.console.print(f"  {entry}", markup=False)
        elif action == "clear":
            self.console.clear()
        elif action == "help":
            self._print_banner()

    async def _edit_text(self) -> None:
        """Multi-line edit of the text form; Esc+Enter (or Meta+Enter) submits."""
        self.console.print(
            "[dim]Edit rules, one 'key: value' per line, '#' disables. "
            "Submit with Esc then Enter.[/dim]"
        )
        text = await self.prompt.prompt_async(
            "",
            multiline=True,
            default=self.session.render_text(),
        )
        self.session.emit(TextEdited(text))

    def _print_rules(self) -> None:
        if self.session.mode.editor is Editor.FREE_TEXT:
            text = self.session.render_text()
            self.console.print(text or "(no rules)", markup=False, highlight=False)
            return
        rows = self.session.visible_rules()
        if not rows:
            self.console.print("[dim]No rules for this host. Use 'add KEY VALUE'.[/dim]")
            return
        host = self.session.scope_host or "all hosts"
        self.console.print(render_rules_table(rows, title=f"Rules for {host}"))
