from datetime import datetime

from rich.console import Console
from rich.table import Table

from kubetoken.domain.token import CacheEntry

console = Console(highlight=False)
err_console = Console(stderr=True, highlight=False)


def print_error(message: str) -> None:
    err_console.print(f"[red bold]Error:[/red bold] {message}")


def print_token(token_json: str) -> None:
    console.out(token_json, highlight=False)


def print_cache_entries(entries: list[CacheEntry], now: datetime) -> None:
    if not entries:
        console.print("No cached tokens.")
        return
    table = Table(title="Cached kubetokens")
    table.add_column("Context")
    table.add_column("Namespace")
    table.add_column("Expires")
    table.add_column("State")
    for entry in entries:
        valid = entry.token.is_valid_at(now)
        state = "[green]valid[/green]" if valid else "[red]expired[/red]"
        table.add_row(
            entry.key.context_name,
            entry.key.namespace,
            entry.token.expiration_timestamp.isoformat(),
            state,
        )
    console.print(table)


def print_cleared(removed: int | None) -> None:
    if removed is None:
        console.print("[bold green]Cleared[/bold green] all cached tokens")
    else:
        console.print(f"[bold green]Removed[/bold green] {removed} cached token(s)")
