from datetime import UTC, datetime
from typing import Annotated

import typer

from kubetoken.cache.factory import create_token_cache
from kubetoken.cli._logging import configure_logging
from kubetoken.cli._output import print_cache_entries, print_cleared, print_error, print_token
from kubetoken.cli.factory import build_token_context
from kubetoken.config import DEFAULT_CONFIG_PATH, create_config
from kubetoken.exceptions import KubetokenException

app = typer.Typer(help="Issue and cache namespace-scoped Kubernetes tokens.")
cache_app = typer.Typer(help="Inspect and clear the local token cache.")
app.add_typer(cache_app, name="cache")


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable DEBUG logging")] = False,
) -> None:
    """Kubernetes token helper for kubectl exec credentials."""
    configure_logging(verbose=verbose)
    if ctx.invoked_subcommand is None:
        raise typer.Exit()


_ConfigOpt = Annotated[str, typer.Option("--config", help="Path to the kubetoken YAML config")]
_ContextOpt = Annotated[str | None, typer.Option("--context", "-c", help="Context name (defaults to current_context)")]
_NamespaceOpt = Annotated[str | None, typer.Option("--namespace", "-n", help="Namespace the token is scoped to")]


@app.command()
def get(
    context: _ContextOpt = None,
    namespace: _NamespaceOpt = None,
    token: Annotated[str | None, typer.Option("--token", help="Bearer credential for the context")] = None,
    no_cache: Annotated[bool, typer.Option("--no-cache", help="Skip cached tokens and always fetch")] = False,
    config: _ConfigOpt = DEFAULT_CONFIG_PATH,
) -> None:
    """Print a Kubernetes token for a context and namespace, fetching it if needed."""
    try:
        with build_token_context(context, namespace, token, config_path=config) as token_ctx:
            cached = None if no_cache else token_ctx.cache.get(token_ctx.context_name, token_ctx.namespace)
            print_token(cached if cached is not None else token_ctx.client.get_kube_token())
    except KubetokenException as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e


@cache_app.command("list")
def list_cmd(config: _ConfigOpt = DEFAULT_CONFIG_PATH) -> None:
    """List cached tokens and whether they are still valid."""
    try:
        entries = create_token_cache(create_config(config)).entries()
    except KubetokenException as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e
    print_cache_entries(entries, datetime.now(UTC))


@cache_app.command("clear")
def clear_cmd(
    context: _ContextOpt = None,
    namespace: _NamespaceOpt = None,
    config: _ConfigOpt = DEFAULT_CONFIG_PATH,
) -> None:
    """Remove cached tokens for a context, one namespace of it, or everything."""
    if namespace is not None and context is None:
        print_error("--namespace requires --context")
        raise typer.Exit(code=1)
    try:
        cache = create_token_cache(create_config(config))
        if context is None:
            cache.clear()
            removed = None
        else:
            removed = cache.invalidate(context, namespace)
    except KubetokenException as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e
    print_cleared(removed)
