"""
CLI for codepack.

Runs the pack pipeline over one or more directories and reports statistics.
Rendering the packed document is left to downstream tools.
"""

import logging
import sys
from pathlib import Path
from typing import Optional

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table

from codepack.core.config import PackConfig, load_config
from codepack.core.errors import CodepackError
from codepack.core.file_walker import parse_stdin_paths
from codepack.core.token_tree import render_token_tree
from codepack.services import PackService, PipelineResult

# Initialize Rich Console
console = Console()
err_console = Console(stderr=True)

app = typer.Typer(
    name="codepack",
    help="codepack - Pack repository files into AI-ready content",
    add_completion=False,
)


def _configure_logging(config: PackConfig) -> None:
    level = getattr(logging, str(config.logging.level).upper(), logging.INFO)
    logging.basicConfig(level=level, format=config.logging.format)


def build_config(
    config_path: Optional[Path] = None,
    include: Optional[list[str]] = None,
    ignore: Optional[list[str]] = None,
    compress: Optional[bool] = None,
    remove_comments: Optional[bool] = None,
    remove_empty_lines: Optional[bool] = None,
    truncate_base64: Optional[bool] = None,
    no_security_check: bool = False,
    workers: Optional[int] = None,
    token_tree: bool = False,
    token_tree_threshold: Optional[int] = None,
    top_files: Optional[int] = None,
) -> PackConfig:
    """
    Build the effective configuration.

    Precedence, lowest first: defaults, config file, CODEPACK_* environment
    variables (including those from .env), command-line flags.
    """
    load_dotenv()
    cfg = load_config(config_path, apply_env=True)

    if include:
        cfg.include = [p.strip() for item in include for p in item.split(",") if p.strip()]
    if ignore:
        cfg.ignore.custom_patterns.extend(
            p.strip() for item in ignore for p in item.split(",") if p.strip()
        )
    if compress is not None:
        cfg.output.compress = compress
    if remove_comments is not None:
        cfg.output.remove_comments = remove_comments
    if remove_empty_lines is not None:
        cfg.output.remove_empty_lines = remove_empty_lines
    if truncate_base64 is not None:
        cfg.output.truncate_base64 = truncate_base64
    if no_security_check:
        cfg.security.enable_security_check = False
    if workers is not None:
        cfg.processing.max_workers = workers
    if token_tree_threshold is not None:
        cfg.output.token_count_tree = token_tree_threshold
    elif token_tree:
        cfg.output.token_count_tree = True
    if top_files is not None:
        cfg.output.top_files_length = top_files

    return cfg


def _print_result(result: PipelineResult, cfg: PackConfig) -> None:
    if result.top_files:
        table = Table(title=f"Top {len(result.top_files)} Files by Tokens", border_style="blue")
        table.add_column("#", justify="right", style="dim")
        table.add_column("File", style="cyan")
        table.add_column("Tokens", justify="right")
        table.add_column("Chars", justify="right")
        for idx, stats in enumerate(result.top_files, 1):
            table.add_row(str(idx), stats.path, f"{stats.token_count:,}", f"{stats.char_count:,}")
        console.print(table)

    threshold = cfg.output.token_tree_threshold()
    if threshold is not None and result.token_tree is not None:
        title = "Token Count Tree"
        if threshold > 0:
            title += f" (≥{threshold} tokens)"
        lines = render_token_tree(result.token_tree, threshold)
        console.print(Panel("\n".join(lines) or "(empty)", title=title, border_style="dim", expand=False))

    if result.security_findings:
        console.print("\n[bold yellow]Suspicious files excluded:[/bold yellow]")
        for finding in result.security_findings:
            console.print(f"  - {finding.path} [dim]({', '.join(finding.categories)})[/dim]")

    # Summary Panel
    summary = Table.grid(padding=1)
    summary.add_column(style="bold")
    summary.add_column()
    summary.add_row("Total Files:", f"{result.total_files:,}")
    summary.add_row("Total Chars:", f"{result.total_chars:,}")
    summary.add_row("Total Tokens:", f"{result.total_tokens:,}")
    if result.has_secrets:
        summary.add_row("Suspicious:", f"[yellow]{len(result.suspicious_files)}[/yellow]")
    else:
        summary.add_row("Security:", "[green]No suspicious files detected[/green]")

    console.print(
        Panel(
            summary,
            title="[bold green]Pack Complete[/bold green]",
            border_style="green",
            expand=False,
        )
    )


@app.command()
def pack(
    directories: list[Path] = typer.Argument(..., help="Directories to pack"),
    config_path: Optional[Path] = typer.Option(
        None, "--config", "-c", help="Path to a YAML or JSON config file"
    ),
    include: Optional[list[str]] = typer.Option(
        None, "--include", help="Include glob (repeatable or comma separated)"
    ),
    ignore: Optional[list[str]] = typer.Option(
        None, "--ignore", "-i", help="Additional ignore glob (repeatable or comma separated)"
    ),
    compress: Optional[bool] = typer.Option(
        None, "--compress/--no-compress", help="Keep only signatures via Tree-sitter"
    ),
    remove_comments: Optional[bool] = typer.Option(
        None, "--remove-comments/--keep-comments", help="Strip comments"
    ),
    remove_empty_lines: Optional[bool] = typer.Option(
        None, "--remove-empty-lines/--keep-empty-lines", help="Drop blank lines"
    ),
    truncate_base64: Optional[bool] = typer.Option(
        None, "--truncate-base64/--keep-base64", help="Shorten embedded base64 data"
    ),
    no_security_check: bool = typer.Option(
        False, "--no-security-check", help="Do not scan files for secrets"
    ),
    workers: Optional[int] = typer.Option(
        None, "--workers", "-w", help="Number of parallel workers"
    ),
    token_tree: bool = typer.Option(False, "--token-tree", help="Show the token count tree"),
    token_tree_threshold: Optional[int] = typer.Option(
        None, "--token-tree-threshold", help="Show the tree, hiding entries below N tokens"
    ),
    top_files: Optional[int] = typer.Option(
        None, "--top-files", "-n", help="Number of files in the top files table"
    ),
    stdin: bool = typer.Option(
        False, "--stdin", help="Read file paths to include from standard input"
    ),
):
    """Pack directories and report token statistics."""
    try:
        cfg = build_config(
            config_path=config_path,
            include=include,
            ignore=ignore,
            compress=compress,
            remove_comments=remove_comments,
            remove_empty_lines=remove_empty_lines,
            truncate_base64=truncate_base64,
            no_security_check=no_security_check,
            workers=workers,
            token_tree=token_tree,
            token_tree_threshold=token_tree_threshold,
            top_files=top_files,
        )
        _configure_logging(cfg)

        if stdin:
            cfg.stdin_file_paths = parse_stdin_paths(sys.stdin, cfg.cwd)

        console.print(f"[bold blue]Packing[/bold blue] {', '.join(str(d) for d in directories)}...")
        result = PackService(cfg).run(directories)
        _print_result(result, cfg)

    except (CodepackError, FileNotFoundError) as e:
        err_console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)


@app.command("show-config")
def show_config(
    config_path: Optional[Path] = typer.Option(
        None, "--config", "-c", help="Path to a YAML or JSON config file"
    ),
):
    """Print the effective configuration as YAML."""
    try:
        cfg = build_config(config_path=config_path)
    except (CodepackError, FileNotFoundError) as e:
        err_console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)

    console.print(Syntax(cfg.to_yaml(), "yaml", theme="monokai", background_color="default"))


def main():
    """Entry point for the codepack command."""
    app()


if __name__ == "__main__":
    main()
