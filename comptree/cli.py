"""Command-line interface for comptree."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import os
import sys
from typing import Any, Dict, List

from rich.console import Console
from rich.progress import Progress
from rich.tree import Tree

from comptree.analysis.classifier import is_component, load_component_file
from comptree.builder import run_generation
from comptree.core.config import config
from comptree.core.engine.ast_handler import get_ast_handler
from comptree.core.error_handling import ComponentTreeError, InvalidRootComponentError
from comptree.models.component import ComponentTreeNode
from comptree.models.config import ProjectConfig


def _load_config(args: argparse.Namespace, console: Console) -> ProjectConfig:
    if args.config:
        project = ProjectConfig.from_file(args.config)
    elif args.root and args.src:
        project = ProjectConfig.from_dict({
            "root_component_path": args.root,
            "src_path": args.src,
            "client_path": args.client,
        })
    else:
        console.print("[bold red]Pass a config file or both --root and --src[/bold red]")
        sys.exit(1)
    if args.log_asts:
        project = project.model_copy(update={"log_asts": True})
    return project.validate_paths()


def _render(node: ComponentTreeNode, branch: Tree) -> None:
    for child in node.children:
        _render(child, branch.add(f"[bold]{child.name}[/bold] [dim]{child.path}[/dim]"))


def _generate(args: argparse.Namespace, console: Console) -> None:
    """Build the component forest for a project and print or save it."""
    try:
        project = _load_config(args, console)
        if args.raw_json or args.output:
            forest = run_generation(project)
        else:
            with Progress(transient=True) as progress:
                progress.add_task("[green]Building component trees...", total=None)
                forest = run_generation(project)
    except InvalidRootComponentError as e:
        console.print(f"[bold red]{e.message}:[/bold red] {e.path}")
        sys.exit(1)
    except ComponentTreeError as e:
        console.print(f"[bold red]{e}[/bold red]")
        if e.__cause__ is not None:
            console.print(f"[red]{e.__cause__}[/red]")
        sys.exit(1)

    output_data: List[Dict[str, Any]] = [entry.model_dump() for entry in forest]
    if args.output:
        with open(args.output, "w", encoding="utf8") as f:
            json.dump(output_data, f, indent=2)
        console.print(f"Wrote {len(output_data)} tree(s) to {args.output}")
    elif args.raw_json:
        print(json.dumps(output_data, indent=2))
    else:
        for entry in forest:
            root = entry.tree()
            tree = Tree(f"[bold green]{root.name}[/bold green] [dim]{root.path}[/dim]")
            _render(root, tree)
            console.print(tree)


def _parse(file_path: str, output: str | None, console: Console) -> None:
    """Write the serialized syntax tree of ``file_path`` as JSON."""
    if not os.path.exists(file_path):
        console.print(f"[bold red]File not found:[/bold red] {file_path}")
        sys.exit(1)
    try:
        component = asyncio.run(load_component_file(os.path.abspath(file_path)))
    except ComponentTreeError as e:
        console.print(f"[bold red]{e}[/bold red]")
        sys.exit(1)
    outfile = output or os.path.join(os.getcwd(), f"{component.name}AST.json")
    with open(outfile, "w", encoding="utf8") as f:
        json.dump(get_ast_handler().to_dict(component.root, component.code_bytes), f)
    console.print(f"Wrote syntax tree to {outfile}")


def _check(file_path: str, console: Console) -> None:
    """Report whether ``file_path`` is recognised as a component."""
    if asyncio.run(is_component(os.path.abspath(file_path))):
        console.print(f"[green]{file_path} is a component[/green]")
    else:
        console.print(f"[yellow]{file_path} is not a component[/yellow]")
        sys.exit(1)


def main() -> None:
    """Entry point for the ``comptree`` command."""

    console = Console()
    parser = argparse.ArgumentParser(description="Component dependency trees for JSX source trees")
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose output")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    parser.add_argument("--quiet", action="store_true", help="Reduce logs to errors only")
    sub = parser.add_subparsers(dest="command")

    generate_p = sub.add_parser("generate", help="Build the component forest of a project")
    generate_p.add_argument("config", nargs="?", help="JSON config file with rootComponentPath and srcPath")
    generate_p.add_argument("--root", help="Root component file")
    generate_p.add_argument("--src", help="Project source directory")
    generate_p.add_argument("--client", help="Project directory the debug logs are written under")
    generate_p.add_argument("--log-asts", action="store_true", help="Write each component's syntax tree to the log directory")
    generate_p.add_argument("--output", help="Write the forest to this file")
    generate_p.add_argument("--raw-json", action="store_true", help="Output raw JSON")

    parse_p = sub.add_parser("parse", help="Dump the syntax tree of a file to JSON")
    parse_p.add_argument("file", help="Source file path")
    parse_p.add_argument("--output", help="Output file (default: <Name>AST.json in the current directory)")

    check_p = sub.add_parser("check", help="Tell whether a file is a component")
    check_p.add_argument("file", help="Source file path")

    args = parser.parse_args()
    if getattr(args, "debug", False):
        log_level = logging.DEBUG
    elif getattr(args, "quiet", False):
        log_level = logging.ERROR
    elif getattr(args, "verbose", False):
        log_level = logging.INFO
    else:
        log_level = getattr(logging, config.get("logging", "level", "WARNING"))
    logging.basicConfig(level=log_level)

    if args.command == "generate":
        _generate(args, console)
    elif args.command == "parse":
        _parse(args.file, args.output, console)
    elif args.command == "check":
        _check(args.file, console)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
