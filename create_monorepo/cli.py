"""create-monorepo command line entry point.

Collects the answer set (interactively with Rich prompts, or from flags),
discovers templates, scaffolds the workspace and installs dependencies.

Usage::

    create-monorepo
    create-monorepo --name demo --prefix @acme --templates web,database \\
        --features eslint,changesets --yes --no-install
"""

from __future__ import annotations

import argparse
import asyncio
import shutil
import sys
from pathlib import Path

from rich.prompt import Confirm, Prompt

from .config import NAMESPACE_MARKER, ScaffoldConfig, resolve_templates_dir
from .scaffolder.discovery import discover
from .scaffolder.errors import DiscoveryError, InstallError, ScaffoldError
from .scaffolder.generator import MonorepoGenerator, install_dependencies
from .scaffolder.models import ScaffoldOptions, TemplateDescriptor
from .utils import (
    console,
    print_error,
    print_header,
    print_success,
    print_summary_table,
    print_warning,
)

EXIT_OK = 0
EXIT_FAILURE = 1


# ---------------------------------------------------------------------------
# Argument parsing
# ---------------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="create-monorepo",
        description="Scaffold a pnpm monorepo from reusable templates",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  create-monorepo\n"
            "  create-monorepo --name demo --prefix @acme --templates web,database\n"
            "  create-monorepo --name demo --features eslint,changesets --yes --no-install\n"
        ),
    )
    parser.add_argument("--name", help="Monorepo name (prompted if omitted)")
    parser.add_argument("--prefix", help="Workspace prefix, e.g. @my-org (prompted if omitted)")
    parser.add_argument(
        "--templates",
        help="Comma-separated template names (prompted if omitted; empty string for none)",
    )
    parser.add_argument(
        "--features",
        help="Comma-separated feature names (prompted if omitted; empty string for none)",
    )
    parser.add_argument("--templates-dir", type=Path, help="Templates root to scan")
    parser.add_argument(
        "--output", "-o", type=Path, default=Path("."),
        help="Parent directory of the new monorepo (default: current directory)",
    )
    parser.add_argument(
        "--yes", "-y", action="store_true",
        help="Overwrite an existing target directory without asking",
    )
    parser.add_argument(
        "--no-install", action="store_true", help="Skip the dependency install step"
    )
    return parser


def split_names(raw: str) -> list[str]:
    """``"a, b,,c"`` -> ``["a", "b", "c"]``."""
    return [part.strip() for part in raw.split(",") if part.strip()]


# ---------------------------------------------------------------------------
# Answer collection
# ---------------------------------------------------------------------------


def ask_project_name(args: argparse.Namespace) -> str:
    if args.name is not None:
        return args.name.strip()
    while True:
        value = Prompt.ask("Monorepo name", default="my-monorepo").strip()
        if value:
            return value
        print_error("Monorepo name is required")


def ask_prefix(args: argparse.Namespace) -> str:
    if args.prefix is not None:
        return args.prefix.strip()
    while True:
        value = Prompt.ask("Workspace prefix (e.g., @my-org)", default="@my-org").strip()
        if value.startswith(NAMESPACE_MARKER):
            return value
        print_error(f"Prefix should start with {NAMESPACE_MARKER}")


def ask_features(args: argparse.Namespace, config: ScaffoldConfig) -> list[str]:
    if args.features is not None:
        return split_names(args.features)
    choices = ", ".join(f"{f.value} ({f.title})" for f in config.features.available)
    console.print(f"[cyan]Available features:[/cyan] {choices}")
    raw = Prompt.ask(
        "Select monorepo features (comma-separated)",
        default=",".join(config.features.default_selection()),
    )
    return split_names(raw)


def ask_templates(
    args: argparse.Namespace, available: list[TemplateDescriptor]
) -> list[TemplateDescriptor] | None:
    """Resolve the template selection; ``None`` means an unknown name was given."""
    by_name = {t.name: t for t in available}
    if args.templates is not None:
        names = split_names(args.templates)
        unknown = [n for n in names if n not in by_name]
        if unknown:
            print_error(f"Unknown templates: {', '.join(unknown)}")
            return None
        return [by_name[n] for n in names]

    console.print("\n[cyan]Select Templates:[/cyan]")
    for template in available:
        console.print(
            f"  [bold]{template.name}[/bold] ({template.category.value}) - {template.description}"
        )
    default = ",".join(t.name for t in available if t.is_default_selected)
    while True:
        names = split_names(
            Prompt.ask("Select templates to include (comma-separated)", default=default)
        )
        unknown = [n for n in names if n not in by_name]
        if not unknown:
            return [by_name[n] for n in names]
        print_error(f"Unknown templates: {', '.join(unknown)}")


# ---------------------------------------------------------------------------
# Run
# ---------------------------------------------------------------------------


async def run(args: argparse.Namespace, config: ScaffoldConfig) -> int:
    """Drive one scaffold run and return the process exit code."""
    print_header("Monorepo Template Generator")

    project_name = ask_project_name(args)
    prefix = ask_prefix(args)
    features = ask_features(args, config)

    templates_root = resolve_templates_dir(config)
    try:
        available = await discover(templates_root, config)
    except DiscoveryError as exc:
        print_warning(f"Error discovering templates: {exc}")
        available = []

    if not available:
        print_warning(f"No templates found in {templates_root}")
        console.print("[dim]Create template directories there with template.json files[/dim]")
        return EXIT_FAILURE

    selected = ask_templates(args, available)
    if selected is None:
        return EXIT_FAILURE

    try:
        options = ScaffoldOptions(
            project_name=project_name,
            namespace_prefix=prefix,
            selected_templates=tuple(selected),
            selected_features=tuple(features),
        )
    except ValueError as exc:
        print_error(f"Invalid options: {exc}")
        return EXIT_FAILURE

    target_dir = Path(args.output) / options.project_name
    if target_dir.exists():
        overwrite = args.yes or Confirm.ask(
            f"Directory {options.project_name} already exists. Overwrite?", default=False
        )
        if not overwrite:
            return EXIT_OK
        await asyncio.to_thread(shutil.rmtree, target_dir)

    print_success(f"\nCreating monorepo in {target_dir}...")
    generator = MonorepoGenerator(config, templates_root)
    try:
        await generator.generate(target_dir, options)
    except (ScaffoldError, OSError) as exc:
        print_error(f"Error: {exc}")
        return EXIT_FAILURE

    if not (args.no_install or config.skip_install):
        try:
            await install_dependencies(target_dir, config)
        except InstallError as exc:
            print_warning(f"\nFailed to install dependencies automatically. ({exc})")
            console.print(
                f"[dim]Please run: cd {options.project_name} && "
                f"{config.package_manager.name} install[/dim]\n"
            )

    print_success("\nMonorepo created successfully!\n")
    print_summary_table(
        {
            "Location": str(target_dir),
            "Templates": ", ".join(t.name for t in options.selected_templates) or "-",
            "Features": ", ".join(options.selected_features) or "-",
        }
    )
    print_next_steps(options, config)
    return EXIT_OK


def print_next_steps(options: ScaffoldOptions, config: ScaffoldConfig) -> None:
    pm = config.package_manager.name
    console.print("[cyan]Next steps:[/cyan]\n")
    console.print(f"  cd {options.project_name}")
    console.print(f"  {pm} run dev\n")
    if options.has_feature(config.features.versioning_feature):
        console.print("[dim]To create a changeset:[/dim]")
        console.print(f"  {pm} changeset\n")
    console.print("[dim]Documentation:[/dim]")
    console.print("  pnpm workspaces: https://pnpm.io/workspaces")


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for ``create-monorepo``."""
    args = build_parser().parse_args(argv)
    config = ScaffoldConfig.from_env()
    if args.templates_dir is not None:
        config.templates_dir = args.templates_dir

    try:
        code = asyncio.run(run(args, config))
    except KeyboardInterrupt:
        print_error("\nOperation cancelled")
        code = EXIT_OK
    sys.exit(code)


if __name__ == "__main__":
    main()
