"""CLI entry point for mjml-schema.

This module acts as the central entry point for the project's CLI tools.
It delegates commands to the appropriate submodules or runs specific tasks.
"""

import argparse
import json
import sys
from pathlib import Path

from dotenv import load_dotenv

from src.components import COMPONENT_PACKAGES, extract_component_specs
from src.config import (
    get_base_id,
    get_environment,
    get_environment_info,
    get_log_level,
    get_output_dir,
    get_source_path,
    list_environment_variables,
)
from src.core import get_logger, setup_logging
from src.inference import infer_attribute_schema
from src.output import dump_json
from src.pipeline import build_documents, generate_artifacts, resolve_definitions
from src.schema import validate_document

# Load environment variables from .env file
load_dotenv()

logger = get_logger("cli")


# =============================================================================
# Generate Command
# =============================================================================


def cmd_generate(args: argparse.Namespace) -> int:
    """Handle the generate command."""
    try:
        output_dir = get_output_dir(args.output_dir)
        source = get_source_path(args.source)
        base_id = get_base_id(args.base_id)

        logger.info("MJML Schema Generator")
        logger.info("=" * 50)

        result = generate_artifacts(output_dir, source=source, base_id=base_id)

        logger.info("Schema generation completed successfully!")
        logger.info(f"Components: {result.component_count}")
        return 0

    except Exception as e:
        logger.error(f"Error generating schema: {e}")
        return 1


def handle_generate_command(argv: list[str]) -> int:
    """Handle generate-specific arguments."""
    parser = argparse.ArgumentParser(
        prog="python . generate",
        description="Extract MJML component specs and write JSON Schemas",
    )
    parser.add_argument(
        "--output-dir",
        "-o",
        type=Path,
        default=None,
        help="Output directory (default: MJML_SCHEMA_OUTPUT_DIR or ./schemas)",
    )
    parser.add_argument(
        "--source",
        "-s",
        type=Path,
        default=None,
        help="JSON dump of component attribute tables (default: built-in)",
    )
    parser.add_argument(
        "--base-id",
        type=str,
        default=None,
        help="Base URL for schema $id values",
    )
    parser.set_defaults(func=cmd_generate)

    args = parser.parse_args(argv)
    return args.func(args)


# =============================================================================
# Infer Command
# =============================================================================


def cmd_infer(args: argparse.Namespace) -> int:
    """Handle the infer command."""
    default = None
    if args.default is not None:
        try:
            default = json.loads(args.default)
        except json.JSONDecodeError:
            # Bare words are taken as string defaults
            default = args.default

    schema = infer_attribute_schema(args.name, args.type, default)
    print(dump_json(schema.to_dict()))
    return 0


def handle_infer_command(argv: list[str]) -> int:
    """Handle infer-specific arguments."""
    parser = argparse.ArgumentParser(
        prog="python . infer",
        description="Show the schema inferred for a single attribute",
    )
    parser.add_argument("name", type=str, help="Attribute name (e.g. padding)")
    parser.add_argument(
        "--type",
        "-t",
        type=str,
        default=None,
        help="MJML type annotation (e.g. 'unit(px,%%){1,4}')",
    )
    parser.add_argument(
        "--default",
        "-d",
        type=str,
        default=None,
        help="Default value as JSON (bare words are read as strings)",
    )
    parser.set_defaults(func=cmd_infer)

    if not argv:
        parser.print_help()
        return 1

    args = parser.parse_args(argv)
    return args.func(args)


# =============================================================================
# Components Command
# =============================================================================


def cmd_components(args: argparse.Namespace) -> int:
    """Handle the components command."""
    try:
        definitions = resolve_definitions(get_source_path(args.source))
    except Exception as e:
        logger.error(f"Failed to load definitions: {e}")
        return 1

    specs = extract_component_specs(definitions)

    print(f"MJML Components ({len(specs)}/{len(COMPONENT_PACKAGES)}):")
    for name, spec in specs.items():
        print(f"  {name:<22} {spec.package_name:<22} {len(spec.attributes)} attributes")

    missing = [name for name in COMPONENT_PACKAGES if name not in specs]
    if missing:
        print(f"\nSkipped: {', '.join(missing)}")
    return 0


def handle_components_command(argv: list[str]) -> int:
    """Handle components-specific arguments."""
    parser = argparse.ArgumentParser(
        prog="python . components",
        description="List known MJML components and their attribute counts",
    )
    parser.add_argument(
        "--source",
        "-s",
        type=Path,
        default=None,
        help="JSON dump of component attribute tables (default: built-in)",
    )
    parser.set_defaults(func=cmd_components)

    args = parser.parse_args(argv)
    return args.func(args)


# =============================================================================
# Validate Command
# =============================================================================


def _load_json_file(path: Path) -> dict:
    return json.loads(path.read_text(encoding="utf-8"))


def cmd_validate(args: argparse.Namespace) -> int:
    """Handle the validate command."""
    try:
        document = _load_json_file(args.file)

        if args.schema:
            schema = _load_json_file(args.schema)
        else:
            definitions = resolve_definitions(get_source_path(args.source))
            result = build_documents(definitions, base_id=get_base_id())
            schema = result.ai_schema if args.ai else result.schema

    except Exception as e:
        logger.error(f"Failed to load input: {e}")
        return 1

    errors = validate_document(document, schema)
    if not errors:
        print(f"{args.file}: valid")
        return 0

    print(f"{args.file}: {len(errors)} error(s)")
    for error in errors:
        print(f"  {error.path} [{error.error_type}]: {error.message}")
    return 1


def handle_validate_command(argv: list[str]) -> int:
    """Handle validate-specific arguments."""
    parser = argparse.ArgumentParser(
        prog="python . validate",
        description="Validate an MJML component tree (JSON) against a schema",
    )
    parser.add_argument("file", type=Path, help="Component tree JSON file")
    target = parser.add_mutually_exclusive_group()
    target.add_argument(
        "--ai",
        action="store_true",
        help="Validate against the AI-optimized schema (hierarchy rules)",
    )
    target.add_argument(
        "--schema",
        type=Path,
        default=None,
        help="Use a previously generated schema file instead",
    )
    parser.add_argument(
        "--source",
        "-s",
        type=Path,
        default=None,
        help="JSON dump of component attribute tables (default: built-in)",
    )
    parser.set_defaults(func=cmd_validate)

    if not argv:
        parser.print_help()
        return 1

    args = parser.parse_args(argv)
    return args.func(args)


# =============================================================================
# Env Command
# =============================================================================


def cmd_env(_argv: list[str]) -> int:
    """Show configuration variables and their resolved values."""
    print("Environment Configuration:")
    for var in list_environment_variables():
        info = get_environment_info(var)
        value = get_environment(var)
        print(f"\n  {info.name} [{info.category}]")
        print(f"    {info.description}")
        print(f"    value: {value if value is not None else '(unset)'}")
    try:
        output_dir = get_output_dir()
    except RuntimeError as e:
        logger.error(f"Cannot resolve output directory: {e}")
        return 1
    print(f"\nResolved output directory: {output_dir}")
    return 0


# =============================================================================
# Main
# =============================================================================


def show_help() -> None:
    """Display CLI help message."""
    print("Usage: python . {command} [args]")
    print("\n=== Schema Generation ===")
    print("  generate    Extract component specs and write all JSON artifacts")
    print("  components  List MJML components and attribute counts")
    print("\n=== Inspection ===")
    print("  infer       Show the inferred schema for one attribute")
    print("  validate    Validate a component tree against the schema")
    print("  env         Show configuration variables")
    print("\nExamples:")
    print("  python . generate                       # Write to ./schemas")
    print("  python . generate -o build/schemas      # Custom output directory")
    print("  python . infer padding -t 'unit(px,%){1,4}'")
    print("  python . infer border-color -t color -d '#000000'")
    print("  python . validate email.json --ai")


def main() -> int:
    """Main entry point for the CLI."""
    if len(sys.argv) < 2:
        show_help()
        return 1

    command = sys.argv[1]
    rest_args = sys.argv[2:]

    if command in ("-h", "--help"):
        show_help()
        return 0

    commands = {
        "generate": lambda: handle_generate_command(rest_args),
        "components": lambda: handle_components_command(rest_args),
        "infer": lambda: handle_infer_command(rest_args),
        "validate": lambda: handle_validate_command(rest_args),
        "env": lambda: cmd_env(rest_args),
    }

    if command in commands:
        setup_logging(get_log_level())
        return commands[command]()

    logger.error(f"Unknown command: {command}")
    show_help()
    return 1


if __name__ == "__main__":
    sys.exit(main())
