"""Command line interface for proplist."""

import argparse
import asyncio
import inspect
import logging
import sys
from datetime import date
from pathlib import Path
from typing import Sequence

from proplist.config import ProplistConfig
from proplist.exceptions import (
    EmptyResultError,
    ParseError,
    ProplistError,
    RecordNotFoundError,
    StoreWriteError,
)
from proplist.generators import PropertyGenerator
from proplist.logging import setup_logging
from proplist.mapping import COLUMNS, MAPPED_KEYS_HELP
from proplist.models import DateRange, Property, PropertyType
from proplist.pipeline import export_properties, prepare_import, run_import
from proplist.search import ExportFilters, SearchFilters, count_by_type, search
from proplist.serialization import candidate_to_document, check_field_keys, from_document, to_document
from proplist.spreadsheet import TEMPLATE_FILENAME, build_template, check_extension, write_properties
from proplist.store import JsonFilePropertyStore

logger = logging.getLogger(__name__)

MAX_LISTED_ERRORS = 10


def _parse_assignments(pairs: Sequence[str]) -> dict[str, str]:
    """Turn ``key=value`` arguments into a partial document."""
    changes = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep:
            raise argparse.ArgumentTypeError(f"Expected key=value, got {pair!r}")
        changes[key.strip()] = value.strip()
    return changes


def _property_type(value: str) -> PropertyType:
    canonical = PropertyType.canonicalize(value)
    if not PropertyType.is_canonical(canonical):
        raise argparse.ArgumentTypeError(
            f"invalid property type {value!r} (choose from {', '.join(PropertyType.labels())})"
        )
    return PropertyType(canonical)


def _summary_line(prop: Property) -> str:
    parts = [
        prop.id or "-",
        prop.property_type.value,
        prop.sector_phase or "-",
        prop.project or "-",
        prop.cp_name or "-",
        prop.contact_number or "-",
        prop.demand or "-",
        prop.date or "-",
    ]
    return " | ".join(parts)


def _write_output(path: Path, content: bytes) -> None:
    try:
        path.write_bytes(content)
    except OSError as exc:
        raise ProplistError(f"Cannot write {path}: {exc}") from exc


def _print_progress(progress: float) -> None:
    print(f"Importing properties... {round(progress)}%")


def cmd_template(args: argparse.Namespace, config: ProplistConfig) -> int:
    output = Path(args.output) if args.output else config.export.output_dir / TEMPLATE_FILENAME
    _write_output(output, build_template(sheet_name=config.export.template_sheet_name))
    print(f"Template written to {output}")
    return 0


def cmd_generate(args: argparse.Namespace, config: ProplistConfig) -> int:
    generator = PropertyGenerator(seed=args.seed)
    properties = generator.generate_many(args.count)
    output = Path(args.output)
    _write_output(output, write_properties(properties, sheet_name=config.export.sheet_name))
    print(f"Saved {len(properties)} sample properties to {output}")
    return 0


async def cmd_import(args: argparse.Namespace, config: ProplistConfig) -> int:
    path = Path(args.file)
    check_extension(path)
    try:
        data = path.read_bytes()
    except OSError as exc:
        raise ParseError(f"Failed to read file: {exc}") from exc

    preview = prepare_import(data)
    print(f"File: {path.name} ({len(data) / 1024:.1f} KB) - Found {preview.total} properties")

    for candidate in preview.preview(config.imports.preview_rows):
        document = candidate_to_document(candidate)
        print(
            "  "
            + " | ".join(
                document.get(key, "-") for key in ("propertyType", "sectorPhase", "cpName", "contactNumber", "demand")
            )
        )

    if preview.errors:
        print(f"Validation Errors ({len(preview.errors)}):")
        for error in preview.errors[:MAX_LISTED_ERRORS]:
            print(f"  {error}")
        if len(preview.errors) > MAX_LISTED_ERRORS:
            print(f"  ... and {len(preview.errors) - MAX_LISTED_ERRORS} more errors")
        if not args.force and not args.dry_run:
            print("Import blocked until the errors are fixed (use --force to import anyway)")
            return 1

    if args.dry_run:
        print("Dry run: nothing imported")
        return 1 if preview.errors else 0

    store = JsonFilePropertyStore(config.store.path)
    result = await run_import(preview, store, config.imports, on_progress=_print_progress)
    print(f"Successfully imported {result.count} properties")
    return 0


async def cmd_export(args: argparse.Namespace, config: ProplistConfig) -> int:
    store = JsonFilePropertyStore(config.store.path)
    properties = await store.get_all()
    filters = ExportFilters(
        property_type=args.type,
        sector_phase=args.sector,
        date_range=DateRange(args.range),
    )
    result = export_properties(properties, filters, sheet_name=config.export.sheet_name)
    output_dir = Path(args.output_dir) if args.output_dir else config.export.output_dir
    output = output_dir / result.filename
    _write_output(output, result.content)
    print(f"Exported {result.count} properties to {output}")
    return 0


async def cmd_list(args: argparse.Namespace, config: ProplistConfig) -> int:
    store = JsonFilePropertyStore(config.store.path)
    properties = await store.get_all()
    filters = SearchFilters(
        property_type=args.type,
        project=args.project,
        sector_phase=args.sector,
        contact_number=args.contact,
        cp_name=args.cp_name,
    )
    matched = search(properties, filters, args.search or "")
    for prop in matched:
        print(_summary_line(prop))
    print(f"{len(matched)} of {len(properties)} properties")
    counts = count_by_type(properties)
    print(", ".join(f"{property_type.value}: {count}" for property_type, count in counts.items()))
    return 0


async def cmd_show(args: argparse.Namespace, config: ProplistConfig) -> int:
    store = JsonFilePropertyStore(config.store.path)
    prop = await store.get_by_id(args.id)
    if prop is None:
        raise RecordNotFoundError(f"Property {args.id} not found")
    document = to_document(prop)
    for column in COLUMNS:
        if column.key in document:
            print(f"{column.header}: {document[column.key]}")
    print(f"Created: {document.get('createdAt', '-')}")
    print(f"Updated: {document.get('updatedAt', '-')}")
    return 0


async def cmd_add(args: argparse.Namespace, config: ProplistConfig) -> int:
    document = _parse_assignments(args.set or [])
    check_field_keys(document)
    document["propertyType"] = args.type.value
    document.setdefault("date", date.today().isoformat())
    prop = from_document(document)
    if prop.property_type == PropertyType.FLAT and not prop.project:
        print("Project is required for Flat properties")
        return 1
    store = JsonFilePropertyStore(config.store.path)
    record_id = await store.add(prop)
    print(f"{prop.property_type.value} property added successfully! ({record_id})")
    return 0


async def cmd_update(args: argparse.Namespace, config: ProplistConfig) -> int:
    store = JsonFilePropertyStore(config.store.path)
    await store.update(args.id, _parse_assignments(args.set))
    print(f"Property {args.id} updated successfully!")
    return 0


async def cmd_delete(args: argparse.Namespace, config: ProplistConfig) -> int:
    store = JsonFilePropertyStore(config.store.path)
    prop = await store.get_by_id(args.id)
    if prop is None:
        raise RecordNotFoundError(f"Property {args.id} not found")
    await store.delete(args.id)
    print(f"{prop.property_type.value} property deleted successfully")
    return 0


COMMANDS = {
    "template": cmd_template,
    "generate": cmd_generate,
    "import": cmd_import,
    "export": cmd_export,
    "list": cmd_list,
    "show": cmd_show,
    "add": cmd_add,
    "update": cmd_update,
    "delete": cmd_delete,
}


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with every sub-command."""
    parser = argparse.ArgumentParser(
        prog="proplist",
        description="Manage property listings and bulk import/export them via Excel files",
    )
    parser.add_argument(
        "--store",
        type=str,
        default=None,
        help="Path of the JSON record store (default: $PROPLIST_STORE_PATH or properties.json)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        help="Log level (default: $LOG_LEVEL or INFO)",
    )
    parser.add_argument(
        "--log-format",
        type=str,
        choices=["standard", "json"],
        default=None,
        help="Log format (default: $LOG_FORMAT or standard)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    template = subparsers.add_parser("template", help="Write the two-row import template")
    template.add_argument("--output", type=str, default=None, help=f"Output file (default: {TEMPLATE_FILENAME})")

    generate = subparsers.add_parser("generate", help="Write a spreadsheet of synthetic properties")
    generate.add_argument("--count", type=int, default=20, help="Number of properties (default: 20)")
    generate.add_argument("--seed", type=int, default=42, help="Random seed for reproducibility (default: 42)")
    generate.add_argument("--output", type=str, default="sample_properties.xlsx", help="Output file")

    import_ = subparsers.add_parser("import", help="Import properties from an Excel file")
    import_.add_argument("file", type=str, help="Excel file (.xlsx)")
    import_.add_argument("--dry-run", action="store_true", help="Validate and preview only")
    import_.add_argument("--force", action="store_true", help="Import even when validation errors are present")

    export = subparsers.add_parser("export", help="Export properties to a dated Excel file")
    export.add_argument("--type", type=_property_type, default=None, help="Only this property type")
    export.add_argument("--sector", type=str, default=None, help="Only this Sector/Phase")
    export.add_argument(
        "--range",
        type=str,
        choices=[r.value for r in DateRange],
        default=DateRange.ALL.value,
        help="Listing date range (default: all)",
    )
    export.add_argument("--output-dir", type=str, default=None, help="Directory for the export file")

    list_ = subparsers.add_parser("list", help="List and filter properties")
    list_.add_argument("--type", type=_property_type, default=None, help="Property type")
    list_.add_argument("--project", type=str, default=None, help="Project (flats)")
    list_.add_argument("--sector", type=str, default=None, help="Sector/Phase")
    list_.add_argument("--contact", type=str, default=None, help="Contact number")
    list_.add_argument("--cp-name", type=str, default=None, help="CP name")
    list_.add_argument("--search", type=str, default=None, help="Free-text search")

    show = subparsers.add_parser("show", help="Show one property")
    show.add_argument("id", type=str)

    add = subparsers.add_parser("add", help="Add a property")
    add.add_argument("--type", type=_property_type, required=True, help="Property type")
    add.add_argument("--set", action="append", metavar="KEY=VALUE", help=MAPPED_KEYS_HELP)

    update = subparsers.add_parser("update", help="Edit a property")
    update.add_argument("id", type=str)
    update.add_argument("--set", action="append", required=True, metavar="KEY=VALUE", help=MAPPED_KEYS_HELP)

    delete = subparsers.add_parser("delete", help="Delete a property")
    delete.add_argument("id", type=str)

    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = ProplistConfig.from_env()
        if args.store:
            config.store.path = Path(args.store)
        setup_logging(args.log_level or config.log_level, args.log_format or config.log_format)

        handler = COMMANDS[args.command]
        if inspect.iscoroutinefunction(handler):
            return asyncio.run(handler(args, config))
        return handler(args, config)
    except ParseError as exc:
        print(f"Error reading file: {exc}", file=sys.stderr)
    except EmptyResultError as exc:
        print(f"No data found: {exc}", file=sys.stderr)
    except StoreWriteError as exc:
        print(f"Import failed: {exc}", file=sys.stderr)
    except argparse.ArgumentTypeError as exc:
        print(f"Error: {exc}", file=sys.stderr)
    except ProplistError as exc:
        print(f"Error: {exc}", file=sys.stderr)
    return 1
