"""Command-line interface for the JSON-LD profile validator."""

import json
import sys
from pathlib import Path

from ldprofiles.config import load_config
from ldprofiles.exceptions import ProfileError
from ldprofiles.logging_config import setup_logging
from ldprofiles.validator import ProfileValidator


def _build_validator(args) -> ProfileValidator:
    config = load_config(getattr(args, 'config', None))
    if getattr(args, 'no_sanitize', False):
        config.sanitize_inputs = False
    return ProfileValidator(config=config)


def _write_output(output: str, output_file) -> None:
    if output_file:
        with open(output_file, "w") as f:
            f.write(output)
        print(f"Results written to {output_file}")
    else:
        print(output)


def print_validation_result(result, label: str = ""):
    """Print a ValidationResult in a readable form.

    Args:
        result: ValidationResult to print
        label: Optional heading suffix (e.g. the batch index)
    """
    print(f"\n{'=' * 60}")
    print(f"{result.profile_type or 'Unknown'} validation{f' {label}' if label else ''}")
    print(f"{'=' * 60}")

    print(f"\n{'✅ Valid' if result.valid else '❌ Invalid'}")

    if result.rich_results_compliance is not None:
        rich = result.rich_results_compliance
        llm = result.llm_optimization_compliance
        print(f"\n📊 Rich results coverage: {rich.coverage:.0f}% ({len(rich.present)}/{rich.total})")
        print(f"📊 LLM optimization score: {llm.coverage:.0f}% ({len(llm.present)}/{llm.total})")

    if result.errors:
        print(f"\n❌ Errors:")
        for error in result.errors:
            print(f"  • {error.enhanced_message or error.message}")
            for suggestion in error.suggestions:
                print(f"      {suggestion.title} {', '.join(suggestion.items)}")

    if result.warnings:
        print(f"\n⚠️  Warnings:")
        for warning in result.warnings:
            print(f"  • [{warning.priority}] {warning.message} ({warning.reason})")

    if result.security_warnings:
        print(f"\n🔒 Security:")
        for warning in result.security_warnings:
            print(f"  • [{warning.severity}] {warning.field}: {warning.message}")

    print(f"\n{'=' * 60}\n")


def print_stats(stats):
    """Print batch statistics."""
    summary = stats.summary
    print(f"\n{'=' * 60}")
    print("Batch Summary")
    print(f"{'=' * 60}")
    print(f"  Documents: {summary.total}")
    print(f"  Valid: {summary.valid}")
    print(f"  Invalid: {summary.invalid}")
    print(f"  With warnings: {summary.with_warnings}")
    print(f"  Rich results compliant: {summary.rich_results_compliant}")
    print(f"  LLM optimized: {summary.llm_optimized}")
    print(f"\n📊 Average rich results coverage: {stats.average_rich_results_coverage:.1f}%")
    print(f"📊 Average LLM optimization score: {stats.average_llm_score:.1f}%")

    if stats.common_errors:
        print(f"\nMost common errors:")
        for key, count in stats.common_errors:
            print(f"  • {count}x {key}")

    if stats.common_warnings:
        print(f"\nMost common warnings:")
        for key, count in stats.common_warnings:
            print(f"  • {count}x {key}")

    print(f"\n{'=' * 60}\n")


def validate_command(args):
    """Validate a JSON document (or an array of documents) against a profile."""
    path = Path(args.file)
    if not path.exists():
        print(f"Error: File not found: {path}")
        sys.exit(1)

    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        print(f"Error: Invalid JSON in {path}: {e}")
        sys.exit(1)

    try:
        validator = _build_validator(args)
    except ProfileError as e:
        print(f"Error: {e}")
        sys.exit(1)

    first = data[0] if isinstance(data, list) and data else data
    profile_type = args.type or (first.get('@type') if isinstance(first, dict) else None)
    if not profile_type:
        print("Error: No profile type given. Use --type or set @type in the document")
        sys.exit(1)

    if isinstance(data, list):
        batch = validator.validate_batch(data, profile_type)
        stats = validator.get_validation_stats(data, profile_type)
        all_valid = batch.summary.invalid == 0

        if args.output == "json":
            output = json.dumps({**batch.to_dict(), "stats": stats.to_dict()}, indent=2, default=str)
            _write_output(output, args.output_file)
        else:
            for item in batch.results:
                print_validation_result(item.result, label=f"#{item.index}")
            print_stats(stats)
    else:
        result = validator.validate(data, profile_type)
        all_valid = result.valid

        if args.output == "json":
            output = json.dumps(result.to_dict(), indent=2, default=str)
            _write_output(output, args.output_file)
        else:
            print_validation_result(result)

    if not all_valid:
        sys.exit(1)


def profiles_command(args):
    """List the registered profiles."""
    try:
        validator = _build_validator(args)
    except ProfileError as e:
        print(f"Error: {e}")
        sys.exit(1)

    profile_types = validator.list_profiles(args.category)
    if not profile_types:
        print("No profiles found")
        return

    for profile_type in profile_types:
        profile = validator.get_profile(profile_type)
        print(f"  • {profile_type} [{profile.category}] - {profile.description}")


def fields_command(args):
    """Show completion hints for a profile's fields."""
    try:
        validator = _build_validator(args)
    except ProfileError as e:
        print(f"Error: {e}")
        sys.exit(1)

    if validator.get_profile(args.type) is None:
        print(f"Error: Unknown profile type: {args.type}")
        sys.exit(1)

    hints = validator.get_completion_hints(args.type, args.partial or "")

    if args.output == "json":
        print(json.dumps(hints, indent=2))
        return

    for hint in hints:
        flags = []
        if hint['richResults']:
            flags.append("rich results")
        if hint['llmOptimized']:
            flags.append("LLM")
        suffix = f" ({', '.join(flags)})" if flags else ""
        print(f"  • {hint['label']}: {hint['detail']}{suffix}")


def main(argv=None):
    """Main CLI entry point."""
    import argparse

    parser = argparse.ArgumentParser(
        description="ldprofiles - Validate JSON-LD structured data against rich-results and LLM profiles"
    )

    # Global flags (before subcommands)
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="WARNING",
        help="Set logging verbosity (default: WARNING)",
    )
    parser.add_argument(
        "--log-file",
        help="Write logs to file in addition to console",
    )
    parser.add_argument(
        "--config",
        help="JSON configuration file (default: read from environment)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Validate command parser
    validate_parser = subparsers.add_parser(
        "validate", help="Validate a JSON-LD document or an array of documents."
    )
    validate_parser.add_argument("file", help="JSON file to validate")
    validate_parser.add_argument(
        "--type",
        "-t",
        help="Profile type (default: the document's @type)",
    )
    validate_parser.add_argument(
        "--no-sanitize",
        action="store_true",
        help="Validate the document as-is, without sanitizing it first",
    )
    validate_parser.add_argument(
        "--output",
        "-o",
        choices=["text", "json"],
        default="text",
        help="Output format (default: text)",
    )
    validate_parser.add_argument(
        "--output-file",
        "-f",
        help="Write output to file (only for json format)",
    )
    validate_parser.set_defaults(func=validate_command)

    # Profiles command parser
    profiles_parser = subparsers.add_parser(
        "profiles", help="List available profiles."
    )
    profiles_parser.add_argument(
        "--category",
        help="Only list profiles in this category (e.g. content, business, interaction)",
    )
    profiles_parser.set_defaults(func=profiles_command)

    # Fields command parser
    fields_parser = subparsers.add_parser(
        "fields", help="Show field completion hints for a profile."
    )
    fields_parser.add_argument("type", help="Profile type, e.g. Article")
    fields_parser.add_argument(
        "--partial",
        "-p",
        help="Only show fields whose name contains this text",
    )
    fields_parser.add_argument(
        "--output",
        "-o",
        choices=["text", "json"],
        default="text",
        help="Output format (default: text)",
    )
    fields_parser.set_defaults(func=fields_command)

    args = parser.parse_args(argv)

    # Configure logging based on flags
    setup_logging(
        level=args.log_level,
        log_file=getattr(args, 'log_file', None),
    )

    if hasattr(args, "func"):
        args.func(args)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
