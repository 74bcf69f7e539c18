import argparse
import logging
import sys
from typing import List, Optional

from .core.config import load_config
from .core.errors import MigrationToolError
from .core.runner import MigrationRunner, MigrationScope


def setup_logging(log_level: str = "INFO") -> None:
    """Configure application logging."""
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[
            logging.StreamHandler(sys.stdout)
        ]
    )


logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ngui-migrate",
        description="ngui-migrate - migrate Angular projects from ag-Grid to ng-ui",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (overrides the config file)"
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to an ngui-migrate.yaml config file"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    def add_path(sub: argparse.ArgumentParser) -> None:
        sub.add_argument(
            "-p", "--path",
            type=str,
            default=".",
            help="Angular project root"
        )

    analyze = subparsers.add_parser("analyze", help="Report ag-Grid usage and ng-ui compatibility")
    add_path(analyze)
    analyze.add_argument("-r", "--report", type=str, default=None, help="Write the report to this file")
    analyze.add_argument("--json", action="store_true", help="JSON instead of HTML / console output")

    migrate = subparsers.add_parser("migrate", help="Rewrite ag-Grid usage to ng-ui")
    add_path(migrate)
    migrate.add_argument("--dry-run", action="store_true", help="Preview changes without writing files")
    migrate.add_argument("--no-backup", action="store_true", help="Skip the pre-migration backup")
    migrate.add_argument("--interactive", action="store_true", help="Ask before changing files")
    migrate.add_argument("--force", action="store_true", help="Never prompt")
    migrate.add_argument(
        "--scope",
        type=str,
        default=MigrationScope.FULL.value,
        choices=[s.value for s in MigrationScope if s != MigrationScope.SELECTIVE],
        help="Which files to migrate"
    )
    migrate.add_argument("files", nargs="*", help="Only migrate these files (relative to the project)")

    validate = subparsers.add_parser("validate", help="Check a migrated project")
    add_path(validate)

    rollback = subparsers.add_parser("rollback", help="Restore the project from a backup")
    add_path(rollback)
    rollback.add_argument("-b", "--backup", type=str, default=None, help="Backup directory (default: newest)")

    wizard = subparsers.add_parser("wizard", help="Interactive analyze and migrate")
    add_path(wizard)

    return parser


def run_command(args: argparse.Namespace, runner: MigrationRunner) -> int:
    if args.command == "analyze":
        runner.analyze(args.path, report_path=args.report, json_output=args.json)
        return 0

    if args.command == "migrate":
        result = runner.migrate(
            args.path,
            dry_run=args.dry_run,
            create_backup=not args.no_backup,
            interactive=args.interactive,
            force=args.force,
            files=args.files or None,
            scope=MigrationScope(args.scope),
        )
        return 0 if result.success or result.cancelled else 1

    if args.command == "validate":
        return 0 if runner.validate(args.path).passed else 1

    if args.command == "rollback":
        runner.rollback(args.path, backup_path=args.backup)
        return 0

    if args.command == "wizard":
        result = runner.wizard(args.path)
        return 0 if result is None or result.success else 1

    raise ValueError(f"Unknown command: {args.command}")


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for ngui-migrate."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = load_config(project_path=args.path, config_path=args.config)
    except MigrationToolError as e:
        setup_logging(args.log_level or "INFO")
        logger.error(f"Configuration error: {e}")
        return 1

    setup_logging(args.log_level or config.log_level)

    try:
        runner = MigrationRunner(config)
        return run_command(args, runner)
    except MigrationToolError as e:
        logger.error(f"{args.command} failed: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
