"""CLI adapter exporting and restoring JSON backups."""

import argparse
from collections.abc import Sequence
from datetime import date
from pathlib import Path

from commission_desk.application.use_cases.backup import (
    ExportBackupUseCase,
    ImportBackupUseCase,
)
from commission_desk.domain.errors import BackupFormatError, RepositoryError
from commission_desk.infrastructure.backup_json import (
    backup_filename,
    read_backup,
    write_backup,
)
from commission_desk.infrastructure.container import (
    build_backup_repository,
    build_database_adapter,
    build_settings,
)
from commission_desk.infrastructure.logging.logger import get_app_logger
from commission_desk.infrastructure.schema import create_schema


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(description="Export or restore backups.")
    commands = parser.add_subparsers(dest="command", required=True)
    export = commands.add_parser("export", help="Write every table to JSON.")
    export.add_argument(
        "path",
        nargs="?",
        help="Output file (default: backup_comisiones_<today>.json).",
    )
    restore = commands.add_parser("import", help="Restore a JSON backup.")
    restore.add_argument("path", help="Backup file to read.")
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    """Run the backup command.

    Returns:
        int: Process exit code.
    """
    args = parse_args(argv)
    logger = get_app_logger()
    settings = build_settings()
    db_port = build_database_adapter(settings)
    create_schema(db_port.get_engine())
    backup_repo = build_backup_repository(db_port, settings)

    try:
        if args.command == "export":
            payload = ExportBackupUseCase(backup_repo, logger=logger).execute()
            target = Path(args.path or backup_filename(date.today()))
            write_backup(payload, target)
            print(f"Backup written to {target}")
        else:
            result = ImportBackupUseCase(backup_repo, logger=logger).execute(
                read_backup(Path(args.path))
            )
            print(
                "Backup restored: "
                + ", ".join(
                    f"{table}={count}"
                    for table, count in result.written.items()
                )
            )
            if (
                result.cleared_references
                or result.dropped_lines
                or result.duplicate_ncfs
            ):
                print(
                    f"Cleared references: {result.cleared_references}, "
                    f"dropped lines: {result.dropped_lines}, "
                    f"repeated NCFs skipped: {result.duplicate_ncfs}"
                )
    except (BackupFormatError, RepositoryError, OSError) as exc:
        logger.error(f"Backup {args.command} failed: {exc}")
        print(f"Error: {exc}")
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
