"""Command-line intake: upload local permit documents and print the proposals."""

import argparse
import asyncio
import mimetypes
from pathlib import Path

from permit_intake.business.summary import PermitSummary, summarize
from permit_intake.config.settings import Settings
from permit_intake.database.connection import close_pool, get_connection, init_pool
from permit_intake.database.repositories.business_permit_repository import (
    BusinessPermitRepository,
)
from permit_intake.intake.exceptions import ConfirmationError, IntakeError
from permit_intake.intake.models import IntakeFile, UploadedItem, UploadStatus
from permit_intake.intake.orchestrator import IntakeOrchestrator, build_orchestrator
from permit_intake.logging.logger import Log


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="permit-intake",
        description="Upload permit documents, detect their type and dates, optionally confirm them.",
    )
    parser.add_argument("--business-id", required=True, help="Business the documents belong to")
    parser.add_argument("--user-id", required=True, help="User uploading the documents")
    parser.add_argument(
        "--confirm", action="store_true", help="Confirm every document whose type was detected"
    )
    parser.add_argument("files", nargs="+", type=Path, help="PDF or image files")
    return parser


def load_file(path: Path) -> IntakeFile:
    media_type, _ = mimetypes.guess_type(path.name)
    return IntakeFile(
        name=path.name,
        media_type=media_type or "application/octet-stream",
        payload=path.read_bytes(),
    )


def describe(item: UploadedItem) -> str:
    if item.status == UploadStatus.CONFIRMED and item.confirmed:
        return f"{item.file.name}: confirmed {item.confirmed.code}"
    if item.status == UploadStatus.DETECTED and item.detected:
        detected = item.detected
        return (
            f"{item.file.name}: {detected.name} ({detected.code}) "
            f"confidence={detected.confidence:.2f} "
            f"issued={detected.issue_date or '-'} expires={detected.expiry_date or '-'}"
        )
    return f"{item.file.name}: {item.status.value} ({item.error or 'no detail'})"


async def run_intake(orchestrator: IntakeOrchestrator, paths: list[Path], confirm: bool) -> int:
    """Process the files and return the number of items that ended in error."""
    for path in paths:
        try:
            orchestrator.add_file(load_file(path))
        except IntakeError as exc:
            print(f"{path.name}: rejected ({exc})")
    await orchestrator.wait_idle()

    if confirm:
        for item in orchestrator.session.items:
            if item.status != UploadStatus.DETECTED:
                continue
            try:
                await orchestrator.confirm(item.id)
            except ConfirmationError as exc:
                print(f"{item.file.name}: {exc}")

    failed = 0
    for item in orchestrator.session.items:
        print(describe(item))
        if item.status == UploadStatus.ERROR:
            failed += 1
    return failed


def business_summary(business_id: str, warning_days: int) -> PermitSummary:
    with get_connection() as conn:
        records = BusinessPermitRepository().list_for_business(conn, business_id)
    return summarize(records, warning_days=warning_days)


def main(argv: list[str] | None = None) -> int:
    """Entry point: parse args -> initialize pool -> run intake over the files."""
    args = build_parser().parse_args(argv)
    settings = Settings()
    Log.configure(settings.log_level)
    init_pool(settings)

    try:
        orchestrator = build_orchestrator(
            settings, business_id=args.business_id, user_id=args.user_id
        )
        failed = asyncio.run(run_intake(orchestrator, args.files, args.confirm))
        if args.confirm:
            summary = business_summary(args.business_id, settings.expiry_warning_days)
            print(
                f"Business {args.business_id}: {summary.approved} approved, "
                f"{summary.pending} pending, {summary.expiring_soon} expiring soon"
            )
    finally:
        close_pool()
    return 1 if failed else 0


if __name__ == "__main__":
    raise SystemExit(main())
