from pathlib import Path
from typing import List

import typer

from .config import Settings
from .logging import get_logger
from .hashing.extract import ImageHashes, extract_fingerprints_from_path
from .classify.compare import BestMatch, find_best_match
from .classify.batch import BatchCandidate, check_batch
from .store.json_store import FingerprintStore, StoreError
from .store.records import new_record

logger = get_logger(__name__)

app = typer.Typer(help="dupecheck – catch visually duplicate photos before upload", no_args_is_help=True)

# Characters shown from each fingerprint in listings
PREVIEW_BITS = 16

settings = Settings()

STORE_OPTION = typer.Option(
    settings.store_path,
    "--store",
    "-s",
    envvar="DUPECHECK_STORE",
    help="Fingerprint store file",
)


def safe_echo(message: str) -> None:
    """Echo message with ASCII fallback for consoles that cannot encode emoji."""
    try:
        typer.echo(message)
    except UnicodeEncodeError:
        fallback_message = (
            message.replace("✅", "[OK]")
            .replace("⚠️", "[WARN]")
            .replace("❌", "[DUP]")
            .replace("📦", "[SAVED]")
            .replace("↔", "<->")
        )
        typer.echo(fallback_message)


def _hash_or_exit(image: Path) -> ImageHashes:
    hashes = extract_fingerprints_from_path(image)
    if hashes is None:
        logger.error(f"Could not process {image}")
        raise typer.Exit(code=1)
    return hashes


def _echo_match(match: BestMatch) -> None:
    result = match.result
    safe_echo(f"   Matched:          {match.record.id} ({match.record.source_ref})")
    safe_echo(f"   Uploaded:         {match.record.created_at}")
    safe_echo(f"   Similarity:       {result.average_similarity:.1f}%")
    safe_echo(f"   Average distance: {result.distance_a}")
    safe_echo(f"   Gradient distance: {result.distance_b}")
    safe_echo(f"   Confidence:       {result.verdict.label}")


@app.command("hash")
def hash_image(
    image: Path = typer.Argument(..., exists=True, dir_okay=False, readable=True, help="Image file to fingerprint"),
) -> None:
    """Print the average and gradient fingerprints of an image."""
    hashes = _hash_or_exit(image)
    safe_echo(f"average:  {hashes.average_bits}")
    safe_echo(f"gradient: {hashes.gradient_bits}")


@app.command()
def check(
    image: Path = typer.Argument(..., exists=True, dir_okay=False, readable=True, help="Image file to check"),
    store: Path = STORE_OPTION,
    save: bool = typer.Option(True, "--save/--no-save", help="Store the fingerprints when no duplicate is found"),
    force: bool = typer.Option(False, "--force", help="Store the fingerprints even if a duplicate is found"),
) -> None:
    """
    Check one image against every stored fingerprint.

    The closest stored image is reported; unless it is a duplicate (or
    --force is given) the new image's fingerprints are added to the store.
    """
    hashes = _hash_or_exit(image)

    try:
        fingerprint_store = FingerprintStore(store)
        records = fingerprint_store.load_all()
        logger.info(f"Comparing against {len(records)} stored images")

        match = find_best_match(hashes.average, hashes.gradient, records, settings.thresholds)

        if match is not None and match.is_duplicate:
            safe_echo(f"❌ Duplicate detected: {image}")
            _echo_match(match)
        else:
            safe_echo(f"✅ No duplicate found: {image}")
            if match is not None:
                safe_echo(f"   Closest match: {match.result.average_similarity:.1f}% ({match.result.verdict.label})")

        duplicate = match is not None and match.is_duplicate
        if (save and not duplicate) or force:
            record = new_record(str(image), hashes)
            fingerprint_store.add(record)
            safe_echo(f"📦 Saved as {record.id}")
    except StoreError as exc:
        logger.error(str(exc))
        raise typer.Exit(code=2) from exc


@app.command("check-batch")
def check_batch_command(
    images: List[Path] = typer.Argument(..., exists=True, dir_okay=False, readable=True, help="Image files to check together"),
    store: Path = STORE_OPTION,
    save: bool = typer.Option(False, "--save/--no-save", help="Store the images that are not duplicates afterwards"),
    force: bool = typer.Option(False, "--force", help="With --save, store duplicates too"),
) -> None:
    """
    Check several images against each other and against the store.

    With --save only unique images are stored: an image that repeats an
    earlier one in the selection, or one already stored, is skipped unless
    --force is given.
    """
    candidates = [
        BatchCandidate(name=str(path), hashes=extract_fingerprints_from_path(path))
        for path in images
    ]

    try:
        fingerprint_store = FingerprintStore(store)
        report = check_batch(candidates, fingerprint_store.load_all(), settings.thresholds)

        for name in report.failed:
            safe_echo(f"⚠️  Could not process {name}")

        if report.has_duplicates:
            safe_echo(f"❌ Found {len(report.findings)} duplicate pair(s):")
            for finding in report.findings:
                safe_echo(f"   [{finding.kind.value}] {finding.first} ↔ {finding.second}")
                safe_echo(f"      Similarity: {finding.result.average_similarity:.1f}% ({finding.result.verdict.label})")
        else:
            safe_echo(f"✅ No duplicates among {len(candidates)} images")

        if save:
            skipped = set() if force else set(report.duplicate_names())
            saved = 0
            for candidate in candidates:
                if candidate.hashes is None or candidate.name in skipped:
                    continue
                fingerprint_store.add(new_record(candidate.name, candidate.hashes))
                saved += 1
            safe_echo(f"📦 Saved {saved} image(s), skipped {len(skipped)} duplicate(s)")
    except StoreError as exc:
        logger.error(str(exc))
        raise typer.Exit(code=2) from exc


@app.command("list")
def list_records(store: Path = STORE_OPTION) -> None:
    """List stored fingerprints, oldest first."""
    try:
        records = FingerprintStore(store).load_all()
    except StoreError as exc:
        logger.error(str(exc))
        raise typer.Exit(code=2) from exc

    if not records:
        safe_echo("No photos stored yet")
        return

    for record in records:
        data = record.to_dict()
        safe_echo(f"{record.id}  {record.source_ref}")
        safe_echo(f"   pH: {data['pHash'][:PREVIEW_BITS]}...  dH: {data['dHash'][:PREVIEW_BITS]}...  {record.created_at}")


@app.command()
def count(store: Path = STORE_OPTION) -> None:
    """Print the number of stored fingerprints."""
    try:
        safe_echo(str(FingerprintStore(store).count()))
    except StoreError as exc:
        logger.error(str(exc))
        raise typer.Exit(code=2) from exc


@app.command()
def clear(
    store: Path = STORE_OPTION,
    yes: bool = typer.Option(False, "--yes", "-y", help="Do not ask for confirmation"),
) -> None:
    """Delete every stored fingerprint."""
    if not yes:
        typer.confirm(f"Delete all stored fingerprints in {store}?", abort=True)
    try:
        FingerprintStore(store).clear()
    except StoreError as exc:
        logger.error(str(exc))
        raise typer.Exit(code=2) from exc
    safe_echo("✅ All stored fingerprints cleared")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
