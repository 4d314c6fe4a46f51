from __future__ import annotations

import argparse
import csv
import json
import logging
import sys
from pathlib import Path
from typing import Any

from entity_dedupe.datasets import GUEST_COLUMNS, GUEST_PROFILE, PROFILES, ReferenceDatasetGenerator
from entity_dedupe.errors import DedupeError
from entity_dedupe.models import BatchResolutionResult, Decision, EntityRecord
from entity_dedupe.policy import Classifier
from entity_dedupe.runners import LocalBatchResolver
from entity_dedupe.schema import Comparison, EntityProfile

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level), format="%(levelname)s %(name)s: %(message)s")

    try:
        if args.command == "resolve":
            resolve(
                profile=PROFILES[args.profile],
                candidates_csv=args.candidates,
                references_csv=args.references,
                threshold=args.threshold,
                id_column=args.id_column,
                label_column=args.label_column,
                output=args.output,
            )
            return 0

        if args.command == "run-test":
            run_test(
                size=args.size,
                duplicate_rate=args.duplicate_rate,
                incoming_rate=args.incoming_rate,
                seed=args.seed,
                output_dir=args.output_dir,
                threshold=args.threshold,
            )
            return 0
    except DedupeError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    parser.print_help()
    return 1


def resolve(
    *,
    profile: EntityProfile,
    candidates_csv: Path,
    references_csv: Path,
    threshold: float | None,
    id_column: str,
    label_column: str | None,
    output: Path | None,
) -> dict[str, Any]:
    label_column = label_column or _default_label_column(profile)
    candidates = _read_records_csv(candidates_csv, id_column, label_column)
    references = _read_records_csv(references_csv, id_column, label_column)

    resolver = LocalBatchResolver.from_profile(profile, threshold=threshold)
    result = resolver.resolve(candidates, references)
    payload = _result_payload(result, _classifier(profile, threshold))

    if output is None:
        print(json.dumps(payload, indent=2))
    else:
        _write_json(output, payload)
        print(f"Matches: {output}")
        print("---")
        print(f"duplicates_with_existing={len(result.cross_matches)}")
        print(f"duplicates_in_batch={len(result.intra_batch_matches)}")
    return payload


def run_test(
    *,
    size: int,
    duplicate_rate: float,
    incoming_rate: float,
    seed: int,
    output_dir: Path,
    threshold: float | None,
) -> dict[str, object]:
    output_dir.mkdir(parents=True, exist_ok=True)

    records = ReferenceDatasetGenerator(seed=seed).generate(size=size, duplicate_rate=duplicate_rate)
    dataset_path = output_dir / "test_dataset.csv"
    _write_records_csv(dataset_path, records, GUEST_COLUMNS)

    incoming_count = int(len(records) * incoming_rate)
    references = records[: len(records) - incoming_count]
    candidates = records[len(records) - incoming_count :]
    logger.info("Split %d records into %d stored and %d incoming", len(records), len(references), len(candidates))

    resolver = LocalBatchResolver.from_profile(GUEST_PROFILE, threshold=threshold)
    result = resolver.resolve(candidates, references)
    classifier = _classifier(GUEST_PROFILE, threshold)

    matches_path = output_dir / "matches.json"
    summary_path = output_dir / "summary.json"
    _write_json(matches_path, _result_payload(result, classifier))
    summary = _build_summary(
        record_count=len(records),
        reference_count=len(references),
        candidate_count=len(candidates),
        result=result,
        classifier=classifier,
        dataset_path=dataset_path,
        matches_path=matches_path,
    )
    _write_json(summary_path, summary)

    print(f"Dataset: {dataset_path}")
    print(f"Matches: {matches_path}")
    print(f"Summary: {summary_path}")
    print("---")
    print(f"records={summary['record_count']}")
    print(f"duplicates_with_existing={summary['cross_match_count']}")
    print(f"duplicates_in_batch={summary['intra_batch_match_count']}")
    print(f"matched_candidates={summary['matched_candidate_count']}")
    return summary


def _build_summary(
    *,
    record_count: int,
    reference_count: int,
    candidate_count: int,
    result: BatchResolutionResult,
    classifier: Classifier,
    dataset_path: Path,
    matches_path: Path,
) -> dict[str, object]:
    decisions = {decision.value: 0 for decision in Decision}
    for cross in result.cross_matches:
        decisions[classifier.classify_match(cross).value] += 1
    matched_candidates = {cross.candidate_index for cross in result.cross_matches}
    scores = [cross.score for cross in result.cross_matches]

    return {
        "record_count": record_count,
        "reference_count": reference_count,
        "candidate_count": candidate_count,
        "cross_match_count": len(result.cross_matches),
        "intra_batch_match_count": len(result.intra_batch_matches),
        "matched_candidate_count": len(matched_candidates),
        "decisions": decisions,
        "avg_score": round(sum(scores) / len(scores), 3) if scores else 0.0,
        "max_score": max(scores) if scores else 0.0,
        "dataset_path": str(dataset_path),
        "matches_path": str(matches_path),
    }


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="entity-dedupe", description="Entity dedupe CLI")
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="WARNING",
    )
    subparsers = parser.add_subparsers(dest="command")

    resolve_parser = subparsers.add_parser(
        "resolve",
        help="Match an incoming CSV batch against stored records and within itself",
    )
    resolve_parser.add_argument("--profile", choices=sorted(PROFILES), default="guest")
    resolve_parser.add_argument("--candidates", type=Path, required=True)
    resolve_parser.add_argument("--references", type=Path, required=True)
    resolve_parser.add_argument("--threshold", type=float, default=None)
    resolve_parser.add_argument("--id-column", type=str, default="RECORD_ID")
    resolve_parser.add_argument("--label-column", type=str, default=None)
    resolve_parser.add_argument("--output", type=Path, default=None)

    run_test_parser = subparsers.add_parser(
        "run-test",
        help="Generate a synthetic guest list, resolve the newest slice against the rest, and output matches + summary",
    )
    run_test_parser.add_argument("--size", type=int, default=500)
    run_test_parser.add_argument("--duplicate-rate", type=float, default=0.15)
    run_test_parser.add_argument("--incoming-rate", type=float, default=0.2)
    run_test_parser.add_argument("--seed", type=int, default=42)
    run_test_parser.add_argument("--threshold", type=float, default=None)
    run_test_parser.add_argument("--output-dir", type=Path, default=Path("data/cli_output"))

    return parser


def _classifier(profile: EntityProfile, threshold: float | None) -> Classifier:
    classifier = Classifier.for_profile(profile)
    if threshold is None:
        return classifier
    return Classifier(exact_threshold=max(classifier.exact_threshold, threshold), potential_threshold=threshold)


def _default_label_column(profile: EntityProfile) -> str | None:
    for spec in profile.fields:
        if spec.comparison == Comparison.FUZZY:
            return spec.name
    return None


def _result_payload(result: BatchResolutionResult, classifier: Classifier) -> dict[str, Any]:
    payload = result.to_dict()
    for item, cross in zip(payload["duplicates_with_existing"], result.cross_matches):
        item["decision"] = classifier.classify_match(cross).value
    for item, pair in zip(payload["duplicates_in_batch"], result.intra_batch_matches):
        item["decision"] = classifier.classify_match(pair).value
    return payload


def _write_json(path: Path, payload: object) -> None:
    with path.open("w", encoding="utf-8") as handle:
        json.dump(payload, handle, indent=2)


def _write_records_csv(path: Path, records: list[EntityRecord], columns: list[str]) -> None:
    with path.open("w", newline="", encoding="utf-8") as handle:
        writer = csv.DictWriter(handle, fieldnames=["RECORD_ID", *columns])
        writer.writeheader()
        for record in records:
            writer.writerow({"RECORD_ID": record.record_id, **record.attributes})


def _read_records_csv(path: Path, id_column: str = "RECORD_ID", label_column: str | None = None) -> list[EntityRecord]:
    records: list[EntityRecord] = []
    with path.open("r", newline="", encoding="utf-8") as handle:
        reader = csv.DictReader(handle)
        for row in reader:
            record_id = row.get(id_column) or None
            attrs = {k: (v or None) for k, v in row.items() if k is not None and k != id_column}
            label = row.get(label_column) if label_column else None
            records.append(EntityRecord(record_id=record_id, attributes=attrs, label=label or None))
    return records


if __name__ == "__main__":
    sys.exit(main())
