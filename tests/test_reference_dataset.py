from entity_dedupe.datasets import GUEST_PROFILE, ReferenceDatasetGenerator
from entity_dedupe.runners import resolve_batch


def test_generator_is_seeded() -> None:
    first = ReferenceDatasetGenerator(seed=5).generate(size=30)
    second = ReferenceDatasetGenerator(seed=5).generate(size=30)

    assert [r.attributes for r in first] == [r.attributes for r in second]
    assert len(first) == 30
    assert len({r.record_id for r in first}) == 30


def test_generator_handles_empty_size() -> None:
    assert ReferenceDatasetGenerator().generate(size=0) == []


def test_generated_duplicates_are_found() -> None:
    records = ReferenceDatasetGenerator(seed=1).generate(size=80, duplicate_rate=0.3)

    result = resolve_batch(records, [], GUEST_PROFILE)

    assert result.intra_batch_matches
    assert all(pair.index1 < pair.index2 for pair in result.intra_batch_matches)
