from entity_dedupe.runners.local import LocalBatchResolver, resolve_batch
from entity_dedupe.runners.pooled import PooledBatchResolver

__all__ = ["LocalBatchResolver", "PooledBatchResolver", "resolve_batch"]
