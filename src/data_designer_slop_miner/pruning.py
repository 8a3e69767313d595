"""Bounded memory for the slop index.

Two sweeps exist. :func:`prune_stale` is the passive decay used during live
operation: records unseen for longer than one pruning cycle are dropped when
weak and decayed when strong. :func:`prune_sparse` is the coarser pass used
while replaying a long history in batch, dropping one-off low-score records.
"""

from __future__ import annotations

import logging

from data_designer_slop_miner.index import NgramIndex

logger = logging.getLogger(__name__)

DECAY_FACTOR = 0.9
SPARSE_SCORE_FLOOR = 2.0
SPARSE_COUNT_FLOOR = 2


def is_stale(index: NgramIndex, last_seen_message_index: int) -> bool:
    return index.messages_processed - last_seen_message_index > index.policy.prune_after_messages


def prune_stale(index: NgramIndex) -> int:
    """Delete stale records below the threshold and decay the stale ones above it.

    Returns the number of deleted records.
    """
    threshold = index.policy.score_threshold
    doomed = []
    for key, record in index.records.items():
        if not is_stale(index, record.last_seen_message_index):
            continue
        if record.score < threshold:
            doomed.append(key)
        else:
            record.score *= DECAY_FACTOR
    for key in doomed:
        index.remove(key)
    if doomed:
        logger.info(f"Pruned {len(doomed)} old/low-score n-grams")
    return len(doomed)


def prune_sparse(index: NgramIndex) -> int:
    doomed = [
        key
        for key, record in index.records.items()
        if record.score < SPARSE_SCORE_FLOOR and record.count < SPARSE_COUNT_FLOOR
    ]
    for key in doomed:
        index.remove(key)
    if doomed:
        logger.info(f"Batch replay pruned {len(doomed)} very low-score n-grams")
    return len(doomed)


def is_prune_due(index: NgramIndex) -> bool:
    cycle = index.policy.prune_after_messages
    return cycle > 0 and index.messages_processed > 0 and index.messages_processed % cycle == 0
