"""
Sequence dispatch onto a bounded worker pool.

Records are read one at a time on the calling thread and each completed
sequence is handed to a thread pool, where it is counted into the shared
ColumnAccumulator. The pool is fully joined before returning, so callers
only ever see a finished accumulator.
"""

import logging
from concurrent.futures import Future, ThreadPoolExecutor
from typing import List, Optional, TextIO

from Bio.SeqIO.FastaIO import SimpleFastaParser

from ..validation import sequence_characters
from .accumulator import ColumnAccumulator


def tally_sequences(
    handle: TextIO,
    accumulator: ColumnAccumulator,
    threads: int,
    logger: Optional[logging.Logger] = None,
) -> int:
    """Count every sequence of an alignment stream into the accumulator.

    Args:
        handle: Validated alignment stream, positioned at the first record
        accumulator: Shared counters sized to the alignment length
        threads: Maximum number of worker threads
        logger: Optional diagnostics sink

    Returns:
        Number of sequence records (headers) read

    Raises:
        ValueError: If threads is not a positive integer, or a worker rejects
            a sequence
        OSError: If reading the stream fails; no partial result is returned
    """
    log = logger or logging.getLogger(__name__)
    if threads < 1:
        raise ValueError(f"Thread count must be a positive integer: {threads}")

    futures: List[Future] = []
    genome_count = 0

    # Leaving the with-block waits for every submitted sequence
    with ThreadPoolExecutor(max_workers=threads, thread_name_prefix="alnentropy") as pool:
        try:
            for header, sequence in SimpleFastaParser(handle):
                genome_count += 1
                # The parser drops spaces but keeps tabs and other whitespace
                sequence = sequence_characters(sequence)
                if not sequence:
                    log.warning(f"No sequence found for {header}")
                    continue
                log.debug(f"Processing {header}")
                futures.append(pool.submit(accumulator.add_sequence, header, sequence))
        except Exception:
            for future in futures:
                future.cancel()
            raise

    log.info(f"Threadpool jobs complete for {genome_count} sequences")

    # Surface the first worker failure, if any
    for future in futures:
        future.result()

    return genome_count
