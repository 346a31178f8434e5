"""Batch dictionary enrichment: chunked provider calls with resume from disk."""

import asyncio
import json
import random
from pathlib import Path
from typing import Optional

from pydantic import ValidationError
from tqdm import tqdm

import config
from lexilens.errors import LexiLensError
from lexilens.extract import extract_json_array
from lexilens.logger import get_logger
from lexilens.models import EnrichmentRecord, WordChunk
from lexilens.prompts import EnrichmentOptions, build_enrichment_prompt
from lexilens.providers.base import Provider


def load_word_list(path: Path) -> list[str]:
    """Load words from a newline-delimited file (one word per line)."""
    words = []
    with open(path, "r", encoding="utf-8") as f:
        for line in f:
            word = line.strip()
            if word:  # Skip empty lines
                words.append(word)
    return words


def split_chunks(words: list[str], chunk_size: int, start: int = 0) -> list[WordChunk]:
    """
    Split the word list into contiguous chunks.

    Args:
        words: Full word list
        chunk_size: Maximum words per chunk
        start: Offset of the first chunk

    Returns:
        Chunks in ascending offset order
    """
    if chunk_size <= 0:
        raise ValueError(f"chunk_size must be positive, got {chunk_size}")
    return [
        WordChunk(offset=offset, words=words[offset:offset + chunk_size])
        for offset in range(start, len(words), chunk_size)
    ]


def chunk_path(chunk_dir: Path, offset: int) -> Path:
    """Path of the result file for the chunk starting at offset."""
    return chunk_dir / f"{offset}.json"


def existing_chunk_offsets(chunk_dir: Path) -> list[int]:
    """Offsets of chunk files already written, in ascending order."""
    if not chunk_dir.exists():
        return []
    return sorted(int(p.stem) for p in chunk_dir.glob("*.json") if p.stem.isdigit())


def compute_resume_offset(chunk_dir: Path, chunk_size: int) -> int:
    """Offset to continue from: one chunk past the highest chunk file, or 0."""
    offsets = existing_chunk_offsets(chunk_dir)
    if not offsets:
        return 0
    return offsets[-1] + chunk_size


def save_json(data, path: Path) -> None:
    """Write JSON with non-ASCII characters preserved."""
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, ensure_ascii=False, indent=2)


def combine_chunks(chunk_dir: Path, output_path: Path) -> list:
    """
    Concatenate every chunk file in ascending offset order into one file.

    Args:
        chunk_dir: Directory holding <offset>.json files
        output_path: Combined output file

    Returns:
        The combined list of records
    """
    combined = []
    for offset in existing_chunk_offsets(chunk_dir):
        with open(chunk_path(chunk_dir, offset), "r", encoding="utf-8") as f:
            data = json.load(f)
        if isinstance(data, list):
            combined.extend(data)

    output_path.parent.mkdir(parents=True, exist_ok=True)
    save_json(combined, output_path)
    return combined


def summarize_records(records: list) -> dict[str, int]:
    """Count records by completeness for the end-of-run report."""
    stats = {"total": len(records), "translated": 0, "with_phonetic": 0, "malformed": 0}
    for item in records:
        try:
            record = EnrichmentRecord.model_validate(item)
        except ValidationError:
            stats["malformed"] += 1
            continue
        if record.translation:
            stats["translated"] += 1
        if record.phonetic:
            stats["with_phonetic"] += 1
    return stats


class EnrichmentJob:
    """Sends a word list to a provider chunk by chunk and persists the results."""

    def __init__(
        self,
        provider: Provider,
        chunk_dir: Path = config.CHUNKS_DIR,
        combined_path: Path = config.COMBINED_OUTPUT_JSON,
        chunk_size: int = config.DEFAULT_CHUNK_SIZE,
        options: EnrichmentOptions = EnrichmentOptions(),
        delay_range: tuple[float, float] = config.CHUNK_DELAY_RANGE,
        limit: Optional[int] = None,
    ):
        """
        Initialize the job.

        Args:
            provider: Text-generation provider
            chunk_dir: Directory for per-chunk result files
            combined_path: Path of the combined output file
            chunk_size: Words per provider request
            options: Prompt format switches
            delay_range: (min, max) seconds to sleep between chunks
            limit: Optional cap on the number of words read (dry runs)
        """
        self.provider = provider
        self.chunk_dir = chunk_dir
        self.combined_path = combined_path
        self.chunk_size = chunk_size
        self.options = options
        self.delay_range = delay_range
        self.limit = limit

    async def process_chunk(self, chunk: WordChunk) -> list:
        """
        Enrich one chunk and write its result file.

        A reply without a parsable JSON array is stored as an empty list.

        Raises:
            ProviderError: If the provider call fails (nothing is written)
        """
        prompt = build_enrichment_prompt(chunk.words, self.options)
        response = await self.provider.generate(prompt)

        records = extract_json_array(response)
        if records is None:
            logger = get_logger()
            logger.warning(f"  Chunk {chunk.offset}: no JSON array in response, storing empty result")
            records = []

        save_json(records, chunk_path(self.chunk_dir, chunk.offset))
        return records

    async def _sleep_between_chunks(self) -> None:
        low, high = self.delay_range
        await asyncio.sleep(random.uniform(low, high))

    async def run_async(self, input_path: Path) -> list:
        """
        Run the job: resume, process remaining chunks, then combine.

        File-system failures propagate; provider failures skip the chunk.

        Returns:
            The combined list of records
        """
        logger = get_logger()

        self.chunk_dir.mkdir(parents=True, exist_ok=True)

        words = load_word_list(input_path)
        logger.info(f"  Loaded {len(words)} words from {input_path}")
        if self.limit is not None:
            words = words[:self.limit]
            logger.info(f"  Dry run: processing {len(words)} words")

        resume_offset = compute_resume_offset(self.chunk_dir, self.chunk_size)
        if resume_offset:
            logger.info(f"  Resuming at offset {resume_offset}")

        chunks = split_chunks(words, self.chunk_size, start=resume_offset)
        if not chunks:
            logger.info("  No chunks to process (all already completed)")

        failed = []
        for i, chunk in enumerate(tqdm(chunks, desc="  Enriching")):
            logger.info(f"  [{i+1}/{len(chunks)}] Processing chunk at offset {chunk.offset}")
            try:
                records = await self.process_chunk(chunk)
                logger.info(f"  [{i+1}/{len(chunks)}] Chunk {chunk.offset}: {len(records)} records")
            except LexiLensError as e:
                failed.append(chunk.offset)
                logger.error(f"  [{i+1}/{len(chunks)}] Chunk {chunk.offset} failed: {e}")

            if i < len(chunks) - 1:
                await self._sleep_between_chunks()

        combined = combine_chunks(self.chunk_dir, self.combined_path)
        logger.info(f"  Saved {len(combined)} records to: {self.combined_path}")

        stats = summarize_records(combined)
        logger.info(f"  Records with translation: {stats['translated']}/{stats['total']}")
        logger.info(f"  Records with phonetic: {stats['with_phonetic']}/{stats['total']}")
        if stats["malformed"]:
            logger.warning(f"  Malformed records: {stats['malformed']}")
        if failed:
            logger.warning(f"  Skipped chunks (provider errors): {failed}")

        return combined

    def run(self, input_path: Path) -> list:
        """Synchronous entry point for the job."""
        return asyncio.run(self.run_async(input_path))
