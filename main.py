#!/usr/bin/env python3
"""LexiLens Dictionary Enrichment - batch job entry point."""

import argparse
import sys
from pathlib import Path

import config
from lexilens.enrichment import EnrichmentJob
from lexilens.errors import ConfigError
from lexilens.logger import setup_logger
from lexilens.prompts import EnrichmentOptions
from lexilens.providers import build_enrichment_provider


def main():
    parser = argparse.ArgumentParser(
        description="LexiLens Dictionary Enrichment",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Enrich the default word list (resumes from existing chunk files)
  python main.py

  # Smaller chunks with example sentences
  python main.py --chunk-size 50 --with-examples

  # Try the first chunk only
  python main.py --dry-run
        """,
    )

    parser.add_argument(
        "--input",
        type=Path,
        default=config.WORD_LIST_TXT,
        help="Newline-delimited word list",
    )
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=config.CHUNKS_DIR,
        help="Directory for per-chunk result files (<offset>.json)",
    )
    parser.add_argument(
        "--combined",
        type=Path,
        default=config.COMBINED_OUTPUT_JSON,
        help="Combined output file",
    )
    parser.add_argument(
        "--chunk-size",
        type=int,
        default=config.DEFAULT_CHUNK_SIZE,
        choices=[config.SMALL_CHUNK_SIZE, config.DEFAULT_CHUNK_SIZE],
        help="Words per provider request",
    )
    parser.add_argument(
        "--with-examples",
        action="store_true",
        help="Ask for example sentence pairs",
    )
    parser.add_argument(
        "--no-phonetic",
        action="store_true",
        help="Omit phonetic transcriptions",
    )
    parser.add_argument(
        "--no-special-cases",
        action="store_true",
        help="Omit ALL-CAPS / misspelling instructions",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Process only the first chunk's worth of words",
    )

    args = parser.parse_args()

    logger = setup_logger()

    options = EnrichmentOptions(
        include_phonetic=not args.no_phonetic,
        include_examples=args.with_examples,
        special_casing=not args.no_special_cases,
    )

    logger.info("=" * 60)
    logger.info("LexiLens Dictionary Enrichment")
    logger.info("=" * 60)
    logger.info(f"Input: {args.input}")
    logger.info(f"Chunk files: {args.output_dir}")
    logger.info(f"Combined output: {args.combined}")
    logger.info(f"Chunk size: {args.chunk_size}")
    if args.dry_run:
        logger.info(f"Mode: Dry run ({args.chunk_size} words)")
    logger.info("=" * 60)

    try:
        provider = build_enrichment_provider()
        job = EnrichmentJob(
            provider,
            chunk_dir=args.output_dir,
            combined_path=args.combined,
            chunk_size=args.chunk_size,
            options=options,
            limit=args.chunk_size if args.dry_run else None,
        )
        job.run(args.input)

        logger.info("=" * 60)
        logger.info("Dictionary processing completed!")
        logger.info("=" * 60)

    except ConfigError as e:
        logger.error(f"Configuration error: {e}")
        sys.exit(1)
    except KeyboardInterrupt:
        logger.warning("Enrichment interrupted by user.")
        logger.info("Finished chunks are on disk; rerun to resume.")
        sys.exit(1)
    except Exception as e:
        logger.error(f"Enrichment error: {e}", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
