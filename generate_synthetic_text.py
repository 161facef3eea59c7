#!/usr/bin/env python3
"""
Synthetic dataset generator for distributed word count benchmarks.

Generates a large newline-delimited text file whose lines carry a random
number of words, plus one planted "longest" line with a known word count so
benchmark runs can check their answer.

Boundary correction may hide the planted line if a partition cut lands
inside it; use --plant-at to move it away from cuts when checking results.
"""

import argparse
import random
import sys

# Large buffer for efficient streaming writes
BUFFER_SIZE = 1024 * 1024  # 1MB

WORDS = [
    "alpha", "bravo", "charlie", "delta", "echo", "foxtrot", "golf", "hotel",
    "india", "juliet", "kilo", "lima", "mike", "november", "oscar", "papa",
    "quebec", "romeo", "sierra", "tango", "uniform", "victor", "whiskey",
    "xray", "yankee", "zulu",
]


def generate_line(num_words: int, rng: random.Random) -> str:
    """Build one line of num_words words separated by random runs of whitespace."""
    parts = []
    for _ in range(num_words):
        parts.append(rng.choice(WORDS))
        parts.append(" " * rng.randint(1, 3) if rng.random() < 0.9 else "\t")
    return "".join(parts[:-1])


def generate_synthetic_dataset(
    output_path: str,
    num_lines: int,
    max_words: int,
    planted_words: int,
    plant_at: float,
    blank_ratio: float,
    seed: int,
) -> int:
    """
    Generate a synthetic dataset with one planted longest line.

    Streams output line-by-line to avoid memory issues.

    Args:
        output_path: Path to output file.
        num_lines: Number of lines to write (including the planted one).
        max_words: Upper bound of words on ordinary lines.
        planted_words: Words on the planted line (must exceed max_words).
        plant_at: Relative position of the planted line in [0, 1].
        blank_ratio: Fraction of ordinary lines left blank.
        seed: Random seed for reproducibility.

    Returns:
        Total number of lines written.
    """
    rng = random.Random(seed)
    planted_index = min(num_lines - 1, int(plant_at * num_lines))

    with open(output_path, "w", encoding="ascii", buffering=BUFFER_SIZE) as f:
        for i in range(num_lines):
            if i == planted_index:
                f.write(generate_line(planted_words, rng) + "\n")
            elif rng.random() < blank_ratio:
                f.write("\n")
            else:
                f.write(generate_line(rng.randint(1, max_words), rng) + "\n")

            # Progress indicator every 1M lines
            if (i + 1) % 1_000_000 == 0:
                print(f"  Generated {i + 1:,}/{num_lines:,} lines...", file=sys.stderr)

    return num_lines


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Generate synthetic text for distributed word count.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Generate ~1M lines (~50 MB)
  python generate_synthetic_text.py --out data/synthetic.txt --lines 1000000

  # Plant the longest line near the end of the file
  python generate_synthetic_text.py --out data/tail.txt --plant-at 0.99
""",
    )

    parser.add_argument(
        "--out",
        required=True,
        help="Output file path",
    )
    parser.add_argument(
        "--lines",
        type=int,
        default=1_000_000,
        help="Number of lines (default: 1000000)",
    )
    parser.add_argument(
        "--max-words",
        type=int,
        default=12,
        help="Maximum words on ordinary lines (default: 12)",
    )
    parser.add_argument(
        "--planted-words",
        type=int,
        default=40,
        help="Words on the planted longest line (default: 40)",
    )
    parser.add_argument(
        "--plant-at",
        type=float,
        default=0.5,
        help="Relative position of the planted line, 0..1 (default: 0.5)",
    )
    parser.add_argument(
        "--blank-ratio",
        type=float,
        default=0.05,
        help="Fraction of blank lines (default: 0.05)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=1,
        help="Random seed for reproducibility (default: 1)",
    )

    args = parser.parse_args()

    # Validate
    if args.lines < 1:
        parser.error("--lines must be at least 1")
    if args.max_words < 1:
        parser.error("--max-words must be at least 1")
    if args.planted_words <= args.max_words:
        parser.error("--planted-words must be greater than --max-words")
    if not 0.0 <= args.plant_at <= 1.0:
        parser.error("--plant-at must be between 0 and 1")
    if not 0.0 <= args.blank_ratio < 1.0:
        parser.error("--blank-ratio must be in [0, 1)")

    # Approximate line length: ~7 chars per word
    approx_size_mb = (args.lines * (args.max_words / 2) * 7) / (1024 * 1024)

    print("=" * 60, file=sys.stderr)
    print("Synthetic Text Dataset Generator", file=sys.stderr)
    print("=" * 60, file=sys.stderr)
    print(f"Output: {args.out}", file=sys.stderr)
    print(f"Lines: {args.lines:,}", file=sys.stderr)
    print(f"Max words per ordinary line: {args.max_words}", file=sys.stderr)
    print(f"Planted line: {args.planted_words} words at {args.plant_at:.0%}", file=sys.stderr)
    print(f"Seed: {args.seed}", file=sys.stderr)
    print(f"Estimated size: ~{approx_size_mb:.1f} MB", file=sys.stderr)
    print("=" * 60, file=sys.stderr)
    print(file=sys.stderr)

    print("Generating...", file=sys.stderr)
    total_lines = generate_synthetic_dataset(
        output_path=args.out,
        num_lines=args.lines,
        max_words=args.max_words,
        planted_words=args.planted_words,
        plant_at=args.plant_at,
        blank_ratio=args.blank_ratio,
        seed=args.seed,
    )

    print(file=sys.stderr)
    print("=" * 60, file=sys.stderr)
    print(f"Done! Wrote {total_lines:,} lines to {args.out}", file=sys.stderr)
    print(f"Expected answer: {args.planted_words}", file=sys.stderr)
    print("=" * 60, file=sys.stderr)


if __name__ == "__main__":
    main()
