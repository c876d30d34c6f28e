"""Entry point for python -m voxlife."""

from .cli import parse_args
from .runners.headless import print_summary, run_headless


def main():
    """Main entry point."""
    config = parse_args()
    summary = run_headless(config)
    print_summary(config, summary)


if __name__ == "__main__":
    main()
