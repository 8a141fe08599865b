"""Run the spsearch command-line interface (`python -m spsearch`)."""

from spsearch.cli import main

if __name__ == "__main__":
    main()
