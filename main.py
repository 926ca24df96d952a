"""Main entry point for the Real Estate Analysis Chat client."""

import sys
from pathlib import Path

# Add project root to Python path
project_root = Path(__file__).parent
sys.path.insert(0, str(project_root))

from interface.cli.main import main as cli_main  # noqa: E402


if __name__ == "__main__":
    cli_main()
