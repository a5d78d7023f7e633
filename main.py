"""
Fingerspell - Hand Landmark Fingerspelling

Entry point for the application.
"""
import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent / "src"))

from fingerspell.cli import main


if __name__ == "__main__":
    sys.exit(main())
