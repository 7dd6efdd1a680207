import sys

from paper_check.cli import main

if __name__ == "__main__":
    sys.exit(main())
